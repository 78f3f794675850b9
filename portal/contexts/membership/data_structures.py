"""
Membership Data Structures

Defines the verified member record supplied by the identity collaborator and
the membership set derived from it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Member:
    """
    A verified portal member.

    Supplied after credential checks and immutable for the rest of the session.
    Optional attributes are None when the member has none; absence never acts
    as a wildcard.

    Attributes:
        id: Member identifier (e.g., "PPMK001")
        display_name: Name shown to other members
        scholarship_provider: Scholarship provider (e.g., "MARA", "JPA")
        institution: Host institution (e.g., "Yonsei", "SNU")
    """

    id: str
    display_name: str
    scholarship_provider: Optional[str] = None
    institution: Optional[str] = None


@dataclass(frozen=True)
class MembershipSet:
    """
    Group memberships derived from a member identifier.

    Clubs and events are ordered and duplicate-free; their order is the order
    channels are listed in.

    Attributes:
        batch_year: Intake batch (e.g., "2024")
        clubs: Club names
        events: Event names
        institution: Host institution, carried over from the Member when known
    """

    batch_year: str
    clubs: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()
    institution: Optional[str] = None
