"""
Membership Context

Responsibilities:
- Holds the verified member record supplied by the identity collaborator
- Derives batch, club and event memberships from a member identifier
- Loads the membership rule table from configuration

Owns: Member and MembershipSet data structures, rule table, membership resolution
Never: Verifies credentials or decides content visibility
"""

from portal.contexts.membership.data_structures import Member, MembershipSet
from portal.contexts.membership.resolver import (
    default_membership,
    resolve_member,
    resolve_membership,
)
from portal.contexts.membership.rules import (
    MatchKind,
    MembershipRule,
    MembershipRuleTable,
    load_membership_rules,
)

__all__ = [
    "Member",
    "MembershipSet",
    "resolve_membership",
    "resolve_member",
    "default_membership",
    "MatchKind",
    "MembershipRule",
    "MembershipRuleTable",
    "load_membership_rules",
]
