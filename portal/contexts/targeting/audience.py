"""
Audience filtering.

Decides whether a member may see an announcement from the item's audience rule.
Unrecognized rules are never visible, so targeted content cannot leak.
"""

from typing import Iterable, List

from portal.contexts.catalog.data_structures import (
    ContentItem,
    General,
    InstitutionTargeted,
    ScholarshipTargeted,
)
from portal.contexts.membership.data_structures import Member
from portal.contexts.targeting.logger import _log_warning


def is_visible(member: Member, item: ContentItem) -> bool:
    """
    Check whether an announcement is addressed to a member.

    - General: always visible
    - ScholarshipTargeted(p): visible iff member.scholarship_provider == p
    - InstitutionTargeted(u): visible iff member.institution == u
    - anything else: not visible

    Comparisons are exact and case-sensitive; a member without the attribute
    never matches.

    Args:
        member: Viewing member
        item: Announcement to check

    Returns:
        True if the member may see the item
    """
    audience = item.audience

    if isinstance(audience, General):
        return True
    if isinstance(audience, ScholarshipTargeted):
        return member.scholarship_provider is not None and (
            member.scholarship_provider == audience.provider
        )
    if isinstance(audience, InstitutionTargeted):
        return member.institution is not None and member.institution == audience.institution

    _log_warning(f"Item {item.id} has unrecognized audience {audience!r}; hiding it")
    return False


def visible_items(member: Member, items: Iterable[ContentItem]) -> List[ContentItem]:
    """Return the items the member may see, in input order."""
    return [item for item in items if is_visible(member, item)]
