"""
Feed orchestration.

Wires the engine's data flow for one member: membership resolution, audience
filtering over the catalog, channel resolution and query filtering. Call it
once per session state change (login, new search, new facet) and hand the
result lists to the presentation layer.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from portal.contexts.catalog.data_structures import ContentItem
from portal.contexts.catalog.registry import ContentCatalog, load_catalog
from portal.contexts.membership.data_structures import Member, MembershipSet
from portal.contexts.membership.resolver import resolve_member
from portal.contexts.membership.rules import MembershipRuleTable
from portal.contexts.targeting.audience import visible_items
from portal.contexts.targeting.channels import DerivedChannel, resolve_channels
from portal.contexts.targeting.logger import log_view_built
from portal.contexts.targeting.query import Query, apply_query, filter_channels


@dataclass(frozen=True)
class PortalView:
    """
    Everything the presentation layer needs for one member.

    Attributes:
        member: Viewing member
        membership: Derived memberships
        channels: Channels the member may join, filtered by channel search text
        announcements: Visible announcements, filtered by the query
    """

    member: Member
    membership: MembershipSet
    channels: Tuple[DerivedChannel, ...]
    announcements: Tuple[ContentItem, ...]


def build_feed(
    member: Member, query: Query = None, catalog: ContentCatalog = None
) -> List[ContentItem]:
    """
    Announcements a member sees: audience-visible AND matching the query.

    Args:
        member: Viewing member
        query: Search text and facet (defaults to no filtering)
        catalog: Catalog to read (defaults to the configured catalog)

    Returns:
        Announcements in catalog order
    """
    if catalog is None:
        catalog = load_catalog()
    return apply_query(visible_items(member, catalog.all()), query, viewer=member)


def build_channel_list(
    member: Member,
    text: Optional[str] = None,
    rules: MembershipRuleTable = None,
    catalog: ContentCatalog = None,
) -> List[DerivedChannel]:
    """Channels a member may join, optionally narrowed by search text."""
    channels = resolve_channels(resolve_member(member, rules), catalog)
    return filter_channels(channels, text)


def build_view(
    member: Member,
    query: Query = None,
    channel_text: Optional[str] = None,
    rules: MembershipRuleTable = None,
    catalog: ContentCatalog = None,
) -> PortalView:
    """
    Build the full view for a member in one pass.

    Args:
        member: Viewing member
        query: Announcement search text and facet
        channel_text: Channel search text
        rules: Membership rule table (defaults to the configured table)
        catalog: Catalog (defaults to the configured catalog)

    Returns:
        PortalView
    """
    if catalog is None:
        catalog = load_catalog()

    membership = resolve_member(member, rules)
    channels = filter_channels(resolve_channels(membership, catalog), channel_text)
    announcements = build_feed(member, query, catalog)

    view = PortalView(
        member=member,
        membership=membership,
        channels=tuple(channels),
        announcements=tuple(announcements),
    )
    log_view_built(view)
    return view
