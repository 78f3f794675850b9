"""
Channel resolution.

Turns a membership set into the ordered list of chat channels a member may
join: the community-wide channel, one channel per membership element, then the
fixed interest channels. The list depends only on the membership set.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from portal.contexts.catalog.data_structures import ChannelKind, ChannelTemplate
from portal.contexts.catalog.registry import ContentCatalog, load_catalog
from portal.contexts.membership.data_structures import MembershipSet
from portal.contexts.targeting.logger import _log_debug
from portal.utils.text_processing import slugify

# Identifier prefix per derived channel kind
CHANNEL_ID_PREFIXES = {
    ChannelKind.CLUB: "club",
    ChannelKind.INSTITUTION: "university",
    ChannelKind.BATCH: "batch",
    ChannelKind.EVENT: "event",
}


@dataclass(frozen=True)
class DerivedChannel:
    """
    A channel as presented to one member.

    Attributes:
        id: URL-safe channel identifier (e.g., "club-badminton-club")
        display_name: Name shown in the channel list
        kind: Channel kind
        description: One-line description
        member_count: Estimated number of members
        preview: Latest message preview
        last_activity: Human-readable age of the latest message
        unread_count: Unread message count
    """

    id: str
    display_name: str
    kind: ChannelKind
    description: str
    member_count: int
    preview: str
    last_activity: str = ""
    unread_count: int = 0

    @classmethod
    def from_template(cls, template: ChannelTemplate) -> "DerivedChannel":
        return cls(
            id=template.id,
            display_name=template.display_name,
            kind=template.kind,
            description=template.description,
            member_count=template.member_count,
            preview=template.base_preview,
            last_activity=template.last_activity,
            unread_count=template.unread_count,
        )


def derive_channel(kind: ChannelKind, name: str, catalog: ContentCatalog) -> DerivedChannel:
    """
    Build the channel for one membership element.

    Args:
        kind: CLUB, INSTITUTION, BATCH or EVENT
        name: Membership element (e.g., "Badminton Club", "Yonsei", "2024")
        catalog: Catalog providing channel text and metadata

    Returns:
        DerivedChannel with id "<prefix>-<slug>"
    """
    slug = slugify(name)
    display_name, description = catalog.channel_text(kind, name)
    stats = catalog.channel_stats(kind, slug)

    return DerivedChannel(
        id=f"{CHANNEL_ID_PREFIXES[kind]}-{slug}",
        display_name=display_name,
        kind=kind,
        description=description,
        member_count=stats.member_count,
        preview=stats.preview,
        last_activity=stats.last_activity,
        unread_count=stats.unread_count,
    )


def resolve_channels(
    membership: MembershipSet, catalog: ContentCatalog = None
) -> List[DerivedChannel]:
    """
    Resolve the channels a member may join, in display order.

    Order:
    1. Community-wide channel (always, exactly once)
    2. One channel per club
    3. Institution channel, if the membership carries one
    4. Batch channel, if a batch year is set
    5. One channel per event
    6. Remaining fixed templates, in catalog order

    Ids are unique within the list. When two names slugify to the same id
    (e.g. "C++ Meetup" and "C Meetup"), later channels get "-2", "-3", ... appended.

    Args:
        membership: Derived membership set
        catalog: Catalog with templates and metadata (defaults to the configured catalog)

    Returns:
        List of DerivedChannel
    """
    if catalog is None:
        catalog = load_catalog()

    channels = [DerivedChannel.from_template(catalog.community_template())]

    channels.extend(derive_channel(ChannelKind.CLUB, club, catalog) for club in membership.clubs)

    if membership.institution:
        channels.append(derive_channel(ChannelKind.INSTITUTION, membership.institution, catalog))

    if membership.batch_year:
        channels.append(derive_channel(ChannelKind.BATCH, membership.batch_year, catalog))

    channels.extend(
        derive_channel(ChannelKind.EVENT, event, catalog) for event in membership.events
    )

    channels.extend(DerivedChannel.from_template(t) for t in catalog.trailing_templates())
    channels = _with_unique_ids(channels)

    _log_debug(f"Resolved {len(channels)} channels: {[c.id for c in channels]}")
    return channels


def _with_unique_ids(channels: List[DerivedChannel]) -> List[DerivedChannel]:
    # Suffixed ids must not shadow an id some other channel carries natively
    native = {channel.id for channel in channels}
    taken = set()
    unique = []

    for channel in channels:
        channel_id = channel.id
        suffix = 2
        while channel_id in taken or (channel_id != channel.id and channel_id in native):
            channel_id = f"{channel.id}-{suffix}"
            suffix += 1

        if channel_id != channel.id:
            _log_debug(f"Channel id '{channel.id}' already taken, using '{channel_id}'")
            channel = replace(channel, id=channel_id)
        taken.add(channel_id)
        unique.append(channel)

    return unique


def find_channel(channels: Iterable[DerivedChannel], channel_id: str) -> Optional[DerivedChannel]:
    """Return the channel with the given id, None if the member cannot see it."""
    return next((channel for channel in channels if channel.id == channel_id), None)
