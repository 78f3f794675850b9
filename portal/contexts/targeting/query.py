"""
Query filtering.

Secondary filters applied after audience filtering: a free-text search over
title and body, and one facet selected from a fixed set. Filters compose as a
conjunction and preserve the relative order of their input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from portal.contexts.catalog.data_structures import ContentItem
from portal.contexts.membership.data_structures import Member
from portal.contexts.targeting.channels import DerivedChannel
from portal.utils.text_processing import contains_ignore_case

# Items need strictly more reactions than this to pass the REACTION facet
REACTION_THRESHOLD = 10


class FacetKind(Enum):
    """Facet selector; exactly one is active at a time."""

    NONE = "none"
    UNREAD = "unread"
    MENTIONS = "mentions"
    REPLIES = "replies"
    REACTION = "reaction"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "FacetKind":
        """
        Map a facet label to a FacetKind.

        Labels are matched case-insensitively. Unknown labels (e.g., "More")
        select no facet.

        Examples:
            >>> FacetKind.from_label("Unread")
            <FacetKind.UNREAD: 'unread'>
            >>> FacetKind.from_label("More")
            <FacetKind.NONE: 'none'>
        """
        if not label:
            return cls.NONE
        try:
            return cls(label.strip().lower())
        except ValueError:
            return cls.NONE


@dataclass(frozen=True)
class Query:
    """
    Search text plus facet selection.

    Attributes:
        text: Case-insensitive search text; None or "" matches everything
        facet: Active facet
    """

    text: Optional[str] = None
    facet: FacetKind = FacetKind.NONE


def matches_text(item: ContentItem, text: Optional[str]) -> bool:
    """Check whether the text occurs in the item's title or body."""
    if not text:
        return True
    return contains_ignore_case(item.title, text) or contains_ignore_case(item.body, text)


def matches_facet(item: ContentItem, facet: FacetKind, viewer: Optional[Member] = None) -> bool:
    """
    Check an item against one facet.

    MENTIONS looks for the viewer's own display name in the body, so it never
    matches without a viewer.
    """
    if facet is FacetKind.UNREAD:
        return not item.read_state
    if facet is FacetKind.MENTIONS:
        return viewer is not None and contains_ignore_case(item.body, viewer.display_name)
    if facet is FacetKind.REPLIES:
        return item.engagement.comment_count > 0
    if facet is FacetKind.REACTION:
        return item.engagement.reaction_count > REACTION_THRESHOLD
    return True


def apply_query(
    items: Iterable[ContentItem], query: Query = None, viewer: Optional[Member] = None
) -> List[ContentItem]:
    """
    Filter items by search text and facet, keeping input order.

    Args:
        items: Items to filter, normally already audience-filtered
        query: Text and facet (defaults to an empty query)
        viewer: Member viewing the items, used by the MENTIONS facet

    Returns:
        Items matching both the text and the facet
    """
    if query is None:
        query = Query()

    return [
        item
        for item in items
        if matches_text(item, query.text) and matches_facet(item, query.facet, viewer)
    ]


def filter_channels(
    channels: Iterable[DerivedChannel], text: Optional[str] = None
) -> List[DerivedChannel]:
    """
    Filter channels by search text over display name or description.

    Args:
        channels: Channels from resolve_channels()
        text: Case-insensitive search text; None or "" keeps every channel

    Returns:
        Matching channels in input order
    """
    if not text:
        return list(channels)
    return [
        channel
        for channel in channels
        if contains_ignore_case(channel.display_name, text)
        or contains_ignore_case(channel.description, text)
    ]
