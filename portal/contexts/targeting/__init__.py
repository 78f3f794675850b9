"""
Targeting Context

Responsibilities:
- Decides which announcements a member may see from their audience rules
- Resolves the ordered list of channels a member may join
- Applies free-text search and facet filters on top of visibility
- Assembles the per-member view handed to the presentation layer

Owns: Visibility predicate, channel resolution, query filters, view assembly
Never: Stores memberships or messages, renders anything
"""

from portal.contexts.targeting.audience import is_visible, visible_items
from portal.contexts.targeting.channels import DerivedChannel, find_channel, resolve_channels
from portal.contexts.targeting.feed import (
    PortalView,
    build_channel_list,
    build_feed,
    build_view,
)
from portal.contexts.targeting.query import (
    REACTION_THRESHOLD,
    FacetKind,
    Query,
    apply_query,
    filter_channels,
)

__all__ = [
    # Audience filtering
    "is_visible",
    "visible_items",
    # Channel resolution
    "DerivedChannel",
    "resolve_channels",
    "find_channel",
    # Query filtering
    "FacetKind",
    "Query",
    "REACTION_THRESHOLD",
    "apply_query",
    "filter_channels",
    # View assembly
    "PortalView",
    "build_feed",
    "build_channel_list",
    "build_view",
]
