"""
Catalog Context

Responsibilities:
- Holds the read-only catalog of announcements and their audience rules
- Holds the fixed channel templates and the derived-channel metadata table
- Loads catalog data from YAML once and shares it across callers

Owns: Content and channel data structures, catalog loading and validation
Never: Decides which member sees which item
"""

from portal.contexts.catalog.data_structures import (
    AudienceRule,
    ChannelKind,
    ChannelStats,
    ChannelTemplate,
    ContentItem,
    Engagement,
    General,
    InstitutionTargeted,
    Priority,
    ScholarshipTargeted,
    UnknownAudience,
)
from portal.utils.exceptions import ConfigurationError
from portal.contexts.catalog.registry import CatalogRegistry, ContentCatalog, load_catalog

__all__ = [
    # Audience rules
    "AudienceRule",
    "General",
    "ScholarshipTargeted",
    "InstitutionTargeted",
    "UnknownAudience",
    # Content and channel records
    "ContentItem",
    "Engagement",
    "Priority",
    "ChannelKind",
    "ChannelStats",
    "ChannelTemplate",
    # Loading
    "ContentCatalog",
    "CatalogRegistry",
    "load_catalog",
    "ConfigurationError",
]
