"""
Catalog Data Structures

Defines the immutable records held by the content catalog: announcements with
their audience rules, and the channel templates and metadata rows used when
channels are resolved for a member.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union


# =============================================================================
# AUDIENCE RULES
# =============================================================================


@dataclass(frozen=True)
class General:
    """Audience rule for announcements addressed to every member."""


@dataclass(frozen=True)
class ScholarshipTargeted:
    """
    Audience rule for announcements addressed to one scholarship provider.

    Attributes:
        provider: Scholarship provider name, compared exactly (e.g., "MARA")
    """

    provider: str


@dataclass(frozen=True)
class InstitutionTargeted:
    """
    Audience rule for announcements addressed to one host institution.

    Attributes:
        institution: Institution name, compared exactly (e.g., "Yonsei")
    """

    institution: str


@dataclass(frozen=True)
class UnknownAudience:
    """
    Placeholder for an audience kind the engine does not recognize.

    Kept so a catalog with a newer audience kind still loads; such items are
    never visible.
    """

    kind: str


AudienceRule = Union[General, ScholarshipTargeted, InstitutionTargeted, UnknownAudience]

# Audience kind labels used in catalog YAML
AUDIENCE_KINDS = {
    "general": General,
    "scholarship": ScholarshipTargeted,
    "institution": InstitutionTargeted,
}


# =============================================================================
# CONTENT ITEMS
# =============================================================================


class Priority(Enum):
    """Display priority of an announcement."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Engagement:
    """Reaction and comment counters attached to an announcement."""

    reaction_count: int = 0
    comment_count: int = 0


@dataclass(frozen=True)
class ContentItem:
    """
    A single announcement in the catalog.

    Attributes:
        id: Catalog-unique identifier
        title: Headline shown in the feed
        body: Full announcement text
        audience: Audience rule deciding who may see the item
        timestamp: Publication time
        author: Display name of the poster
        engagement: Reaction and comment counters
        read_state: Whether the viewer has already read the item
        priority: Display priority
    """

    id: str
    title: str
    body: str
    audience: AudienceRule
    timestamp: datetime
    author: str
    engagement: Engagement = Engagement()
    read_state: bool = False
    priority: Priority = Priority.MEDIUM


# =============================================================================
# CHANNELS
# =============================================================================


class ChannelKind(Enum):
    """Kind of chat channel, fixed (template) or derived from a membership."""

    OFFICIAL = "official"
    CLUB = "club"
    INSTITUTION = "institution"
    BATCH = "batch"
    EVENT = "event"
    INTEREST = "interest"


@dataclass(frozen=True)
class ChannelStats:
    """
    Metadata row for a channel: size estimate and latest activity preview.

    Attributes:
        member_count: Estimated number of members
        preview: Text of the most recent message
        last_activity: Human-readable age of the most recent message
        unread_count: Unread message count shown as a badge
    """

    member_count: int
    preview: str
    last_activity: str = ""
    unread_count: int = 0


@dataclass(frozen=True)
class ChannelTemplate:
    """
    A fixed channel every member sees, regardless of memberships.

    Attributes:
        id: Channel identifier
        display_name: Name shown in the channel list
        kind: OFFICIAL for the community-wide channel, INTEREST for hangouts
        base_preview: Latest message preview
        description: One-line description of the channel
        member_count: Estimated number of members
        last_activity: Human-readable age of the most recent message
        unread_count: Unread message count
    """

    id: str
    display_name: str
    kind: ChannelKind
    base_preview: str
    description: str = ""
    member_count: int = 0
    last_activity: str = ""
    unread_count: int = 0
