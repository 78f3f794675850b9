"""
Content Catalog Registry

Loads the read-only content catalog (announcements, channel templates, channel
metadata) from YAML and caches it per file. The catalog is seeded once and never
mutated afterwards, so a single instance can be shared by every caller.
"""

import os
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, StrictUndefined, Template, TemplateError
from omegaconf import OmegaConf

from portal.contexts.catalog.data_structures import (
    AUDIENCE_KINDS,
    AudienceRule,
    ChannelKind,
    ChannelStats,
    ChannelTemplate,
    ContentItem,
    Engagement,
    General,
    Priority,
    UnknownAudience,
)
from portal.utils.exceptions import ConfigurationError
from portal.contexts.catalog.logger import _log_debug, _log_warning, log_catalog_loaded

load_dotenv()
DATA_PATH = Path(__file__).parent / "data"
CATALOG_PATH = Path(os.getenv("PORTAL_CATALOG_PATH", DATA_PATH / "catalog.yaml"))

FALLBACK_STATS = ChannelStats(member_count=0, preview="")


class ContentCatalog:
    """
    Immutable registry of announcements and channel templates.

    Built by load_catalog() from YAML, or directly from Python objects when a
    caller wants to swap in its own data (tests, alternative data sources).
    """

    def __init__(
        self,
        items: Tuple[ContentItem, ...],
        templates: Tuple[ChannelTemplate, ...],
        channel_stats: Dict[ChannelKind, Dict[str, ChannelStats]] = None,
        default_stats: ChannelStats = FALLBACK_STATS,
        channel_text: Dict[ChannelKind, Tuple[str, str]] = None,
    ):
        """
        Initialize the catalog.

        Args:
            items: Announcements in display order
            templates: Fixed channels; exactly one must be ChannelKind.OFFICIAL
            channel_stats: Per-kind metadata rows keyed by slugified name.
                           The "default" key of each kind is that kind's fallback
            default_stats: Fallback row for kinds with no table
            channel_text: Per-kind (name, description) Jinja2 sources

        Raises:
            ConfigurationError: If the templates do not hold exactly one official channel
        """
        official = [t for t in templates if t.kind is ChannelKind.OFFICIAL]
        if len(official) != 1:
            raise ConfigurationError(
                f"Catalog must define exactly one official channel template, found {len(official)}",
                entry=[t.id for t in official],
            )

        self._items = tuple(items)
        self._templates = tuple(templates)
        self._by_id = {item.id: item for item in self._items}
        self._stats = {kind: dict(rows) for kind, rows in (channel_stats or {}).items()}
        self._default_stats = default_stats
        self._env = Environment(undefined=StrictUndefined, autoescape=False)
        self._text: Dict[ChannelKind, Tuple[Template, Template]] = {}

        for kind, (name_source, description_source) in (channel_text or {}).items():
            try:
                pair = (
                    self._env.from_string(name_source),
                    self._env.from_string(description_source),
                )
                # Templates may only reference {{ name }}
                pair[0].render(name="")
                pair[1].render(name="")
            except TemplateError as e:
                raise ConfigurationError(
                    f"Invalid channel text template for kind '{kind.value}': {e}",
                    entry=(name_source, description_source),
                ) from e
            self._text[kind] = pair

    def all(self) -> Tuple[ContentItem, ...]:
        """Return every announcement in catalog order."""
        return self._items

    def all_templates(self) -> Tuple[ChannelTemplate, ...]:
        """Return every fixed channel template in catalog order."""
        return self._templates

    def get(self, item_id: str) -> Optional[ContentItem]:
        """Look up an announcement by id, None if absent."""
        return self._by_id.get(item_id)

    def community_template(self) -> ChannelTemplate:
        """Return the single community-wide channel template."""
        return next(t for t in self._templates if t.kind is ChannelKind.OFFICIAL)

    def trailing_templates(self) -> Tuple[ChannelTemplate, ...]:
        """Return the non-official templates, appended after derived channels."""
        return tuple(t for t in self._templates if t.kind is not ChannelKind.OFFICIAL)

    def channel_stats(self, kind: ChannelKind, key: str) -> ChannelStats:
        """
        Look up metadata for a derived channel.

        Total: an unknown key falls back to the kind's default row, and a kind
        with no table falls back to the catalog-wide default.

        Args:
            kind: Channel kind
            key: Normalized (slugified) membership name, e.g. "badminton-club"

        Returns:
            ChannelStats row
        """
        rows = self._stats.get(kind)
        if not rows:
            return self._default_stats
        if key in rows:
            return rows[key]
        return rows.get("default", self._default_stats)

    def channel_text(self, kind: ChannelKind, name: str) -> Tuple[str, str]:
        """
        Render display name and description for a derived channel.

        Kinds without a configured template use the raw name and no description.
        """
        pair = self._text.get(kind)
        if pair is None:
            return name, ""
        return pair[0].render(name=name), pair[1].render(name=name)

    def __len__(self) -> int:
        return len(self._items)


# =============================================================================
# YAML LOADING
# =============================================================================


def _require(entry: Dict[str, Any], key: str, config_path: Path) -> Any:
    if entry.get(key) in (None, ""):
        raise ConfigurationError(f"Missing required field '{key}'", config_path, entry)
    return entry[key]


def _require_mapping(value: Any, what: str, config_path: Path) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigurationError(f"{what} must be a mapping", config_path, value)
    return value


def _parse_int(entry: Dict[str, Any], key: str, config_path: Path) -> int:
    value = entry.get(key, 0)
    # bool is an int subclass; reject it along with strings and floats
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Field '{key}' must be an integer", config_path, entry)
    return value


def _parse_bool(entry: Dict[str, Any], key: str, config_path: Path) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"Field '{key}' must be true or false", config_path, entry)
    return value


def _parse_audience(raw: Any, config_path: Path) -> AudienceRule:
    if raw is None:
        return General()
    raw = _require_mapping(raw, "Audience", config_path)

    kind = str(raw.get("kind", "general"))
    rule_cls = AUDIENCE_KINDS.get(kind)

    if rule_cls is None:
        _log_warning(f"Unknown audience kind '{kind}' in {config_path.name}; item will be hidden")
        return UnknownAudience(kind)
    if rule_cls is General:
        return General()

    target = raw.get("target")
    if not target:
        raise ConfigurationError(f"Audience kind '{kind}' requires a target", config_path, raw)
    return rule_cls(str(target))


def _parse_item(entry: Any, config_path: Path) -> ContentItem:
    entry = _require_mapping(entry, "Announcement", config_path)
    raw_timestamp = str(_require(entry, "timestamp", config_path))

    try:
        timestamp = datetime.fromisoformat(raw_timestamp)
        priority = Priority(entry.get("priority", "medium"))
    except ValueError as e:
        raise ConfigurationError(f"Invalid announcement field: {e}", config_path, entry) from e

    return ContentItem(
        id=str(_require(entry, "id", config_path)),
        title=str(_require(entry, "title", config_path)),
        body=str(entry.get("body", "")),
        audience=_parse_audience(entry.get("audience"), config_path),
        timestamp=timestamp,
        author=str(entry.get("author", "")),
        engagement=Engagement(
            reaction_count=_parse_int(entry, "reactions", config_path),
            comment_count=_parse_int(entry, "comments", config_path),
        ),
        read_state=_parse_bool(entry, "read_state", config_path),
        priority=priority,
    )


def _parse_kind(value: Any, config_path: Path, entry: Any) -> ChannelKind:
    try:
        return ChannelKind(value)
    except ValueError as e:
        raise ConfigurationError(f"Unknown channel kind '{value}'", config_path, entry) from e


def _parse_template(entry: Any, config_path: Path) -> ChannelTemplate:
    entry = _require_mapping(entry, "Channel template", config_path)
    return ChannelTemplate(
        id=str(_require(entry, "id", config_path)),
        display_name=str(_require(entry, "name", config_path)),
        kind=_parse_kind(_require(entry, "kind", config_path), config_path, entry),
        base_preview=str(entry.get("preview", "")),
        description=str(entry.get("description", "")),
        member_count=_parse_int(entry, "member_count", config_path),
        last_activity=str(entry.get("last_activity", "")),
        unread_count=_parse_int(entry, "unread_count", config_path),
    )


def _parse_stats(entry: Any, config_path: Path) -> ChannelStats:
    entry = _require_mapping(entry, "Channel stats row", config_path)
    return ChannelStats(
        member_count=_parse_int(entry, "member_count", config_path),
        preview=str(entry.get("preview", "")),
        last_activity=str(entry.get("last_activity", "")),
        unread_count=_parse_int(entry, "unread_count", config_path),
    )


def parse_catalog(data: Dict[str, Any], config_path: Path) -> ContentCatalog:
    """
    Build a ContentCatalog from an already-parsed YAML mapping.

    Args:
        data: Mapping with announcements, templates, channel_text, channel_stats
        config_path: Source path, used in error messages

    Returns:
        ContentCatalog instance

    Raises:
        ConfigurationError: If any entry is malformed
    """
    data = _require_mapping(data, "Catalog root", config_path)

    items = tuple(_parse_item(entry, config_path) for entry in data.get("announcements") or [])
    templates = tuple(_parse_template(entry, config_path) for entry in data.get("templates") or [])

    duplicates = {item_id for item_id, count in Counter(i.id for i in items).items() if count > 1}
    if duplicates:
        raise ConfigurationError(
            f"Duplicate announcement ids: {sorted(duplicates)}", config_path
        )

    channel_text = {}
    raw_text = _require_mapping(data.get("channel_text") or {}, "channel_text", config_path)
    for kind_name, text in raw_text.items():
        kind = _parse_kind(kind_name, config_path, text)
        text = _require_mapping(text, f"channel_text.{kind_name}", config_path)
        channel_text[kind] = (str(text.get("name", "{{ name }}")), str(text.get("description", "")))

    raw_stats = dict(_require_mapping(data.get("channel_stats") or {}, "channel_stats", config_path))
    default_stats = _parse_stats(raw_stats.pop("default", None) or {}, config_path)
    channel_stats = {}
    for kind_name, rows in raw_stats.items():
        kind = _parse_kind(kind_name, config_path, rows)
        rows = _require_mapping(rows, f"channel_stats.{kind_name}", config_path)
        channel_stats[kind] = {
            str(key): _parse_stats(row, config_path) for key, row in rows.items()
        }

    return ContentCatalog(
        items=items,
        templates=templates,
        channel_stats=channel_stats,
        default_stats=default_stats,
        channel_text=channel_text,
    )


class CatalogRegistry:
    """
    Registry for loading and caching content catalogs.

    Catalogs are read from YAML once per path and shared afterwards; they are
    immutable, so sharing needs no locking.
    """

    def __init__(self, default_path: Path = None):
        """
        Initialize the catalog registry.

        Args:
            default_path: Catalog used when get_catalog() is called without a
                          path. Defaults to PORTAL_CATALOG_PATH from environment
        """
        if default_path is None:
            default_path = CATALOG_PATH

        self.default_path = Path(default_path)
        self._cache: Dict[Path, ContentCatalog] = {}

    def get_catalog(self, config_path: Path = None) -> ContentCatalog:
        """
        Get a catalog by path, loading and caching it if necessary.

        Args:
            config_path: Catalog YAML path (defaults to default_path)

        Returns:
            ContentCatalog instance

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ConfigurationError: If the catalog is malformed
        """
        config_path = Path(config_path) if config_path is not None else self.default_path

        if config_path in self._cache:
            return self._cache[config_path]

        if not config_path.exists():
            raise FileNotFoundError(f"Catalog not found at {config_path}")

        _log_debug(f"Loading catalog from {config_path}")
        data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
        catalog = parse_catalog(data, config_path)
        log_catalog_loaded(config_path, catalog)

        self._cache[config_path] = catalog
        return catalog

    def clear_cache(self):
        """Clear the catalog cache."""
        self._cache.clear()

    def is_cached(self, config_path: Path) -> bool:
        """Check if a catalog is in the cache."""
        return Path(config_path) in self._cache


_registry = CatalogRegistry()


def load_catalog(config_path: Path = None) -> ContentCatalog:
    """
    Load the content catalog through the shared registry.

    Args:
        config_path: Optional catalog YAML (defaults to PORTAL_CATALOG_PATH)

    Returns:
        ContentCatalog instance (cached per path)
    """
    return _registry.get_catalog(config_path)
