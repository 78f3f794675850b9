"""
Membership rule table.

Rules map patterns found in a member identifier to a batch year and to club and
event additions. The table is plain data, loaded from YAML, so the rule set can
change without touching the resolver.

Examples:
    >>> table = load_membership_rules()
    >>> [rule.pattern for rule in table.matching("PPMK001")]
    ['001']
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from portal.contexts.membership.logger import _log_debug
from portal.utils.exceptions import ConfigurationError

load_dotenv()
MEMBERSHIP_RULES_PATH = Path(
    os.getenv(
        "PORTAL_MEMBERSHIP_RULES_PATH",
        Path(__file__).parent / "data" / "membership_rules.yaml",
    )
)


class MatchKind(Enum):
    """How a rule pattern is compared with a member identifier."""

    CONTAINS = "contains"
    EXACT = "exact"


@dataclass(frozen=True)
class MembershipRule:
    """
    One row of the rule table.

    Attributes:
        pattern: Text compared against the member id (case-sensitive)
        match: CONTAINS for substring match, EXACT for whole-id match
        batch_year: Batch year implied by the pattern, if any
        clubs: Clubs added when the rule matches
        events: Events added when the rule matches
    """

    pattern: str
    match: MatchKind = MatchKind.CONTAINS
    batch_year: Optional[str] = None
    clubs: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()

    def matches(self, member_id: str) -> bool:
        if self.match is MatchKind.EXACT:
            return member_id == self.pattern
        return self.pattern in member_id


@dataclass(frozen=True)
class MembershipRuleTable:
    """
    Ordered rule table plus the baseline batch used when no rule sets one.

    Attributes:
        baseline_batch: Batch year for members no batch rule matches
        rules: Rules in evaluation order
    """

    baseline_batch: str
    rules: Tuple[MembershipRule, ...] = ()

    def matching(self, member_id: str) -> Tuple[MembershipRule, ...]:
        """Return every rule that matches the id, in table order."""
        return tuple(rule for rule in self.rules if rule.matches(member_id))


def _parse_rule(entry: Dict[str, Any], config_path: Path) -> MembershipRule:
    pattern = entry.get("pattern")
    if pattern in (None, ""):
        raise ConfigurationError("Membership rule requires a non-empty pattern", config_path, entry)

    try:
        match = MatchKind(entry.get("match", "contains"))
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown match kind '{entry.get('match')}'", config_path, entry
        ) from e

    batch = entry.get("batch")
    return MembershipRule(
        pattern=str(pattern),
        match=match,
        batch_year=str(batch) if batch is not None else None,
        clubs=tuple(str(club) for club in entry.get("clubs") or []),
        events=tuple(str(event) for event in entry.get("events") or []),
    )


def parse_membership_rules(data: Dict[str, Any], config_path: Path) -> MembershipRuleTable:
    """
    Build a rule table from an already-parsed YAML mapping.

    Args:
        data: Mapping with baseline_batch and rules
        config_path: Source path, used in error messages

    Returns:
        MembershipRuleTable

    Raises:
        ConfigurationError: If the baseline is missing or a rule is malformed
    """
    if not isinstance(data, dict) or data.get("baseline_batch") in (None, ""):
        raise ConfigurationError("Membership rules require a baseline_batch", config_path)

    return MembershipRuleTable(
        baseline_batch=str(data["baseline_batch"]),
        rules=tuple(_parse_rule(entry, config_path) for entry in data.get("rules") or []),
    )


_cache: Dict[Path, MembershipRuleTable] = {}


def load_membership_rules(config_path: Path = None) -> MembershipRuleTable:
    """
    Load the membership rule table from YAML, caching it per path.

    Args:
        config_path: Optional path to the rules file (defaults to PORTAL_MEMBERSHIP_RULES_PATH)

    Returns:
        MembershipRuleTable

    Raises:
        FileNotFoundError: If the rules file doesn't exist
        ConfigurationError: If the rules file is malformed
    """
    if config_path is None:
        config_path = MEMBERSHIP_RULES_PATH
    config_path = Path(config_path)

    if config_path in _cache:
        return _cache[config_path]

    if not config_path.exists():
        raise FileNotFoundError(f"Membership rules not found at {config_path}")

    data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    table = parse_membership_rules(data, config_path)
    _log_debug(f"Loaded {len(table.rules)} membership rules from {config_path.name}")

    _cache[config_path] = table
    return table
