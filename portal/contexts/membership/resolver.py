"""
Membership resolution.

Derives a member's batch, clubs and events from their identifier by evaluating
every rule in the rule table and unioning the results. Resolution is total:
empty, missing or non-string identifiers resolve to the default membership.
"""

from typing import Any, Iterable, Tuple

from portal.contexts.membership.data_structures import Member, MembershipSet
from portal.contexts.membership.logger import _log_debug, log_membership_resolved
from portal.contexts.membership.rules import MembershipRuleTable, load_membership_rules


def _ordered_union(groups: Iterable[Tuple[str, ...]]) -> Tuple[str, ...]:
    """Concatenate groups, keeping the first occurrence of each name."""
    seen = {}
    for group in groups:
        for name in group:
            seen.setdefault(name, None)
    return tuple(seen)


def default_membership(rules: MembershipRuleTable = None) -> MembershipSet:
    """Return the membership given to identifiers no rule matches."""
    if rules is None:
        rules = load_membership_rules()
    return MembershipSet(batch_year=rules.baseline_batch)


def resolve_membership(member_id: Any, rules: MembershipRuleTable = None) -> MembershipSet:
    """
    Derive the membership set implied by a member identifier.

    Rules are evaluated independently, so an id matching several patterns
    collects the clubs and events of all of them. The batch year comes from
    the first matching rule that declares one.

    Args:
        member_id: Member identifier (e.g., "PPMK001", "demo")
        rules: Rule table (defaults to the configured table)

    Returns:
        MembershipSet; the default membership when nothing matches

    Examples:
        >>> resolve_membership("PPMK001").clubs
        ('Badminton Club', 'Recreational Club')
        >>> resolve_membership("").batch_year
        '2024'
    """
    if rules is None:
        rules = load_membership_rules()

    if not isinstance(member_id, str) or not member_id:
        _log_debug(f"Identifier {member_id!r} is empty or not a string; using default membership")
        return default_membership(rules)

    matched = rules.matching(member_id)
    if not matched:
        return default_membership(rules)

    batch_year = next(
        (rule.batch_year for rule in matched if rule.batch_year is not None),
        rules.baseline_batch,
    )
    membership = MembershipSet(
        batch_year=batch_year,
        clubs=_ordered_union(rule.clubs for rule in matched),
        events=_ordered_union(rule.events for rule in matched),
    )
    log_membership_resolved(member_id, [rule.pattern for rule in matched], membership)
    return membership


def resolve_member(member: Member, rules: MembershipRuleTable = None) -> MembershipSet:
    """
    Derive the membership set for a verified member.

    Same as resolve_membership(member.id) but also carries the member's
    institution, which the channel resolver turns into an institution channel.
    """
    membership = resolve_membership(member.id, rules)
    if member.institution is None:
        return membership
    return MembershipSet(
        batch_year=membership.batch_year,
        clubs=membership.clubs,
        events=membership.events,
        institution=member.institution,
    )
