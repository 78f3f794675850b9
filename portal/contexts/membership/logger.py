"""
Membership context logger.

Provides logging interface for the membership context with automatic [membership] prefix.
All membership modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[membership]"


def _log_debug(message: str) -> None:
    """Log debug message with [membership] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_membership_resolved(member_id: str, patterns: list, membership) -> None:
    """
    Log which rules matched an identifier and what they produced.

    Args:
        member_id: Resolved identifier
        patterns: Patterns of the matching rules, in table order
        membership: Resulting MembershipSet
    """
    _log_debug(f"{member_id}: matched rules {patterns}")
    _log_debug(
        f"  batch={membership.batch_year} clubs={list(membership.clubs)} "
        f"events={list(membership.events)}"
    )
