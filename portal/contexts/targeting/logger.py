"""
Targeting context logger.

Provides logging interface for the targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from portal.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path = None, **provenance) -> Path:
    """
    Setup logger for the targeting context.

    Args:
        log_dir: Directory for this session (defaults to PORTAL_LOGS_PATH)
        **provenance: Extra key-value pairs for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance=provenance or None,
    )


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_view_built(view) -> None:
    """
    Log a one-line summary of a built PortalView.

    Args:
        view: PortalView returned by build_view()
    """
    _log_info(
        f"{view.member.id}: {len(view.announcements)} announcements, "
        f"{len(view.channels)} channels (batch {view.membership.batch_year})"
    )
