"""
Catalog context logger.

Provides logging interface for the catalog context with automatic [catalog] prefix.
All catalog modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[catalog]"


def _log_info(message: str) -> None:
    """Log info message with [catalog] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [catalog] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [catalog] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_catalog_loaded(config_path: Path, catalog) -> None:
    """
    Log a summary of a freshly loaded catalog.

    Args:
        config_path: YAML file the catalog came from
        catalog: ContentCatalog instance
    """
    _log_info(
        f"Loaded catalog {config_path.name}: {len(catalog.all())} announcements, "
        f"{len(catalog.all_templates())} channel templates"
    )
