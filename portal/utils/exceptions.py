"""Custom exceptions for catalog and rule-table configuration."""

from pathlib import Path
from typing import Any, Optional


class ConfigurationError(ValueError):
    """
    Exception raised when a catalog or membership rule file is malformed.

    Only configuration loading raises; the targeting engine itself is total.

    Attributes:
        message: Error description
        config_path: Path to the YAML file being loaded
        entry: The offending entry, if one could be isolated
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        entry: Optional[Any] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.entry = entry

        parts = [message]

        if config_path:
            parts.append(f"\nConfig file: {config_path}")

        if entry is not None:
            snippet = repr(entry)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"Entry: {snippet}")

        super().__init__("\n".join(parts))
