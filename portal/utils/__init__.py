"""
Shared utilities for PORTAL.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Text normalization helpers
"""

from portal.utils.exceptions import ConfigurationError
from portal.utils.text_processing import contains_ignore_case, slugify

__all__ = ["ConfigurationError", "contains_ignore_case", "slugify"]
