"""Error definitions for the Sensitive Replace tool."""

from __future__ import annotations


class SensitiveReplaceError(Exception):
    """Base exception for all custom errors."""


class ReplacementCancelled(SensitiveReplaceError):
    """Raised when the user dismisses the replacement prompt."""


class SelectionError(SensitiveReplaceError):
    """Raised when selections fall outside the document or overlap."""


class OverwriteRefusedError(SensitiveReplaceError):
    """Raised when attempting to overwrite an output without consent."""


class ConfigurationError(SensitiveReplaceError):
    """Raised when configuration sources cannot be loaded or validated."""
