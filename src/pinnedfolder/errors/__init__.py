"""Custom exception hierarchy for pinnedfolder."""

from __future__ import annotations


class PinnedFolderError(Exception):
    """Base class for all custom errors raised by pinnedfolder."""


# --- Infrastructure errors ---

class InfrastructureError(PinnedFolderError):
    """Base class for infrastructure-level errors."""


class RepositoryError(InfrastructureError):
    """Raised when the asset repository cannot answer a query."""


class ExternalToolError(InfrastructureError):
    """Raised when a native helper (file manager, default application) fails to launch."""


# --- Settings ---

class SettingsError(PinnedFolderError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "ExternalToolError",
    "InfrastructureError",
    "PinnedFolderError",
    "RepositoryError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
