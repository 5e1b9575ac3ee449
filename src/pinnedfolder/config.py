"""Default configuration values for pinnedfolder."""

from __future__ import annotations

from typing import Final

# Fallback window title when no folder is displayed.
DEFAULT_TITLE: Final[str] = "Folder"
NO_FOLDER_TEXT: Final[str] = "No folder selected..."

# ---------------------------------------------------------------------------
# List geometry
# ---------------------------------------------------------------------------

ROW_HEIGHT: Final[float] = 16.0
ICON_SIZE: Final[int] = 16
TOP_BAR_HEIGHT: Final[int] = 21
ROW_TEXT_PADDING: Final[int] = 4

# ---------------------------------------------------------------------------
# UI interaction constants
# ---------------------------------------------------------------------------

# A press turns into a drag once the pointer moves strictly further than this.
DRAG_THRESHOLD_PX: Final[float] = 6.0

# Bursts of file-system notifications are folded into a single reload.
WATCH_DEBOUNCE_MS: Final[int] = 250

# ---------------------------------------------------------------------------
# File-system repository
# ---------------------------------------------------------------------------

DEFAULT_EXCLUDE: Final[list[str]] = [
    "**/.DS_Store",
    "**/._*",
    "**/.git",
    "**/Thumbs.db",
    "**/desktop.ini",
]
HIDDEN_EXCLUDE: Final[list[str]] = ["**/.*"]

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

APP_DIR_NAME: Final[str] = "pinnedfolder"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
SETTINGS_SCHEMA_ID: Final[str] = "pinnedfolder/settings@1"
