"""Pure helpers for folder and file identifiers.

Identifiers are ``/``-separated strings. Both POSIX roots (``/``) and drive
roots (``C:/``) are understood so that Windows paths round-trip.
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
from typing import TYPE_CHECKING, Optional, Union

from ..errors import RepositoryError

if TYPE_CHECKING:
    from ..domain.repositories import IAssetRepository

_LOGGER = logging.getLogger(__name__)

_DRIVE = re.compile(r"^[A-Za-z]:$")

PathLike = Union[str, "os.PathLike[str]"]


def _restore_drive_root(path: str) -> str:
    # ``posixpath`` turns ``C:/`` into ``C:``; keep drive roots addressable.
    return path + "/" if _DRIVE.match(path) else path


def is_root(path: str) -> bool:
    return path == "/" or (len(path) == 3 and _DRIVE.match(path[:2]) is not None and path[2] == "/")


def normalize_path(path: Optional[PathLike]) -> Optional[str]:
    """Return *path* with ``/`` separators and no redundant components.

    ``None`` and blank strings normalize to ``None``.
    """

    if path is None:
        return None
    text = os.fspath(path).replace("\\", "/")
    if not text.strip():
        return None
    # ``normpath`` keeps a leading ``//`` (UNC style) intact.
    return _restore_drive_root(posixpath.normpath(text))


def containing_folder(path: Optional[PathLike]) -> Optional[str]:
    """Return the folder directly containing *path*, or ``None`` at a root."""

    normalized = normalize_path(path)
    if normalized is None or is_root(normalized):
        return None
    parent = posixpath.dirname(normalized)
    if not parent or parent == normalized:
        return None
    return _restore_drive_root(parent)


def is_immediate_child(folder: Optional[PathLike], path: Optional[PathLike]) -> bool:
    """Return ``True`` when *path* lives directly inside *folder*."""

    normalized_folder = normalize_path(folder)
    if normalized_folder is None:
        return False
    return containing_folder(path) == normalized_folder


def is_valid_folder(path: Optional[PathLike], repository: "IAssetRepository") -> bool:
    """Ask the repository whether *path* is a folder; lookup failures mean no."""

    normalized = normalize_path(path)
    if normalized is None:
        return False
    try:
        return repository.is_valid_folder(normalized)
    except RepositoryError as exc:
        _LOGGER.debug("Folder check failed for %s: %s", normalized, exc)
        return False


def valid_parent_folder(path: Optional[PathLike], repository: "IAssetRepository") -> Optional[str]:
    """Return the parent of *path* when the repository accepts it as a folder."""

    normalized = normalize_path(path)
    if normalized is None:
        return None
    try:
        parent = normalize_path(repository.parent_of(normalized))
    except RepositoryError as exc:
        _LOGGER.debug("Parent of %s did not resolve: %s", normalized, exc)
        return None
    if parent is not None and is_valid_folder(parent, repository):
        return parent
    return None


def display_name(path: Optional[PathLike]) -> str:
    """Basename of *path* without its extension."""

    normalized = normalize_path(path)
    if normalized is None:
        return ""
    name = posixpath.basename(normalized)
    if not name:
        return normalized
    stem, _ = posixpath.splitext(name)
    return stem or name


__all__ = [
    "containing_folder",
    "display_name",
    "is_immediate_child",
    "is_valid_folder",
    "is_root",
    "normalize_path",
    "valid_parent_folder",
]
