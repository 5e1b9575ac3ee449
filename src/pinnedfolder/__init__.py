"""Pinned single-folder file browser panel."""

__version__ = "0.1.0"
