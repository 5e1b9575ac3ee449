"""Persisted settings for the pinned folder panel."""
