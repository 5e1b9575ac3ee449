"""Qt presentation of the pinned folder panel."""
