from .models import ChildRecord, Entry, Snapshot
from .repositories import IAssetRepository

__all__ = ["ChildRecord", "Entry", "IAssetRepository", "Snapshot"]
