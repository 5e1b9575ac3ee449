from .filesystem_asset_repository import FileSystemAssetRepository, stable_id

__all__ = ["FileSystemAssetRepository", "stable_id"]
