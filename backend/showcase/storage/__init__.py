"""Storage module for uploaded image files."""

from showcase.storage.image_store import ImageStore, StoredImage

__all__ = ["ImageStore", "StoredImage"]
