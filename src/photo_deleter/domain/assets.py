"""Domain models for photo library assets."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AssetRef:
    """Opaque handle to one photo in the library."""

    id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class AlbumRef:
    """Handle to an album returned by the photo library."""

    id: str
    name: str


@dataclass(frozen=True)
class TargetSize:
    """Requested bounding box for a rendered image."""

    width: int = 800
    height: int = 800


@dataclass(frozen=True)
class ImageData:
    """Pixel data materialized for a single asset."""

    asset_id: str
    content: bytes
    media_type: str = "image/jpeg"
