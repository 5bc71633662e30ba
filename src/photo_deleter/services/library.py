"""Photo library interface used by the swipe session."""

from typing import Protocol

from photo_deleter.domain.assets import AlbumRef, AssetRef, ImageData, TargetSize


class PhotoLibrary(Protocol):
    """Access to the user's photo library.

    Implementations raise the errors from ``photo_deleter.domain.errors``:
    ``create_album`` fails with ``AlbumCreationError``, ``add_asset`` with
    ``AlbumWriteError`` and ``request_image`` with one of
    ``ImageRequestTransientError``, ``ImageRequestCancelledError`` or
    ``ImageRequestEmptyError``.
    """

    async def has_access(self) -> bool:
        """Return whether the library may be read and written."""

    async def list_image_assets(self) -> list[AssetRef]:
        """Return every image asset, oldest first."""

    async def find_album(self, name: str) -> AlbumRef | None:
        """Return the album with the given name, if present."""

    async def list_album_members(self, name: str) -> set[str]:
        """Return asset ids in the named album, empty when it is absent."""

    async def create_album(self, name: str) -> None:
        """Create an album with the given name."""

    async def add_asset(self, asset: AssetRef, album: AlbumRef) -> None:
        """Add an asset to an album."""

    async def request_image(
        self, asset: AssetRef, target_size: TargetSize
    ) -> ImageData:
        """Fetch pixel data for an asset."""
