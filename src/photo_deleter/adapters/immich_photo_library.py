"""Immich server client implementing the photo library interface."""

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx

from photo_deleter.domain.assets import AlbumRef, AssetRef, ImageData, TargetSize
from photo_deleter.domain.errors import (
    AlbumCreationError,
    AlbumWriteError,
    ImageRequestCancelledError,
    ImageRequestEmptyError,
    ImageRequestTransientError,
)
from photo_deleter.services.library import PhotoLibrary

logger = logging.getLogger(__name__)

PAGE_SIZE = 250
THUMBNAIL_MAX_EDGE = 250
PREVIEW_MAX_EDGE = 1440
HTTP_CLIENT_CLOSED_REQUEST = 499


@dataclass
class ImmichPhotoLibrary(PhotoLibrary):
    """Photo library backed by the Immich REST API."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, api_key: str) -> "ImmichPhotoLibrary":
        """Create a library client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers={"x-api-key": api_key}),
        )

    async def has_access(self) -> bool:
        """Return whether the API key is accepted by the server."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/api/users/me", timeout=10
            )
        except httpx.HTTPError:
            logger.exception("Photo library is unreachable")
            return False
        return response.status_code == httpx.codes.OK

    async def list_image_assets(self) -> list[AssetRef]:
        """Return every image asset ordered by creation date."""
        assets: list[AssetRef] = []
        page: int | None = 1
        while page is not None:
            response = await self.http_client.post(
                f"{self.base_url}/api/search/metadata",
                json={"type": "IMAGE", "order": "asc", "page": page, "size": PAGE_SIZE},
                timeout=30,
            )
            response.raise_for_status()
            result = response.json().get("assets", {})
            assets.extend(_parse_asset(item) for item in result.get("items", []))
            next_page = result.get("nextPage")
            page = int(next_page) if next_page else None
        return assets

    async def find_album(self, name: str) -> AlbumRef | None:
        """Return the album with the given name, if present."""
        response = await self.http_client.get(f"{self.base_url}/api/albums", timeout=15)
        response.raise_for_status()
        for row in response.json():
            if row.get("albumName") == name:
                return AlbumRef(id=str(row["id"]), name=name)
        return None

    async def list_album_members(self, name: str) -> set[str]:
        """Return asset ids stored in the named album."""
        album = await self.find_album(name)
        if album is None:
            return set()
        response = await self.http_client.get(
            f"{self.base_url}/api/albums/{album.id}", timeout=30
        )
        response.raise_for_status()
        return {str(item["id"]) for item in response.json().get("assets", [])}

    async def create_album(self, name: str) -> None:
        """Create an empty album."""
        try:
            response = await self.http_client.post(
                f"{self.base_url}/api/albums", json={"albumName": name}, timeout=15
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AlbumCreationError(f"Failed to create album {name!r}") from exc

    async def add_asset(self, asset: AssetRef, album: AlbumRef) -> None:
        """Add an asset to an album."""
        try:
            response = await self.http_client.put(
                f"{self.base_url}/api/albums/{album.id}/assets",
                json={"ids": [asset.id]},
                timeout=15,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AlbumWriteError(
                f"Failed to add asset {asset.id} to album {album.name!r}"
            ) from exc
        for row in response.json():
            error = row.get("error")
            # Re-adding an asset already in the album is not a failure.
            if not row.get("success") and error != "duplicate":
                raise AlbumWriteError(
                    f"Album {album.name!r} rejected asset {asset.id}: {error}"
                )

    async def request_image(
        self, asset: AssetRef, target_size: TargetSize
    ) -> ImageData:
        """Download a rendition of the asset sized for the target box."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/api/assets/{asset.id}/thumbnail",
                params={"size": _rendition(target_size)},
                timeout=20,
            )
        except httpx.HTTPError as exc:
            raise ImageRequestTransientError(str(exc)) from exc
        if response.status_code == HTTP_CLIENT_CLOSED_REQUEST:
            raise ImageRequestCancelledError(f"Request for {asset.id} was aborted")
        if response.is_error:
            raise ImageRequestTransientError(
                f"Image request for {asset.id} failed with {response.status_code}"
            )
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            raise ImageRequestEmptyError(f"No image data for {asset.id}")
        return ImageData(
            asset_id=asset.id,
            content=response.content,
            media_type=response.headers.get("content-type", "image/jpeg"),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _rendition(target_size: TargetSize) -> str:
    edge = max(target_size.width, target_size.height)
    if edge <= THUMBNAIL_MAX_EDGE:
        return "thumbnail"
    if edge <= PREVIEW_MAX_EDGE:
        return "preview"
    return "fullsize"


def _parse_asset(item: dict[str, object]) -> AssetRef:
    created_raw = item.get("fileCreatedAt")
    created_at = None
    if isinstance(created_raw, str):
        created_at = datetime.fromisoformat(created_raw.replace("Z", "+00:00"))
    return AssetRef(id=str(item["id"]), created_at=created_at)
