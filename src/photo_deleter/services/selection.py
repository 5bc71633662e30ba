"""Random selection of photos the user has not judged yet."""

import logging
import random
from dataclasses import dataclass, field

from photo_deleter.domain.assets import AssetRef
from photo_deleter.services.library import PhotoLibrary
from photo_deleter.services.processed import ProcessedIdSet
from photo_deleter.services.quarantine import QuarantineAlbum

logger = logging.getLogger(__name__)


@dataclass
class AssetSelector:
    """Picks the next eligible asset and records it as processed."""

    library: PhotoLibrary
    quarantine: QuarantineAlbum
    processed: ProcessedIdSet
    rng: random.Random = field(default_factory=random.Random)

    async def next_eligible(self) -> AssetRef | None:
        """Return a random eligible asset, or ``None`` once exhausted.

        The chosen id is persisted as processed before returning, so a
        restart between selection and decision never offers it again.
        """
        candidates = await self._eligible()
        if not candidates:
            logger.info("No eligible photos remain")
            return None
        asset = self.rng.choice(candidates)
        self.processed.add(asset.id)
        logger.debug(
            "Selected asset %s from %d candidates", asset.id, len(candidates)
        )
        return asset

    async def remaining(self) -> int:
        """Count eligible assets without selecting one."""
        return len(await self._eligible())

    async def _eligible(self) -> list[AssetRef]:
        assets = await self.library.list_image_assets()
        if not assets:
            return []
        quarantined = await self.quarantine.members()
        return [
            asset
            for asset in assets
            if asset.id not in quarantined and asset.id not in self.processed
        ]
