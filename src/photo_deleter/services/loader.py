"""Image loading with a per-asset retry budget."""

import logging
from dataclasses import dataclass, field

from photo_deleter.domain.assets import AssetRef, ImageData, TargetSize
from photo_deleter.domain.errors import (
    ImageRequestCancelledError,
    ImageRequestEmptyError,
    ImageRequestTransientError,
)
from photo_deleter.domain.loading import ImageRequest, LoadAttempt, LoadOutcome
from photo_deleter.services.library import PhotoLibrary

logger = logging.getLogger(__name__)

MAX_RETRIES = 3


@dataclass
class RetryBoundedLoader:
    """Loads asset images, retrying failures up to ``MAX_RETRIES`` times.

    Transient failures and empty results consume the budget. Cancellations
    are retried with the same count, so they never cause a skip.
    """

    library: PhotoLibrary
    max_retries: int = MAX_RETRIES
    attempts: list[LoadAttempt] = field(default_factory=list)

    async def load(self, asset: AssetRef, target_size: TargetSize) -> ImageData | None:
        """Return image data, or ``None`` when the asset is unusable."""
        self.attempts = []
        request = ImageRequest(asset=asset)
        while True:
            outcome, image = await self._attempt(request, target_size)
            self.attempts.append(LoadAttempt(request=request, outcome=outcome))
            if outcome is LoadOutcome.SUCCESS:
                return image
            if outcome is LoadOutcome.CANCELLED:
                request = request.repeat()
                continue
            if request.retry_count < self.max_retries:
                request = request.retry()
                continue
            logger.warning(
                "Giving up on asset %s after %d retries (%s)",
                asset.id,
                request.retry_count,
                outcome,
            )
            return None

    async def _attempt(
        self, request: ImageRequest, target_size: TargetSize
    ) -> tuple[LoadOutcome, ImageData | None]:
        try:
            image = await self.library.request_image(request.asset, target_size)
        except ImageRequestCancelledError:
            return LoadOutcome.CANCELLED, None
        except ImageRequestEmptyError:
            return LoadOutcome.EMPTY_RESULT, None
        except ImageRequestTransientError:
            return LoadOutcome.TRANSIENT_FAILURE, None
        except Exception:
            logger.exception("Unexpected error loading asset %s", request.asset.id)
            return LoadOutcome.TRANSIENT_FAILURE, None
        if image is None or not image.content:
            return LoadOutcome.EMPTY_RESULT, None
        return LoadOutcome.SUCCESS, image
