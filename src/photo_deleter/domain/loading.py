"""Domain models for image load attempts."""

from dataclasses import dataclass, replace
from enum import StrEnum

from photo_deleter.domain.assets import AssetRef


class LoadOutcome(StrEnum):
    """Result of a single image request."""

    SUCCESS = "success"
    TRANSIENT_FAILURE = "transient_failure"
    CANCELLED = "cancelled"
    EMPTY_RESULT = "empty_result"


@dataclass(frozen=True)
class ImageRequest:
    """One attempt to load an asset, carrying its retry count."""

    asset: AssetRef
    retry_count: int = 0

    def retry(self) -> "ImageRequest":
        """Return the next attempt, consuming one unit of retry budget."""
        return replace(self, retry_count=self.retry_count + 1)

    def repeat(self) -> "ImageRequest":
        """Return the next attempt without consuming retry budget."""
        return replace(self)


@dataclass(frozen=True)
class LoadAttempt:
    """Recorded outcome of an issued image request."""

    request: ImageRequest
    outcome: LoadOutcome
