"""Domain models for swipe sessions."""

from dataclasses import dataclass, field, replace
from enum import StrEnum

from photo_deleter.domain.assets import AssetRef, ImageData


class Decision(StrEnum):
    """User judgement for the photo on screen."""

    KEEP = "keep"
    DELETE = "delete"


@dataclass(frozen=True)
class ProcessingStats:
    """Counters for a session; every change yields a new snapshot."""

    total_processed: int = 0
    marked_for_deletion: int = 0

    def __post_init__(self) -> None:
        if self.total_processed < 0 or self.marked_for_deletion < 0:
            raise ValueError("Processing counters must be non-negative")
        if self.marked_for_deletion > self.total_processed:
            raise ValueError("Cannot mark more photos than were processed")

    @property
    def kept(self) -> int:
        """Number of processed photos not marked for deletion."""
        return self.total_processed - self.marked_for_deletion

    def record_decision(self, decision: Decision) -> "ProcessingStats":
        """Return stats after the user judged one photo."""
        marked = self.marked_for_deletion
        if decision is Decision.DELETE:
            marked += 1
        return replace(
            self,
            total_processed=self.total_processed + 1,
            marked_for_deletion=marked,
        )

    def record_skip(self) -> "ProcessingStats":
        """Return stats after a photo that could never be shown."""
        return replace(self, total_processed=self.total_processed + 1)


@dataclass(frozen=True)
class Welcome:
    """Session has not been started yet."""

    stats: ProcessingStats = field(default_factory=ProcessingStats)


@dataclass(frozen=True)
class Processing:
    """A photo is being selected, loaded or shown."""

    current_asset: AssetRef | None = None
    current_image: ImageData | None = None
    stats: ProcessingStats = field(default_factory=ProcessingStats)


@dataclass(frozen=True)
class Finished:
    """No eligible photo remains."""

    stats: ProcessingStats = field(default_factory=ProcessingStats)


SessionState = Welcome | Processing | Finished
