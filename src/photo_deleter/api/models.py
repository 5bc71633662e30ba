"""HTTP models for the swipe session API."""

from typing import Literal

from pydantic import BaseModel

from photo_deleter.domain.session import (
    Decision,
    Finished,
    Processing,
    ProcessingStats,
    SessionState,
)


class StatsPayload(BaseModel):
    """Processing counters as shown to the user."""

    total_processed: int
    marked_for_deletion: int
    kept: int

    @classmethod
    def from_stats(cls, stats: ProcessingStats) -> "StatsPayload":
        return cls(
            total_processed=stats.total_processed,
            marked_for_deletion=stats.marked_for_deletion,
            kept=stats.kept,
        )


class SessionSnapshot(BaseModel):
    """Read-only view of the session for the presentation layer."""

    state: Literal["welcome", "processing", "finished"]
    authorized: bool
    asset_id: str | None = None
    has_image: bool = False
    stats: StatsPayload

    @classmethod
    def from_state(cls, state: SessionState, authorized: bool) -> "SessionSnapshot":
        name: Literal["welcome", "processing", "finished"] = "welcome"
        asset_id = None
        has_image = False
        if isinstance(state, Processing):
            name = "processing"
            asset_id = state.current_asset.id if state.current_asset else None
            has_image = state.current_image is not None
        elif isinstance(state, Finished):
            name = "finished"
        return cls(
            state=name,
            authorized=authorized,
            asset_id=asset_id,
            has_image=has_image,
            stats=StatsPayload.from_stats(state.stats),
        )


class DecisionRequest(BaseModel):
    """Swipe decision for the photo on screen."""

    decision: Decision


class SessionSummary(BaseModel):
    """Totals for the summary screen."""

    stats: StatsPayload
    remaining: int
    quarantine_album: str
    message: str
