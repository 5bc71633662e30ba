"""Session state machine for swiping through the photo library."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from photo_deleter.domain.assets import AssetRef, TargetSize
from photo_deleter.domain.session import (
    Decision,
    Finished,
    Processing,
    ProcessingStats,
    SessionState,
    Welcome,
)
from photo_deleter.services.loader import RetryBoundedLoader
from photo_deleter.services.quarantine import QuarantineAlbum
from photo_deleter.services.selection import AssetSelector

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionState], None]


@dataclass
class SwipeSessionController:
    """Drives a swipe session from the welcome screen to the summary.

    All methods must be called from the event loop that owns the controller.
    Selecting and loading the next photo runs as a single background task;
    a newer request cancels the older one and late results for an asset that
    is no longer on screen are dropped.
    """

    selector: AssetSelector
    loader: RetryBoundedLoader
    quarantine: QuarantineAlbum
    target_size: TargetSize = field(default_factory=TargetSize)
    initial_stats: ProcessingStats = field(default_factory=ProcessingStats)
    _state: SessionState = field(init=False)
    _authorized: bool | None = field(default=None, init=False)
    _listeners: list[SessionListener] = field(default_factory=list, init=False)
    _presenter: asyncio.Task | None = field(default=None, init=False)
    _moves: set[asyncio.Task] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        self._state = Welcome(stats=self.initial_stats)

    @property
    def state(self) -> SessionState:
        """Return the current session state."""
        return self._state

    @property
    def stats(self) -> ProcessingStats:
        """Return the current statistics snapshot."""
        return self._state.stats

    @property
    def authorized(self) -> bool:
        """Return whether photo library access was granted."""
        return bool(self._authorized)

    def authorize(self, granted: bool) -> None:
        """Record whether photo library access was granted at startup."""
        if self._authorized is not None:
            logger.warning("Photo library access was already observed")
            return
        self._authorized = granted
        if not granted:
            logger.warning("Photo library access denied; session stays inactive")

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for state changes and return its remover."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> SessionState:
        """Leave the welcome screen and begin presenting photos."""
        if not self._authorized:
            logger.warning("Cannot start a session without photo library access")
            return self._state
        if not isinstance(self._state, Welcome):
            logger.info("Session already started")
            return self._state
        self._transition(Processing(stats=self.stats))
        self._present_next()
        return self._state

    async def advance(self, decision: Decision) -> SessionState:
        """Record a decision for the photo on screen and move on."""
        state = self._state
        if not isinstance(state, Processing) or state.current_asset is None:
            logger.warning("Ignoring %s decision without a photo on screen", decision)
            return state
        if decision is Decision.DELETE:
            self._schedule_quarantine(state.current_asset)
        self._transition(Processing(stats=state.stats.record_decision(decision)))
        self._present_next()
        return self._state

    async def refresh(self) -> SessionState:
        """Retry presenting a photo after the previous attempt stopped early."""
        state = self._state
        if not isinstance(state, Processing) or self._is_presenting():
            return state
        if state.current_image is None:
            self._present_next(state.current_asset)
        return self._state

    async def wait_until_settled(self) -> SessionState:
        """Wait for pending selection and loading, then return the state."""
        while self._is_presenting():
            await asyncio.wait({self._presenter})
        return self._state

    async def close(self) -> None:
        """Cancel pending loads and wait for album moves to finish."""
        if self._presenter is not None:
            self._presenter.cancel()
            await asyncio.wait({self._presenter})
            self._presenter = None
        if self._moves:
            await asyncio.gather(*self._moves, return_exceptions=True)

    def _is_presenting(self) -> bool:
        return self._presenter is not None and not self._presenter.done()

    def _is_current(self, asset: AssetRef) -> bool:
        state = self._state
        return (
            isinstance(state, Processing)
            and state.current_asset is not None
            and state.current_asset.id == asset.id
        )

    def _transition(self, state: SessionState) -> None:
        if isinstance(self._state, Finished):
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session listener failed")

    def _present_next(self, asset: AssetRef | None = None) -> None:
        if self._is_presenting():
            self._presenter.cancel()
        self._presenter = asyncio.create_task(self._present(asset))
        self._presenter.add_done_callback(_log_presenter_failure)

    async def _present(self, asset: AssetRef | None) -> None:
        while True:
            if asset is None:
                asset = await self.selector.next_eligible()
                if asset is None:
                    self._transition(Finished(stats=self.stats))
                    return
                self._transition(Processing(current_asset=asset, stats=self.stats))
            image = await self.loader.load(asset, self.target_size)
            if not self._is_current(asset):
                logger.debug("Discarding image for superseded asset %s", asset.id)
                return
            if image is not None:
                self._transition(
                    Processing(
                        current_asset=asset, current_image=image, stats=self.stats
                    )
                )
                return
            logger.info("Skipping asset %s that could not be loaded", asset.id)
            self._transition(Processing(stats=self.stats.record_skip()))
            asset = None

    def _schedule_quarantine(self, asset: AssetRef) -> None:
        task = asyncio.create_task(self.quarantine.ensure_album_and_add(asset))
        self._moves.add(task)
        task.add_done_callback(self._moves.discard)
        task.add_done_callback(partial(_log_move_failure, asset.id))


def _log_presenter_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Failed to present the next photo", exc_info=error)


def _log_move_failure(asset_id: str, task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(
            "Failed to move asset %s to the quarantine album",
            asset_id,
            exc_info=error,
        )
