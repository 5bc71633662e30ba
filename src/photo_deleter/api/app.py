"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from photo_deleter.api.session import router as session_router
from photo_deleter.app_logging import configure_logging
from photo_deleter.containers import AppContainer
from photo_deleter.domain.session import Finished, Processing, SessionState


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    def log_transition(state: SessionState) -> None:
        if isinstance(state, Finished):
            logger.info(
                "Session finished: %d processed, %d marked for deletion",
                state.stats.total_processed,
                state.stats.marked_for_deletion,
            )
        elif isinstance(state, Processing) and state.current_image is not None:
            logger.info("Showing asset %s", state.current_image.asset_id)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            granted = await state_container.photo_library.has_access()
        except Exception:
            logger.exception("Failed to check photo library access")
            granted = False
        state_container.session_controller.authorize(granted)
        unsubscribe = state_container.session_controller.subscribe(log_transition)
        yield
        unsubscribe()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(session_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
