"""Swipe session endpoints with optional token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from photo_deleter.api.models import (
    DecisionRequest,
    SessionSnapshot,
    SessionSummary,
    StatsPayload,
)
from photo_deleter.domain.session import Finished, Processing

if TYPE_CHECKING:
    from photo_deleter.containers import AppContainer
    from photo_deleter.services.session import SwipeSessionController

router = APIRouter(prefix="/session", tags=["session"])


def _get_api_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str | None = Depends(_get_api_token),
) -> None:
    """Ensure requests include the API token when one is configured."""
    if api_token is None:
        return
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _controller(request: Request) -> SwipeSessionController:
    container: AppContainer = request.app.state.container
    return container.session_controller


def _snapshot(controller: SwipeSessionController) -> SessionSnapshot:
    return SessionSnapshot.from_state(controller.state, controller.authorized)


@router.get("", dependencies=[Depends(require_api_token)])
async def get_session(request: Request) -> SessionSnapshot:
    """Return the current session snapshot."""
    return _snapshot(_controller(request))


@router.post("/start", dependencies=[Depends(require_api_token)])
async def start_session(request: Request) -> SessionSnapshot:
    """Leave the welcome screen and wait for the first photo."""
    controller = _controller(request)
    if not controller.authorized:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Photo library access was not granted",
        )
    await controller.start()
    await controller.wait_until_settled()
    return _snapshot(controller)


@router.post("/decisions", dependencies=[Depends(require_api_token)])
async def submit_decision(
    payload: DecisionRequest, request: Request
) -> SessionSnapshot:
    """Keep or quarantine the photo on screen and wait for the next one."""
    controller = _controller(request)
    state = controller.state
    if not isinstance(state, Processing) or state.current_asset is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No photo is awaiting a decision",
        )
    await controller.advance(payload.decision)
    await controller.wait_until_settled()
    return _snapshot(controller)


@router.post("/refresh", dependencies=[Depends(require_api_token)])
async def refresh_session(request: Request) -> SessionSnapshot:
    """Retry presenting a photo after a failed selection or load."""
    controller = _controller(request)
    await controller.refresh()
    await controller.wait_until_settled()
    return _snapshot(controller)


@router.get("/image", dependencies=[Depends(require_api_token)])
async def get_image(request: Request) -> Response:
    """Return the bytes of the photo on screen."""
    state = _controller(request).state
    if not isinstance(state, Processing) or state.current_image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    image = state.current_image
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={"X-Asset-Id": image.asset_id},
    )


@router.get("/summary", dependencies=[Depends(require_api_token)])
async def get_summary(request: Request) -> SessionSummary:
    """Return totals and where marked photos can be found."""
    container: AppContainer = request.app.state.container
    controller = container.session_controller
    remaining = 0
    if controller.authorized and not isinstance(controller.state, Finished):
        remaining = await container.selector.remaining()
    album = container.quarantine.name
    return SessionSummary(
        stats=StatsPayload.from_stats(controller.stats),
        remaining=remaining,
        quarantine_album=album,
        message=f"You can find photos marked for deletion in the '{album}' album",
    )
