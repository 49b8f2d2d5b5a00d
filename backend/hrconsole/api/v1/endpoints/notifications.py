from __future__ import annotations

from fastapi import APIRouter, Depends

from hrconsole.core.context import ConsoleContext
from hrconsole.core.dependencies import require_session
from hrconsole.services.notifications import Notification

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[Notification])
async def drain_notifications(console: ConsoleContext = Depends(require_session)):  # noqa: B008
    return console.notifier.drain()
