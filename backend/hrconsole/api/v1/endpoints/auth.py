from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hrconsole.core.context import ConsoleContext
from hrconsole.core.dependencies import get_console, require_session
from hrconsole.models.auth import LoginRequest, UserInfo
from hrconsole.services.hr_api_client import HrApiError, HrAuthenticationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserInfo)
async def login(
    request: LoginRequest,
    console: ConsoleContext = Depends(get_console),  # noqa: B008
):
    try:
        session = await console.login(request.username, request.password)
    except HrAuthenticationError as err:
        logger.info("Login rejected for user=%s", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from err
    except HrApiError as err:
        logger.exception("Login failed for user=%s", request.username)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Login service unavailable",
        ) from err
    return session.user


@router.post("/logout")
async def logout(console: ConsoleContext = Depends(get_console)):  # noqa: B008
    await console.logout()
    return {"status": "logged_out"}


@router.get("/session", response_model=UserInfo)
async def current_session(console: ConsoleContext = Depends(require_session)):  # noqa: B008
    return console.session.user
