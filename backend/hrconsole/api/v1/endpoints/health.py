from __future__ import annotations

from fastapi import APIRouter, Depends

from hrconsole.core.config import settings
from hrconsole.core.context import ConsoleContext
from hrconsole.core.dependencies import get_console

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(console: ConsoleContext = Depends(get_console)):  # noqa: B008
    services: dict[str, str] = {}

    try:
        if console.client.initialized:
            ok = await console.client.check_connection()
            services["hr_api"] = "ok" if ok else "error"
        else:
            services["hr_api"] = "not_configured"
    except Exception:
        services["hr_api"] = "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "session": "active" if console.authenticated else "none",
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
