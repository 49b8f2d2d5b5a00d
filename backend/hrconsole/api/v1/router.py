from fastapi import APIRouter

from hrconsole.api.v1.endpoints import auth, employees, health, leaves, notifications

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(employees.router)
api_router.include_router(leaves.router)
api_router.include_router(notifications.router)
