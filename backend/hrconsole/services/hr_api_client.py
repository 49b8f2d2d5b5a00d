"""aiohttp client for the remote HR REST API (token authenticated)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from hrconsole.core.config import Settings
from hrconsole.models.auth import ConsoleSession
from hrconsole.models.employee import Department, Designation, Employee
from hrconsole.models.leave import LeaveRecord
from hrconsole.models.listing import SearchFilter

logger = logging.getLogger(__name__)

EXPAND_RELATED = "department,designation"

ModelT = TypeVar("ModelT", bound=BaseModel)


class HrApiError(Exception):
    def __init__(self, message: str, status: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload

    def field_messages(self) -> list[str]:
        """Flatten a ``{"field": ["msg", ...]}`` error body into display strings."""
        if not isinstance(self.payload, dict):
            return []
        messages: list[str] = []
        for field, errors in self.payload.items():
            if isinstance(errors, list):
                messages.extend(f"{field}: {error}" for error in errors)
            else:
                messages.append(str(errors))
        return messages

    @property
    def server_message(self) -> str | None:
        if isinstance(self.payload, dict) and isinstance(self.payload.get("message"), str):
            return self.payload["message"]
        return None


class HrAuthenticationError(HrApiError):
    pass


def _parse(model: type[ModelT], data: Any, path: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as err:
        logger.error("Malformed %s item from %s: %s", model.__name__, path, err)
        raise HrApiError(f"Malformed response from {path}") from err


def _parse_list(model: type[ModelT], data: Any, path: str) -> list[ModelT]:
    if data is not None and not isinstance(data, list):
        raise HrApiError(f"Expected a list from {path}")
    return [_parse(model, item, path) for item in data or []]


class HrApiClient:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 30.0

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.HR_API_BASE_URL:
            logger.warning("HR API base URL missing — HrApiClient not initialized")
            return

        self.base_url = settings.HR_API_BASE_URL.rstrip("/") + "/"
        self.timeout_seconds = settings.HR_API_TIMEOUT_SECONDS
        self.initialized = True
        logger.info("HrApiClient initialized (base_url=%s)", self.base_url)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""

    async def _request(
        self,
        method: str,
        path: str,
        *,
        session: ConsoleSession | None = None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if not self.initialized:
            raise HrApiError("HrApiClient not initialized")

        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if session is not None:
            headers.update(session.auth_header)

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.request(method, url, headers=headers, params=params, json=json) as response:
                    if response.status == 204:
                        return None

                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        data = None

                    if 200 <= response.status < 300:
                        return data

                    logger.warning("%s %s failed: %s", method, path, response.status)
                    raise HrApiError(
                        f"{method} {path} failed: {response.status}",
                        status=response.status,
                        payload=data,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            logger.error("%s %s transport error: %s", method, path, err)
            raise HrApiError(f"{method} {path} unreachable: {err}") from err

    async def login(self, username: str, password: str) -> ConsoleSession:
        try:
            data = await self._request("POST", "auth/login/", json={"username": username, "password": password})
        except HrApiError as err:
            if err.status in (400, 401, 403):
                raise HrAuthenticationError("Invalid credentials", status=err.status, payload=err.payload) from err
            raise

        if not isinstance(data, dict) or not data.get("token"):
            raise HrAuthenticationError("Login response carried no token", payload=data)
        try:
            return ConsoleSession.from_login_response(data)
        except (ValidationError, TypeError) as err:
            raise HrApiError("Malformed login response") from err

    async def list_employees(
        self,
        session: ConsoleSession,
        search: str = "",
        search_filter: SearchFilter = SearchFilter.ALL,
        expand: bool = True,
    ) -> list[Employee]:
        params: dict[str, Any] = {"search": search, "search_filter": search_filter.value}
        if expand:
            params["expand"] = EXPAND_RELATED
        data = await self._request("GET", "employees/", session=session, params=params)
        return _parse_list(Employee, data, "employees/")

    async def employee_suggestions(self, session: ConsoleSession, search: str) -> list[str]:
        data = await self._request("GET", "employees/suggestions/", session=session, params={"search": search})
        return [str(item) for item in data or []]

    async def get_employee(self, session: ConsoleSession, employee_id: int) -> Employee:
        data = await self._request("GET", f"employees/{employee_id}/", session=session)
        return _parse(Employee, data, f"employees/{employee_id}/")

    async def create_employee(self, session: ConsoleSession, payload: dict[str, Any]) -> Employee:
        data = await self._request("POST", "employees/", session=session, json=payload)
        return _parse(Employee, data, "employees/")

    async def update_employee(self, session: ConsoleSession, employee_id: int, payload: dict[str, Any]) -> Employee:
        data = await self._request("PUT", f"employees/{employee_id}/", session=session, json=payload)
        return _parse(Employee, data, f"employees/{employee_id}/")

    async def delete_employee(self, session: ConsoleSession, employee_id: int) -> None:
        await self._request("DELETE", f"employees/{employee_id}/", session=session)

    async def list_departments(self, session: ConsoleSession) -> list[Department]:
        data = await self._request("GET", "departments/", session=session)
        return _parse_list(Department, data, "departments/")

    async def list_designations(self, session: ConsoleSession) -> list[Designation]:
        data = await self._request("GET", "designations/", session=session)
        return _parse_list(Designation, data, "designations/")

    async def list_leaves(self, session: ConsoleSession, employee_id: int, year: int) -> list[LeaveRecord]:
        data = await self._request(
            "GET",
            "leaves/",
            session=session,
            params={"employee_id": employee_id, "year": year},
        )
        return _parse_list(LeaveRecord, data, "leaves/")

    async def create_leave(self, session: ConsoleSession, payload: dict[str, Any]) -> dict[str, Any] | None:
        return await self._request("POST", "leaves/", session=session, json=payload)

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False

        try:
            timeout = aiohttp.ClientTimeout(total=10)
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.get(self.base_url) as response:
                    return response.status < 500
        except Exception:
            logger.exception("HrApiClient connection check failed")
            return False


hr_api_client = HrApiClient()
