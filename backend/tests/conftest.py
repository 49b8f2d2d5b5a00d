from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from hrconsole.core.config import Settings
from hrconsole.core.session import SessionStore
from hrconsole.main import app
from hrconsole.models.auth import ConsoleSession, UserInfo
from hrconsole.models.employee import Department, Designation, Employee
from hrconsole.services.hr_api_client import HrApiClient

TEST_TOKEN = "test-token-0123456789abcdef"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _console_settings(tmp_path):
    from hrconsole.core.config import settings

    original_session_file = settings.SESSION_FILE
    original_base_url = settings.HR_API_BASE_URL
    settings.SESSION_FILE = str(tmp_path / "session.json")
    settings.HR_API_BASE_URL = "http://hr.test/api/"
    yield
    settings.SESSION_FILE = original_session_file
    settings.HR_API_BASE_URL = original_base_url


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        HR_API_BASE_URL="http://hr.test/api/",
        SEARCH_DEBOUNCE_SECONDS=0.1,
    )


@pytest.fixture
def console_session() -> ConsoleSession:
    return ConsoleSession(
        token=TEST_TOKEN,
        user=UserInfo(id=1, username="admin", email="admin@bashyamgroup.com"),
    )


@pytest.fixture
def mock_api() -> MagicMock:
    api = MagicMock(spec=HrApiClient)
    api.initialized = True
    api.login = AsyncMock()
    api.list_employees = AsyncMock(return_value=[])
    api.employee_suggestions = AsyncMock(return_value=[])
    api.get_employee = AsyncMock()
    api.create_employee = AsyncMock()
    api.update_employee = AsyncMock()
    api.delete_employee = AsyncMock(return_value=None)
    api.list_departments = AsyncMock(return_value=[])
    api.list_designations = AsyncMock(return_value=[])
    api.list_leaves = AsyncMock(return_value=[])
    api.create_leave = AsyncMock(return_value={})
    api.check_connection = AsyncMock(return_value=True)
    return api


def make_employee(employee_id: int, name: str | None = None, expanded: bool = True) -> Employee:
    name = name or f"Employee {employee_id}"
    return Employee(
        id=employee_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@bashyamgroup.com",
        department=Department(id=1, name="Engineering") if expanded else 1,
        designation=Designation(id=2, title="Developer") if expanded else 2,
        join_date="2023-04-01",
    )


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def authenticated_client(console_session, mock_api):
    from hrconsole.core.config import settings

    SessionStore(settings.SESSION_FILE).save(console_session)
    with TestClient(app) as c:
        console = app.state.console
        console.client = mock_api
        for view in (console.listing, console.editor, console.leaves):
            view.client = mock_api
        yield c
