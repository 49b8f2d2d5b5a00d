from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from hrconsole.core.context import ConsoleContext
from hrconsole.services.employee_editor import EmployeeEditor
from hrconsole.services.leave_aggregator import LeaveAggregator
from hrconsole.services.search_coordinator import SearchCoordinator


def get_console(request: Request) -> ConsoleContext:
    return request.app.state.console


def require_session(console: ConsoleContext = Depends(get_console)) -> ConsoleContext:  # noqa: B008
    if not console.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Token"},
        )
    return console


def get_listing(console: ConsoleContext = Depends(require_session)) -> SearchCoordinator:  # noqa: B008
    assert console.listing is not None
    return console.listing


def get_editor(console: ConsoleContext = Depends(require_session)) -> EmployeeEditor:  # noqa: B008
    assert console.editor is not None
    return console.editor


def get_leaves(console: ConsoleContext = Depends(require_session)) -> LeaveAggregator:  # noqa: B008
    assert console.leaves is not None
    return console.leaves
