from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hrconsole.core.dependencies import get_editor, get_listing
from hrconsole.models.employee import (
    EmailCheck,
    EmailCheckResult,
    Employee,
    EmployeeFormOptions,
    EmployeeInput,
)
from hrconsole.models.listing import FilterChange, ListingView, PageChange, SearchInput
from hrconsole.services.employee_editor import EmployeeEditor, EmployeeValidationError
from hrconsole.services.hr_api_client import HrApiError
from hrconsole.services.search_coordinator import SearchCoordinator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/listing", response_model=ListingView)
async def get_listing_view(listing: SearchCoordinator = Depends(get_listing)):  # noqa: B008
    await listing.ensure_loaded()
    return listing.view()


@router.post("/listing/input", response_model=ListingView)
async def search_input(
    request: SearchInput,
    listing: SearchCoordinator = Depends(get_listing),  # noqa: B008
):
    await listing.on_search_input(request.text)
    return listing.view()


@router.post("/listing/filter", response_model=ListingView)
async def change_filter(
    request: FilterChange,
    listing: SearchCoordinator = Depends(get_listing),  # noqa: B008
):
    await listing.on_filter_change(request.search_filter)
    return listing.view()


@router.post("/listing/suggestion", response_model=ListingView)
async def pick_suggestion(
    request: SearchInput,
    listing: SearchCoordinator = Depends(get_listing),  # noqa: B008
):
    await listing.select_suggestion(request.text)
    return listing.view()


@router.post("/listing/suggestions/hide", response_model=ListingView)
async def hide_suggestions(listing: SearchCoordinator = Depends(get_listing)):  # noqa: B008
    listing.hide_suggestions()
    return listing.view()


@router.post("/listing/clear", response_model=ListingView)
async def clear_search(listing: SearchCoordinator = Depends(get_listing)):  # noqa: B008
    await listing.clear()
    return listing.view()


@router.post("/listing/page", response_model=ListingView)
async def change_page(
    request: PageChange,
    listing: SearchCoordinator = Depends(get_listing),  # noqa: B008
):
    listing.set_page(request.page)
    return listing.view()


@router.get("/options", response_model=EmployeeFormOptions)
async def form_options(editor: EmployeeEditor = Depends(get_editor)):  # noqa: B008
    try:
        return await editor.load_options()
    except HrApiError as err:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load form data",
        ) from err


@router.post("/email-check", response_model=EmailCheckResult)
async def check_email(
    request: EmailCheck,
    editor: EmployeeEditor = Depends(get_editor),  # noqa: B008
):
    return EmailCheckResult(email=request.email, valid=editor.check_email(request.email))


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: int,
    editor: EmployeeEditor = Depends(get_editor),  # noqa: B008
):
    try:
        return await editor.load_employee(employee_id)
    except HrApiError as err:
        if err.status == status.HTTP_404_NOT_FOUND:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Employee {employee_id} not found",
            ) from err
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load form data",
        ) from err


async def _save(editor: EmployeeEditor, data: EmployeeInput, employee_id: int | None = None) -> Employee:
    try:
        return await editor.save(data, employee_id)
    except EmployeeValidationError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except HrApiError as err:
        messages = err.field_messages()
        if messages:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=messages) from err
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="An error occurred while saving employee",
        ) from err


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeInput,
    editor: EmployeeEditor = Depends(get_editor),  # noqa: B008
):
    return await _save(editor, data)


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: int,
    data: EmployeeInput,
    editor: EmployeeEditor = Depends(get_editor),  # noqa: B008
):
    return await _save(editor, data, employee_id)


@router.delete("/{employee_id}", response_model=ListingView)
async def delete_employee(
    employee_id: int,
    listing: SearchCoordinator = Depends(get_listing),  # noqa: B008
):
    deleted = await listing.delete_employee(employee_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to delete employee",
        )
    return listing.view()
