from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from hrconsole.core.dependencies import get_leaves
from hrconsole.models.leave import LeaveRecordInput, LeaveSelection, LeaveSummary
from hrconsole.services.leave_aggregator import LeaveAggregator, LeaveAggregatorError

router = APIRouter(prefix="/leaves", tags=["leaves"])


@router.get("/summary", response_model=LeaveSummary)
async def leave_summary(leaves: LeaveAggregator = Depends(get_leaves)):  # noqa: B008
    await leaves.ensure_employee_selected()
    return leaves.summary()


@router.post("/selection", response_model=LeaveSummary)
async def change_selection(
    request: LeaveSelection,
    leaves: LeaveAggregator = Depends(get_leaves),  # noqa: B008
):
    await leaves.select(employee_id=request.employee_id, year=request.year)
    return leaves.summary()


@router.post("", response_model=LeaveSummary, status_code=status.HTTP_201_CREATED)
async def submit_leave(
    request: LeaveRecordInput,
    leaves: LeaveAggregator = Depends(get_leaves),  # noqa: B008
):
    try:
        submitted = await leaves.submit_leave(request)
    except LeaveAggregatorError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err

    if not submitted:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to submit leave",
        )
    return leaves.summary()
