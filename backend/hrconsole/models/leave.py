"""Leave record models and the monthly leave summary view."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class LeaveType(str, Enum):
    CASUAL = "CL"
    SICK = "SL"


class LeaveRecord(BaseModel):
    """A month's leave of one type, as returned by ``GET leaves/``."""

    id: int | None = None
    employee: int
    leave_type: LeaveType
    month: int = Field(..., ge=1, le=12)
    year: int
    days_taken: float


class LeaveRecordInput(BaseModel):
    """Body of the "Apply for Leave" form; the employee comes from the selection."""

    leave_type: LeaveType = LeaveType.CASUAL
    month: int = Field(default=1, ge=1, le=12)
    year: int = Field(default_factory=lambda: date.today().year, ge=1900, le=9999)
    days_taken: float = Field(default=0.5, ge=0.5, le=12)

    @field_validator("days_taken")
    @classmethod
    def _half_day_steps(cls, value: float) -> float:
        if (value * 2) != int(value * 2):
            raise ValueError("days_taken must be a multiple of 0.5")
        return value


class LeaveSelection(BaseModel):
    employee_id: int | None = None
    year: int | None = Field(default=None, ge=1900, le=9999)


class MonthlyLeaveRow(BaseModel):
    month: int
    label: str
    sick: float = 0.0
    casual: float = 0.0


class LeaveSummary(BaseModel):
    """Twelve-month grid with totals, entitlements and balances."""

    employee_id: int | None = None
    year: int
    loading: bool = False
    months: list[MonthlyLeaveRow] = []
    total_sick: float = 0.0
    total_casual: float = 0.0
    entitlement_sick: float
    entitlement_casual: float
    balance_sick: float
    balance_casual: float
