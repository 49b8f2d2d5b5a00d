"""Per-employee yearly leave summary built from monthly leave records."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date

from hrconsole.core.config import Settings
from hrconsole.models.auth import ConsoleSession
from hrconsole.models.employee import Employee
from hrconsole.models.leave import (
    MONTH_NAMES,
    LeaveRecord,
    LeaveRecordInput,
    LeaveSummary,
    LeaveType,
    MonthlyLeaveRow,
)
from hrconsole.services.hr_api_client import HrApiClient, HrApiError
from hrconsole.services.notifications import Notifier

logger = logging.getLogger(__name__)


class LeaveAggregatorError(Exception):
    pass


class LeaveAggregator:
    """Leave view for one (employee, year) selection.

    Records always come from the API: a selection change or a submitted leave
    triggers a reload instead of adjusting totals locally.
    """

    def __init__(
        self,
        client: HrApiClient,
        session: ConsoleSession,
        settings: Settings,
        notifier: Notifier | None = None,
    ) -> None:
        self.client = client
        self.session = session
        self.notifier = notifier or Notifier()
        self.entitlements: dict[LeaveType, float] = {
            LeaveType.CASUAL: settings.CASUAL_LEAVE_ENTITLEMENT,
            LeaveType.SICK: settings.SICK_LEAVE_ENTITLEMENT,
        }

        self.employees: list[Employee] = []
        self.employee_id: int | None = None
        self.year: int = date.today().year
        self.records: list[LeaveRecord] = []
        self.loading = False
        self._load_seq = 0

    async def ensure_employee_selected(self) -> None:
        if self.employee_id is not None:
            return

        try:
            self.employees = await self.client.list_employees(self.session, expand=False)
        except HrApiError:
            logger.exception("Failed to load employees for leave view")
            self.notifier.error("Failed to load employees")
            return

        if self.employees:
            await self.select(employee_id=self.employees[0].id)

    async def select(self, employee_id: int | None = None, year: int | None = None) -> None:
        new_employee = self.employee_id if employee_id is None else employee_id
        new_year = self.year if year is None else year
        if new_employee == self.employee_id and new_year == self.year:
            return

        self.employee_id = new_employee
        self.year = new_year
        if new_employee is not None:
            await self.load_records(new_employee, new_year)

    async def load_records(self, employee_id: int, year: int) -> None:
        self._load_seq += 1
        seq = self._load_seq
        # Totals of the previous selection must not stay on screen.
        self.records = []
        self.loading = True

        try:
            records = await self.client.list_leaves(self.session, employee_id, year)
        except HrApiError:
            if seq == self._load_seq:
                logger.exception("Failed to load leave data (employee=%s year=%s)", employee_id, year)
                self.notifier.error("Failed to load leave data")
        else:
            if seq == self._load_seq:
                self._warn_on_duplicates(records)
                self.records = records
            else:
                logger.debug("Discarding stale leave fetch #%d (latest #%d)", seq, self._load_seq)
        finally:
            if seq == self._load_seq:
                self.loading = False

    def _warn_on_duplicates(self, records: list[LeaveRecord]) -> None:
        counts = Counter((r.month, r.leave_type) for r in records)
        for (month, leave_type), n in counts.items():
            if n > 1:
                logger.warning(
                    "%d %s records for month %d; summing them",
                    n,
                    leave_type.value,
                    month,
                )

    def monthly_value(self, month: int, leave_type: LeaveType) -> float:
        # Duplicate (month, type) records are summed so the grid adds up to the annual total.
        return sum(
            (r.days_taken for r in self.records if r.month == month and r.leave_type == leave_type),
            0.0,
        )

    def annual_total(self, leave_type: LeaveType) -> float:
        return sum((r.days_taken for r in self.records if r.leave_type == leave_type), 0.0)

    def balance(self, leave_type: LeaveType) -> float:
        return self.entitlements[leave_type] - self.annual_total(leave_type)

    async def submit_leave(self, leave: LeaveRecordInput) -> bool:
        if self.employee_id is None:
            raise LeaveAggregatorError("No employee selected")

        payload = {
            "employee": self.employee_id,
            "leave_type": leave.leave_type.value,
            "month": leave.month,
            "year": leave.year,
            "days_taken": leave.days_taken,
        }
        try:
            await self.client.create_leave(self.session, payload)
        except HrApiError as err:
            logger.exception("Failed to submit leave for employee %s", self.employee_id)
            self.notifier.error(err.server_message or "Failed to submit leave")
            return False

        self.notifier.success("Leave application submitted successfully!")
        await self.load_records(self.employee_id, self.year)
        return True

    def summary(self) -> LeaveSummary:
        months = [
            MonthlyLeaveRow(
                month=number,
                label=label,
                sick=self.monthly_value(number, LeaveType.SICK),
                casual=self.monthly_value(number, LeaveType.CASUAL),
            )
            for number, label in enumerate(MONTH_NAMES, start=1)
        ]
        return LeaveSummary(
            employee_id=self.employee_id,
            year=self.year,
            loading=self.loading,
            months=months,
            total_sick=self.annual_total(LeaveType.SICK),
            total_casual=self.annual_total(LeaveType.CASUAL),
            entitlement_sick=self.entitlements[LeaveType.SICK],
            entitlement_casual=self.entitlements[LeaveType.CASUAL],
            balance_sick=self.balance(LeaveType.SICK),
            balance_casual=self.balance(LeaveType.CASUAL),
        )
