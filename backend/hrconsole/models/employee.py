"""Employee and reference-data models as served by the remote HR API."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field


class Department(BaseModel):
    id: int
    name: str = ""


class Designation(BaseModel):
    id: int
    title: str = ""


def _strip_time(value: object) -> object:
    # "2023-04-01T00:00:00Z" -> "2023-04-01"
    if isinstance(value, str):
        return value.split("T", 1)[0] or None
    return value


JoinDate = Annotated[date, BeforeValidator(_strip_time)]


class Employee(BaseModel):
    """Employee record.

    ``department`` and ``designation`` are bare ids unless the listing was
    requested with ``expand=department,designation``, in which case the API
    inlines the related objects.
    """

    id: int
    name: str = ""
    email: str = ""
    department: Department | int | None = None
    designation: Designation | int | None = None
    join_date: JoinDate | None = None

    @property
    def department_label(self) -> str:
        if self.department is None:
            return "-"
        if isinstance(self.department, Department):
            return self.department.name
        return f"ID: {self.department}"

    @property
    def designation_label(self) -> str:
        if self.designation is None:
            return "-"
        if isinstance(self.designation, Designation):
            return self.designation.title
        return f"ID: {self.designation}"

    @property
    def department_id(self) -> int | None:
        if isinstance(self.department, Department):
            return self.department.id
        return self.department

    @property
    def designation_id(self) -> int | None:
        if isinstance(self.designation, Designation):
            return self.designation.id
        return self.designation


class EmployeeInput(BaseModel):
    """Body of the add/edit employee form."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    join_date: JoinDate
    department: int | None = None
    designation: int | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "email": self.email,
            "join_date": self.join_date.isoformat(),
            "department": self.department or None,
            "designation": self.designation or None,
        }


class EmployeeRow(BaseModel):
    """One row of the employee listing table."""

    id: int
    name: str
    email: str
    department: str
    designation: str
    join_date: date | None = None

    @classmethod
    def from_employee(cls, employee: Employee) -> EmployeeRow:
        return cls(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            department=employee.department_label,
            designation=employee.designation_label,
            join_date=employee.join_date,
        )


class EmployeeFormOptions(BaseModel):
    departments: list[Department] = []
    designations: list[Designation] = []


class EmailCheck(BaseModel):
    email: str = ""


class EmailCheckResult(BaseModel):
    email: str
    valid: bool
