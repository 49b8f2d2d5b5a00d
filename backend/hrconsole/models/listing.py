"""View models for the employee listing (search + pagination)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from hrconsole.models.employee import EmployeeRow


class SearchFilter(str, Enum):
    ALL = "all"
    NAME = "name"
    EMAIL = "email"
    DEPARTMENT = "department"
    DESIGNATION = "designation"


class SearchInput(BaseModel):
    text: str = Field(default="", max_length=200)


class FilterChange(BaseModel):
    search_filter: SearchFilter


class PageChange(BaseModel):
    page: int


class PaginationView(BaseModel):
    current_page: int
    total_pages: int
    visible_pages: list[int] = []
    has_previous: bool = False
    has_next: bool = False
    range_label: str = ""


class ListingView(BaseModel):
    """Everything the employee listing screen needs to render."""

    search_term: str = ""
    search_filter: SearchFilter = SearchFilter.ALL
    total_count: int = 0
    employees: list[EmployeeRow] = []
    pagination: PaginationView | None = None
    suggestions: list[str] = []
    show_suggestions: bool = False
    loading: bool = False
    error: str | None = None
    empty_message: str | None = None
