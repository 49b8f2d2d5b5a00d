"""Employee listing state: debounced search, suggestions and pagination."""

from __future__ import annotations

import asyncio
import logging

from hrconsole.core.config import Settings
from hrconsole.models.auth import ConsoleSession
from hrconsole.models.employee import Employee, EmployeeRow
from hrconsole.models.listing import ListingView, SearchFilter
from hrconsole.services.hr_api_client import HrApiClient, HrApiError
from hrconsole.services.notifications import Notifier
from hrconsole.services.pagination import build_pagination, clamp_page, page_slice, total_pages

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load employees"


def _log_search_failure(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Debounced employee search failed", exc_info=task.exception())


class SearchCoordinator:
    """Turns search input and a field filter into a paginated employee list.

    Typing is debounced: every keystroke restarts the timer, so a burst of
    input issues a single remote query once the operator pauses. Filter
    changes, suggestion picks and clearing query immediately. Each query is
    tagged with a sequence number and only the latest one may update the list.
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

        self.page_size = settings.PAGE_SIZE
        self.max_visible_pages = settings.MAX_VISIBLE_PAGES
        self.debounce_seconds = settings.SEARCH_DEBOUNCE_SECONDS
        self.suggestion_min_length = settings.SUGGESTION_MIN_LENGTH

        self.search_term = ""
        self.search_filter = SearchFilter.ALL
        self.current_page = 1
        self.total_pages = 0
        self.employees: list[Employee] = []
        self.suggestions: list[str] = []
        self.show_suggestions = False
        self.loading = False
        self.error: str | None = None
        self.loaded = False

        self._debounce_task: asyncio.Task[None] | None = None
        self._query_seq = 0
        self._suggestion_seq = 0

    @property
    def search_pending(self) -> bool:
        return self._debounce_task is not None and not self._debounce_task.done()

    async def on_search_input(self, text: str) -> None:
        self.search_term = text
        self.current_page = 1
        self._schedule_search()
        await self._fetch_suggestions(text)

    async def on_filter_change(self, search_filter: SearchFilter) -> None:
        self.search_filter = search_filter
        self.current_page = 1
        await self.fetch_employees(self.search_term)

    async def select_suggestion(self, text: str) -> None:
        self.search_term = text
        self.show_suggestions = False
        await self.fetch_employees(text)

    async def clear(self) -> None:
        self.search_term = ""
        self.current_page = 1
        await self.fetch_employees("")

    def set_page(self, page: int) -> int:
        self.current_page = clamp_page(page, self.total_pages)
        return self.current_page

    def hide_suggestions(self) -> None:
        self.show_suggestions = False

    async def refresh(self) -> None:
        await self.fetch_employees(self.search_term)

    async def ensure_loaded(self) -> None:
        if not self.loaded and not self.loading:
            await self.refresh()

    def _schedule_search(self) -> None:
        self._cancel_pending_search()
        self._debounce_task = asyncio.create_task(self._debounced_search())
        self._debounce_task.add_done_callback(_log_search_failure)

    def _cancel_pending_search(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    async def _debounced_search(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # Past this point a new keystroke must not cancel the query in flight.
        self._debounce_task = None
        await self.fetch_employees(self.search_term)

    async def fetch_employees(self, search: str = "") -> None:
        self._query_seq += 1
        seq = self._query_seq
        self.loading = True

        try:
            employees = await self.client.list_employees(
                self.session,
                search=search,
                search_filter=self.search_filter,
            )
        except HrApiError:
            if seq == self._query_seq:
                logger.exception("Employee search failed (search=%r filter=%s)", search, self.search_filter.value)
                self._apply_failure()
            else:
                logger.debug("Ignoring failure of superseded employee search #%d", seq)
        else:
            if seq == self._query_seq:
                self._apply_results(employees)
            else:
                logger.debug("Discarding stale employee search #%d (latest #%d)", seq, self._query_seq)
        finally:
            if seq == self._query_seq:
                self.loading = False

    def _apply_results(self, employees: list[Employee]) -> None:
        self.employees = employees
        self.total_pages = total_pages(len(employees), self.page_size)
        self.current_page = clamp_page(self.current_page, self.total_pages)
        self.error = None
        self.loaded = True
        logger.debug("Employee search returned %d rows", len(employees))

    def _apply_failure(self) -> None:
        self.employees = []
        self.total_pages = 0
        self.current_page = 1
        self.error = LOAD_ERROR
        self.loaded = True

    async def _fetch_suggestions(self, text: str) -> None:
        if len(text) <= self.suggestion_min_length:
            return

        self._suggestion_seq += 1
        seq = self._suggestion_seq
        try:
            suggestions = await self.client.employee_suggestions(self.session, text)
        except HrApiError as err:
            logger.warning("Failed to fetch suggestions for %r: %s", text, err)
            return

        if seq != self._suggestion_seq:
            return
        self.suggestions = suggestions
        self.show_suggestions = bool(suggestions)

    async def delete_employee(self, employee_id: int) -> bool:
        try:
            await self.client.delete_employee(self.session, employee_id)
        except HrApiError:
            logger.exception("Failed to delete employee %s", employee_id)
            self.notifier.error("Failed to delete employee")
            return False

        self.notifier.success("Employee deleted successfully!")
        await self.refresh()
        return True

    def view(self) -> ListingView:
        count = len(self.employees)
        pagination = build_pagination(count, self.current_page, self.page_size, self.max_visible_pages)

        empty_message = None
        if not self.loading and not self.error and count == 0:
            if self.search_term:
                empty_message = f'No employees found matching "{self.search_term}". Try a different search.'
            else:
                empty_message = "No employees found. Add a new employee to get started."

        rows = page_slice(self.employees, self.current_page, self.page_size)
        return ListingView(
            search_term=self.search_term,
            search_filter=self.search_filter,
            total_count=count,
            employees=[EmployeeRow.from_employee(e) for e in rows],
            pagination=pagination,
            suggestions=self.suggestions,
            show_suggestions=self.show_suggestions and bool(self.suggestions),
            loading=self.loading,
            error=self.error,
            empty_message=empty_message,
        )

    async def close(self) -> None:
        task = self._debounce_task
        self._cancel_pending_search()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
