from __future__ import annotations

import asyncio

import pytest

from hrconsole.models.listing import SearchFilter
from hrconsole.services.hr_api_client import HrApiClient, HrApiError
from hrconsole.services.notifications import Notifier
from hrconsole.services.search_coordinator import LOAD_ERROR, SearchCoordinator
from tests.conftest import make_employee


@pytest.fixture
def coordinator(mock_api, console_session, test_settings):
    return SearchCoordinator(mock_api, console_session, test_settings, Notifier())


def _employees(n: int):
    return [make_employee(i) for i in range(1, n + 1)]


@pytest.mark.anyio
async def test_burst_of_keystrokes_issues_one_query(coordinator, mock_api):
    for text in ("j", "jo", "joh", "john"):
        await coordinator.on_search_input(text)
        await asyncio.sleep(0.01)

    assert mock_api.list_employees.await_count == 0
    assert coordinator.search_term == "john"

    await asyncio.sleep(0.3)

    assert mock_api.list_employees.await_count == 1
    assert mock_api.list_employees.call_args.kwargs["search"] == "john"


@pytest.mark.anyio
async def test_each_keystroke_restarts_the_debounce_timer(coordinator, mock_api):
    loop = asyncio.get_running_loop()
    for text in ("a", "an", "ann", "anna", "annab"):
        await coordinator.on_search_input(text)
        last_keystroke = loop.time()
        await asyncio.sleep(0.06)
        assert mock_api.list_employees.await_count == 0

    while mock_api.list_employees.await_count == 0 and loop.time() - last_keystroke < 1.0:
        await asyncio.sleep(0.01)

    assert loop.time() - last_keystroke >= 0.09
    await asyncio.sleep(0.2)
    assert mock_api.list_employees.await_count == 1
    assert mock_api.list_employees.call_args.kwargs["search"] == "annab"


@pytest.mark.anyio
async def test_separate_bursts_issue_separate_queries(coordinator, mock_api):
    await coordinator.on_search_input("ann")
    await asyncio.sleep(0.3)
    await coordinator.on_search_input("bob")
    await asyncio.sleep(0.3)

    searches = [c.kwargs["search"] for c in mock_api.list_employees.call_args_list]
    assert searches == ["ann", "bob"]


@pytest.mark.anyio
async def test_search_input_resets_page(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(12)
    await coordinator.refresh()
    coordinator.set_page(3)

    await coordinator.on_search_input("x")
    assert coordinator.current_page == 1
    await coordinator.close()


@pytest.mark.anyio
async def test_suggestions_only_for_terms_longer_than_two(coordinator, mock_api):
    mock_api.employee_suggestions.return_value = ["Johnny", "Johanna"]

    await coordinator.on_search_input("jo")
    mock_api.employee_suggestions.assert_not_awaited()

    await coordinator.on_search_input("joh")
    mock_api.employee_suggestions.assert_awaited_once()
    assert coordinator.suggestions == ["Johnny", "Johanna"]
    assert coordinator.view().show_suggestions is True
    await coordinator.close()


@pytest.mark.anyio
async def test_suggestion_failure_is_silent(coordinator, mock_api):
    mock_api.employee_suggestions.side_effect = HrApiError("boom", status=500)

    await coordinator.on_search_input("john")
    await asyncio.sleep(0.3)

    assert coordinator.suggestions == []
    assert coordinator.error is None
    assert mock_api.list_employees.await_count == 1


@pytest.mark.anyio
async def test_filter_change_queries_immediately(coordinator, mock_api):
    coordinator.search_term = "sales"
    coordinator.current_page = 2

    await coordinator.on_filter_change(SearchFilter.DEPARTMENT)

    assert coordinator.current_page == 1
    kwargs = mock_api.list_employees.call_args.kwargs
    assert kwargs["search"] == "sales"
    assert kwargs["search_filter"] is SearchFilter.DEPARTMENT


@pytest.mark.anyio
async def test_select_suggestion_hides_dropdown_and_queries(coordinator, mock_api):
    coordinator.suggestions = ["Johnny"]
    coordinator.show_suggestions = True

    await coordinator.select_suggestion("Johnny")

    assert coordinator.search_term == "Johnny"
    assert coordinator.show_suggestions is False
    assert mock_api.list_employees.call_args.kwargs["search"] == "Johnny"


@pytest.mark.anyio
async def test_clear_resets_term_and_page(coordinator, mock_api):
    coordinator.search_term = "john"
    coordinator.current_page = 2

    await coordinator.clear()

    assert coordinator.search_term == ""
    assert coordinator.current_page == 1
    assert mock_api.list_employees.call_args.kwargs["search"] == ""


@pytest.mark.anyio
async def test_results_replace_list_and_set_page_count(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(11)

    await coordinator.refresh()

    assert len(coordinator.employees) == 11
    assert coordinator.total_pages == 3
    assert coordinator.loading is False


@pytest.mark.anyio
async def test_set_page_clamps_without_querying(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(12)
    await coordinator.refresh()
    mock_api.list_employees.reset_mock()

    assert coordinator.set_page(0) == 1
    assert coordinator.set_page(99) == 3
    assert coordinator.set_page(2) == 2
    mock_api.list_employees.assert_not_awaited()

    view = coordinator.view()
    assert [row.id for row in view.employees] == [6, 7, 8, 9, 10]
    assert view.pagination is not None
    assert view.pagination.range_label == "Showing 6 to 10 of 12 employees"


@pytest.mark.anyio
async def test_empty_result_shows_empty_state(coordinator, mock_api):
    await coordinator.refresh()
    assert coordinator.set_page(4) == 1

    view = coordinator.view()
    assert view.pagination is None
    assert view.empty_message == "No employees found. Add a new employee to get started."

    coordinator.search_term = "zed"
    assert coordinator.view().empty_message == 'No employees found matching "zed". Try a different search.'


@pytest.mark.anyio
async def test_query_failure_clears_list_and_keeps_term(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(3)
    await coordinator.refresh()

    mock_api.list_employees.side_effect = HrApiError("down", status=503)
    await coordinator.select_suggestion("Johnny")
    await coordinator.on_filter_change(SearchFilter.EMAIL)

    assert coordinator.employees == []
    assert coordinator.error == LOAD_ERROR
    assert coordinator.loading is False
    assert coordinator.search_term == "Johnny"
    assert coordinator.search_filter is SearchFilter.EMAIL

    view = coordinator.view()
    assert view.error == LOAD_ERROR
    assert view.empty_message is None


@pytest.mark.anyio
async def test_debounced_query_on_unconfigured_client_shows_error(console_session, test_settings):
    coordinator = SearchCoordinator(HrApiClient(), console_session, test_settings, Notifier())

    await coordinator.on_search_input("x")
    await asyncio.sleep(0.3)

    assert coordinator.search_pending is False
    assert coordinator.employees == []
    assert coordinator.error == LOAD_ERROR
    assert coordinator.loading is False


@pytest.mark.anyio
async def test_malformed_listing_shows_error(coordinator, mock_api):
    mock_api.list_employees.side_effect = HrApiError("Malformed response from employees/")

    await coordinator.clear()

    assert coordinator.error == LOAD_ERROR
    assert coordinator.view().empty_message is None


@pytest.mark.anyio
async def test_stale_response_is_discarded(coordinator, mock_api):
    release_slow = asyncio.Event()

    async def list_employees(session, search="", search_filter=SearchFilter.ALL, expand=True):
        if search == "slow":
            await release_slow.wait()
            return _employees(9)
        return _employees(2)

    mock_api.list_employees.side_effect = list_employees

    slow = asyncio.create_task(coordinator.fetch_employees("slow"))
    await asyncio.sleep(0)
    await coordinator.fetch_employees("fast")
    release_slow.set()
    await slow

    assert len(coordinator.employees) == 2
    assert coordinator.loading is False


@pytest.mark.anyio
async def test_close_cancels_pending_search(coordinator, mock_api):
    await coordinator.on_search_input("pending")
    assert coordinator.search_pending is True

    await coordinator.close()
    await asyncio.sleep(0.3)

    assert coordinator.search_pending is False
    mock_api.list_employees.assert_not_awaited()


@pytest.mark.anyio
async def test_delete_success_refreshes_and_notifies(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(3)
    await coordinator.refresh()
    mock_api.list_employees.return_value = [make_employee(1), make_employee(3)]

    assert await coordinator.delete_employee(2) is True

    mock_api.delete_employee.assert_awaited_once()
    assert [e.id for e in coordinator.employees] == [1, 3]
    messages = [n.message for n in coordinator.notifier.drain()]
    assert messages == ["Employee deleted successfully!"]


@pytest.mark.anyio
async def test_delete_failure_leaves_listing_unchanged(coordinator, mock_api):
    mock_api.list_employees.return_value = _employees(3)
    await coordinator.refresh()
    mock_api.list_employees.reset_mock()
    mock_api.delete_employee.side_effect = HrApiError("nope", status=500)

    assert await coordinator.delete_employee(2) is False

    mock_api.list_employees.assert_not_awaited()
    assert [e.id for e in coordinator.employees] == [1, 2, 3]
    messages = [n.message for n in coordinator.notifier.drain()]
    assert messages == ["Failed to delete employee"]


@pytest.mark.anyio
async def test_ensure_loaded_fetches_once(coordinator, mock_api):
    await coordinator.ensure_loaded()
    await coordinator.ensure_loaded()
    assert mock_api.list_employees.await_count == 1


@pytest.mark.anyio
async def test_view_rows_use_display_labels(coordinator, mock_api):
    mock_api.list_employees.return_value = [make_employee(1, expanded=True), make_employee(2, expanded=False)]
    await coordinator.refresh()

    rows = coordinator.view().employees
    assert rows[0].department == "Engineering"
    assert rows[0].designation == "Developer"
    assert rows[1].department == "ID: 1"
    assert rows[1].designation == "ID: 2"
