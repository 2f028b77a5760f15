"""
Unit tests for the navigation state machine
"""
import pytest

from lambda_logs.core import ActiveColumn, AppState, FetchKind, NavigationController
from lambda_logs.errors import RemoteFetchError

from conftest import FakeBackend


@pytest.fixture
def controller(profiles, backend, fixed_now):
    return NavigationController(profiles, backend, clock=lambda: fixed_now, viewport_height=10)


def run(controller, request):
    """Run a fetch inline and report its outcome, like the UI worker does"""
    try:
        result = request.run()
    except RemoteFetchError as e:
        return controller.fail_fetch(request, e)
    return controller.complete_fetch(request, result)


def advance_to_logs(controller):
    run(controller, controller.confirm())
    controller.confirm()
    run(controller, controller.confirm())


def test_starts_on_profile_selection(controller):
    snapshot = controller.snapshot()
    assert snapshot.state is AppState.PROFILE_SELECTION
    assert snapshot.loading is False
    assert snapshot.profile is None


def test_confirm_profile_requests_functions(controller, profiles):
    controller.move_down()
    request = controller.confirm()

    assert request.kind is FetchKind.FUNCTIONS
    assert request.origin is AppState.PROFILE_SELECTION
    assert request.profile == profiles[1]
    assert controller.loading
    assert controller.state is AppState.PROFILE_SELECTION

    assert run(controller, request)
    assert controller.state is AppState.FUNCTION_LIST
    assert controller.profile == profiles[1]
    assert controller.functions.filtered == ["api-handler", "worker"]
    assert not controller.loading


def test_confirm_with_empty_profile_filter_does_nothing(controller):
    for char in "zzz":
        controller.type_char(char)
    assert controller.confirm() is None
    assert controller.state is AppState.PROFILE_SELECTION


def test_function_then_date_then_logs(controller, backend, fixed_now):
    run(controller, controller.confirm())
    controller.move_down()
    assert controller.confirm() is None
    assert controller.state is AppState.DATE_SELECTION
    assert controller.function_name == "worker"
    assert controller.range_selector is not None

    request = controller.confirm()
    assert request.kind is FetchKind.LOGS
    assert request.time_range.end == fixed_now
    assert run(controller, request)

    assert controller.state is AppState.LOG_VIEWER
    assert len(controller.browser.entries) == 3
    name, profile, function_name, start_ms, end_ms = backend.calls[-1]
    assert (name, profile, function_name) == ("fetch_logs", "default", "worker")
    assert end_ms - start_ms == 3_600_000


def test_confirm_in_log_viewer_toggles_expansion(controller):
    advance_to_logs(controller)
    assert controller.confirm() is None
    assert controller.browser.expanded
    controller.confirm()
    assert not controller.browser.expanded


def test_back_walks_to_previous_screens(controller):
    advance_to_logs(controller)

    controller.back()
    assert controller.state is AppState.DATE_SELECTION
    assert controller.browser is None

    controller.back()
    assert controller.state is AppState.FUNCTION_LIST
    assert controller.range_selector is None
    assert controller.function_name is None

    controller.back()
    assert controller.state is AppState.PROFILE_SELECTION
    assert controller.functions is None
    assert controller.profile is None

    controller.back()
    assert controller.state is AppState.PROFILE_SELECTION


def test_back_then_forward_refetches(controller, backend):
    advance_to_logs(controller)
    controller.back()
    run(controller, controller.confirm())
    assert controller.state is AppState.LOG_VIEWER
    assert [call[0] for call in backend.calls].count("fetch_logs") == 2


def test_back_while_loading_cancels_and_stays(controller):
    request = controller.confirm()
    controller.back()
    assert not controller.loading
    assert controller.state is AppState.PROFILE_SELECTION

    assert run(controller, request) is False
    assert controller.state is AppState.PROFILE_SELECTION
    assert controller.functions is None


def test_superseded_request_is_discarded(controller):
    first = controller.confirm()
    controller.back()
    second = controller.confirm()
    assert second.request_id != first.request_id

    assert controller.complete_fetch(first, ["stale"]) is False
    assert controller.loading
    assert run(controller, second)
    assert controller.functions.filtered == ["api-handler", "worker"]


def test_input_is_ignored_while_loading(controller):
    controller.confirm()
    controller.move_down()
    controller.type_char("x")
    assert controller.profiles.selected_index == 0
    assert controller.profiles.filter_text == ""
    assert controller.confirm() is None


def test_fetch_failure_keeps_screen_and_reports_error(profiles, fixed_now, mocker):
    backend = FakeBackend()
    mocker.patch.object(backend, "list_functions", side_effect=RemoteFetchError("AccessDenied"))
    controller = NavigationController(profiles, backend, clock=lambda: fixed_now)

    assert run(controller, controller.confirm())
    assert controller.state is AppState.PROFILE_SELECTION
    assert controller.error == "AccessDenied"
    assert not controller.loading

    # Retrying clears the error
    mocker.patch.object(backend, "list_functions", return_value=["fn"])
    run(controller, controller.confirm())
    assert controller.error is None
    assert controller.state is AppState.FUNCTION_LIST


def test_invalid_custom_range_reports_error(controller):
    run(controller, controller.confirm())
    controller.confirm()
    controller.select_column(ActiveColumn.CUSTOM_RANGE)
    controller.toggle_editing()
    # from.year + 1 puts start after end
    controller.move_up()

    assert controller.confirm() is None
    assert controller.state is AppState.DATE_SELECTION
    assert controller.error
    assert not controller.loading


def test_date_screen_routing(controller):
    run(controller, controller.confirm())
    controller.confirm()
    selector = controller.range_selector

    controller.move_right()
    assert selector.quick_index == 2
    controller.move_down()
    assert selector.quick_index == 3
    controller.toggle_column()
    assert selector.active_column is ActiveColumn.CUSTOM_RANGE
    controller.move_right()
    assert selector.active_field == 1


def test_log_viewer_routing(controller):
    advance_to_logs(controller)
    browser = controller.browser

    controller.move_down()
    assert browser.selected_index == 1
    controller.type_char("E")
    controller.type_char("N")
    controller.type_char("D")
    assert [entry.message for entry in browser.filtered] == ["END RequestId: 1"]
    controller.backspace()
    assert browser.filter_text == "EN"

    controller.confirm()
    controller.type_char("x")
    assert browser.filter_text == "EN"


def test_resize_recenters_log_list(profiles, fixed_now, make_entries):
    backend = FakeBackend(entries=make_entries(*[f"line {i}" for i in range(50)]))
    controller = NavigationController(profiles, backend, clock=lambda: fixed_now, viewport_height=10)
    advance_to_logs(controller)
    for _ in range(25):
        controller.move_down()

    controller.resize(10)
    assert controller.viewport_height == 10
    assert controller.browser.list_offset == 20


def test_quit(controller):
    controller.confirm()
    controller.quit()
    assert controller.quit_requested
    assert not controller.loading
