"""
Navigation Module - Screen state machine

Handles:
- Profile → function → time range → logs sequencing
- Remote fetches as request/result messages with a stale-response guard
- Routing of semantic input operations to the active component
- Error reporting for failed fetches and invalid ranges

The controller never performs I/O itself. ``confirm()`` hands back a
FetchRequest; the caller runs it wherever it likes (a worker thread in the
UI, inline in tests) and reports the outcome with ``complete_fetch`` or
``fail_fetch``. Only the outstanding request is ever applied.
"""
import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import wraps
from typing import Any, Callable, List, Optional, Sequence

from lambda_logs.config import Profile
from lambda_logs.errors import ValidationError

from .entry_model import EntryModel
from .log_browser import LogBrowser
from .log_entry import LogEntry
from .range_selector import ActiveColumn, RangeSelector, TimeRange

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_HEIGHT = 20


class AppState(Enum):
    """Screens of the application, in forward order"""
    PROFILE_SELECTION = "profile_selection"
    FUNCTION_LIST = "function_list"
    DATE_SELECTION = "date_selection"
    LOG_VIEWER = "log_viewer"


class FetchKind(Enum):
    FUNCTIONS = "functions"
    LOGS = "logs"


@dataclass(frozen=True)
class FetchRequest:
    """A remote call the controller is waiting on"""
    request_id: int
    kind: FetchKind
    origin: AppState
    description: str
    profile: Profile
    function_name: Optional[str] = None
    time_range: Optional[TimeRange] = None
    run: Callable[[], Any] = field(default=lambda: None, compare=False, repr=False)


@dataclass(frozen=True)
class ControllerSnapshot:
    state: AppState
    loading: bool
    loading_message: Optional[str]
    error: Optional[str]
    profile: Optional[Profile]
    function_name: Optional[str]


def _ignored_while_loading(method):
    """Drop an input operation while a fetch is outstanding"""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.loading:
            return None
        return method(self, *args, **kwargs)
    return wrapper


class NavigationController:
    """
    Finite state machine driving the screens

    The backend must provide ``list_functions(profile)`` and
    ``fetch_logs(profile, function_name, start_ms, end_ms)``.
    """

    def __init__(self, profiles: Sequence[Profile], backend: Any,
                 clock: Callable[[], datetime] = datetime.now,
                 viewport_height: int = DEFAULT_VIEWPORT_HEIGHT):
        """
        Initialize the controller

        Args:
            profiles: Available AWS profiles
            backend: Remote collaborator (see class docstring)
            clock: Source of "now" for quick ranges and custom defaults
            viewport_height: Rows available to the log list
        """
        self.backend = backend
        self.clock = clock
        self.viewport_height = viewport_height

        self.state = AppState.PROFILE_SELECTION
        self.profiles: EntryModel[Profile] = EntryModel(list(profiles), label=lambda p: p.name)
        self.functions: Optional[EntryModel[str]] = None
        self.range_selector: Optional[RangeSelector] = None
        self.browser: Optional[LogBrowser] = None

        self.profile: Optional[Profile] = None
        self.function_name: Optional[str] = None

        self.pending: Optional[FetchRequest] = None
        self.error: Optional[str] = None
        self.quit_requested = False
        self._request_ids = itertools.count(1)

    @property
    def loading(self) -> bool:
        return self.pending is not None

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            state=self.state,
            loading=self.loading,
            loading_message=self.pending.description if self.pending else None,
            error=self.error,
            profile=self.profile,
            function_name=self.function_name,
        )

    # Forward / backward

    @_ignored_while_loading
    def confirm(self) -> Optional[FetchRequest]:
        """
        Advance from the current screen

        Returns:
            The FetchRequest to run when the transition needs remote data,
            otherwise None
        """
        if self.state is AppState.PROFILE_SELECTION:
            self.error = None
            return self._request_functions()
        if self.state is AppState.FUNCTION_LIST:
            self.error = None
            self._enter_date_selection()
            return None
        if self.state is AppState.DATE_SELECTION:
            self.error = None
            return self._request_logs()
        if self.browser is not None:
            self.browser.toggle_expand()
        return None

    def back(self) -> None:
        """Cancel an outstanding fetch, or return to the previous screen"""
        if self.pending is not None:
            logger.info(f"Cancelled: {self.pending.description}")
            self.pending = None
            return

        self.error = None
        if self.state is AppState.FUNCTION_LIST:
            self.functions = None
            self.profile = None
            self.state = AppState.PROFILE_SELECTION
        elif self.state is AppState.DATE_SELECTION:
            self.range_selector = None
            self.function_name = None
            self.state = AppState.FUNCTION_LIST
        elif self.state is AppState.LOG_VIEWER:
            self.browser = None
            self.state = AppState.DATE_SELECTION

    def quit(self) -> None:
        self.pending = None
        self.quit_requested = True

    def _enter_date_selection(self) -> None:
        function_name = self.functions.selected() if self.functions else None
        if function_name is None:
            return
        self.function_name = function_name
        self.range_selector = RangeSelector(now=self.clock())
        self.state = AppState.DATE_SELECTION

    def _request_functions(self) -> Optional[FetchRequest]:
        profile = self.profiles.selected()
        if profile is None:
            return None
        return self._start_fetch(
            FetchKind.FUNCTIONS,
            f"Loading functions for {profile.name}",
            lambda: self.backend.list_functions(profile),
            profile=profile,
        )

    def _request_logs(self) -> Optional[FetchRequest]:
        if self.range_selector is None or self.profile is None or self.function_name is None:
            return None
        try:
            time_range = self.range_selector.resolve(self.clock())
        except ValidationError as e:
            logger.warning(f"Rejected time range: {e}")
            self.error = str(e)
            return None

        profile, function_name = self.profile, self.function_name
        return self._start_fetch(
            FetchKind.LOGS,
            f"Loading logs for {function_name} ({time_range})",
            lambda: self.backend.fetch_logs(
                profile, function_name, time_range.start_ms, time_range.end_ms),
            profile=profile,
            function_name=function_name,
            time_range=time_range,
        )

    def _start_fetch(self, kind: FetchKind, description: str,
                     run: Callable[[], Any], **context) -> FetchRequest:
        request = FetchRequest(
            request_id=next(self._request_ids),
            kind=kind,
            origin=self.state,
            description=description,
            run=run,
            **context,
        )
        self.pending = request
        logger.info(f"{description} (request {request.request_id})")
        return request

    # Fetch outcomes

    def _is_current(self, request: FetchRequest) -> bool:
        return (
            self.pending is not None
            and self.pending.request_id == request.request_id
            and self.state is request.origin
        )

    def complete_fetch(self, request: FetchRequest, result: Any) -> bool:
        """
        Apply a finished fetch

        Returns:
            True if the result was applied, False if it was stale
        """
        if not self._is_current(request):
            logger.info(f"Discarding stale result of request {request.request_id}")
            return False

        self.pending = None
        self.error = None
        if request.kind is FetchKind.FUNCTIONS:
            functions: List[str] = list(result)
            self.profile = request.profile
            self.functions = EntryModel(functions)
            self.state = AppState.FUNCTION_LIST
        else:
            entries: List[LogEntry] = list(result)
            self.browser = LogBrowser(request.function_name, request.time_range, entries)
            self.state = AppState.LOG_VIEWER
        return True

    def fail_fetch(self, request: FetchRequest, error: BaseException) -> bool:
        """
        Report a failed fetch; the current screen stays active

        Returns:
            True if the failure was reported, False if it was stale
        """
        if not self._is_current(request):
            logger.info(f"Discarding stale failure of request {request.request_id}")
            return False

        self.pending = None
        self.error = str(error) or error.__class__.__name__
        logger.error(f"{request.description} failed: {self.error}")
        return True

    # Directional input

    @_ignored_while_loading
    def move_up(self) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.previous()
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.previous()
        elif self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.up()
        elif self.state is AppState.LOG_VIEWER and self.browser:
            if self.browser.expanded:
                self.browser.scroll_up()
            else:
                self.browser.move_selection(-1, self.viewport_height)

    @_ignored_while_loading
    def move_down(self) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.next()
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.next()
        elif self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.down()
        elif self.state is AppState.LOG_VIEWER and self.browser:
            if self.browser.expanded:
                self.browser.scroll_down()
            else:
                self.browser.move_selection(1, self.viewport_height)

    @_ignored_while_loading
    def move_left(self) -> None:
        if self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.left()

    @_ignored_while_loading
    def move_right(self) -> None:
        if self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.right()

    @_ignored_while_loading
    def page_up(self) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.page_up()
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.page_up()
        elif self.state is AppState.LOG_VIEWER and self.browser:
            if self.browser.expanded:
                self.browser.page_up()
            else:
                self.browser.page_selection(-1, self.viewport_height)

    @_ignored_while_loading
    def page_down(self) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.page_down()
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.page_down()
        elif self.state is AppState.LOG_VIEWER and self.browser:
            if self.browser.expanded:
                self.browser.page_down()
            else:
                self.browser.page_selection(1, self.viewport_height)

    # Text input

    @_ignored_while_loading
    def type_char(self, char: str) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.append_filter_char(char)
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.append_filter_char(char)
        elif self.state is AppState.LOG_VIEWER and self.browser and not self.browser.expanded:
            self.browser.append_filter_char(char)

    @_ignored_while_loading
    def backspace(self) -> None:
        if self.state is AppState.PROFILE_SELECTION:
            self.profiles.pop_filter_char()
        elif self.state is AppState.FUNCTION_LIST and self.functions:
            self.functions.pop_filter_char()
        elif self.state is AppState.LOG_VIEWER and self.browser and not self.browser.expanded:
            self.browser.pop_filter_char()

    # Date screen focus

    @_ignored_while_loading
    def select_column(self, column: ActiveColumn) -> None:
        if self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.select_column(column)

    @_ignored_while_loading
    def toggle_column(self) -> None:
        if self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.toggle_column()

    @_ignored_while_loading
    def toggle_editing(self) -> None:
        if self.state is AppState.DATE_SELECTION and self.range_selector:
            self.range_selector.toggle_editing()

    # Layout

    def resize(self, viewport_height: int) -> None:
        """Record the new list height and re-centre the log list on the selection"""
        self.viewport_height = max(viewport_height, 1)
        if self.browser is not None:
            self.browser.recenter(self.viewport_height)
