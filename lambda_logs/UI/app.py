"""
lambda_logs Main Application - CloudWatch log browser using Textual
"""
import logging

from rich.text import Text
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import ContentSwitcher, Footer, Header, LoadingIndicator, Static

from lambda_logs.core import ActiveColumn, AppState, FetchRequest, NavigationController
from lambda_logs.errors import RemoteFetchError
from lambda_logs.UI.views import DateSelectionView, LogViewerView, SelectionListView

# Header, title, filter bar, help line, status bar and footer
CHROME_ROWS = 8

DATE_COLUMN_KEYS = {
    "1": ActiveColumn.QUICK_RANGES,
    "2": ActiveColumn.CUSTOM_RANGE,
}


class LambdaLogsApp(App):
    """Lambda CloudWatch Logs - Terminal UI Application"""

    TITLE = "Lambda Logs"
    CSS_PATH = "lambda_logs.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit_app", "Quit", priority=True),
        Binding("escape", "back", "Back", priority=True),
        Binding("enter", "confirm", "Select", priority=True),
        Binding("tab", "toggle_editing", "Edit field", show=False, priority=True),
        Binding("up", "move_up", "Up", show=False, priority=True),
        Binding("down", "move_down", "Down", show=False, priority=True),
        Binding("left", "move_left", "Left", show=False, priority=True),
        Binding("right", "move_right", "Right", show=False, priority=True),
        Binding("pageup", "page_up", "Page up", show=False, priority=True),
        Binding("pagedown", "page_down", "Page down", show=False, priority=True),
        Binding("backspace", "backspace", "Delete", show=False, priority=True),
    ]

    def __init__(self, controller: NavigationController, **kwargs):
        """
        Initialize the application

        Args:
            controller: State machine holding all browsing state
        """
        super().__init__(**kwargs)
        self.controller = controller
        self.logger = logging.getLogger(__name__)

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)

        with ContentSwitcher(initial=AppState.PROFILE_SELECTION.value, id="screens"):
            yield SelectionListView(
                "Select an AWS profile", "No profiles match the filter",
                id=AppState.PROFILE_SELECTION.value,
            )
            yield SelectionListView(
                "Select a Lambda function", "No functions match the filter",
                id=AppState.FUNCTION_LIST.value,
            )
            yield DateSelectionView(id=AppState.DATE_SELECTION.value)
            yield LogViewerView(id=AppState.LOG_VIEWER.value)

        with Horizontal(id="status-bar"):
            yield LoadingIndicator(id="loading-indicator")
            yield Static("", id="status-message")

        yield Footer()

    def on_mount(self) -> None:
        self._resize_viewport()
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self._resize_viewport()
        try:
            self.refresh_view()
        except NoMatches:
            # Resized before the screens were composed
            pass

    def _resize_viewport(self) -> None:
        self.controller.resize(max(self.size.height - CHROME_ROWS, 1))

    # Rendering

    def refresh_view(self) -> None:
        """Redraw the active screen and the status bar from the controller"""
        snapshot = self.controller.snapshot()
        height = self.controller.viewport_height

        self.query_one("#screens", ContentSwitcher).current = snapshot.state.value

        if snapshot.state is AppState.PROFILE_SELECTION:
            view = self.query_one(f"#{snapshot.state.value}", SelectionListView)
            view.show(self.controller.profiles, height)
        elif snapshot.state is AppState.FUNCTION_LIST:
            view = self.query_one(f"#{snapshot.state.value}", SelectionListView)
            if snapshot.profile is not None:
                view.set_title(f"Lambda functions for {snapshot.profile}")
            view.show(self.controller.functions, height)
        elif snapshot.state is AppState.DATE_SELECTION:
            self.query_one(DateSelectionView).show(
                self.controller.range_selector, snapshot.function_name
            )
        elif self.controller.browser is not None:
            self.query_one(LogViewerView).show(self.controller.browser.snapshot(height))

        crumbs = [str(snapshot.profile)] if snapshot.profile else []
        if snapshot.function_name:
            crumbs.append(snapshot.function_name)
        self.sub_title = " › ".join(crumbs)

        self.query_one("#loading-indicator", LoadingIndicator).display = snapshot.loading
        status = self.query_one("#status-message", Static)
        if snapshot.loading:
            status.update(Text.assemble(
                f"{snapshot.loading_message}… ", ("(Esc to cancel)", "dim")
            ))
        elif snapshot.error:
            # Error text comes from the aws CLI and may contain brackets
            status.update(Text(snapshot.error, style="red"))
        else:
            status.update("")

    # Input

    def on_key(self, event: events.Key) -> None:
        """Route printable characters to the active filter or date column"""
        if not event.is_printable or not event.character:
            return

        if self.controller.state is AppState.DATE_SELECTION:
            if event.character in DATE_COLUMN_KEYS:
                self.controller.select_column(DATE_COLUMN_KEYS[event.character])
            elif event.character.lower() == "c":
                self.controller.toggle_column()
        else:
            self.controller.type_char(event.character)

        event.stop()
        self.refresh_view()

    def action_confirm(self) -> None:
        request = self.controller.confirm()
        if request is not None:
            self._run_fetch(request)
        elif self.controller.error:
            self.notify(self.controller.error, severity="warning", markup=False)
        self.refresh_view()

    def action_back(self) -> None:
        self.controller.back()
        self.refresh_view()

    def action_quit_app(self) -> None:
        self.controller.quit()
        self.exit()

    def action_move_up(self) -> None:
        self.controller.move_up()
        self.refresh_view()

    def action_move_down(self) -> None:
        self.controller.move_down()
        self.refresh_view()

    def action_move_left(self) -> None:
        self.controller.move_left()
        self.refresh_view()

    def action_move_right(self) -> None:
        self.controller.move_right()
        self.refresh_view()

    def action_page_up(self) -> None:
        self.controller.page_up()
        self.refresh_view()

    def action_page_down(self) -> None:
        self.controller.page_down()
        self.refresh_view()

    def action_backspace(self) -> None:
        self.controller.backspace()
        self.refresh_view()

    def action_toggle_editing(self) -> None:
        self.controller.toggle_editing()
        self.refresh_view()

    # Remote fetches

    @work(exclusive=True, thread=True, group="fetch")
    def _run_fetch(self, request: FetchRequest) -> None:
        """
        Run a fetch request in a background thread

        The outcome is handed back to the controller on the UI thread,
        which ignores it if the request is no longer outstanding.
        """
        try:
            result = request.run()
        except RemoteFetchError as e:
            self.call_from_thread(self._fetch_failed, request, e)
            return
        except Exception as e:
            self.logger.exception(f"Unexpected error during: {request.description}")
            self.call_from_thread(self._fetch_failed, request, e)
            return
        self.call_from_thread(self._fetch_finished, request, result)

    def _fetch_finished(self, request: FetchRequest, result) -> None:
        if self.controller.complete_fetch(request, result):
            self.refresh_view()

    def _fetch_failed(self, request: FetchRequest, error: BaseException) -> None:
        if self.controller.fail_fetch(request, error):
            self.notify(str(self.controller.error), severity="error", markup=False)
            self.refresh_view()


def run_app(controller: NavigationController) -> None:
    """Entry point to run the lambda_logs application"""
    app = LambdaLogsApp(controller)
    app.run()
