"""Textual application for browsing taxonomies as a filterable tree."""

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Static

from iab_taxonomy.core.session import BrowserSession
from iab_taxonomy.core.tree.details import render_details
from iab_taxonomy.tui.render import (
    dataset_tabs,
    filter_line,
    row_text,
    scrollbar,
    window_start,
)


class TaxonomyBrowserApp(App[None]):
    """Tree on the left, details of the selected record on the right."""

    CSS = """
    #tabs { height: 1; }
    #filter { height: 1; margin-bottom: 1; }
    #body { height: 1fr; }
    #tree { width: 1fr; }
    #scrollbar { width: 1; color: $accent; }
    #details { width: 45%; padding: 0 1; border-left: solid $panel; }
    """

    BINDINGS = [
        Binding("tab", "switch_dataset(1)", "Next taxonomy", priority=True),
        Binding("shift+tab", "switch_dataset(-1)", "Previous taxonomy", priority=True),
        Binding("up", "move(-1)", "Up", show=False, priority=True),
        Binding("down", "move(1)", "Down", show=False, priority=True),
        Binding("pageup", "page(-1)", "Page up", show=False, priority=True),
        Binding("pagedown", "page(1)", "Page down", show=False, priority=True),
        Binding("left", "collapse", "Collapse", priority=True),
        Binding("right", "expand", "Expand", priority=True),
        Binding("enter,ctrl+t", "toggle", "Toggle", priority=True),
        Binding("backspace", "trim_filter", "Trim filter", show=False, priority=True),
        Binding("escape", "clear_filter", "Clear filter", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True),
    ]

    def __init__(self, session: BrowserSession) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Static(id="tabs")
        yield Static(id="filter")
        with Horizontal(id="body"):
            yield Static(id="tree")
            yield Static(id="scrollbar")
            yield Static(id="details")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "IAB taxonomies"
        self.refresh_view()
        # Widget sizes are only known after the first layout pass
        self.call_after_refresh(self.refresh_view)

    def on_resize(self, event: events.Resize) -> None:
        self.call_after_refresh(self.refresh_view)

    def on_key(self, event: events.Key) -> None:
        if event.is_printable and event.character:
            self.session.append_filter(event.character)
            event.stop()
            self.refresh_view()

    # actions

    def action_switch_dataset(self, step: int) -> None:
        self.session.switch_dataset(step)
        self.refresh_view()

    def action_move(self, delta: int) -> None:
        self.session.move(delta)
        self.refresh_view()

    def action_page(self, direction: int) -> None:
        if direction > 0:
            self.session.page_down()
        else:
            self.session.page_up()
        self.refresh_view()

    def action_collapse(self) -> None:
        self.session.collapse()
        self.refresh_view()

    def action_expand(self) -> None:
        self.session.expand()
        self.refresh_view()

    def action_toggle(self) -> None:
        self.session.toggle()
        self.refresh_view()

    def action_trim_filter(self) -> None:
        self.session.trim_filter()
        self.refresh_view()

    def action_clear_filter(self) -> None:
        self.session.clear_filter()
        self.refresh_view()

    # rendering

    def refresh_view(self) -> None:
        session = self.session
        kind = session.active_kind
        rows = session.rows
        position = session.scroll_position
        tree = self.query_one("#tree", Static)
        height = tree.size.height or len(rows)

        self.query_one("#tabs", Static).update(
            dataset_tabs([s.kind for s in session.stores], kind)
        )
        self.query_one("#filter", Static).update(
            filter_line(
                session.filter_text,
                len(session.filter_state.matched_ids),
                len(rows),
                active=session.filter_state.active,
            )
        )

        start = window_start(position.offset, len(rows), height)
        lines = Text()
        for row in rows[start : start + height]:
            lines.append_text(
                row_text(
                    row,
                    session.active_store.get(row.record_id),
                    session.highlights_for(row.record_id),
                    selected=row.record_id == session.selected_id,
                    accent=kind.accent,
                )
            )
            lines.append("\n")
        if not rows:
            message = "No matches" if session.filter_state.active else "No records"
            lines = Text(message, style="dim italic")
        tree.update(lines)

        self.query_one("#scrollbar", Static).update("\n".join(scrollbar(position, height)))

        record = session.selected_record
        self.query_one("#details", Static).update(
            render_details(record, kind) if record is not None else ""
        )
