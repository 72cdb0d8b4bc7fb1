"""Pure rendering helpers for the terminal browser."""

from collections.abc import Sequence

from rich.text import Text

from iab_taxonomy.models.record import (
    DatasetKind,
    HighlightSpan,
    Record,
    RecordHighlights,
    ScrollPosition,
    VisibleRow,
)

HIGHLIGHT_STYLE = "bold reverse"
SELECTED_STYLE = "on grey23"
INDENT = "  "


def _highlighted(text: str, spans: Sequence[HighlightSpan], style: str) -> Text:
    out = Text(text, style=style)
    for span in spans:
        out.stylize(HIGHLIGHT_STYLE, span.start, span.end)
    return out


def disclosure_marker(row: VisibleRow) -> str:
    if not row.has_children:
        return " "
    return "▾" if row.is_expanded else "▸"


def row_text(
    row: VisibleRow,
    record: Record | None,
    highlights: RecordHighlights | None,
    *,
    selected: bool = False,
    accent: str = "cyan",
) -> Text:
    """One tree row: indentation, disclosure marker, id and name."""
    name = record.name if record is not None else ""
    id_spans = highlights.id_spans if highlights else ()
    name_spans = highlights.name_spans if highlights else ()

    out = Text(f"{INDENT * row.depth}{disclosure_marker(row)} ")
    out.append_text(_highlighted(row.record_id, id_spans, f"bold {accent}"))
    out.append(" ")
    out.append_text(_highlighted(name, name_spans, ""))
    if selected:
        out.stylize(SELECTED_STYLE)
    return out


def window_start(offset: int | None, total: int, height: int) -> int:
    """First row to draw so the selected offset stays centred when possible."""
    if height <= 0 or total <= height or offset is None:
        return 0
    start = offset - height // 2
    return max(0, min(start, total - height))


def scrollbar(position: ScrollPosition, height: int) -> list[str]:
    """A one-column scrollbar track of ``height`` cells.

    The thumb length is proportional to the share of rows that fit the window and
    its position follows the selected offset.
    """
    if height <= 0:
        return []
    total = position.total
    if total <= height:
        return [" "] * height

    thumb = max(1, height * height // total)
    offset = position.offset or 0
    top = (height - thumb) * offset // max(1, total - 1)
    return ["█" if top <= cell < top + thumb else "│" for cell in range(height)]


def dataset_tabs(kinds: Sequence[DatasetKind], active: DatasetKind) -> Text:
    out = Text()
    for kind in kinds:
        label = f" {kind.title} {kind.version} "
        style = f"bold reverse {kind.accent}" if kind is active else "dim"
        out.append(label, style=style)
        out.append(" ")
    return out


def filter_line(filter_text: str, matched: int, visible: int, *, active: bool) -> Text:
    out = Text("Filter: ", style="bold")
    out.append(filter_text)
    out.append("█", style="blink")
    if active:
        noun = "match" if matched == 1 else "matches"
        out.append(f"   {matched} {noun}, {visible} rows", style="dim")
    return out
