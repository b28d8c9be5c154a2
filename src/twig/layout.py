"""Column layout for branch rows."""

from dataclasses import dataclass
from typing import Iterable

from rich.text import Text

from twig.branches import BranchRecord

TIME_WIDTH = 13
AUTHOR_WIDTH = 15
SEPARATOR = "  "
MIN_MESSAGE_WIDTH = 3
ELLIPSIS = "..."

# Index column: current marker, space, right-aligned index, space
SEARCH_PREFIX_WIDTH = 5
RECENT_PREFIX_WIDTH = 6


def fixed_overhead(prefix_width: int, show_author: bool) -> int:
    """Width taken by everything except the name and message columns."""
    overhead = prefix_width + TIME_WIDTH + 2 * len(SEPARATOR)
    if show_author:
        overhead += AUTHOR_WIDTH + len(SEPARATOR)
    return overhead


def minimum_width(prefix_width: int) -> int:
    """Narrowest terminal a row fits in: fixed columns plus a one-character name."""
    return fixed_overhead(prefix_width, show_author=False) + 1


@dataclass(frozen=True)
class LayoutPlan:
    """Column widths shared by every row of one listing."""

    name_width: int
    message_width: int
    show_author: bool
    prefix_width: int = SEARCH_PREFIX_WIDTH

    @property
    def overhead(self) -> int:
        """Width of the fixed columns and separators."""
        return fixed_overhead(self.prefix_width, self.show_author)

    @property
    def row_width(self) -> int:
        """Total width of one rendered row."""
        return self.name_width + self.overhead + self.message_width


def plan_layout(
    records: Iterable[BranchRecord],
    terminal_width: int,
    prefix_width: int = SEARCH_PREFIX_WIDTH,
) -> LayoutPlan:
    """Fit the columns into the terminal width.

    The message column gets at least ``MIN_MESSAGE_WIDTH`` characters where the
    terminal allows it. When it would not, the author column is dropped first and
    then the name column is shrunk, down to one character. Below that the message
    column gives way, down to zero. Terminals narrower than ``minimum_width``
    are planned as if they were exactly that wide.
    """
    width = max(terminal_width, minimum_width(prefix_width))
    longest_name = max((len(record.name) for record in records), default=0)
    name_width = max(longest_name, 1)

    show_author = True
    available = width - name_width - fixed_overhead(prefix_width, show_author)
    if available < MIN_MESSAGE_WIDTH:
        show_author = False
        available = width - name_width - fixed_overhead(prefix_width, show_author)
    if available < MIN_MESSAGE_WIDTH:
        name_width = max(width - fixed_overhead(prefix_width, show_author) - MIN_MESSAGE_WIDTH, 1)
        available = width - name_width - fixed_overhead(prefix_width, show_author)

    return LayoutPlan(
        name_width=name_width,
        message_width=max(available, 0),
        show_author=show_author,
        prefix_width=prefix_width,
    )


def truncate(text: str, width: int) -> str:
    """Shorten text to width, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return (text[: max(width - len(ELLIPSIS), 0)].rstrip() + ELLIPSIS)[:width]


def _cell(text: str, width: int) -> str:
    return truncate(text, width).ljust(width)


def _columns(record: BranchRecord, plan: LayoutPlan) -> list[tuple[str, str]]:
    """Padded cells paired with their styles."""
    columns = [
        (_cell(record.name, plan.name_width), "yellow"),
        (_cell(record.last_commit, TIME_WIDTH), "green"),
        (_cell(record.message, plan.message_width), "blue"),
    ]
    if plan.show_author:
        columns.append((_cell(record.author, AUTHOR_WIDTH), "magenta"))
    return columns


def format_prefix(record: BranchRecord, index: int, prefix_width: int) -> str:
    """Current-branch marker and right-aligned index."""
    mark = "*" if record.is_current else " "
    return f"{mark} {index:>{max(prefix_width - 3, 1)}} "


def display_line(record: BranchRecord, plan: LayoutPlan) -> str:
    """Plain text of a row without its index prefix."""
    return SEPARATOR.join(cell for cell, _ in _columns(record, plan)).rstrip()


def render_row(record: BranchRecord, plan: LayoutPlan, index: int) -> Text:
    """Coloured row with its index prefix."""
    row = Text(format_prefix(record, index, plan.prefix_width), style="bold" if record.is_current else "")
    for position, (cell, style) in enumerate(_columns(record, plan)):
        if position:
            row.append(SEPARATOR)
        row.append(cell, style=style)
    return row
