"""Interactive branch selection and checkout."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

from twig.branches import BranchRecord, build_records, resolve_recent
from twig.config import Settings
from twig.fuzzy import fuzzy_filter
from twig.git import GitRepo
from twig.layout import (
    RECENT_PREFIX_WIDTH,
    SEARCH_PREFIX_WIDTH,
    LayoutPlan,
    display_line,
    plan_layout,
    render_row,
)
from twig.logger import get_logger

logger = get_logger("selector")

MAX_VISIBLE = 10


class SelectionCancelled(Exception):
    """The user aborted a prompt."""


def _show(console: Console, records: list[BranchRecord], plan: LayoutPlan, limit: Optional[int] = None) -> None:
    visible = records if limit is None else records[:limit]
    for index, record in enumerate(visible):
        console.print(render_row(record, plan, index), no_wrap=True, overflow="crop")
    hidden = len(records) - len(visible)
    if hidden > 0:
        console.print(f"[dim]... and {hidden} more, type to narrow down[/dim]")


def search_branches(records: list[BranchRecord], plan: LayoutPlan, console: Console) -> BranchRecord:
    """Let the user narrow down records by fuzzy search and pick one.

    Each query filters the full record set against the rendered rows. A number
    picks one of the visible candidates and an empty query restores them all.

    Raises:
        SelectionCancelled: If the user aborts the prompt.
    """
    lines = {record.name: display_line(record, plan) for record in records}
    candidates = list(records)

    while True:
        if candidates:
            _show(console, candidates, plan, limit=MAX_VISIBLE)
        try:
            answer = Prompt.ask(
                "[bold]Select a branch[/bold] [dim](type to search, number to pick)[/dim]",
                console=console,
                default="",
                show_default=False,
            ).strip()
        except (KeyboardInterrupt, EOFError) as err:
            raise SelectionCancelled() from err

        if not answer:
            candidates = list(records)
            continue

        if answer.isdecimal() and int(answer) < min(len(candidates), MAX_VISIBLE):
            return candidates[int(answer)]

        candidates = fuzzy_filter(answer, records, key=lambda record: lines[record.name])
        logger.debug("%d of %d branches match %r", len(candidates), len(records), answer)
        if not candidates:
            console.print(f"[yellow]No branches match[/yellow] {escape(answer)}")


def pick_recent(records: list[BranchRecord], plan: LayoutPlan, console: Console) -> Optional[BranchRecord]:
    """List recent checkouts once, numbered, and ask for an index.

    Raises:
        SelectionCancelled: If the user aborts the prompt.
    """
    if not records:
        console.print("[yellow]No recent checkouts found[/yellow]")
        return None

    _show(console, records, plan)
    while True:
        try:
            index = IntPrompt.ask("[bold]Select a recent checkout[/bold]", console=console)
        except (KeyboardInterrupt, EOFError) as err:
            raise SelectionCancelled() from err
        if 0 <= index < len(records):
            return records[index]
        console.print(f"[prompt.invalid]Please enter a number between 0 and {len(records) - 1}")


def switch_to(repo: GitRepo, record: BranchRecord, console: Console) -> bool:
    """Check out the selected record.

    Returns:
        False when the record is already checked out and nothing was done.

    Raises:
        GitError: If the checkout fails.
    """
    target = record.name.strip()
    if record.is_current:
        console.print(f"Already on [yellow]'{escape(target)}'[/yellow]")
        return False

    message = repo.checkout(target)
    if message:
        console.print(escape(message))
    return True


def run(repo: GitRepo, settings: Settings, console: Console) -> Optional[BranchRecord]:
    """List, select and check out a branch.

    Returns:
        The selected record, or None when there was nothing to select.

    Raises:
        SelectionCancelled: If the user aborts a prompt.
        GitError: If listing or checkout fails.
    """
    records = build_records(repo.list_branches(), settings.current_marker)
    if not records:
        console.print("[yellow]No branches found[/yellow]")
        return None

    if settings.recent:
        recent = resolve_recent(
            repo.recent_checkouts(settings.history_depth),
            records,
            repo.lookup,
            settings.current_marker,
        )
        plan = plan_layout(recent, settings.terminal_width, RECENT_PREFIX_WIDTH)
        selected = pick_recent(recent, plan, console)
    else:
        plan = plan_layout(records, settings.terminal_width, SEARCH_PREFIX_WIDTH)
        selected = search_branches(records, plan, console)

    if selected is None:
        return None
    switch_to(repo, selected, console)
    return selected
