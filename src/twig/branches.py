"""Branch records and recent checkout history."""

from dataclasses import dataclass
from typing import Callable, Optional

from twig.logger import get_logger

logger = get_logger("branches")

CURRENT_MARKER = "*"
HISTORY_TOKEN = " to "


@dataclass(frozen=True)
class BranchRecord:
    """One selectable reference: a local branch or a bare commit."""

    name: str
    last_commit: str = ""
    message: str = ""
    author: str = ""
    is_current: bool = False


def _is_marked_copy(name: str, candidate: str) -> bool:
    """Check if candidate is name with at most one leading character added."""
    return candidate == name or (len(candidate) == len(name) + 1 and candidate[1:] == name)


def parse_line(line: str, marker: str = CURRENT_MARKER) -> BranchRecord:
    """Parse a single listing line into a record.

    Accepts both ``name|<marker>name|time|subject|author`` and
    ``name|time|subject|author``. Missing fields become empty strings.
    """
    parts = line.split("|")
    if len(parts) >= 5 and parts[0] and _is_marked_copy(parts[0], parts[1]):
        name_field, rest = parts[1], parts[2:]
    else:
        name_field, rest = parts[0], parts[1:]

    is_current = name_field.startswith(marker)
    if is_current:
        name_field = name_field[len(marker) :]

    last_commit = rest[0] if rest else ""
    if len(rest) >= 3:
        # Subjects may contain pipes, the author is always last
        message = "|".join(rest[1:-1])
        author = rest[-1]
    else:
        message = rest[1] if len(rest) == 2 else ""
        author = ""

    return BranchRecord(
        name=name_field.strip(),
        last_commit=last_commit.strip(),
        message=message.strip(),
        author=author.strip(),
        is_current=is_current,
    )


def build_records(raw_listing: str, marker: str = CURRENT_MARKER) -> list[BranchRecord]:
    """Build branch records from raw listing output, preserving order."""
    return [parse_line(line, marker) for line in raw_listing.split("\n") if line.strip()]


def parse_history(raw_history: str) -> list[str]:
    """Extract checkout targets from history lines, most recent first, without duplicates."""
    seen: set[str] = set()
    targets: list[str] = []
    for line in raw_history.splitlines():
        if HISTORY_TOKEN not in line:
            continue
        target = line.rsplit(HISTORY_TOKEN, 1)[1].strip()
        if not target or target in seen:
            continue
        seen.add(target)
        targets.append(target)
    return targets


def resolve_recent(
    raw_history: str,
    records: list[BranchRecord],
    lookup: Callable[[str], str],
    marker: str = CURRENT_MARKER,
) -> list[BranchRecord]:
    """Resolve recent checkout history into records.

    Targets naming a known branch reuse its record. Anything else is treated
    as a bare commit and resolved through ``lookup``, which returns a
    ``hash|time|subject|author`` line or an empty string. Lookups are cached
    under both the target and the resolved hash, so each unknown target costs
    at most one call. Unresolvable targets are skipped.
    """
    known: dict[str, Optional[BranchRecord]] = {record.name: record for record in records}
    resolved: list[BranchRecord] = []
    emitted: set[str] = set()

    for target in parse_history(raw_history):
        if target not in known:
            output = lookup(target).strip()
            if not output:
                logger.debug("Skipping unresolvable history entry %s", target)
                known[target] = None
                continue
            commit = parse_line(output.splitlines()[0], marker)
            record = known.setdefault(commit.name, commit)
            known[target] = record

        record = known[target]
        if record is None or record.name in emitted:
            continue
        emitted.add(record.name)
        resolved.append(record)

    return resolved
