"""Runtime settings, built once at startup."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from rich.console import Console

from twig.branches import CURRENT_MARKER
from twig.logger import get_logger

logger = get_logger("config")

DEFAULT_HISTORY_DEPTH = 50
DEFAULT_LOG_LEVEL = "WARNING"
HISTORY_DEPTH_ENV = "TWIG_HISTORY_DEPTH"
LOG_LEVEL_ENV = "TWIG_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Everything the selection flow needs to know about this invocation."""

    recent: bool = False
    terminal_width: int = 80
    history_depth: int = DEFAULT_HISTORY_DEPTH
    current_marker: str = CURRENT_MARKER
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(
        cls,
        recent: bool,
        console: Console,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from the CLI flag, the console and the environment."""
        env = os.environ if environ is None else environ
        return cls(
            recent=recent,
            terminal_width=console.width,
            history_depth=_history_depth(env.get(HISTORY_DEPTH_ENV)),
            log_level=env.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(),
        )


def _history_depth(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_HISTORY_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        depth = 0
    if depth <= 0:
        logger.warning("Ignoring %s=%r, using %d", HISTORY_DEPTH_ENV, raw, DEFAULT_HISTORY_DEPTH)
        return DEFAULT_HISTORY_DEPTH
    return depth
