"""Command line interface for twig."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from twig.config import Settings
from twig.git import GitError, GitRepo
from twig.logger import setup_logging
from twig.selector import SelectionCancelled, run

app = typer.Typer(help="Interactively switch git branches", add_completion=False)
console = Console()


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


@app.command()
def main(
    recent: Annotated[
        bool,
        typer.Option("--recent", "-r", help="Pick from recently checked out references instead of searching"),
    ] = False,
) -> None:
    """Pick a branch and check it out."""
    settings = Settings.load(recent=recent, console=console)
    setup_logging(settings.log_level)

    repo = get_repo(Path.cwd())

    try:
        run(repo, settings, console)
    except SelectionCancelled:
        raise typer.Exit(code=0) from None
    except GitError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
