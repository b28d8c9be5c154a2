"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator, Optional

import pytest
from git import Actor, Repo


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a test repository with a few branches and a checkout history.

    Branches: main, feature/test, feature/merged (merged into main),
    zebra-crossing and feature/current, which is left checked out.

    Returns:
        Path of the repository
    """
    local_path = tmp_path / "local"
    local_path.mkdir()

    local_repo = Repo.init(local_path, initial_branch="main")

    # Set up git config
    author = Actor("Test User", "test@example.com")
    local_repo.config_writer().set_value("user", "name", author.name).release()
    local_repo.config_writer().set_value("user", "email", author.email).release()

    # Create initial commit and make sure we're on main
    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author, committer=author)

    if "main" not in local_repo.heads:
        local_repo.create_head("main")
    main_branch = local_repo.heads.main
    main_branch.checkout()

    def create_branch(name: str, content: str, merge: bool = False) -> None:
        """Create a branch off main with one commit."""
        main_branch.checkout()

        branch = local_repo.create_head(name)
        branch.checkout()

        file_name = f"{name.replace('/', '_')}.txt"
        (local_path / file_name).write_text(content)
        local_repo.index.add([file_name])
        local_repo.index.commit(f"Add {name}", author=author, committer=author)

        if merge:
            main_branch.checkout()
            local_repo.git.merge(name, "--no-ff")

    create_branch("feature/test", "Test branch content")
    create_branch("feature/merged", "Merged branch content", merge=True)
    create_branch("zebra-crossing", "Zebra branch content")
    create_branch("feature/current", "Current branch content")

    local_repo.heads["feature/current"].checkout()

    yield local_path

    # Cleanup is handled by pytest's tmp_path fixture


@pytest.fixture
def in_repo(test_env: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside the test repository."""
    monkeypatch.chdir(test_env)
    return test_env


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Queue of lines fed to prompts; an empty queue behaves like Ctrl-D."""
    queue: list[str] = []

    def fake_input(prompt: Optional[str] = None) -> str:
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return queue
