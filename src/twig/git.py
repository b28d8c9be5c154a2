"""Git repository operations."""

from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from twig.logger import get_logger

logger = get_logger("git")

BRANCH_FORMAT = "%(refname:short)|%(HEAD)%(refname:short)|%(committerdate:relative)|%(subject)|%(authorname)"
COMMIT_FORMAT = "%H|%cr|%s|%an"


class GitError(Exception):
    """Git operation error."""


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Open the repository containing path."""
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except (GitCommandError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Not a git repository: {path}") from err

    def list_branches(self) -> str:
        """List local branches, most recently committed first."""
        logger.debug("Listing branches")
        try:
            return self.repo.git.for_each_ref("--sort=-committerdate", f"--format={BRANCH_FORMAT}", "refs/heads")
        except GitCommandError as err:
            raise GitError(f"Failed to list branches: {err}") from err

    def lookup(self, ref: str) -> str:
        """Describe a single commit, or return an empty string if git can't resolve ref."""
        logger.debug("Looking up %s", ref)
        try:
            return self.repo.git.log("-1", f"--format={COMMIT_FORMAT}", ref, "--")
        except GitCommandError:
            return ""

    def recent_checkouts(self, depth: int) -> str:
        """Get the last depth checkout entries of the HEAD reflog."""
        logger.debug("Reading last %d checkouts", depth)
        try:
            return self.repo.git.reflog("show", f"-n{depth}", "--grep-reflog=checkout:", "--format=%gs")
        except GitCommandError:
            # No reflog yet, e.g. a repository without commits
            return ""

    def checkout(self, name: str) -> str:
        """Check out name and return git's own report of it."""
        logger.debug("Checking out %s", name)
        status, stdout, stderr = self.repo.git.checkout(name, with_extended_output=True, with_exceptions=False)
        if status != 0:
            raise GitError(stderr.strip() or f"git checkout {name} failed with status {status}")
        return (stderr or stdout).strip()
