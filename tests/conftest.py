"""Shared test fixtures for gitstage tests."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest
from dulwich import porcelain
from dulwich.repo import Repo

from gitstage.utils._logging import _library_logger

TEST_AUTHOR = b"Test User <test@example.com>"


@dataclass(frozen=True, slots=True)
class StatusCounts:
    """File counts per status partition, as reported by porcelain.status."""

    untracked: int
    staged: int
    working_dir: int


@pytest.fixture(autouse=True)
def isolated_git_env(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Keep the user's global git configuration out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for name in ("GIT_CONFIG_GLOBAL", "GIT_CONFIG_SYSTEM", "GIT_DIR", "GIT_WORK_TREE"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_library_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Rebuild the library logger from a clean environment for each test."""
    for name in (
        "GITSTAGE_LOGGING__LEVEL",
        "GITSTAGE_LOGGING__FORMAT",
        "GITSTAGE_LOGGING__FILE",
        "GITSTAGE_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    _library_logger.cache_clear()
    yield
    _library_logger.cache_clear()


def init_repo(path: Path) -> Repo:
    """Initialize a repository with a committer identity configured."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(str(path))
    config = repo.get_config()
    config.set((b"user",), b"name", b"Test User")
    config.set((b"user",), b"email", b"test@example.com")
    config.write_to_path()
    return repo


def commit_all(path: Path, message: str = "commit") -> bytes:
    """Commit the current index of the repository at path."""
    return porcelain.commit(
        str(path),
        message=message.encode(),
        author=TEST_AUTHOR,
        committer=TEST_AUTHOR,
    )


def status_counts(path: Path) -> StatusCounts:
    """Count untracked, staged and unstaged files in the repository at path."""
    status = porcelain.status(str(path), untracked_files="all")
    staged = sum(len(paths) for paths in status.staged.values())
    return StatusCounts(
        untracked=len(status.untracked),
        staged=staged,
        working_dir=len(status.unstaged),
    )


@pytest.fixture
def repo_init_empty(tmp_path: Path) -> Iterator[Path]:
    """Create a repository with no commits.

    Structure:
        tmp_path/
            repo/
                .git/
    """
    root = tmp_path / "repo"
    repo = init_repo(root)
    repo.close()
    yield root.resolve()


@pytest.fixture
def repo_init(repo_init_empty: Path) -> Path:
    """Create a repository with one initial commit holding README.md."""
    readme = repo_init_empty / "README.md"
    _ = readme.write_text("# Test\n")
    _ = porcelain.add(str(repo_init_empty), paths=[str(readme)])
    _ = commit_all(repo_init_empty, "initial")
    return repo_init_empty


StatusFunc = Callable[[Path], StatusCounts]
CommitFunc = Callable[..., bytes]


@pytest.fixture
def git_status() -> StatusFunc:
    """Return a function counting status partitions of a repository."""
    return status_counts


@pytest.fixture
def git_commit() -> CommitFunc:
    """Return a function committing the index of a repository."""
    return commit_all


@pytest.fixture
def make_repo() -> Callable[[Path], Repo]:
    """Return a function initializing a repository at a path."""
    return init_repo
