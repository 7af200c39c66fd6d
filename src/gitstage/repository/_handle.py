# ruff: noqa: TC003  # Path needed at runtime for method bodies
"""Repository handle resolution.

This module opens repositories from filesystem paths and wraps them in a
RepositoryHandle. Every other operation in ``gitstage.repository`` goes
through open_repository(), so the non-bare guarantee is enforced once here.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Final, Self

from dulwich.errors import FileFormatException, NotGitRepository
from dulwich.file import FileLocked
from dulwich.repo import Repo

from gitstage.exceptions import (
    BareRepositoryError,
    GitStageError,
    NotARepositoryError,
    NoWorkDirError,
    StoreError,
)
from gitstage.utils._git import path_to_str
from gitstage.utils._logging import get_logger

# Lower-level failures reported as StoreError at operation boundaries
_STORE_ERRORS: Final = (FileLocked, FileFormatException, OSError, ValueError, KeyError)


class RepositoryHandle:
    """Exclusively owned handle on one non-bare repository.

    A handle is created per operation by open_repository() and closed when
    the operation ends; handles are never cached or shared between calls.

    The class implements the context manager protocol. When used as a
    context manager, the underlying dulwich Repo is automatically closed
    when exiting the context.

    Example:
        >>> with open_repository("/path/to/project/src") as handle:
        ...     print(handle.work_dir)
        ...     print(handle.metadata_dir)
    """

    __slots__: Final = ("_repo", "_root")
    _root: Path
    _repo: Repo

    def __init__(self, repo: Repo) -> None:
        """Wrap an opened, non-bare dulwich repository.

        Args:
            repo: The repository to take ownership of.
        """
        self._repo = repo
        self._root = Path(os.fsdecode(repo.path)).resolve()

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the repository."""
        self.close()

    def close(self) -> None:
        """Close the underlying git repository.

        Releases file handles held by the dulwich Repo.
        """
        self._repo.close()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def repo(self) -> Repo:
        """The underlying dulwich repository."""
        return self._repo

    @property
    def work_dir(self) -> Path:
        """Get the working tree root directory.

        Returns:
            The resolved path to the working tree root.

        Raises:
            NoWorkDirError: If the working tree root is not an existing directory.
        """
        if not self._root.is_dir():
            msg = f"Working tree does not exist: {self._root}"
            raise NoWorkDirError(msg, path=self._root)
        return self._root

    @property
    def metadata_dir(self) -> Path:
        """Get the control directory (the ``.git`` directory) of the repository."""
        return Path(os.fsdecode(self._repo.controldir()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self._root)!r})"


def _discover(path: Path | str) -> Repo:
    """Find the repository at or above ``path`` without the bare check.

    Raises:
        NotARepositoryError: If no repository is found.
        StoreError: If a repository is found but cannot be read.
    """
    start = Path(path)
    if not start.exists():
        msg = f"Path does not exist: {start}"
        raise NotARepositoryError(msg, path=start)

    try:
        return Repo.discover(str(start))
    except NotGitRepository as e:
        msg = f"Not inside a Git repository: {start}"
        raise NotARepositoryError(msg, path=start) from e
    except _STORE_ERRORS as e:
        msg = f"Failed to open repository at {start}: {e}"
        raise StoreError(msg, path=start, cause=e) from e


def open_repository(path: Path | str) -> RepositoryHandle:
    """Open the non-bare repository located at or above ``path``.

    Args:
        path: Working tree root or any path beneath it.

    Returns:
        A RepositoryHandle owning the opened repository.

    Raises:
        NotARepositoryError: If no repository is found.
        BareRepositoryError: If the repository has no working tree.
        StoreError: If the repository cannot be read.
    """
    repo = _discover(path)
    if repo.bare:
        control_dir = Path(os.fsdecode(repo.controldir()))
        repo.close()
        msg = f"Bare repositories are not supported: {control_dir}"
        raise BareRepositoryError(msg, path=control_dir)

    get_logger("handle").debug("open_repository", path=str(path))
    return RepositoryHandle(repo)


@contextmanager
def translate_store_errors(
    operation: str, *, path: Path | None = None
) -> Iterator[None]:
    """Report lower-level store failures as StoreError.

    gitstage exceptions pass through unchanged.

    Args:
        operation: Operation name used in the error message.
        path: Working tree root for error context.

    Raises:
        StoreError: Wrapping I/O errors, index lock contention and malformed
            store files raised inside the block.
    """
    try:
        yield
    except GitStageError:
        raise
    except _STORE_ERRORS as e:
        msg = f"{operation} failed: {e}"
        raise StoreError(msg, path=path, cause=e) from e


def is_repo(path: Path | str) -> bool:
    """Check whether a repository exists at or above ``path``.

    Bare repositories count.

    Args:
        path: Path to start the search from.

    Returns:
        True if a repository was found.
    """
    try:
        repo = _discover(path)
    except (NotARepositoryError, StoreError):
        return False
    repo.close()
    return True


def is_bare_repo(path: Path | str) -> bool:
    """Check whether the repository at or above ``path`` is bare.

    Args:
        path: Path to start the search from.

    Returns:
        True if the repository has no working tree.

    Raises:
        NotARepositoryError: If no repository is found.
        StoreError: If the repository cannot be read.
    """
    repo = _discover(path)
    try:
        return bool(repo.bare)
    finally:
        repo.close()


def repo_dir(path: Path | str) -> Path:
    """Get the control (``.git``) directory of the repository at ``path``.

    Args:
        path: Working tree root or any path beneath it.

    Returns:
        Path to the repository's metadata directory.
    """
    with open_repository(path) as handle:
        return handle.metadata_dir


def repo_work_dir(path: Path | str) -> str:
    """Get the working tree root of the repository at ``path`` as text.

    Args:
        path: Working tree root or any path beneath it.

    Returns:
        The working tree root.

    Raises:
        NoWorkDirError: If the working tree root does not exist.
        InvalidPathError: If the root cannot be represented as UTF-8 text.
    """
    with open_repository(path) as handle:
        return path_to_str(handle.work_dir)
