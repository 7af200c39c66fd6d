"""HEAD resolution.

This module resolves the reference HEAD designates and the commit it points
to. An unborn branch (no commits yet) is reported as NoHeadError, distinct
from a missing or corrupt HEAD.
"""

from pathlib import Path  # noqa: TC003 - Used at runtime in signatures
from typing import Final

from gitstage.exceptions import NoHeadError, StoreError
from gitstage.repository._handle import (
    RepositoryHandle,
    open_repository,
    translate_store_errors,
)
from gitstage.repository._models import CommitId, Head
from gitstage.utils._git import decode_bytes
from gitstage.utils._logging import get_logger

_HEAD_REF: Final = b"HEAD"


def get_head_repo(handle: RepositoryHandle) -> CommitId:
    """Get the commit HEAD points to.

    Args:
        handle: Open repository handle.

    Returns:
        The HEAD commit id.

    Raises:
        NoHeadError: If HEAD designates a branch with no commits yet.
        StoreError: If HEAD is missing or cannot be read.
    """
    repo = handle.repo
    with translate_store_errors("Resolving HEAD", path=handle.work_dir):
        try:
            sha: bytes = repo.head()
        except KeyError as e:
            target = repo.refs.get_symrefs().get(_HEAD_REF)
            if target is None:
                msg = "HEAD reference is missing"
                raise StoreError(msg, path=handle.work_dir, cause=e) from e
            ref = decode_bytes(target)
            msg = f"HEAD points to {ref}, which has no commits yet"
            raise NoHeadError(msg, path=handle.work_dir, ref=ref) from e

    return CommitId.from_bytes(sha)


def get_head_refname(handle: RepositoryHandle) -> str:
    """Get the full name of the reference HEAD designates.

    Args:
        handle: Open repository handle.

    Returns:
        The reference name (e.g., "refs/heads/main"), or "HEAD" when HEAD is
        detached.

    Raises:
        InvalidUtf8Error: If the reference name is not valid UTF-8.
        StoreError: If the references cannot be read.
    """
    with translate_store_errors("Reading HEAD reference", path=handle.work_dir):
        target = handle.repo.refs.get_symrefs().get(_HEAD_REF)

    if target is None:
        return decode_bytes(_HEAD_REF)
    return decode_bytes(target)


def get_head(repo_path: Path | str) -> CommitId:
    """Get the HEAD commit of the repository at a path.

    Args:
        repo_path: Working tree root or any path beneath it.

    Returns:
        The HEAD commit id.

    Raises:
        NoHeadError: If the repository has no commits yet.
    """
    with open_repository(repo_path) as handle:
        return get_head_repo(handle)


def get_head_tuple(repo_path: Path | str) -> Head:
    """Get the HEAD reference name and commit of the repository at a path.

    Args:
        repo_path: Working tree root or any path beneath it.

    Returns:
        Head with the reference name and the commit id.

    Raises:
        NoHeadError: If the repository has no commits yet.
        InvalidUtf8Error: If the reference name is not valid UTF-8.

    Example:
        >>> head = get_head_tuple("/path/to/project")
        >>> print(f"{head.name} at {head.id.get_short_string()}")
        refs/heads/main at 3f2a9c1
    """
    with open_repository(repo_path) as handle:
        commit_id = get_head_repo(handle)
        name = get_head_refname(handle)

    get_logger("head").debug("get_head_tuple", name=name, id=commit_id.hex)
    return Head(name=name, id=commit_id)
