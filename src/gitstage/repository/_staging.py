# ruff: noqa: TC002, TC003  # Path and Repo needed at runtime for signatures
"""Staging area (index) mutations.

Every public function here opens its own repository handle and its own view
of the index, applies one mutation and writes the index back before
returning. Nothing is cached between calls and no in-process lock is taken;
concurrent writers are arbitrated by the index lock file, and losing that
race surfaces as StoreError.
"""

import errno
import os
import posixpath
import stat
from pathlib import Path
from typing import Final

from dulwich.ignore import IgnoreFilterManager
from dulwich.index import Index, blob_from_path_and_stat, index_entry_from_stat
from dulwich.objects import S_ISGITLINK
from dulwich.repo import Repo
from pathspec import PathSpec

from gitstage.exceptions import NestedRepositoryError
from gitstage.repository._handle import (
    RepositoryHandle,
    open_repository,
    translate_store_errors,
)
from gitstage.utils._git import (
    GIT_DIR_NAME,
    decode_bytes,
    is_nested_repo_root,
    path_to_str,
    to_tree_path,
)
from gitstage.utils._logging import get_logger

# Patterns selecting the whole working tree
_MATCH_ALL_PATTERNS: Final = frozenset({"", ".", "/", "*", "**"})

# Git's "top" pathspec magic
_ROOT_MAGIC: Final = ":/"


# =============================================================================
# Pattern Matching
# =============================================================================


def _compile_pattern(pattern: str) -> PathSpec | None:
    """Compile a staging pattern into a root-anchored PathSpec.

    Patterns are always matched from the working tree root, so ``f.txt``
    selects the top-level file only and ``docs`` selects the top-level
    directory and everything beneath it. Wildcards do not cross ``/``;
    ``**`` does.

    Args:
        pattern: Glob pattern or path prefix.

    Returns:
        The compiled PathSpec, or None when the pattern selects everything.
    """
    normalized = pattern.strip()
    if normalized.startswith(_ROOT_MAGIC):
        normalized = normalized[len(_ROOT_MAGIC) :]
    while normalized.startswith("./"):
        normalized = normalized[2:]
    if normalized in _MATCH_ALL_PATTERNS:
        return None
    if not normalized.startswith("/"):
        normalized = "/" + normalized
    return PathSpec.from_lines("gitignore", [normalized])


def _matches(spec: PathSpec | None, rel_path: str) -> bool:
    """Check whether a repository-relative file path is selected."""
    return spec is None or spec.match_file(rel_path)


def _matches_dir(spec: PathSpec | None, rel_dir: str) -> bool:
    """Check whether a repository-relative directory is selected."""
    return _matches(spec, rel_dir) or _matches(spec, rel_dir + "/")


# =============================================================================
# Index Helpers
# =============================================================================


def _is_stageable(full_path: bytes) -> bool:
    """Check whether a path exists as a regular file or symlink."""
    try:
        st = os.lstat(full_path)
    except FileNotFoundError:
        return False
    return stat.S_ISREG(st.st_mode) or stat.S_ISLNK(st.st_mode)


def _is_gitlink(index: Index, tree_path: bytes) -> bool:
    """Check whether an index entry records a submodule commit."""
    if tree_path not in index:
        return False
    mode: int | None = getattr(index[tree_path], "mode", None)
    return mode is not None and S_ISGITLINK(mode)


def _add_to_index(repo: Repo, index: Index, root: Path, tree_path: bytes) -> None:
    """Hash a working tree file into the object store and record it in the index.

    Raises:
        FileNotFoundError: If the file does not exist.
        IsADirectoryError: If the path is a directory.
    """
    full_path = os.path.join(os.fsencode(root), tree_path)
    st = os.lstat(full_path)
    if stat.S_ISDIR(st.st_mode):
        raise IsADirectoryError(
            errno.EISDIR, os.strerror(errno.EISDIR), os.fsdecode(full_path)
        )

    blob = blob_from_path_and_stat(full_path, st)
    repo.object_store.add_object(blob)
    index[tree_path] = index_entry_from_stat(st, blob.id)


def _tracked_matches(index: Index, spec: PathSpec | None) -> list[bytes]:
    """Collect tracked (non-submodule) index paths selected by the pattern."""
    matched: list[bytes] = []
    for tree_path in list(index):
        if _is_gitlink(index, tree_path):
            continue
        if _matches(spec, decode_bytes(tree_path)):
            matched.append(tree_path)
    return matched


def _untracked_matches(
    handle: RepositoryHandle,
    index: Index,
    spec: PathSpec | None,
) -> list[bytes]:
    """Walk the working tree for untracked, non-ignored files selected by the pattern.

    Raises:
        NestedRepositoryError: If the pattern selects the root of a nested
            repository that is not a registered submodule.
        InvalidPathError: If a selected file name is not valid UTF-8.
    """
    root = handle.work_dir
    root_str = str(root)
    ignore_manager = IgnoreFilterManager.from_repo(handle.repo)
    found: list[bytes] = []

    for dirpath, dirnames, filenames in os.walk(root_str):
        rel_dir = os.path.relpath(dirpath, root_str)
        rel_dir = "" if rel_dir == os.curdir else rel_dir.replace(os.sep, "/")

        candidates = [name for name in filenames if name != GIT_DIR_NAME]
        kept: list[str] = []
        for name in sorted(dirnames):
            if name == GIT_DIR_NAME:
                continue
            rel_path = posixpath.join(rel_dir, name)
            full_path = os.path.join(dirpath, name)
            if os.path.islink(full_path):
                # Symlinked directories are staged as symlinks, not walked
                candidates.append(name)
                continue
            if ignore_manager.is_ignored(rel_path + "/") is True:
                continue
            if is_nested_repo_root(full_path):
                if _is_gitlink(index, rel_path.encode("utf-8", "surrogateescape")):
                    continue
                if _matches_dir(spec, rel_path):
                    msg = (
                        f"Cannot stage {rel_path}: it is the root of a nested "
                        "repository"
                    )
                    raise NestedRepositoryError(msg, path=root, nested_path=rel_path)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(candidates):
            rel_path = posixpath.join(rel_dir, name)
            if not _matches(spec, rel_path):
                continue
            tree_path = path_to_str(rel_path).encode("utf-8")
            if tree_path in index:
                continue
            if ignore_manager.is_ignored(rel_path) is True:
                continue
            found.append(tree_path)

    return found


# =============================================================================
# Public Staging Operations
# =============================================================================


def stage_add_file(repo_path: Path | str, path: Path | str) -> None:
    """Stage the working tree content of a single file.

    Does not stage removals; a missing file is an error (see
    stage_add_removed()).

    Args:
        repo_path: Working tree root or any path beneath it.
        path: File path, relative to the working tree root.

    Raises:
        InvalidPathError: If path is not a valid working tree path.
        StoreError: If the file is missing, is a directory, or the index
            cannot be read or written.

    Example:
        >>> repo_write_file(handle, "notes.txt", "hello")
        >>> stage_add_file("/path/to/project", "notes.txt")
    """
    with open_repository(repo_path) as handle:
        root = handle.work_dir
        tree_path = to_tree_path(root, path)
        with translate_store_errors(f"Staging {path}", path=root):
            index = handle.repo.open_index()
            _add_to_index(handle.repo, index, root, tree_path)
            index.write()

    get_logger("staging").debug("stage_add_file", path=decode_bytes(tree_path))


def stage_add_all(
    repo_path: Path | str,
    pattern: str,
    *,
    update_tracked_only: bool = False,
) -> None:
    """Stage every file selected by a glob pattern.

    The pattern is anchored at the working tree root, and a matched
    directory selects everything beneath it. Tracked files that were deleted
    from the working tree are removed from the index. Ignored untracked
    files are skipped.

    The match set is collected and validated before the index changes, so
    the call either stages everything it selected or nothing.

    Args:
        repo_path: Working tree root or any path beneath it.
        pattern: Glob pattern matched against repository-relative paths.
        update_tracked_only: Only refresh files that are already tracked,
            never adding untracked files (like ``git add --update``).

    Raises:
        NestedRepositoryError: If the pattern selects the root of a nested
            repository.
        StoreError: If the index or object store cannot be read or written.
    """
    with open_repository(repo_path) as handle:
        root = handle.work_dir
        spec = _compile_pattern(pattern)
        with translate_store_errors(f"Staging {pattern!r}", path=root):
            index = handle.repo.open_index()
            root_bytes = os.fsencode(root)

            to_add: list[bytes] = []
            to_remove: list[bytes] = []
            for tree_path in _tracked_matches(index, spec):
                if _is_stageable(os.path.join(root_bytes, tree_path)):
                    to_add.append(tree_path)
                else:
                    to_remove.append(tree_path)

            if not update_tracked_only:
                to_add.extend(_untracked_matches(handle, index, spec))

            for tree_path in to_add:
                _add_to_index(handle.repo, index, root, tree_path)
            for tree_path in to_remove:
                del index[tree_path]
            index.write()

    get_logger("staging").debug(
        "stage_add_all",
        pattern=pattern,
        update_tracked_only=update_tracked_only,
        added=len(to_add),
        removed=len(to_remove),
    )


def stage_add_removed(repo_path: Path | str, path: Path | str) -> None:
    """Stage the removal of a file deleted from the working tree.

    Only the index changes; the working tree is never touched. Removing a
    path that is not in the index is a no-op.

    Args:
        repo_path: Working tree root or any path beneath it.
        path: File path, relative to the working tree root.

    Raises:
        InvalidPathError: If path is not a valid working tree path.
        StoreError: If the index cannot be read or written.
    """
    with open_repository(repo_path) as handle:
        root = handle.work_dir
        tree_path = to_tree_path(root, path)
        with translate_store_errors(f"Staging removal of {path}", path=root):
            index = handle.repo.open_index()
            removed = tree_path in index
            if removed:
                del index[tree_path]
            index.write()

    get_logger("staging").debug(
        "stage_add_removed", path=decode_bytes(tree_path), removed=removed
    )
