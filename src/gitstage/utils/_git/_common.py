"""Common git utility functions.

This module provides shared helper functions used by the repository layer
for byte/string conversion, repository-relative path handling and config
key parsing.
"""

import os
from pathlib import Path, PurePosixPath

from gitstage.exceptions import InvalidPathError, InvalidUtf8Error

GIT_DIR_NAME = ".git"


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed, strictly as UTF-8.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.

    Raises:
        InvalidUtf8Error: If value is bytes and not valid UTF-8.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Invalid UTF-8 data: {value!r}"
            raise InvalidUtf8Error(msg, value=value) from e
    return value


def path_to_str(path: Path | str | bytes) -> str:
    """Convert a filesystem path to text.

    Args:
        path: A path as Path, str or bytes (as returned by dulwich).

    Returns:
        The path as a string.

    Raises:
        InvalidPathError: If the path cannot be represented as UTF-8 text.
    """
    if isinstance(path, bytes):
        try:
            return path.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Path is not valid UTF-8: {path!r}"
            raise InvalidPathError(msg, path=os.fsdecode(path)) from e

    text = str(path)
    try:
        _ = text.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"Path is not valid UTF-8: {text!r}"
        raise InvalidPathError(msg, path=text) from e
    return text


def to_tree_path(root: Path, path: Path | str) -> bytes:
    """Convert a working tree path to an index/tree path.

    Relative paths are taken relative to ``root``. Absolute paths must lie
    inside ``root``.

    Args:
        root: The working tree root.
        path: Repository-relative or absolute path.

    Returns:
        The POSIX-style repository-relative path encoded as UTF-8.

    Raises:
        InvalidPathError: If the path is empty, leaves the working tree,
            names a .git component or is not valid UTF-8.
    """
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.relative_to(root)
        except ValueError as e:
            msg = f"Path is outside the working tree {root}: {path}"
            raise InvalidPathError(msg, path=path) from e

    parts: list[str] = []
    for part in candidate.parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                msg = f"Path escapes the working tree: {path}"
                raise InvalidPathError(msg, path=path)
            _ = parts.pop()
            continue
        if part == GIT_DIR_NAME:
            msg = f"Path names a {GIT_DIR_NAME} component: {path}"
            raise InvalidPathError(msg, path=path)
        parts.append(part)

    if not parts:
        msg = f"Path does not name a file in the working tree: {path!s}"
        raise InvalidPathError(msg, path=path)

    return path_to_str(PurePosixPath(*parts).as_posix()).encode("utf-8")


def split_config_key(key: str) -> tuple[tuple[bytes, ...], bytes]:
    """Split a dotted git config key into section and variable name.

    ``status.showUntrackedFiles`` becomes ``((b"status",), b"showUntrackedFiles")``
    and ``remote.origin.url`` becomes ``((b"remote", b"origin"), b"url")``.
    The subsection may itself contain dots.

    Args:
        key: Dotted config key.

    Returns:
        Tuple of (section tuple, variable name) as bytes.

    Raises:
        ValueError: If the key has no section or no variable name.
    """
    section, _, rest = key.partition(".")
    subsection, _, name = rest.rpartition(".")
    if not section or not name:
        msg = f"Invalid config key: {key!r}"
        raise ValueError(msg)

    if subsection:
        return (section.encode(), subsection.encode()), name.encode()
    return (section.encode(),), name.encode()


def is_nested_repo_root(directory: Path | str) -> bool:
    """Check whether a directory is the root of its own git repository.

    Both a ``.git`` directory and a ``.git`` file (gitdir pointer used by
    worktrees and submodules) count.

    Args:
        directory: Directory to inspect.

    Returns:
        True if the directory holds a .git entry.
    """
    return os.path.lexists(os.path.join(directory, GIT_DIR_NAME))
