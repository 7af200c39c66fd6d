"""Repository configuration lookup.

Values are read from the repository's layered configuration (repository,
then user, then system) as assembled by dulwich's config stack.
"""

import os
from pathlib import Path
from typing import Final

from dulwich.config import StackedConfig  # noqa: TC002 - Used at runtime in signatures
from dulwich.errors import FileFormatException

from gitstage.enums import UntrackedFilesConfig
from gitstage.repository._handle import RepositoryHandle, open_repository
from gitstage.utils._git import decode_bytes, split_config_key
from gitstage.utils._logging import get_logger

SHOW_UNTRACKED_FILES_KEY: Final = "status.showUntrackedFiles"

# Lookup failures folded into "not set"
_LOOKUP_ERRORS: Final = (KeyError, ValueError, OSError, FileFormatException)


# =============================================================================
# Value-less Entries
# =============================================================================


def _strip_comment(line: bytes) -> bytes:
    for marker in (b"#", b";"):
        line = line.partition(marker)[0]
    return line


def _parse_section_header(header: bytes) -> tuple[bytes, ...]:
    """Parse ``section``, ``section "sub"`` or ``section.sub`` into a section tuple.

    Section names compare case-insensitively and are lowered; subsections
    are kept as written.
    """
    name, _, quoted = header.strip().partition(b" ")
    if quoted:
        subsection = quoted.strip().strip(b'"')
        subsection = subsection.replace(b'\\"', b'"').replace(b"\\\\", b"\\")
        return name.lower(), subsection
    name, dot, legacy = name.partition(b".")
    if dot:
        return name.lower(), legacy
    return (name.lower(),)


def _declared_without_value(
    path: Path, section: tuple[bytes, ...], name: bytes
) -> bool:
    """Check whether the last entry for a key in a config file has no ``=``.

    Args:
        path: Config file to scan.
        section: Section tuple as produced by split_config_key.
        name: Variable name.

    Returns:
        True if the last matching entry is a bare ``name`` line.
    """
    target = (section[0].lower(), *section[1:])
    wanted = name.lower()
    current: tuple[bytes, ...] | None = None
    without_value = False
    continued = False

    with path.open("rb") as f:
        for raw in f:
            line = raw.strip()
            if continued:
                continued = line.endswith(b"\\")
                continue
            if line.startswith(b"["):
                header, _, line = line[1:].partition(b"]")
                current = _parse_section_header(header)

            setting, sep, value = _strip_comment(line).strip().partition(b"=")
            continued = bool(sep) and value.rstrip().endswith(b"\\")
            setting = setting.strip()
            if current == target and setting and setting.lower() == wanted:
                without_value = not sep

    return without_value


def _is_value_less(
    stack: StackedConfig, section: tuple[bytes, ...], name: bytes
) -> bool:
    """Check whether the layer supplying a key declares it without a value.

    Layers are searched in stack order, so the first layer holding the key
    is the one whose value the stack returned.
    """
    for backend in stack.backends:
        try:
            _ = backend.get(section, name)
        except KeyError:
            continue
        path = getattr(backend, "path", None)
        if path is None:
            return False
        return _declared_without_value(Path(os.fsdecode(path)), section, name)
    return False


# =============================================================================
# Lookup
# =============================================================================


def get_config_string(repo_path: Path | str, key: str) -> str | None:
    """Get a string value from the configuration of the repository at a path.

    Args:
        repo_path: Working tree root or any path beneath it.
        key: Dotted config key (e.g., "user.name").

    Returns:
        The configured value, or None if the key is not set, has no value,
        or cannot be read.

    Raises:
        NotARepositoryError: If no repository is found.
        BareRepositoryError: If the repository has no working tree.
    """
    with open_repository(repo_path) as handle:
        return get_config_string_repo(handle, key)


def get_config_string_repo(handle: RepositoryHandle, key: str) -> str | None:
    """Get a string value from a repository's configuration.

    A key that is absent, a key declared without a value (a bare ``flag``
    line), a key with an empty value and a lookup that fails (malformed
    config file, unreadable file, malformed key) all give None; callers fall
    back the same way in every case.

    Args:
        handle: Open repository handle.
        key: Dotted config key (e.g., "status.showUntrackedFiles").

    Returns:
        The configured value, or None.

    Example:
        >>> with open_repository(".") as handle:
        ...     name = get_config_string_repo(handle, "user.name")
    """
    try:
        section, name = split_config_key(key)
        stack = handle.repo.get_config_stack()
        value = stack.get(section, name)
        if value == b"true" and _is_value_less(stack, section, name):
            return None
        text = decode_bytes(value)
    except KeyError:
        return None
    except _LOOKUP_ERRORS as e:
        get_logger("config").warning("config_lookup_failed", key=key, error=str(e))
        return None

    if not text:
        return None
    return text


def untracked_files_config(handle: RepositoryHandle) -> UntrackedFilesConfig:
    """Get the ``status.showUntrackedFiles`` policy for a repository.

    Only the exact values "no" and "normal" select a restricted policy.
    Anything else (unset, unreadable, "all" or an unknown word) yields ALL.

    Args:
        handle: Open repository handle.

    Returns:
        The untracked files policy.
    """
    value = get_config_string_repo(handle, SHOW_UNTRACKED_FILES_KEY)

    if value == UntrackedFilesConfig.NO.value:
        return UntrackedFilesConfig.NO
    if value == UntrackedFilesConfig.NORMAL.value:
        return UntrackedFilesConfig.NORMAL
    return UntrackedFilesConfig.ALL


def untracked_files_config_by_path(repo_path: Path | str) -> UntrackedFilesConfig:
    """Get the ``status.showUntrackedFiles`` policy of the repository at a path.

    Args:
        repo_path: Working tree root or any path beneath it.

    Returns:
        The untracked files policy.

    Raises:
        NotARepositoryError: If no repository is found.
        BareRepositoryError: If the repository has no working tree.
    """
    with open_repository(repo_path) as handle:
        return untracked_files_config(handle)
