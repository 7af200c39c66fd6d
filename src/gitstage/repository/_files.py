"""Working tree file helpers.

Used to materialize content in the working tree before staging it. These
helpers never touch the index.
"""

from pathlib import Path  # noqa: TC003 - Used at runtime in signatures

from gitstage.repository._handle import RepositoryHandle, translate_store_errors
from gitstage.utils._git import decode_bytes, path_to_str, to_tree_path


def _resolve(handle: RepositoryHandle, file: Path | str) -> Path:
    """Map a repository-relative path onto the working tree."""
    root = handle.work_dir
    tree_path = to_tree_path(root, file)
    return root / path_to_str(tree_path)


def repo_write_file(
    handle: RepositoryHandle, file: Path | str, content: str | bytes
) -> None:
    """Create or overwrite a file in the working tree.

    Parent directories must already exist. Text content is written as UTF-8.

    Args:
        handle: Open repository handle.
        file: File path, relative to the working tree root.
        content: New file content.

    Raises:
        InvalidPathError: If file is not a valid working tree path.
        StoreError: If the file cannot be written.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    full_path = _resolve(handle, file)
    with translate_store_errors(f"Writing {file}", path=handle.work_dir):
        _ = full_path.write_bytes(data)


def repo_read_file(handle: RepositoryHandle, file: Path | str) -> str:
    """Read a working tree file as UTF-8 text.

    Args:
        handle: Open repository handle.
        file: File path, relative to the working tree root.

    Returns:
        The file content.

    Raises:
        InvalidPathError: If file is not a valid working tree path.
        InvalidUtf8Error: If the content is not valid UTF-8.
        StoreError: If the file cannot be read.
    """
    full_path = _resolve(handle, file)
    with translate_store_errors(f"Reading {file}", path=handle.work_dir):
        data = full_path.read_bytes()
    return decode_bytes(data)
