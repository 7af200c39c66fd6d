"""gitstage repository access.

This package provides a synchronous, path-addressed API over a git
repository: opening handles, reading configuration, resolving HEAD and
mutating the staging area (index).

Every operation opens its own RepositoryHandle; nothing is cached between
calls. Bare repositories are rejected when the handle is opened.

Handle:
    RepositoryHandle: Context manager owning one opened non-bare repository.
    open_repository: Open the repository at or above a path.
    is_repo, is_bare_repo, repo_dir, repo_work_dir: Path-addressed queries.

Configuration:
    get_config_string, get_config_string_repo: String lookup (None if unset).
    untracked_files_config: status.showUntrackedFiles policy (defaults to ALL).

HEAD:
    get_head, get_head_repo, get_head_refname, get_head_tuple.

Staging:
    stage_add_file, stage_add_all, stage_add_removed.

Files:
    repo_write_file, repo_read_file.

Models:
    CommitId: Commit identifier.
    Head: Reference name and commit id.

Example:
    >>> from gitstage.repository import open_repository, repo_write_file
    >>> from gitstage.repository import stage_add_all, get_head_tuple
    >>> with open_repository("/path/to/project") as handle:
    ...     repo_write_file(handle, "docs/notes.md", "# Notes\\n")
    >>> stage_add_all("/path/to/project", "docs")
    >>> head = get_head_tuple("/path/to/project")
"""

from gitstage.repository._config import (
    SHOW_UNTRACKED_FILES_KEY,
    get_config_string,
    get_config_string_repo,
    untracked_files_config,
    untracked_files_config_by_path,
)
from gitstage.repository._files import repo_read_file, repo_write_file
from gitstage.repository._handle import (
    RepositoryHandle,
    is_bare_repo,
    is_repo,
    open_repository,
    repo_dir,
    repo_work_dir,
)
from gitstage.repository._head import (
    get_head,
    get_head_refname,
    get_head_repo,
    get_head_tuple,
)
from gitstage.repository._models import CommitId, Head
from gitstage.repository._staging import (
    stage_add_all,
    stage_add_file,
    stage_add_removed,
)

__all__ = [
    "SHOW_UNTRACKED_FILES_KEY",
    "CommitId",
    "Head",
    "RepositoryHandle",
    "get_config_string",
    "get_config_string_repo",
    "get_head",
    "get_head_refname",
    "get_head_repo",
    "get_head_tuple",
    "is_bare_repo",
    "is_repo",
    "open_repository",
    "repo_dir",
    "repo_read_file",
    "repo_work_dir",
    "repo_write_file",
    "stage_add_all",
    "stage_add_file",
    "stage_add_removed",
    "untracked_files_config",
    "untracked_files_config_by_path",
]
