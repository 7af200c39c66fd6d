"""gitstage: repository handles, configuration lookup and staging for git."""

from importlib.metadata import PackageNotFoundError, version

from gitstage.enums import UntrackedFilesConfig
from gitstage.exceptions import (
    BareRepositoryError,
    GitStageError,
    InvalidPathError,
    InvalidUtf8Error,
    NestedRepositoryError,
    NoHeadError,
    NotARepositoryError,
    NoWorkDirError,
    StoreError,
)

try:
    __version__ = version("gitstage")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "BareRepositoryError",
    "GitStageError",
    "InvalidPathError",
    "InvalidUtf8Error",
    "NestedRepositoryError",
    "NoHeadError",
    "NoWorkDirError",
    "NotARepositoryError",
    "StoreError",
    "UntrackedFilesConfig",
    "__version__",
]
