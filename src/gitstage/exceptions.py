"""gitstage exceptions."""

from pathlib import Path  # noqa: TC003 - Used at runtime in signatures
from typing import Any


class GitStageError(Exception):
    """Base exception for gitstage errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitStageError):
    """Base exception for library configuration errors."""


class ConfigValidationError(ConfigError):
    """Raised when a library setting fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryError(GitStageError):
    """Base exception for repository access errors."""


class NotARepositoryError(RepositoryError):
    """Raised when no git repository is found at or above a path.

    Attributes:
        path: The path the search started from.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The path the search started from.
        """
        super().__init__(message)
        self.path: Path | None = path


class BareRepositoryError(RepositoryError):
    """Raised when the discovered repository has no working tree.

    Attributes:
        path: The control directory of the bare repository.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The control directory of the bare repository.
        """
        super().__init__(message)
        self.path: Path | None = path


class NoWorkDirError(RepositoryError):
    """Raised when the working tree root cannot be resolved.

    Attributes:
        path: The path expected to be the working tree root.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The path expected to be the working tree root.
        """
        super().__init__(message)
        self.path: Path | None = path


class NoHeadError(RepositoryError):
    """Raised when HEAD designates a branch that has no commits yet.

    Attributes:
        path: The working tree root of the repository.
        ref: The unborn reference HEAD points to, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        ref: str | None = None,
    ) -> None:
        """Initialize with error message and reference context.

        Args:
            message: Human-readable error message.
            path: The working tree root of the repository.
            ref: The unborn reference HEAD points to, if known.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.ref: str | None = ref


class InvalidUtf8Error(RepositoryError, ValueError):
    """Raised when a reference name, path or file content is not valid UTF-8.

    Attributes:
        value: The raw bytes that failed to decode.
    """

    def __init__(self, message: str, *, value: bytes | None = None) -> None:
        """Initialize with error message and the offending bytes.

        Args:
            message: Human-readable error message.
            value: The raw bytes that failed to decode.
        """
        super().__init__(message)
        self.value: bytes | None = value


class InvalidPathError(RepositoryError, ValueError):
    """Raised when a path cannot be expressed as a repository tree path.

    Attributes:
        path: The rejected path.
    """

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The rejected path.
        """
        super().__init__(message)
        self.path: Path | str | None = path


class StoreError(RepositoryError):
    """Raised when the underlying object store or index fails.

    Wraps I/O errors, index lock contention and malformed store files.

    Attributes:
        path: The repository working tree root, if known.
        cause: The lower-level exception, also available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and store context.

        Args:
            message: Human-readable error message.
            path: The repository working tree root, if known.
            cause: The lower-level exception.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.cause: BaseException | None = cause


class NestedRepositoryError(StoreError):
    """Raised when a staging pattern reaches into a nested repository.

    Attributes:
        nested_path: Repository-relative path of the nested repository root.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        nested_path: str,
    ) -> None:
        """Initialize with error message and boundary context.

        Args:
            message: Human-readable error message.
            path: The repository working tree root.
            nested_path: Repository-relative path of the nested repository root.
        """
        super().__init__(message, path=path)
        self.nested_path: str = nested_path
