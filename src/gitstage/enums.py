"""Enumeration types for gitstage."""

from enum import StrEnum


class UntrackedFilesConfig(StrEnum):
    """Possible values of the ``status.showUntrackedFiles`` config option.

    Values are the literal config words, so a member can be handed to
    ``dulwich.porcelain.status(untracked_files=...)`` unchanged.
    """

    NO = "no"
    """Do not include any untracked files."""

    NORMAL = "normal"
    """Include untracked files, report untracked directories as a single entry."""

    ALL = "all"
    """Include untracked files and recurse into untracked directories."""

    @property
    def include_untracked(self) -> bool:
        """Whether untracked files are included at all."""
        return self in (UntrackedFilesConfig.NORMAL, UntrackedFilesConfig.ALL)

    @property
    def recurse_untracked_dirs(self) -> bool:
        """Whether untracked directories are walked file by file."""
        return self is UntrackedFilesConfig.ALL


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"
