"""Repository models.

This module defines data structures for representing repository state.
"""

from dataclasses import dataclass
from typing import Final, Self

_SHORT_ID_LENGTH: Final = 7


@dataclass(frozen=True, slots=True)
class CommitId:
    """Identifier of a commit (snapshot) in the object store.

    Attributes:
        hex: Full 40-character commit SHA hex string.
    """

    hex: str

    @classmethod
    def from_bytes(cls, sha: bytes) -> Self:
        """Create a CommitId from a hex SHA as returned by dulwich.

        Args:
            sha: 40-byte ASCII hex SHA.

        Returns:
            The corresponding CommitId.
        """
        return cls(sha.decode("ascii"))

    def get_short_string(self) -> str:
        """Get the abbreviated form used for display."""
        return self.hex[:_SHORT_ID_LENGTH]

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True, slots=True)
class Head:
    """The reference HEAD designates and the commit it points to.

    Attributes:
        name: Full reference name (e.g., "refs/heads/main"), or "HEAD" when
            detached.
        id: The commit the reference points to.
    """

    name: str
    id: CommitId
