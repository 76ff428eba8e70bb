"""Abstract base class for repository access.

The tagging pipeline only needs a handful of repository capabilities.
Implementations may shell out to the git binary or bind in-process; the
services never depend on which.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional


@dataclass
class GitCommit:
    """A git commit with metadata."""
    hash: str
    date: Optional[datetime] = None
    author: str = ""
    email: str = ""
    message: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    def display(self) -> str:
        """One-line label used by the commit picker."""
        return f"{self.short_hash} {self.message}".rstrip()

    def to_dict(self) -> dict:
        return {
            'hash': self.hash,
            'date': self.date.isoformat() if self.date else None,
            'author': self.author,
            'email': self.email,
            'message': self.message,
        }


class RepositoryGateway(ABC):
    """Abstract interface for the repository operations vertag uses.

    Query methods raise RepositoryAccessError when the repository cannot be
    read. create_tag is the only mutation.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def list_tags(self) -> List[str]:
        """Return every tag name in the repository."""
        ...

    @abstractmethod
    def head(self) -> str:
        """Return the full commit id HEAD points to."""
        ...

    @abstractmethod
    def commit_history(self) -> Iterator[str]:
        """Yield commit ids reachable from HEAD, newest first.

        The iterator is lazy; consumers may stop early.
        """
        ...

    @abstractmethod
    def recent_commits(self, limit: int) -> List[GitCommit]:
        """Return up to ``limit`` commits from HEAD with their subjects."""
        ...

    @abstractmethod
    def commit_exists(self, commit_id: str) -> bool:
        """Check whether ``commit_id`` names an existing commit object."""
        ...

    @abstractmethod
    def tag_exists(self, tag_name: str) -> bool:
        """Check whether a tag with this name exists."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def create_tag(self, tag_name: str, commit_id: str) -> None:
        """Create a lightweight tag ``tag_name`` pointing at ``commit_id``.

        Raises:
            DuplicateTagError: If the tag already exists
            RepositoryAccessError: If the tag could not be written
        """
        ...
