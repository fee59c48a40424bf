"""Domain models representing core business entities."""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable domain entity representing a GitHub repository.

    Identity is the numeric GitHub id: equality and hashing ignore the
    name and description.
    """
    id: int
    name: str = field(compare=False)
    description: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class PageResult:
    """One page of repositories as returned by a single fetch."""
    page: int
    repositories: Tuple[RepositoryRecord, ...] = ()
    has_more: bool = False

    def __len__(self) -> int:
        return len(self.repositories)


@dataclass(frozen=True)
class SessionState:
    """Snapshot of a search session.

    The pagination controller never mutates a snapshot; every transition
    publishes a new instance, so listeners may keep references freely.
    """
    username: Optional[str] = None
    current_page: int = 1
    repos: Tuple[RepositoryRecord, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    has_more: bool = False

    @property
    def repo_count(self) -> int:
        """Number of repositories accumulated so far."""
        return len(self.repos)

    @property
    def is_initial_load(self) -> bool:
        """True while the first page of a search is loading."""
        return self.is_loading and not self.repos

    @property
    def is_loading_more(self) -> bool:
        """True while a further page loads below already shown results."""
        return self.is_loading and bool(self.repos)
