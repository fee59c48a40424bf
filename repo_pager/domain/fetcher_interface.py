"""Repository fetcher interface (port) for paging through a user's repositories.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from repo_pager.domain.models import PageResult


DEFAULT_PAGE_SIZE = 30


class IRepositoryFetcher(ABC):
    """Abstract interface for fetching one page of a user's repositories."""

    @abstractmethod
    async def fetch_page(
        self,
        username: str,
        page: int,
        page_size: int = DEFAULT_PAGE_SIZE
    ) -> PageResult:
        """Fetch a single page of repositories owned by ``username``.

        Args:
            username: GitHub login, passed to the API as given
            page: 1-based page number
            page_size: Number of repositories per page

        Returns:
            PageResult with the page's repositories and the more-pages flag

        Raises:
            FetchError: On transport, decoding or HTTP status failures
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
