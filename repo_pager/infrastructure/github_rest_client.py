"""GitHub REST API client fetching one page of a user's repositories."""
import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

import aiohttp

from repo_pager.domain.errors import DecodeError, HttpStatusError, TransportError
from repo_pager.domain.fetcher_interface import DEFAULT_PAGE_SIZE, IRepositoryFetcher
from repo_pager.domain.models import PageResult, RepositoryRecord
from repo_pager.infrastructure.settings import DEFAULT_API_URL, Settings


logger = logging.getLogger(__name__)


def _has_next_page(links: Mapping[str, Any]) -> bool:
    """Return True when a parsed Link header carries a ``next`` relation.

    aiohttp keys each link by its raw ``rel`` value, which may list several
    space separated relation types in any case.
    """
    return any("next" in rel.lower().split() for rel in links)


class GitHubRestClient(IRepositoryFetcher):
    """GitHub REST API client for ``GET /users/{username}/repos``.

    Implements the IRepositoryFetcher port. Every call issues exactly one
    request: no caching and no retry. The client keeps no per-session state,
    so several pagination controllers may share one instance.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        timeout: float = 20.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            base_url: API root, e.g. https://api.github.com
            token: Optional personal access token sent as a bearer token
            timeout: Total timeout per request in seconds
            session: Existing aiohttp session to use; the caller keeps
                ownership and must close it
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "repo-pager",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubRestClient":
        """Create a client configured from Settings."""
        return cls(
            base_url=settings.api_url,
            token=settings.token,
            timeout=settings.request_timeout
        )

    async def _init_session(self) -> aiohttp.ClientSession:
        """Create the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _repos_url(self, username: str) -> str:
        return f"{self._base_url}/users/{quote(username, safe='')}/repos"

    async def fetch_page(
        self,
        username: str,
        page: int,
        page_size: int = DEFAULT_PAGE_SIZE
    ) -> PageResult:
        """Fetch one page of repositories for ``username``.

        Args:
            username: GitHub login; not validated, the API's answer is surfaced
            page: 1-based page number
            page_size: Value sent as ``per_page``

        Returns:
            PageResult whose ``has_more`` reflects a ``rel="next"`` Link entry

        Raises:
            HttpStatusError: When the API answers with a non-2xx status
            TransportError: On connection, DNS, timeout or payload failures
            DecodeError: When the body is not a list of repository objects
        """
        session = await self._init_session()
        params = {"page": str(page), "per_page": str(page_size)}

        try:
            url = self._repos_url(username)
            logger.debug(f"GET {url} page={page} per_page={page_size}")

            async with session.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self._timeout
            ) as response:
                if not 200 <= response.status < 300:
                    error = HttpStatusError(response.status, response.reason or "")
                    logger.warning(f"GitHub API returned {error} for user {username!r} page {page}")
                    raise error

                has_more = _has_next_page(response.links)
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeError(f"Response body is not valid JSON: {e}") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            if isinstance(e, asyncio.TimeoutError):
                message = str(e) or "Request timed out"
            else:
                message = str(e) or e.__class__.__name__
            logger.error(f"Error fetching repositories for {username!r}: {message}")
            raise TransportError(message) from e
        except UnicodeEncodeError as e:
            logger.error(f"Cannot build a request URL for {username!r}: {e}")
            raise TransportError(f"Username cannot be encoded into a URL: {e.reason}") from e

        repositories = self._parse_repositories(payload)

        logger.info(
            f"Fetched {len(repositories)} repositories for {username!r} "
            f"(page {page}, more pages: {has_more})"
        )

        return PageResult(page=page, repositories=repositories, has_more=has_more)

    @staticmethod
    def _parse_repositories(payload: Any) -> Tuple[RepositoryRecord, ...]:
        """Transform the GitHub API response to domain entities.

        A single malformed item rejects the whole page.
        """
        if not isinstance(payload, list):
            raise DecodeError(
                f"Expected a JSON array of repositories, got {type(payload).__name__}"
            )
        return tuple(
            GitHubRestClient._parse_repository(item, index)
            for index, item in enumerate(payload)
        )

    @staticmethod
    def _parse_repository(item: Dict[str, Any], index: int) -> RepositoryRecord:
        if not isinstance(item, dict):
            raise DecodeError(f"Repository #{index} is not a JSON object")

        repo_id = item.get("id")
        name = item.get("name")
        description = item.get("description")

        # bool is a subclass of int
        if not isinstance(repo_id, int) or isinstance(repo_id, bool):
            raise DecodeError(f"Repository #{index} has no integer 'id'")
        if not isinstance(name, str) or not name:
            raise DecodeError(f"Repository #{index} has no 'name'")
        if description is not None and not isinstance(description, str):
            raise DecodeError(f"Repository #{index} has a non-string 'description'")

        return RepositoryRecord(id=repo_id, name=name, description=description)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
