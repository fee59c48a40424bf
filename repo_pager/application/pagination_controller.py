"""Pagination controller driving a repository search session."""
import asyncio
import logging
from dataclasses import replace
from typing import Callable, List, Optional

from repo_pager.domain.errors import FetchError
from repo_pager.domain.fetcher_interface import DEFAULT_PAGE_SIZE, IRepositoryFetcher
from repo_pager.domain.models import PageResult, SessionState


logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


class PaginationController:
    """Application service owning the state of one search session.

    Exposes two operations to a presentation layer, ``search`` and
    ``load_more``, and publishes an immutable SessionState snapshot to every
    subscribed listener after each transition. Fetch errors never escape:
    they end up in ``SessionState.error``.

    At most one fetch is in flight. A ``search`` issued while a fetch is
    outstanding supersedes it (the old fetch is cancelled and its outcome
    discarded); a ``load_more`` issued while a fetch is outstanding is ignored.
    """

    def __init__(
        self,
        fetcher: IRepositoryFetcher,
        page_size: int = DEFAULT_PAGE_SIZE
    ):
        """Initialize pagination controller.

        Args:
            fetcher: Repository fetcher implementation, may be shared
            page_size: Number of repositories requested per page
        """
        self._fetcher = fetcher
        self._page_size = page_size
        self._state = SessionState()
        self._listeners: List[StateListener] = []
        self._inflight: Optional[asyncio.Future] = None
        # Bumped whenever in-flight work is superseded; stale fetches compare against it
        self._generation = 0

    @property
    def state(self) -> SessionState:
        """Current session snapshot."""
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Returns:
            Callable removing the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener raised")

    async def search(self, username: str) -> SessionState:
        """Start a new session for ``username`` and fetch its first page.

        Discards previously accumulated repositories. The reset snapshot,
        with ``is_loading`` set, is published before the fetch starts.

        Args:
            username: GitHub login, any string is accepted

        Returns:
            Snapshot after the fetch resolved
        """
        if self._inflight is not None:
            logger.info(
                f"Superseding in-flight fetch for {self._state.username!r} "
                f"with search for {username!r}"
            )
            self._inflight.cancel()
            self._inflight = None

        self._generation += 1
        generation = self._generation

        logger.info(f"Searching repositories for {username!r}")
        self._publish(SessionState(username=username, is_loading=True))

        return await self._fetch(generation, username, 1, reset=True)

    async def load_more(self) -> SessionState:
        """Fetch the page at the cursor and append it to the results.

        Callers are expected to invoke this only while ``has_more`` is set;
        otherwise the page at the cursor is fetched again.

        Returns:
            Snapshot after the fetch resolved, or the unchanged snapshot when
            the call was ignored
        """
        state = self._state
        if state.username is None:
            logger.warning("load_more called before any search, ignoring")
            return state
        if self._inflight is not None:
            logger.debug(f"Fetch already in flight for {state.username!r}, ignoring load_more")
            return state

        logger.info(f"Loading page {state.current_page} for {state.username!r}")
        self._publish(replace(state, is_loading=True))

        return await self._fetch(
            self._generation, state.username, state.current_page, reset=False
        )

    def cancel(self) -> None:
        """Abandon the in-flight fetch, if any, and leave the loading state."""
        if self._inflight is None:
            return

        logger.info(f"Cancelling in-flight fetch for {self._state.username!r}")
        self._generation += 1
        self._inflight.cancel()
        self._inflight = None
        self._publish(replace(self._state, is_loading=False))

    async def _fetch(
        self,
        generation: int,
        username: str,
        page: int,
        reset: bool
    ) -> SessionState:
        task = asyncio.ensure_future(
            self._fetcher.fetch_page(username, page, self._page_size)
        )
        self._inflight = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation == self._generation:
                # The caller itself was cancelled
                self._publish(replace(self._state, is_loading=False))
                raise
            if asyncio.current_task().cancelling():
                # Superseded, but the caller was cancelled as well
                raise
            logger.debug(f"Discarded superseded fetch of page {page} for {username!r}")
            return self._state
        except FetchError as e:
            if generation != self._generation:
                return self._state
            logger.error(f"Error fetching page {page} for {username!r}: {e}")
            self._publish(replace(self._state, is_loading=False, error=str(e)))
            return self._state
        except Exception as e:
            logger.error(f"Unexpected error fetching page {page} for {username!r}: {e}")
            if generation == self._generation:
                self._publish(replace(self._state, is_loading=False))
            raise
        finally:
            if self._inflight is task:
                self._inflight = None

        if generation != self._generation:
            logger.debug(f"Discarded stale page {page} for {username!r}")
            return self._state

        self._apply_page(result, page, reset)
        return self._state

    def _apply_page(self, result: PageResult, page: int, reset: bool) -> None:
        state = self._state
        if reset:
            repos = result.repositories
        else:
            repos = state.repos + result.repositories

        self._publish(replace(
            state,
            repos=repos,
            current_page=page + 1 if result.has_more else page,
            has_more=result.has_more,
            is_loading=False,
            error=None
        ))

        logger.info(
            f"Page {page} for {state.username!r} added {len(result)} repositories. "
            f"Total: {len(repos)}, more pages: {result.has_more}"
        )
