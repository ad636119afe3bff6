"""Debounced autocomplete for the location search box.

Each input change issues a new token and restarts the debounce timer. When
the timer elapses the search runs in its own task, so a later keystroke
never aborts it; instead the result is dropped on completion if its token
is no longer the latest one. Only results for the current query ever reach
the visible snapshot, regardless of the order in which fetches finish.

The orchestrator has no Django dependency and can drive any async search
function, e.g. `LookupClient.search` or `services.search_locations` bound
to a gateway.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from .engines.types import LocationCandidate

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3
DEFAULT_MIN_QUERY_LENGTH = 2
DEFAULT_MAX_CANDIDATES = 5

SearchFn = Callable[[str], Awaitable[Sequence[LocationCandidate]]]
Listener = Callable[["SearchSnapshot"], None]


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchSnapshot:
    query: str
    state: SearchState
    candidates: tuple[LocationCandidate, ...] = ()
    search_failed: bool = False


class SearchOrchestrator:
    def __init__(
        self,
        search: SearchFn,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
    ) -> None:
        self._search = search
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length
        self.max_candidates = max_candidates
        self._token = 0
        self._timer: asyncio.Task[None] | None = None
        self._fetches: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []
        self._snapshot = SearchSnapshot(query="", state=SearchState.IDLE)

    @property
    def snapshot(self) -> SearchSnapshot:
        return self._snapshot

    @property
    def token(self) -> int:
        return self._token

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def input(self, query: str) -> int:
        """Record a keystroke and restart the debounce timer.

        Must be called from a running event loop. Returns the token issued
        for `query`.
        """

        token = self._supersede()
        self._publish(
            SearchSnapshot(
                query=query,
                state=SearchState.DEBOUNCING,
                candidates=self._snapshot.candidates,
            )
        )
        self._timer = asyncio.get_running_loop().create_task(
            self._debounce(token, query)
        )
        return token

    def select(self, candidate: LocationCandidate) -> str:
        """Accept a suggestion and return the location string to resolve."""

        self._supersede()
        label = candidate.label
        self._publish(SearchSnapshot(query=label, state=SearchState.SETTLED))
        return label

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or fetch is pending."""

        while True:
            pending = [
                task
                for task in (self._timer, *self._fetches)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        self._supersede()
        for task in list(self._fetches):
            task.cancel()
        await self.wait_idle()

    def _supersede(self) -> int:
        self._token += 1
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        return self._token

    async def _debounce(self, token: int, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        if token != self._token:
            return
        if len(query) < self.min_query_length:
            self._publish(
                SearchSnapshot(query=query, state=SearchState.SETTLED)
            )
            return

        self._publish(
            SearchSnapshot(
                query=query,
                state=SearchState.FETCHING,
                candidates=self._snapshot.candidates,
            )
        )
        fetch = asyncio.get_running_loop().create_task(
            self._fetch(token, query)
        )
        self._fetches.add(fetch)
        fetch.add_done_callback(self._fetches.discard)

    async def _fetch(self, token: int, query: str) -> None:
        try:
            results = await self._search(query)
        except Exception as exc:  # noqa: BLE001
            if token != self._token:
                logger.debug("lookup.autocomplete.stale query=%s", query)
                return
            logger.warning(
                "lookup.autocomplete.failed query=%s err=%s", query, exc
            )
            self._publish(
                SearchSnapshot(
                    query=query,
                    state=SearchState.FAILED,
                    search_failed=True,
                )
            )
            return

        if token != self._token:
            logger.debug("lookup.autocomplete.stale query=%s", query)
            return
        candidates = tuple(results)[: self.max_candidates]
        logger.debug(
            "lookup.autocomplete.settled query=%s count=%s",
            query,
            len(candidates),
        )
        self._publish(
            SearchSnapshot(
                query=query,
                state=SearchState.SETTLED,
                candidates=candidates,
            )
        )

    def _publish(self, snapshot: SearchSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
