from __future__ import annotations

# ruff: noqa: S101
import asyncio
from collections.abc import Sequence

from lookup.engines.types import LocationCandidate
from lookup.errors import ProviderUnavailable
from lookup.orchestrator import SearchOrchestrator, SearchSnapshot, SearchState
from lookup.tests.fakes import LONDON

LONDON_ON = LocationCandidate(
    name="London",
    country="CA",
    state="Ontario",
    latitude=42.98,
    longitude=-81.24,
)
LONGYEARBYEN = LocationCandidate(
    name="Longyearbyen", country="SJ", latitude=78.22, longitude=15.65
)
DEBOUNCE = 0.01
PAST_DEBOUNCE = 0.05


class GatedSearch:
    """Search function whose calls block until released per query."""

    def __init__(
        self, results: dict[str, Sequence[LocationCandidate]]
    ) -> None:
        self.results = results
        self.gates = {query: asyncio.Event() for query in results}
        self.started: list[str] = []

    async def __call__(self, query: str) -> Sequence[LocationCandidate]:
        self.started.append(query)
        await self.gates[query].wait()
        return self.results[query]


def test_rapid_input_fetches_only_latest_query() -> None:
    calls: list[str] = []

    async def search(query: str) -> Sequence[LocationCandidate]:
        calls.append(query)
        return (LONDON, LONDON_ON)

    async def scenario() -> SearchSnapshot:
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        for query in ("Lo", "Lon", "Lond", "London"):
            orchestrator.input(query)
            await asyncio.sleep(0)
        assert orchestrator.snapshot.state is SearchState.DEBOUNCING
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    snapshot = asyncio.run(scenario())

    assert calls == ["London"]
    assert snapshot.query == "London"
    assert snapshot.state is SearchState.SETTLED
    assert snapshot.candidates == (LONDON, LONDON_ON)
    assert snapshot.search_failed is False


def test_short_query_settles_without_searching() -> None:
    calls: list[str] = []

    async def search(query: str) -> Sequence[LocationCandidate]:
        calls.append(query)
        return (LONDON,)

    async def scenario() -> SearchSnapshot:
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        orchestrator.input("L")
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    snapshot = asyncio.run(scenario())

    assert calls == []
    assert snapshot.state is SearchState.SETTLED
    assert snapshot.candidates == ()


def _run_staleness(release_order: tuple[str, ...]) -> SearchSnapshot:
    async def scenario() -> SearchSnapshot:
        search = GatedSearch(
            {"Lon": (LONGYEARBYEN,), "London": (LONDON, LONDON_ON)}
        )
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)

        orchestrator.input("Lon")
        await asyncio.sleep(PAST_DEBOUNCE)
        assert search.started == ["Lon"]
        assert orchestrator.snapshot.state is SearchState.FETCHING

        orchestrator.input("London")
        await asyncio.sleep(PAST_DEBOUNCE)
        assert search.started == ["Lon", "London"]

        for query in release_order:
            search.gates[query].set()
            await asyncio.sleep(0)
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    return asyncio.run(scenario())


def test_stale_result_arriving_last_is_discarded() -> None:
    snapshot = _run_staleness(("London", "Lon"))

    assert snapshot.query == "London"
    assert snapshot.candidates == (LONDON, LONDON_ON)


def test_stale_result_arriving_first_is_discarded() -> None:
    snapshot = _run_staleness(("Lon", "London"))

    assert snapshot.query == "London"
    assert snapshot.candidates == (LONDON, LONDON_ON)


def test_search_failure_surfaces_empty_failed_state() -> None:
    async def search(query: str) -> Sequence[LocationCandidate]:
        raise ProviderUnavailable("geocoding", 500)

    async def scenario() -> SearchSnapshot:
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        orchestrator.input("Paris")
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state is SearchState.FAILED
    assert snapshot.search_failed is True
    assert snapshot.candidates == ()


def test_stale_failure_does_not_override_newer_result() -> None:
    async def scenario() -> SearchSnapshot:
        gate = asyncio.Event()

        async def search(query: str) -> Sequence[LocationCandidate]:
            if query == "Lon":
                await gate.wait()
                raise RuntimeError("upstream timeout")
            return (LONDON,)

        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        orchestrator.input("Lon")
        await asyncio.sleep(PAST_DEBOUNCE)
        orchestrator.input("London")
        await asyncio.sleep(PAST_DEBOUNCE)
        gate.set()
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state is SearchState.SETTLED
    assert snapshot.search_failed is False
    assert snapshot.candidates == (LONDON,)


def test_candidates_capped_at_max() -> None:
    many = tuple(
        LocationCandidate(
            name="Springfield", country="US", latitude=float(i), longitude=1.0
        )
        for i in range(8)
    )

    async def search(query: str) -> Sequence[LocationCandidate]:
        return many

    async def scenario() -> SearchSnapshot:
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        orchestrator.input("Springfield")
        await orchestrator.wait_idle()
        return orchestrator.snapshot

    snapshot = asyncio.run(scenario())

    assert len(snapshot.candidates) == 5
    assert snapshot.candidates == many[:5]


def test_select_returns_label_and_drops_in_flight_result() -> None:
    async def scenario() -> tuple[str, SearchSnapshot]:
        search = GatedSearch({"Lond": (LONDON, LONDON_ON)})
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        orchestrator.input("Lond")
        await asyncio.sleep(PAST_DEBOUNCE)

        label = orchestrator.select(LONDON_ON)
        search.gates["Lond"].set()
        await orchestrator.wait_idle()
        return label, orchestrator.snapshot

    label, snapshot = asyncio.run(scenario())

    assert label == "London, Ontario, CA"
    assert snapshot.query == "London, Ontario, CA"
    assert snapshot.state is SearchState.SETTLED
    assert snapshot.candidates == ()


def test_listeners_receive_each_transition() -> None:
    async def search(query: str) -> Sequence[LocationCandidate]:
        return (LONDON,)

    async def scenario() -> list[SearchState]:
        seen: list[SearchState] = []
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        unsubscribe = orchestrator.subscribe(
            lambda snapshot: seen.append(snapshot.state)
        )
        orchestrator.input("London")
        await orchestrator.wait_idle()
        unsubscribe()
        orchestrator.input("Paris")
        await orchestrator.wait_idle()
        return seen

    seen = asyncio.run(scenario())

    assert seen == [
        SearchState.DEBOUNCING,
        SearchState.FETCHING,
        SearchState.SETTLED,
    ]


def test_tokens_increase_monotonically() -> None:
    async def search(query: str) -> Sequence[LocationCandidate]:
        return ()

    async def scenario() -> list[int]:
        orchestrator = SearchOrchestrator(search, debounce_seconds=DEBOUNCE)
        tokens = [orchestrator.input(q) for q in ("Ro", "Rom", "Rome")]
        await orchestrator.close()
        return tokens

    tokens = asyncio.run(scenario())

    assert tokens == sorted(tokens)
    assert len(set(tokens)) == 3
