from __future__ import annotations

import asyncio
from typing import Optional

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from airportfinder.core.errors import RoutingCallError
from airportfinder.core.geo import haversine_km
from airportfinder.core.models import AirportRecord, Coordinate, DistanceMode
from airportfinder.core.time import SimTimeSource
from airportfinder.search.ranker import rank, rank_driving, rank_straight_line

ORIGIN = Coordinate(lat=0.0, lon=0.0)


def _airport(code: str, lat: float, lon: float) -> AirportRecord:
    return AirportRecord(
        id=code,
        name=f"{code} Airport",
        type="large_airport",
        iata_code=code,
        coordinate=Coordinate(lat=lat, lon=lon),
    )


def _on_equator(code: str, km: float) -> AirportRecord:
    # 1 degree of longitude on the equator is 111.195 km at R = 6371
    return _airport(code, 0.0, km / 111.19492664455873)


class FakeRouter:
    """Returns a fixed road/straight-line ratio; records call order."""

    def __init__(
        self,
        ratio: float = 1.2,
        *,
        fail: tuple[str, ...] = (),
        no_route: tuple[str, ...] = (),
    ) -> None:
        self.ratio = ratio
        self.fail = set(fail)
        self.no_route = set(no_route)
        self.calls: list[tuple[Coordinate, Coordinate]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[float]:
        self.calls.append((origin, destination))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            key = f"{destination.lat},{destination.lon}"
            if key in self.fail:
                raise RoutingCallError("HTTP 502")
            if key in self.no_route:
                return None
            km = haversine_km(origin.lat, origin.lon, destination.lat, destination.lon)
            return km * self.ratio * 1000.0
        finally:
            self.in_flight -= 1


def _key(ap: AirportRecord) -> str:
    return f"{ap.coordinate.lat},{ap.coordinate.lon}"


def test_straight_line_filters_and_sorts() -> None:
    aps = [_on_equator("CCC", 30), _on_equator("AAA", 10), _on_equator("FAR", 80)]
    out = rank_straight_line(ORIGIN, 50, aps)
    assert [r.iata_code for r in out] == ["AAA", "CCC"]
    assert out[0].distance_km == 10.0
    assert out[1].distance_km == 30.0
    assert out[0].straight_line_km == out[0].distance_km


def test_straight_line_radius_is_inclusive() -> None:
    out = rank_straight_line(ORIGIN, 25, [_on_equator("EDG", 25)])
    assert [r.distance_km for r in out] == [25.0]


def test_straight_line_ties_keep_input_order() -> None:
    aps = [_airport("BBB", 0.0, 0.1), _airport("AAA", 0.0, -0.1)]
    out = rank_straight_line(ORIGIN, 50, aps)
    assert [r.iata_code for r in out] == ["BBB", "AAA"]


@pytest.mark.asyncio
async def test_empty_candidates_in_both_modes() -> None:
    router = FakeRouter()
    assert await rank(ORIGIN, 50, DistanceMode.STRAIGHT_LINE, []) == []
    assert await rank(ORIGIN, 50, DistanceMode.DRIVING, [], router) == []
    assert router.calls == []


@pytest.mark.asyncio
async def test_driving_requires_routing_function() -> None:
    with pytest.raises(ValueError):
        await rank(ORIGIN, 50, DistanceMode.DRIVING, [_on_equator("AAA", 5)])


@pytest.mark.asyncio
async def test_driving_prefilters_with_buffer() -> None:
    inside = _on_equator("INB", 14)  # within 10 * 1.5
    outside = _on_equator("OUT", 16)
    router = FakeRouter(ratio=0.5)
    out = await rank_driving(
        ORIGIN, 10, [outside, inside], router, time_source=SimTimeSource()
    )
    assert [c[1] for c in router.calls] == [inside.coordinate]
    assert [r.iata_code for r in out] == ["INB"]
    assert out[0].distance_km == 7.0
    assert out[0].straight_line_km == 14.0


@pytest.mark.asyncio
async def test_driving_routes_at_most_twenty_closest_in_order() -> None:
    aps = [_on_equator(f"A{i:02d}", float(i)) for i in range(30, 0, -1)]
    router = FakeRouter(ratio=1.0)
    out = await rank_driving(ORIGIN, 100, aps, router, time_source=SimTimeSource())
    routed = [c[1].lon for c in router.calls]
    assert len(routed) == 20
    assert routed == sorted(routed)
    assert [r.iata_code for r in out] == [f"A{i:02d}" for i in range(1, 21)]


@pytest.mark.asyncio
async def test_driving_calls_are_sequential_and_paced() -> None:
    aps = [_on_equator(f"P{i:02d}", float(i)) for i in range(1, 6)]
    router = FakeRouter()
    clock = SimTimeSource()
    await rank_driving(ORIGIN, 100, aps, router, delay_s=0.1, time_source=clock)
    assert router.max_in_flight == 1
    assert clock.sleeps == [0.1] * 4


@pytest.mark.asyncio
async def test_driving_drops_failed_and_unroutable_candidates() -> None:
    a, b, c, d = (_on_equator(code, km) for code, km in
                  (("AAA", 5), ("BBB", 10), ("CCC", 15), ("DDD", 20)))
    router = FakeRouter(ratio=1.0, fail=(_key(b),), no_route=(_key(c),))
    out = await rank_driving(
        ORIGIN, 50, [a, b, c, d], router, time_source=SimTimeSource()
    )
    assert len(router.calls) == 4
    assert [r.iata_code for r in out] == ["AAA", "DDD"]


@pytest.mark.asyncio
async def test_driving_applies_final_radius_and_sorts_by_road_distance() -> None:
    near = _on_equator("NER", 10)
    mid = _on_equator("MID", 20)

    async def router(origin: Coordinate, dest: Coordinate) -> Optional[float]:
        # The nearer airport needs a long detour
        return 45_000.0 if dest == near.coordinate else 25_400.0

    out = await rank_driving(
        ORIGIN, 30, [near, mid], router, time_source=SimTimeSource()
    )
    assert [(r.iata_code, r.distance_km) for r in out] == [("MID", 25.4)]

    out = await rank_driving(
        ORIGIN, 60, [near, mid], router, time_source=SimTimeSource()
    )
    assert [(r.iata_code, r.distance_km) for r in out] == [
        ("MID", 25.4),
        ("NER", 45.0),
    ]


@pytest.mark.asyncio
async def test_rank_forwards_driving_options() -> None:
    aps = [_on_equator(f"O{i}", float(i)) for i in range(1, 4)]
    router = FakeRouter(ratio=1.0)
    clock = SimTimeSource()
    out = await rank(
        ORIGIN,
        100,
        DistanceMode.DRIVING,
        aps,
        router,
        max_routed=2,
        delay_s=0.5,
        time_source=clock,
    )
    assert len(out) == 2
    assert clock.sleeps == [0.5]


points = st.tuples(
    st.floats(min_value=-3.0, max_value=3.0, allow_nan=False),
    st.floats(min_value=-3.0, max_value=3.0, allow_nan=False),
)


@settings(deadline=None, max_examples=60)
@given(pts=st.lists(points, max_size=40), radius=st.integers(min_value=1, max_value=400))
def test_straight_line_invariants(pts: list[tuple[float, float]], radius: int) -> None:
    aps = [_airport(f"X{i:02d}", lat, lon) for i, (lat, lon) in enumerate(pts)]
    out = rank_straight_line(ORIGIN, radius, aps)
    dists = [r.distance_km for r in out]
    assert all(d <= radius for d in dists)
    assert dists == sorted(dists)
    expected = sum(
        1 for lat, lon in pts if haversine_km(0.0, 0.0, lat, lon) <= radius
    )
    assert len(out) == expected


@settings(deadline=None, max_examples=40)
@given(
    pts=st.lists(points, max_size=40),
    radius=st.integers(min_value=1, max_value=400),
    ratio=st.floats(min_value=0.5, max_value=2.5),
)
def test_driving_invariants(
    pts: list[tuple[float, float]], radius: int, ratio: float
) -> None:
    aps = [_airport(f"X{i:02d}", lat, lon) for i, (lat, lon) in enumerate(pts)]
    router = FakeRouter(ratio=ratio)
    out = asyncio.run(
        rank_driving(ORIGIN, radius, aps, router, time_source=SimTimeSource())
    )
    assert len(router.calls) <= 20
    for _, dest in router.calls:
        assert haversine_km(0.0, 0.0, dest.lat, dest.lon) <= radius * 1.5
    dists = [r.distance_km for r in out]
    assert all(d <= radius for d in dists)
    assert dists == sorted(dists)
    assert all(
        r.straight_line_km is not None and r.straight_line_km <= radius * 1.5
        for r in out
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_meters", [float("nan"), float("inf"), -1500.0])
async def test_driving_drops_unusable_route_lengths(bad_meters: float) -> None:
    a, b, c = (_on_equator(code, km) for code, km in
               (("AAA", 5), ("BBB", 10), ("CCC", 15)))

    async def router(origin: Coordinate, dest: Coordinate) -> Optional[float]:
        if dest == b.coordinate:
            return bad_meters
        return 9_000.0

    out = await rank_driving(
        ORIGIN, 50, [a, b, c], router, time_source=SimTimeSource()
    )
    assert [r.iata_code for r in out] == ["AAA", "CCC"]
    assert all(r.distance_km == 9.0 for r in out)
