"""
Tests for the upstream-then-client-side extent strategy
"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from nature_areas.exceptions import (
    EmptyGeometryError,
    UpstreamNotFoundError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from nature_areas.services.extent_service import (
    compute_extent_client_side,
    get_areas_extent,
    is_valid_extent_response,
)
from nature_areas.wkt_utils import (
    bounding_box_to_wkt,
    combine_bounding_boxes,
    extract_bounding_box,
    iter_coordinate_pairs,
    reproject_wkt,
)

from tests.conftest import STOCKHOLM_SWEREF_WKT

# Enable async test support
pytest_plugins = ('pytest_asyncio',)

SECOND_AREA_SWEREF_WKT = (
    "POLYGON ((676000 6582000, 677000 6582000, 677000 6583000, 676000 6583000, 676000 6582000))"
)

AREA_GEOMETRIES = {
    "A": "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0))",
    "B": "POLYGON ((5 5, 20 5, 20 20, 5 20, 5 5))",
}


async def fetch_area_wkt(area_id):
    return AREA_GEOMETRIES[area_id]


def test_valid_extent_response():
    assert is_valid_extent_response("POLYGON (( 0 0, 1 0, 1 1, 0 1, 0 0))")
    assert not is_valid_extent_response("ORA-28579: network error")
    assert not is_valid_extent_response("")
    assert not is_valid_extent_response(None)
    assert not is_valid_extent_response({"error": "POLYGON"})
    assert not is_valid_extent_response(" POLYGON ((0 0))")


@pytest.mark.asyncio
class TestComputeExtentClientSide:

    async def test_union_of_area_boxes(self):
        result = await compute_extent_client_side(["A", "B"], fetch_area_wkt)
        assert result == "POLYGON (( 0 0, 20 0, 20 20, 0 20, 0 0))"

    async def test_per_area_failure_propagates(self):
        async def failing(area_id):
            if area_id == "B":
                raise UpstreamTransportError("nvr", "HTTP error", upstream_status=503)
            return AREA_GEOMETRIES[area_id]

        with pytest.raises(UpstreamTransportError):
            await compute_extent_client_side(["A", "B"], failing)

    async def test_geometry_without_coordinates_propagates(self):
        async def empty(area_id):
            return "GEOMETRYCOLLECTION EMPTY"

        with pytest.raises(EmptyGeometryError):
            await compute_extent_client_side(["A"], empty)

    async def test_at_most_two_fetches_in_flight(self):
        in_flight = 0
        peak = 0

        async def slow_fetch(area_id):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return "POINT (1 1)"

        await compute_extent_client_side([str(i) for i in range(8)], slow_fetch)

        assert peak == 2


@pytest.mark.asyncio
class TestGetAreasExtent:

    async def test_valid_upstream_answer_is_reprojected(self):
        fetch_bulk = AsyncMock(return_value=STOCKHOLM_SWEREF_WKT)
        fetch_area = AsyncMock()

        result = await get_areas_extent(["A"], fetch_bulk, fetch_area)

        fetch_bulk.assert_awaited_once_with(["A"])
        fetch_area.assert_not_awaited()
        assert result.startswith("POLYGON ((")
        lon, lat = next(iter_coordinate_pairs(result))
        assert lon == pytest.approx(18.0592, abs=1e-3)
        assert lat == pytest.approx(59.33, abs=0.01)

    @pytest.mark.parametrize("error", [
        UpstreamTransportError("nvr", "HTTP error", upstream_status=500),
        UpstreamTimeoutError("nvr", 30.0),
        UpstreamNotFoundError("nvr", "/omrade/extentAsWkt"),
    ])
    async def test_upstream_error_falls_back(self, error):
        fetch_bulk = AsyncMock(side_effect=error)

        result = await get_areas_extent(["A", "B"], fetch_bulk, fetch_area_wkt)

        assert result == "POLYGON (( 0 0, 20 0, 20 20, 0 20, 0 0))"

    @pytest.mark.parametrize("answer", ["ORA-28579: network error", "", None, {"message": "error"}])
    async def test_invalid_answer_falls_back(self, answer):
        fetch_bulk = AsyncMock(return_value=answer)

        result = await get_areas_extent(["A", "B"], fetch_bulk, fetch_area_wkt)

        assert result == "POLYGON (( 0 0, 20 0, 20 20, 0 20, 0 0))"

    async def test_fallback_matches_a_working_upstream(self):
        geometries = {"A": STOCKHOLM_SWEREF_WKT, "B": SECOND_AREA_SWEREF_WKT}
        sweref_extent = bounding_box_to_wkt(combine_bounding_boxes(
            extract_bounding_box(wkt) for wkt in geometries.values()
        ))

        async def fetch_reprojected(area_id):
            return reproject_wkt(geometries[area_id])

        working = AsyncMock(return_value=sweref_extent)
        broken = AsyncMock(side_effect=UpstreamTransportError("nvr", "HTTP error", upstream_status=500))

        via_upstream = extract_bounding_box(await get_areas_extent(["A", "B"], working, fetch_reprojected))
        via_fallback = extract_bounding_box(await get_areas_extent(["A", "B"], broken, fetch_reprojected))

        assert via_fallback.min_x == pytest.approx(via_upstream.min_x, abs=1e-3)
        assert via_fallback.max_x == pytest.approx(via_upstream.max_x, abs=1e-3)
        assert via_fallback.min_y == pytest.approx(via_upstream.min_y, abs=1e-3)
        assert via_fallback.max_y == pytest.approx(via_upstream.max_y, abs=1e-3)

    async def test_upstream_is_tried_on_every_call(self):
        fetch_bulk = AsyncMock(side_effect=UpstreamTransportError("nvr", "HTTP error", upstream_status=500))

        await get_areas_extent(["A", "B"], fetch_bulk, fetch_area_wkt)
        await get_areas_extent(["A", "B"], fetch_bulk, fetch_area_wkt)

        assert fetch_bulk.await_count == 2

    async def test_fallback_failure_propagates(self):
        fetch_bulk = AsyncMock(side_effect=UpstreamTransportError("nvr", "HTTP error", upstream_status=500))
        fetch_area = AsyncMock(side_effect=UpstreamTimeoutError("nvr", 30.0))

        with pytest.raises(UpstreamTimeoutError):
            await get_areas_extent(["A", "B"], fetch_bulk, fetch_area)

    async def test_non_transport_errors_are_not_swallowed(self):
        fetch_bulk = AsyncMock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            await get_areas_extent(["A"], fetch_bulk, fetch_area_wkt)

    async def test_result_box_contains_every_area(self):
        fetch_bulk = AsyncMock(return_value="")

        result = await get_areas_extent(["A", "B"], fetch_bulk, fetch_area_wkt)

        box = extract_bounding_box(result)
        for wkt in AREA_GEOMETRIES.values():
            area_box = extract_bounding_box(wkt)
            assert box.min_x <= area_box.min_x and area_box.max_x <= box.max_x
            assert box.min_y <= area_box.min_y and area_box.max_y <= box.max_y
