"""
WKT utilities for geometry processing and coordinate conversion

Coordinates are located lexically: every "number number" pair in the text is
treated as an (x, y) coordinate. No WKT grammar is parsed; keywords,
parentheses and commas pass through untouched. This holds for the 2D
POLYGON/MULTIPOLYGON/POINT/LINESTRING geometries (no Z/M, no SRID prefix)
the upstream APIs return.
"""
import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, Tuple

from .exceptions import EmptyGeometryError, EmptyInputError
from .services.crs_service import Sweref99Point, to_wgs84

logger = logging.getLogger(__name__)

# The single definition of a coordinate pair: (x) whitespace (y)
COORDINATE_PAIR_PATTERN = re.compile(r"(-?\d+\.?\d*)\s+(-?\d+\.?\d*)")


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in whatever coordinate space its source used"""
    min_x: float
    max_x: float
    min_y: float
    max_y: float


def iter_coordinate_pairs(wkt: str) -> Iterator[Tuple[float, float]]:
    """Yield every (x, y) pair found in a WKT string, in text order"""
    for match in COORDINATE_PAIR_PATTERN.finditer(wkt):
        yield float(match.group(1)), float(match.group(2))


def _reproject_match(match: "re.Match[str]") -> str:
    wgs84 = to_wgs84(Sweref99Point(east=float(match.group(1)), north=float(match.group(2))))
    # WKT "x y" is "longitude latitude"; 6 decimals is about 11 cm
    return f"{wgs84.longitude:.6f} {wgs84.latitude:.6f}"


def reproject_wkt(source: str) -> str:
    """Convert WKT geometry from SWEREF99 TM to WGS84.

    Every coordinate pair is replaced in place; all other text is kept as is.
    A string without coordinate pairs is returned unchanged.
    """
    return COORDINATE_PAIR_PATTERN.sub(_reproject_match, source)


def extract_bounding_box(wkt: str) -> BoundingBox:
    """Compute the bounding box of every coordinate pair in a WKT string.

    Raises:
        EmptyGeometryError: If the string contains no coordinate pairs
    """
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    match_count = 0

    for x, y in iter_coordinate_pairs(wkt):
        min_x = min(min_x, x)
        max_x = max(max_x, x)
        min_y = min(min_y, y)
        max_y = max(max_y, y)
        match_count += 1

    if match_count == 0:
        raise EmptyGeometryError(wkt)

    return BoundingBox(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def combine_bounding_boxes(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """Combine bounding boxes into the one box enclosing all of them.

    Raises:
        EmptyInputError: If no boxes are given
    """
    boxes = list(boxes)
    if not boxes:
        raise EmptyInputError()

    return BoundingBox(
        min_x=min(box.min_x for box in boxes),
        max_x=max(box.max_x for box in boxes),
        min_y=min(box.min_y for box in boxes),
        max_y=max(box.max_y for box in boxes),
    )


def _format_number(value: float) -> str:
    value = float(value)
    # Upstream prints integral values without a decimal part
    if value.is_integer():
        return str(int(value))
    # Fixed notation only; "1e-05 5" would not read back as one pair
    return format(Decimal(repr(value)), "f")


def bounding_box_to_wkt(box: BoundingBox) -> str:
    """Serialize a bounding box as a closed rectangular WKT polygon.

    Vertex order and spacing match the upstream extentAsWkt output:
    POLYGON (( x1 y1, x2 y1, x2 y2, x1 y2, x1 y1))
    """
    min_x, max_x = _format_number(box.min_x), _format_number(box.max_x)
    min_y, max_y = _format_number(box.min_y), _format_number(box.max_y)
    return (
        f"POLYGON (( {min_x} {min_y}, {max_x} {min_y}, "
        f"{max_x} {max_y}, {min_x} {max_y}, {min_x} {min_y}))"
    )
