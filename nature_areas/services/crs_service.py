"""Coordinate Reference System transformation from SWEREF99 TM to WGS84"""
import logging
from dataclasses import dataclass

from pyproj import CRS, Transformer

logger = logging.getLogger(__name__)

CRS_SWEREF99TM = "EPSG:3006"
CRS_WGS84 = "EPSG:4326"

# SWEREF99 TM as published by Lantmäteriet: UTM zone 33 on GRS80 with a
# zero-parameter shift to WGS84.
SWEREF99TM_PROJ4 = "+proj=utm +zone=33 +ellps=GRS80 +towgs84=0,0,0,0,0,0,0 +units=m +no_defs +type=crs"


@dataclass(frozen=True)
class Sweref99Point:
    """Point in SWEREF99 TM, metres"""
    east: float
    north: float


@dataclass(frozen=True)
class Wgs84Point:
    """Point in WGS84, degrees"""
    longitude: float
    latitude: float


# Built once per process; the projection never changes at runtime.
_SWEREF99_TO_WGS84 = Transformer.from_crs(
    CRS.from_proj4(SWEREF99TM_PROJ4), CRS.from_user_input(CRS_WGS84), always_xy=True
)


def to_wgs84(point: Sweref99Point) -> Wgs84Point:
    """Convert a SWEREF99 TM point to WGS84.

    No range validation is performed: out-of-range input gives a
    mathematically defined but geographically meaningless result, and NaN
    propagates as NaN.
    """
    # always_xy: (easting, northing) in, (lon, lat) out
    longitude, latitude = _SWEREF99_TO_WGS84.transform(point.east, point.north)
    return Wgs84Point(longitude=longitude, latitude=latitude)
