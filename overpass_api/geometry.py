"""
Geometry helpers

Bounding extents for elements and coordinate sequences, Overpass bbox
formatting and conversion to shapely geometries through `__geo_interface__`.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Tuple, Union

from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from .exceptions import MissingGeometryError


@dataclass(frozen=True)
class Extent:
    """Axis-aligned bounding extent: x = (west, east), y = (south, north)"""
    x: Tuple[float, float]
    y: Tuple[float, float]

    @classmethod
    def from_bounds(cls, south: float, west: float, north: float, east: float) -> "Extent":
        """Build an extent from Overpass (south, west, north, east) order"""
        return cls(x=(west, east), y=(south, north))

    @property
    def west(self) -> float:
        return self.x[0]

    @property
    def east(self) -> float:
        return self.x[1]

    @property
    def south(self) -> float:
        return self.y[0]

    @property
    def north(self) -> float:
        return self.y[1]

    def as_bounds(self) -> Tuple[float, float, float, float]:
        """(south, west, north, east), the order Overpass expects"""
        return (self.south, self.west, self.north, self.east)


BBoxLike = Union[Extent, Sequence[float]]


def to_extent(bbox: BBoxLike) -> Extent:
    """
    Accept an Extent or a (south, west, north, east) sequence

    Raises:
        ValueError: If a sequence does not have exactly four values
    """
    if isinstance(bbox, Extent):
        return bbox
    values = list(bbox)
    if len(values) != 4:
        raise ValueError(
            f"bbox must be (south, west, north, east), got {len(values)} values"
        )
    south, west, north, east = (float(v) for v in values)
    return Extent.from_bounds(south, west, north, east)


def extent_of(points: Iterable[Any], kind: str, element_id: int) -> Extent:
    """
    Compute the extent of a sequence of points with `lat`/`lon` attributes

    Raises:
        MissingGeometryError: If the sequence is empty
    """
    points = list(points)
    if not points:
        raise MissingGeometryError(kind, element_id)

    lons = [p.lon for p in points]
    lats = [p.lat for p in points]
    return Extent(x=(min(lons), max(lons)), y=(min(lats), max(lats)))


def bbox_string(bbox: BBoxLike) -> str:
    """Format an extent as an Overpass filter suffix `(south,west,north,east)`"""
    ext = to_extent(bbox)
    return f"({ext.south},{ext.west},{ext.north},{ext.east})"


def bbox_setting(bbox: BBoxLike) -> str:
    """Format an extent as the global `[bbox:south,west,north,east]` setting"""
    ext = to_extent(bbox)
    return f"[bbox:{ext.south},{ext.west},{ext.north},{ext.east}]"


def to_shapely(obj: Any) -> BaseGeometry:
    """
    Convert any object exposing `__geo_interface__` to a shapely geometry

    Raises:
        MissingGeometryError: If a way or member has no geometry data
    """
    return shape(obj.__geo_interface__)
