"""
OSM data models

Immutable records for the elements returned by the Overpass API
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, KeysView, List, Mapping, Optional, Tuple, Union

from .exceptions import MissingGeometryError, TagKeyError
from .geometry import Extent, extent_of


def _freeze_tags(obj: Any) -> None:
    object.__setattr__(obj, "tags", MappingProxyType(dict(obj.tags)))


def _line_string(points: Tuple["LatLon", ...]) -> Dict[str, Any]:
    return {
        "type": "LineString",
        "coordinates": tuple((p.lon, p.lat) for p in points),
    }


@dataclass(frozen=True)
class LatLon:
    """A latitude/longitude pair"""
    lat: float
    lon: float

    def __str__(self) -> str:
        return f"LatLon({self.lat}, {self.lon})"

    @property
    def __geo_interface__(self) -> Dict[str, Any]:
        return {"type": "Point", "coordinates": (self.lon, self.lat)}

    def extent(self) -> Extent:
        return Extent(x=(self.lon, self.lon), y=(self.lat, self.lat))


class TaggedElement:
    """Tag lookups shared by nodes, ways and relations"""

    tags: Mapping[str, str]

    def __getitem__(self, key: str) -> str:
        try:
            return self.tags[key]
        except KeyError:
            raise TagKeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self.tags

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.tags.get(key, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags)

    def keys(self) -> KeysView:
        return self.tags.keys()


@dataclass(frozen=True)
class Node(TaggedElement):
    """An OSM node (point)"""
    id: int
    lat: float
    lon: float
    tags: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze_tags(self)

    def __str__(self) -> str:
        text = f"Node({self.id}, {self.lat}, {self.lon}"
        if self.tags:
            text += f", {len(self.tags)} tags"
        return text + ")"

    @property
    def coordinate(self) -> LatLon:
        return LatLon(self.lat, self.lon)

    @property
    def __geo_interface__(self) -> Dict[str, Any]:
        return self.coordinate.__geo_interface__

    def extent(self) -> Extent:
        return self.coordinate.extent()


@dataclass(frozen=True)
class Way(TaggedElement):
    """
    An OSM way (line or polygon)

    `node_ids` lists the referenced nodes; `geometry` holds coordinates only
    when the query used `out geom`. An empty geometry means "not available";
    a server-sent empty list is indistinguishable from an absent one.
    """
    id: int
    tags: Mapping[str, str] = field(default_factory=dict, hash=False)
    node_ids: Tuple[int, ...] = ()
    geometry: Tuple[LatLon, ...] = ()

    def __post_init__(self):
        _freeze_tags(self)
        object.__setattr__(self, "node_ids", tuple(self.node_ids))
        object.__setattr__(self, "geometry", tuple(self.geometry))

    def __str__(self) -> str:
        text = f"Way({self.id}"
        if self.tags:
            text += f", {len(self.tags)} tags"
        if self.node_ids:
            text += f", {len(self.node_ids)} nodes"
        if self.geometry:
            text += f", {len(self.geometry)} coords"
        return text + ")"

    @property
    def has_geometry(self) -> bool:
        return bool(self.geometry)

    @property
    def __geo_interface__(self) -> Dict[str, Any]:
        if not self.geometry:
            raise MissingGeometryError("Way", self.id)
        return _line_string(self.geometry)

    def extent(self) -> Extent:
        """
        Bounding extent of the way's geometry

        Raises:
            MissingGeometryError: If the way has no geometry data
        """
        return extent_of(self.geometry, "Way", self.id)


@dataclass(frozen=True)
class Member:
    """A reference from a relation to another element"""
    type: str
    ref: int
    role: str = ""
    geometry: Tuple[LatLon, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "geometry", tuple(self.geometry))

    def __str__(self) -> str:
        return f"Member({self.type}, ref={self.ref}, role={self.role!r})"

    @property
    def has_geometry(self) -> bool:
        return bool(self.geometry)

    @property
    def __geo_interface__(self) -> Dict[str, Any]:
        if not self.geometry:
            raise MissingGeometryError("Member", self.ref)
        return _line_string(self.geometry)

    def extent(self) -> Extent:
        """
        Bounding extent of the member's geometry

        Raises:
            MissingGeometryError: If the member has no geometry data
        """
        return extent_of(self.geometry, "Member", self.ref)


@dataclass(frozen=True)
class Relation(TaggedElement):
    """An OSM relation; member order is significant"""
    id: int
    tags: Mapping[str, str] = field(default_factory=dict, hash=False)
    members: Tuple[Member, ...] = ()

    def __post_init__(self):
        _freeze_tags(self)
        object.__setattr__(self, "members", tuple(self.members))

    def __str__(self) -> str:
        text = f"Relation({self.id}"
        if self.tags:
            text += f", {len(self.tags)} tags"
        if self.members:
            text += f", {len(self.members)} members"
        return text + ")"


Element = Union[Node, Way, Relation]


@dataclass(frozen=True)
class OverpassResponse:
    """Parsed Overpass response; elements keep the server's order"""
    version: float = 0.6
    generator: str = ""
    timestamp: str = ""
    elements: Tuple[Element, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "elements", tuple(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __str__(self) -> str:
        parts = []
        for label, items in (
            ("nodes", self.nodes),
            ("ways", self.ways),
            ("relations", self.relations),
        ):
            if items:
                parts.append(f"{len(items)} {label}")
        return f"OverpassResponse({', '.join(parts)})"

    @property
    def nodes(self) -> List[Node]:
        return [e for e in self.elements if isinstance(e, Node)]

    @property
    def ways(self) -> List[Way]:
        return [e for e in self.elements if isinstance(e, Way)]

    @property
    def relations(self) -> List[Relation]:
        return [e for e in self.elements if isinstance(e, Relation)]
