"""
Overpass API client

Modular client for the Overpass API with separate components for:
- Models: Typed OSM elements (Node, Way, Relation, Member, LatLon)
- Parser: Overpass JSON response parsing
- OQL: Immutable Overpass QL expression builder
- API client: Query assembly and HTTP transport
- Geometry: Extents, bbox formatting, shapely conversion
- GeoJSON: FeatureCollection export
- Config: Endpoint and request settings
"""

from .api_client import OverpassAPIClient, build_query, query
from .config import DEFAULT_ENDPOINT, get_config
from .exceptions import (
    HttpError,
    MissingGeometryError,
    OverpassError,
    ParseError,
    TagKeyError,
)
from .geometry import Extent, bbox_string, to_shapely
from .models import Element, LatLon, Member, Node, OverpassResponse, Relation, Way
from .oql import OQL, OQLStatement, overpass_ql
from .parser import parse_json, parse_response

__all__ = [
    "DEFAULT_ENDPOINT",
    "Element",
    "Extent",
    "HttpError",
    "LatLon",
    "Member",
    "MissingGeometryError",
    "Node",
    "OQL",
    "OQLStatement",
    "OverpassAPIClient",
    "OverpassError",
    "OverpassResponse",
    "ParseError",
    "Relation",
    "TagKeyError",
    "Way",
    "bbox_string",
    "build_query",
    "get_config",
    "overpass_ql",
    "parse_json",
    "parse_response",
    "query",
    "to_shapely",
]
