"""
Overpass response parser

Converts the JSON body returned by the Overpass API into typed elements
(Node, Way, Relation). Optional fields fall back to documented defaults;
required fields are coerced explicitly.
"""

import json
from typing import Any, Dict, List, Mapping, Tuple, Union

from loguru import logger

from .exceptions import ParseError
from .models import Element, LatLon, Member, Node, OverpassResponse, Relation, Way


DEFAULT_VERSION = 0.6


def _require(obj: Mapping[str, Any], key: str) -> Any:
    if key not in obj:
        raise KeyError(key)
    return obj[key]


def _to_int(value: Any) -> int:
    """Exact integer coercion; fractional numbers and booleans are rejected"""
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _to_text(value: Any) -> str:
    """Tag text: strings as-is, numbers stringified, anything else rejected"""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string tag value, got {value!r}")


class OverpassResponseParser:
    """Parses Overpass API JSON responses"""

    @staticmethod
    def parse_tags(obj: Mapping[str, Any]) -> Dict[str, str]:
        """
        Tags as a str -> str dict; absent tags give an empty dict

        Numeric values are stringified; null, booleans and nested values
        are rejected.
        """
        tags = obj.get("tags") or {}
        return {_to_text(k): _to_text(v) for k, v in tags.items()}

    @staticmethod
    def parse_latlon(obj: Mapping[str, Any]) -> LatLon:
        return LatLon(
            lat=float(_require(obj, "lat")),
            lon=float(_require(obj, "lon")),
        )

    @classmethod
    def parse_geometry(cls, obj: Mapping[str, Any]) -> Tuple[LatLon, ...]:
        """
        Coordinates from `out geom`

        An absent `geometry` and an empty one both give an empty tuple.
        """
        return tuple(cls.parse_latlon(p) for p in obj.get("geometry") or ())

    @classmethod
    def parse_node(cls, obj: Mapping[str, Any]) -> Node:
        return Node(
            id=_to_int(_require(obj, "id")),
            lat=float(_require(obj, "lat")),
            lon=float(_require(obj, "lon")),
            tags=cls.parse_tags(obj),
        )

    @classmethod
    def parse_way(cls, obj: Mapping[str, Any]) -> Way:
        # `nodes` holds node references, not coordinates
        return Way(
            id=_to_int(_require(obj, "id")),
            tags=cls.parse_tags(obj),
            node_ids=tuple(_to_int(n) for n in obj.get("nodes") or ()),
            geometry=cls.parse_geometry(obj),
        )

    @classmethod
    def parse_member(cls, obj: Mapping[str, Any]) -> Member:
        role = obj.get("role")
        return Member(
            type=str(_require(obj, "type")),
            ref=_to_int(_require(obj, "ref")),
            role="" if role is None else str(role),
            geometry=cls.parse_geometry(obj),
        )

    @classmethod
    def parse_relation(cls, obj: Mapping[str, Any]) -> Relation:
        return Relation(
            id=_to_int(_require(obj, "id")),
            tags=cls.parse_tags(obj),
            members=tuple(cls.parse_member(m) for m in obj.get("members") or ()),
        )

    @classmethod
    def parse_element(cls, index: int, obj: Any) -> Element:
        """
        Parse one entry of the `elements` array

        Raises:
            ParseError: If `type` is missing or unknown, or a required
                field is missing or cannot be coerced
        """
        if not isinstance(obj, Mapping):
            raise ParseError(index, None, "element is not a JSON object")

        element_type = obj.get("type")
        parsers = {
            "node": cls.parse_node,
            "way": cls.parse_way,
            "relation": cls.parse_relation,
        }
        if not isinstance(element_type, str) or element_type not in parsers:
            raise ParseError(index, element_type)

        try:
            return parsers[element_type](obj)
        except KeyError as e:
            raise ParseError(
                index, element_type, f"missing required field {e.args[0]!r}"
            ) from e
        except (TypeError, ValueError, AttributeError) as e:
            raise ParseError(index, element_type, str(e)) from e

    @classmethod
    def parse_response(cls, data: Mapping[str, Any]) -> OverpassResponse:
        """
        Parse a decoded Overpass JSON body

        Args:
            data: JSON object returned by the Overpass API

        Returns:
            OverpassResponse with elements in server order

        Raises:
            ParseError: If the body has no `elements` array or any element
                is invalid; no partial response is returned
        """
        if not isinstance(data, Mapping):
            raise ParseError(None, None, "response body is not a JSON object")

        raw_elements = data.get("elements")
        if not isinstance(raw_elements, list):
            raise ParseError(None, None, "response has no 'elements' array")

        osm3s = data.get("osm3s")
        timestamp = ""
        if isinstance(osm3s, Mapping) and "timestamp_osm_base" in osm3s:
            timestamp = str(osm3s["timestamp_osm_base"])

        version = data.get("version")
        generator = data.get("generator")

        try:
            version = DEFAULT_VERSION if version is None else float(version)
        except (TypeError, ValueError) as e:
            raise ParseError(None, None, f"invalid version {version!r}") from e

        elements: List[Element] = [
            cls.parse_element(i, obj) for i, obj in enumerate(raw_elements)
        ]

        response = OverpassResponse(
            version=version,
            generator="" if generator is None else str(generator),
            timestamp=timestamp,
            elements=elements,
        )
        logger.debug(f"Parsed Overpass response: {response}")
        return response


def parse_response(data: Mapping[str, Any]) -> OverpassResponse:
    """Parse a decoded Overpass JSON body into an OverpassResponse"""
    return OverpassResponseParser.parse_response(data)


def parse_json(body: Union[str, bytes]) -> OverpassResponse:
    """
    Decode a raw Overpass JSON body and parse it

    Raises:
        ParseError: If the body is not valid JSON or not a valid response
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(None, None, f"invalid JSON: {e}") from e
    return parse_response(data)
