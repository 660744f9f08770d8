import json

import pytest

from overpass_api import (
    LatLon,
    Node,
    ParseError,
    Relation,
    Way,
    parse_json,
    parse_response,
)


class TestParseNodes:
    def test_envelope_fields(self, node_json):
        response = parse_response(node_json)

        assert response.version == 0.6
        assert response.generator == "Overpass API 0.7.62"
        assert response.timestamp == "2024-01-01T00:00:00Z"
        assert len(response.elements) == 2

    def test_node_fields(self, node_json):
        first, second = parse_response(node_json).elements

        assert isinstance(first, Node)
        assert first.id == 123
        assert first.lat == 40.748
        assert first.lon == -73.985
        assert first.tags == {"amenity": "cafe", "name": "Test Cafe"}

        assert second.id == 456
        assert second.tags == {}

    def test_missing_tags_default_to_empty(self):
        response = parse_response(
            {"elements": [{"type": "node", "id": 1, "lat": 0, "lon": 0}]}
        )

        assert response.elements[0].tags == {}

    def test_tag_values_coerced_to_text(self):
        response = parse_response(
            {
                "elements": [
                    {"type": "node", "id": 1, "lat": 0, "lon": 0, "tags": {"lanes": 2}}
                ]
            }
        )

        assert response.elements[0].tags == {"lanes": "2"}

    def test_integer_coordinates_coerced_to_float(self):
        node = parse_response(
            {"elements": [{"type": "node", "id": "7", "lat": 1, "lon": 2}]}
        ).elements[0]

        assert node.id == 7
        assert isinstance(node.lat, float)
        assert isinstance(node.lon, float)


class TestParseWays:
    def test_way_with_geometry(self, way_json):
        way = parse_response(way_json).elements[0]

        assert isinstance(way, Way)
        assert way.id == 789
        assert way.node_ids == (1, 2, 3, 4)
        assert len(way.geometry) == 4
        assert way.geometry[0] == LatLon(40.0, -74.0)
        assert way["highway"] == "residential"

    def test_way_without_geometry(self, way_json):
        way = parse_response(way_json).elements[1]

        assert isinstance(way, Way)
        assert way.id == 790
        assert way.geometry == ()
        assert not way.has_geometry
        assert way.node_ids == (5, 6, 7)

    def test_way_without_nodes(self):
        way = parse_response({"elements": [{"type": "way", "id": 5}]}).elements[0]

        assert way.node_ids == ()
        assert way.geometry == ()
        assert way.tags == {}

    def test_empty_geometry_list_is_same_as_absent(self):
        absent, empty = parse_response(
            {
                "elements": [
                    {"type": "way", "id": 1},
                    {"type": "way", "id": 2, "geometry": []},
                ]
            }
        ).elements

        assert absent.geometry == empty.geometry == ()


class TestParseRelations:
    def test_relation_members(self, relation_json):
        relation = parse_response(relation_json).elements[0]

        assert isinstance(relation, Relation)
        assert relation.id == 999
        assert relation.tags["type"] == "multipolygon"
        assert len(relation.members) == 2

        outer, inner = relation.members
        assert outer.type == "way"
        assert outer.ref == 100
        assert outer.role == "outer"
        assert outer.geometry == (LatLon(40.0, -74.0), LatLon(40.1, -74.1))

        assert inner.role == "inner"
        assert inner.geometry == ()

    def test_member_role_defaults_to_empty(self):
        relation = parse_response(
            {
                "elements": [
                    {"type": "relation", "id": 1, "members": [{"type": "node", "ref": 4}]}
                ]
            }
        ).elements[0]

        assert relation.members[0].role == ""

    def test_member_type_is_not_validated(self):
        relation = parse_response(
            {
                "elements": [
                    {"type": "relation", "id": 1, "members": [{"type": "area", "ref": 4}]}
                ]
            }
        ).elements[0]

        assert relation.members[0].type == "area"

    def test_relation_without_members(self):
        relation = parse_response({"elements": [{"type": "relation", "id": 3}]}).elements[0]

        assert relation.members == ()


class TestParseResponse:
    @pytest.mark.parametrize(
        "fixture_name", ["node_json", "way_json", "relation_json", "mixed_json"]
    )
    def test_elements_keep_count_order_and_kind(self, request, fixture_name):
        data = request.getfixturevalue(fixture_name)
        kinds = {"node": Node, "way": Way, "relation": Relation}

        response = parse_response(data)

        assert len(response) == len(data["elements"])
        for raw, element in zip(data["elements"], response):
            assert isinstance(element, kinds[raw["type"]])
            assert element.id == raw["id"]

    def test_envelope_defaults(self):
        response = parse_response({"elements": []})

        assert response.version == 0.6
        assert response.generator == ""
        assert response.timestamp == ""
        assert len(response) == 0

    def test_osm3s_without_timestamp(self):
        response = parse_response({"osm3s": {"copyright": "ODbL"}, "elements": []})

        assert response.timestamp == ""

    def test_unknown_type_raises_with_index(self, mixed_json):
        mixed_json["elements"].insert(1, {"type": "area", "id": 9})

        with pytest.raises(ParseError) as exc_info:
            parse_response(mixed_json)

        assert exc_info.value.index == 1
        assert exc_info.value.element_type == "area"
        assert "index 1" in str(exc_info.value)

    def test_missing_type_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_response({"elements": [{"id": 1, "lat": 0, "lon": 0}]})

        assert exc_info.value.index == 0
        assert exc_info.value.element_type is None

    def test_missing_required_field_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_response({"elements": [{"type": "node", "id": 1, "lat": 0}]})

        assert exc_info.value.element_type == "node"
        assert "'lon'" in exc_info.value.reason

    def test_bad_member_ref_raises(self):
        data = {
            "elements": [
                {"type": "relation", "id": 1, "members": [{"type": "way", "ref": "x"}]}
            ]
        }

        with pytest.raises(ParseError) as exc_info:
            parse_response(data)

        assert exc_info.value.element_type == "relation"

    def test_missing_elements_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_response({"version": 0.6})

        assert exc_info.value.index is None

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_response({"elements": [{"type": "changeset", "id": 1}]})


class TestParseJson:
    def test_bytes_body(self, mixed_json):
        response = parse_json(json.dumps(mixed_json).encode("utf-8"))

        assert len(response) == 3

    def test_invalid_json_raises(self):
        with pytest.raises(ParseError, match="invalid JSON"):
            parse_json(b"<html>rate limited</html>")


class TestCoercion:
    @pytest.mark.parametrize(
        "element",
        [
            pytest.param({"type": "node", "id": 1.5, "lat": 0, "lon": 0}, id="fractional node id"),
            pytest.param({"type": "node", "id": True, "lat": 0, "lon": 0}, id="boolean node id"),
            pytest.param({"type": "way", "id": 1, "nodes": [1, 2.5]}, id="fractional node ref"),
            pytest.param(
                {"type": "relation", "id": 1, "members": [{"type": "way", "ref": 10.2}]},
                id="fractional member ref",
            ),
        ],
    )
    def test_inexact_integers_rejected(self, element):
        with pytest.raises(ParseError) as exc_info:
            parse_response({"elements": [element]})

        assert exc_info.value.index == 0
        assert exc_info.value.element_type == element["type"]

    def test_integral_float_id_accepted(self):
        node = parse_response(
            {"elements": [{"type": "node", "id": 42.0, "lat": 0, "lon": 0}]}
        ).elements[0]

        assert node.id == 42
        assert isinstance(node.id, int)

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(None, id="null"),
            pytest.param(True, id="boolean"),
            pytest.param({"nested": "x"}, id="object"),
            pytest.param(["a"], id="array"),
        ],
    )
    def test_non_text_tag_values_rejected(self, value):
        data = {
            "elements": [
                {"type": "way", "id": 1, "tags": {"name": value}}
            ]
        }

        with pytest.raises(ParseError) as exc_info:
            parse_response(data)

        assert exc_info.value.element_type == "way"
