"""
Shared fixtures: Overpass JSON payloads and a clean configuration
"""

import copy
from typing import Any, Dict, Iterator

import pytest
import requests

from overpass_api.config import ClientConfig, set_config


NODE_JSON: Dict[str, Any] = {
    "version": 0.6,
    "generator": "Overpass API 0.7.62",
    "osm3s": {"timestamp_osm_base": "2024-01-01T00:00:00Z"},
    "elements": [
        {
            "type": "node",
            "id": 123,
            "lat": 40.748,
            "lon": -73.985,
            "tags": {"amenity": "cafe", "name": "Test Cafe"},
        },
        {"type": "node", "id": 456, "lat": 40.749, "lon": -73.986, "tags": {}},
    ],
}

WAY_JSON: Dict[str, Any] = {
    "version": 0.6,
    "generator": "Overpass API 0.7.62",
    "osm3s": {"timestamp_osm_base": "2024-01-01T00:00:00Z"},
    "elements": [
        {
            "type": "way",
            "id": 789,
            "nodes": [1, 2, 3, 4],
            "tags": {"highway": "residential", "name": "Main St"},
            "geometry": [
                {"lat": 40.0, "lon": -74.0},
                {"lat": 40.1, "lon": -74.1},
                {"lat": 40.2, "lon": -74.2},
                {"lat": 40.3, "lon": -74.3},
            ],
        },
        {"type": "way", "id": 790, "nodes": [5, 6, 7], "tags": {"building": "yes"}},
    ],
}

RELATION_JSON: Dict[str, Any] = {
    "version": 0.6,
    "generator": "Overpass API 0.7.62",
    "osm3s": {"timestamp_osm_base": "2024-01-01T00:00:00Z"},
    "elements": [
        {
            "type": "relation",
            "id": 999,
            "tags": {"type": "multipolygon", "building": "yes"},
            "members": [
                {
                    "type": "way",
                    "ref": 100,
                    "role": "outer",
                    "geometry": [
                        {"lat": 40.0, "lon": -74.0},
                        {"lat": 40.1, "lon": -74.1},
                    ],
                },
                {"type": "way", "ref": 101, "role": "inner"},
            ],
        }
    ],
}

MIXED_JSON: Dict[str, Any] = {
    "version": 0.6,
    "generator": "Overpass API 0.7.62",
    "osm3s": {"timestamp_osm_base": "2024-01-01T00:00:00Z"},
    "elements": [
        {"type": "node", "id": 1, "lat": 40.0, "lon": -74.0},
        {
            "type": "way",
            "id": 2,
            "nodes": [1, 2],
            "geometry": [{"lat": 40.0, "lon": -74.0}, {"lat": 40.1, "lon": -74.1}],
        },
        {"type": "relation", "id": 3, "members": []},
    ],
}


@pytest.fixture
def node_json() -> Dict[str, Any]:
    return copy.deepcopy(NODE_JSON)


@pytest.fixture
def way_json() -> Dict[str, Any]:
    return copy.deepcopy(WAY_JSON)


@pytest.fixture
def relation_json() -> Dict[str, Any]:
    return copy.deepcopy(RELATION_JSON)


@pytest.fixture
def mixed_json() -> Dict[str, Any]:
    return copy.deepcopy(MIXED_JSON)


@pytest.fixture(autouse=True)
def default_config() -> Iterator[ClientConfig]:
    """Isolate tests from OVERPASS_* variables and .env files"""
    config = ClientConfig()
    set_config(config)
    yield config
    set_config(None)


def make_response(status_code: int, body: bytes) -> requests.Response:
    """Build a real requests.Response for patched transports"""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.url = "https://overpass.example/api/interpreter"
    return response


@pytest.fixture
def response_factory():
    return make_response
