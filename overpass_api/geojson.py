"""
GeoJSON export

Pydantic models for writing a parsed response out as a GeoJSON
FeatureCollection. Only elements that carry coordinates become features.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .models import Element, Node, OverpassResponse, Way


# ============================================================
# GeoJSON Types
# ============================================================

class GeoJSONPoint(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [longitude, latitude]


class GeoJSONLineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]  # [[lon, lat], ...]


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: Union[GeoJSONPoint, GeoJSONLineString]
    properties: Dict[str, Any] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)


# ============================================================
# Conversion
# ============================================================

def element_to_feature(element: Element) -> Optional[Feature]:
    """
    Convert one element to a GeoJSON feature

    Nodes become points and ways with geometry become line strings.
    Relations and ways without geometry have no feature (None).
    """
    if isinstance(element, Node):
        geometry = GeoJSONPoint(coordinates=[element.lon, element.lat])
        osm_type = "node"
    elif isinstance(element, Way) and element.has_geometry:
        geometry = GeoJSONLineString(
            coordinates=[[p.lon, p.lat] for p in element.geometry]
        )
        osm_type = "way"
    else:
        return None

    return Feature(
        geometry=geometry,
        properties={
            "osm_type": osm_type,
            "osm_id": element.id,
            "tags": dict(element.tags),
        },
    )


def response_to_feature_collection(response: OverpassResponse) -> FeatureCollection:
    """Features for every node and geometry-bearing way, in response order"""
    features = []
    for element in response:
        feature = element_to_feature(element)
        if feature is not None:
            features.append(feature)
    return FeatureCollection(features=features)
