"""
Error types raised by the Overpass client
"""

from typing import Optional


class OverpassError(Exception):
    """Base class for every error raised by this package"""


class ParseError(OverpassError, ValueError):
    """
    Overpass response could not be converted into typed elements.

    `index` is the position of the offending entry in the `elements` array
    (None when the failure is not tied to a single element) and
    `element_type` is the value of its `type` field, if any.
    """

    def __init__(
        self,
        index: Optional[int],
        element_type: Optional[str],
        reason: str = "unknown OSM element type",
    ) -> None:
        super().__init__(index, element_type, reason)

        self.index = index
        self.element_type = element_type
        self.reason = reason

    def __str__(self) -> str:
        if self.index is None:
            return f"Invalid Overpass response: {self.reason}"
        return (
            f"Invalid element at index {self.index} "
            f"(type={self.element_type!r}): {self.reason}"
        )


class MissingGeometryError(OverpassError, ValueError, AttributeError):
    """
    Geometry was required but the element carries no coordinates.

    Also an AttributeError, so `hasattr(way, "__geo_interface__")` is False
    for elements without geometry.
    """

    def __init__(self, kind: str, element_id: int) -> None:
        super().__init__(kind, element_id)

        self.kind = kind
        self.element_id = element_id

    def __str__(self) -> str:
        return (
            f"{self.kind} {self.element_id} has no geometry data. "
            f"Use `out geom` in your query."
        )


class HttpError(OverpassError):
    """Overpass endpoint answered with a non-success HTTP status"""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(status_code, body)

        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"Overpass API error (HTTP {self.status_code}): {self.body}"


class TagKeyError(OverpassError, KeyError):
    """Exact tag lookup on a key the element does not have"""

    def __init__(self, key: str) -> None:
        super().__init__(key)

        self.key = key

    def __str__(self) -> str:
        return f"Tag {self.key!r} not found"
