"""
Overpass API client

Assembles the final query text (output format and optional global bbox) and
sends it to an Overpass endpoint. One request per call: no retries and no
rate limiting.
"""

from typing import Optional, Union

import requests
from loguru import logger

from .config import DEFAULT_ENDPOINT, get_config
from .exceptions import HttpError
from .geometry import BBoxLike, bbox_setting
from .models import OverpassResponse
from .oql import OQLStatement, overpass_ql
from .parser import parse_json


JSON_OUTPUT_SETTING = "[out:json]"

QueryLike = Union[str, OQLStatement]


def build_query(ql: QueryLike, bbox: Optional[BBoxLike] = None) -> str:
    """
    Build the text actually sent to the server

    `[out:json];` is prepended unless the literal `[out:json]` already occurs
    anywhere in the query (plain substring test, the query is not parsed).
    With `bbox`, a global `[bbox:south,west,north,east];` setting goes in
    front of everything.

    Args:
        ql: Overpass QL text or builder statement
        bbox: Extent or (south, west, north, east) sequence
    """
    query = overpass_ql(ql)
    if JSON_OUTPUT_SETTING not in query:
        query = f"{JSON_OUTPUT_SETTING};{query}"
    if bbox is not None:
        query = f"{bbox_setting(bbox)};{query}"
    return query


class OverpassAPIClient:
    """Client for interacting with an Overpass API endpoint"""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        config = get_config()
        self.endpoint = endpoint or config.api.overpass_url
        self.timeout = timeout or config.api.overpass_timeout
        self.user_agent = user_agent or config.api.user_agent

    def post(self, query: str) -> bytes:
        """
        Send a finished query and return the raw response body

        Raises:
            HttpError: If the server answers with a non-success status
            requests.exceptions.RequestException: On network failures
        """
        headers = {
            "User-Agent": self.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        logger.info(f"POST {self.endpoint} ({len(query)} chars)")
        logger.debug(f"Overpass query: {query}")

        response = requests.post(
            self.endpoint,
            data={"data": query},
            headers=headers,
            timeout=self.timeout
        )
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise HttpError(response.status_code, response.text) from e

        logger.info(f"Overpass answered HTTP {response.status_code} ({len(response.content)} bytes)")
        return response.content

    def query(self, ql: QueryLike, bbox: Optional[BBoxLike] = None) -> OverpassResponse:
        """
        Execute an Overpass QL query and parse the response

        Args:
            ql: Overpass QL text or builder statement
            bbox: Optional global bounding box

        Returns:
            Parsed OverpassResponse

        Raises:
            HttpError: On a non-success HTTP status
            ParseError: If the body is not a valid Overpass JSON response
        """
        return parse_json(self.post(build_query(ql, bbox)))


def query(
    ql: QueryLike,
    bbox: Optional[BBoxLike] = None,
    endpoint: Optional[str] = None,
) -> OverpassResponse:
    """Execute a query against `endpoint` (configured default when omitted)"""
    return OverpassAPIClient(endpoint=endpoint).query(ql, bbox=bbox)
