#!/usr/bin/env python
"""
Command-line interface for the Overpass API client

Usage:
    python cli.py query "node[amenity=cafe]; out geom;" --bbox 35.9,-79.1,36.1,-78.8
    python cli.py build node amenity=cafe "name~^star/i"
"""

import re
import sys
import json
import argparse
from typing import List, Optional

import requests
from loguru import logger

from overpass_api import OverpassAPIClient, OverpassError, build_query, parse_json
from overpass_api.config import get_config, validate_config
from overpass_api.geojson import response_to_feature_collection
from overpass_api.oql import SELECTORS, OQLStatement, make_filter


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else get_config().log_level
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def parse_bbox(text: str) -> List[float]:
    """Parse "south,west,north,east" into four floats"""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError("bbox must be south,west,north,east")
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"bbox values must be numbers: {text}") from None


def parse_filter(text: str):
    """
    Parse a command-line filter

    `key` -> exists, `key=value` -> exact match, `key~pattern` -> regex,
    `key~pattern/i` -> case-insensitive regex. The first `=` or `~` splits
    key from value.
    """
    match = re.match(r"^([^=~]+)([=~])(.*)$", text)
    if not match:
        return make_filter(text)

    key, op, value = match.groups()
    if op == "=":
        return make_filter(key, value)
    if value.endswith("/i"):
        return make_filter(key, re.compile(value[:-2], re.IGNORECASE))
    return make_filter(key, re.compile(value))


def cmd_query(args):
    """Run a query and report what came back"""
    setup_logging(args.verbose)

    ql = sys.stdin.read() if args.ql == "-" else args.ql

    try:
        client = OverpassAPIClient(endpoint=args.endpoint)
        body = client.post(build_query(ql, bbox=args.bbox))
        response = parse_json(body)
    except (OverpassError, ValueError, requests.exceptions.RequestException) as e:
        logger.error(f"Query failed: {e}")
        return 1

    logger.info(f"✓ {response}")

    if args.output:
        if args.geojson:
            content = response_to_feature_collection(response).model_dump_json(indent=2)
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(content)
        else:
            with open(args.output, "wb") as f:
                f.write(body)
        logger.info(f"✓ Saved: {args.output}")

    if args.summary:
        summary = {
            "version": response.version,
            "generator": response.generator,
            "timestamp": response.timestamp,
            "elements": len(response),
            "nodes": len(response.nodes),
            "ways": len(response.ways),
            "relations": len(response.relations),
        }
        print(json.dumps(summary, indent=2))

    return 0


def cmd_build(args):
    """Render an OQL statement from a selector and filters"""
    setup_logging(args.verbose)

    try:
        filters = tuple(parse_filter(f) for f in args.filters)
    except (TypeError, re.error) as e:
        logger.error(f"Invalid filter: {e}")
        return 1

    statement = OQLStatement(args.selector, filters)
    print(statement.to_ql())
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Overpass API client CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Run a query inside a bounding box:
    python cli.py query "node[amenity=cafe]; out;" --bbox 35.9,-79.1,36.1,-78.8 --summary

  Save ways as GeoJSON:
    python cli.py query "way[highway=primary]; out geom;" --output roads.geojson --geojson

  Build a query fragment:
    python cli.py build node amenity=cafe "name~^star/i"
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Query command
    query_parser = subparsers.add_parser("query", help="Run an Overpass QL query")
    query_parser.add_argument("ql", help="Overpass QL text, or - to read from stdin")
    query_parser.add_argument("--bbox", "-b", type=parse_bbox, help="Global bbox: south,west,north,east")
    query_parser.add_argument("--endpoint", "-e", help="Overpass endpoint URL")
    query_parser.add_argument("--output", "-o", help="Write the response to this file")
    query_parser.add_argument("--geojson", action="store_true", help="Write --output as GeoJSON")
    query_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    query_parser.set_defaults(func=cmd_query)

    # Build command
    build_parser = subparsers.add_parser("build", help="Render an OQL statement")
    build_parser.add_argument("selector", choices=SELECTORS, help="Element selector")
    build_parser.add_argument("filters", nargs="*", help="key, key=value, key~regex or key~regex/i")
    build_parser.set_defaults(func=cmd_build)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        validate_config(get_config())
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
