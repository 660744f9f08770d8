"""
Overpass QL expression builder

Immutable statements that accumulate tag filters and render to Overpass QL:

    OQL.node.filter("amenity", "cafe").filter(name=re.compile("^star", re.I))
    -> node[amenity=cafe][name~"^star",i]

Every filter call returns a new statement, so a common prefix can be reused
for several queries without interference.
"""

import re
from dataclasses import dataclass
from typing import Any, Tuple, Union


SELECTORS = ("node", "way", "relation", "rel", "nwr")


@dataclass(frozen=True)
class ExistsFilter:
    """`[key]` - the tag is present"""
    key: str

    def to_ql(self) -> str:
        return f"[{self.key}]"


@dataclass(frozen=True)
class EqualsFilter:
    """`[key=value]` - value is inserted verbatim, without escaping"""
    key: str
    value: str

    def to_ql(self) -> str:
        return f"[{self.key}={self.value}]"


@dataclass(frozen=True)
class RegexFilter:
    """`[key~"pattern"]`, or `[key~"pattern",i]` when case-insensitive"""
    key: str
    pattern: str
    ignore_case: bool = False

    def to_ql(self) -> str:
        if self.ignore_case:
            return f'[{self.key}~"{self.pattern}",i]'
        return f'[{self.key}~"{self.pattern}"]'


TagFilter = Union[ExistsFilter, EqualsFilter, RegexFilter]


def make_filter(key: str, value: Any = None) -> TagFilter:
    """
    Build a filter clause from a key and an optional value

    Args:
        key: Tag key
        value: None for an existence test, a str for exact match, or a
            compiled regular expression (re.IGNORECASE gives `,i`)

    Raises:
        TypeError: For any other value type
    """
    if not isinstance(key, str):
        raise TypeError(f"Filter key must be a str, got {type(key).__name__}")
    if value is None:
        return ExistsFilter(key)
    if isinstance(value, re.Pattern):
        return RegexFilter(
            key,
            str(value.pattern),
            ignore_case=bool(value.flags & re.IGNORECASE),
        )
    if isinstance(value, str):
        return EqualsFilter(key, value)
    raise TypeError(
        f"Filter value for {key!r} must be a str or compiled regex, "
        f"got {type(value).__name__}"
    )


@dataclass(frozen=True, repr=False)
class OQLStatement:
    """An element selector plus an ordered tuple of tag filters"""
    selector: str
    filters: Tuple[TagFilter, ...] = ()

    def __post_init__(self):
        if self.selector not in SELECTORS:
            raise ValueError(
                f"Unknown selector {self.selector!r}, expected one of {', '.join(SELECTORS)}"
            )
        object.__setattr__(self, "filters", tuple(self.filters))

    def filter(self, *args: Any, **kwargs: Any) -> "OQLStatement":
        """
        Return a new statement with extra filters appended

        Positional form: `filter(key)` or `filter(key, value)`.
        Keyword form: `filter(amenity="cafe", cuisine="coffee")`, one clause
        per pair in argument order, after the positional clause if any.
        """
        if len(args) > 2:
            raise TypeError(f"filter() takes a key and an optional value, got {len(args)} arguments")
        if not args and not kwargs:
            raise TypeError("filter() needs a key or at least one keyword filter")

        added = []
        if args:
            added.append(make_filter(*args))
        for key, value in kwargs.items():
            added.append(make_filter(key, value))

        return OQLStatement(self.selector, self.filters + tuple(added))

    def __getitem__(self, item: Any) -> "OQLStatement":
        if isinstance(item, tuple):
            return self.filter(*item)
        return self.filter(item)

    def to_ql(self) -> str:
        return self.selector + "".join(f.to_ql() for f in self.filters)

    def __str__(self) -> str:
        return self.to_ql()

    __repr__ = __str__


class OQL:
    """Starting statements, one per element selector"""
    node = OQLStatement("node")
    way = OQLStatement("way")
    relation = OQLStatement("relation")
    rel = OQLStatement("rel")
    nwr = OQLStatement("nwr")


def overpass_ql(query: Union[str, OQLStatement]) -> str:
    """Query text for either a raw string or a builder statement"""
    if isinstance(query, OQLStatement):
        return query.to_ql()
    return query
