"""Path template segments.

Parses a route path template into typed segments. The grammar covers
the Express/Fastify template syntax::

    /users              static
    /:id                param
    /:id?               optional param
    /:id(\\d+)           constrained param
    /:from-:to          compound param
    /*  /**  /:path*    wildcard
"""

import re
from dataclasses import dataclass
from enum import Enum

from routeguard.routing.paths import path_segments


class SegmentKind(Enum):
    """Kind of a parsed path segment."""

    STATIC = "static"
    PARAM = "param"
    OPTIONAL_PARAM = "optional-param"
    CONSTRAINED_PARAM = "constrained-param"
    WILDCARD = "wildcard"
    COMPOUND_PARAM = "compound-param"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path template.

    Static:       ``users``      (normalized "users")
    Param:        ``:id``        (param_name="id", normalized ":param")
    Constrained:  ``:id(\\d+)``   (constraint="(\\d+)", normalized ":param")
    Wildcard:     ``:rest*``     (param_name="rest", normalized "*")
    """

    raw: str
    kind: SegmentKind
    normalized: str
    param_name: str | None = None
    constraint: str | None = None

    @property
    def is_static(self) -> bool:
        return self.kind is SegmentKind.STATIC

    @property
    def is_wildcard(self) -> bool:
        return self.kind is SegmentKind.WILDCARD


_WILDCARD_PARAM = re.compile(r"^:([^(]+)\*$")
_CONSTRAINED_PARAM = re.compile(r"^:([^(]+)(\(.+\))$")
_COMPOUND_PARAM = re.compile(r"^:([^-:(]+)-:?([^-:(]+)$")


def parse_segment(raw: str) -> PathSegment:
    """Classify a single ``/``-free fragment of a path template."""
    if not raw:
        return PathSegment(raw=raw, kind=SegmentKind.STATIC, normalized=raw)

    if raw in ("*", "**"):
        return PathSegment(raw=raw, kind=SegmentKind.WILDCARD, normalized="*")

    if not raw.startswith(":"):
        return PathSegment(raw=raw, kind=SegmentKind.STATIC, normalized=raw)

    optional = raw.endswith("?")
    base = raw[:-1] if optional else raw

    if m := _WILDCARD_PARAM.match(base):
        return PathSegment(
            raw=raw,
            kind=SegmentKind.WILDCARD,
            normalized="*",
            param_name=m.group(1),
        )

    if m := _CONSTRAINED_PARAM.match(base):
        return PathSegment(
            raw=raw,
            kind=SegmentKind.CONSTRAINED_PARAM,
            normalized=":param",
            param_name=m.group(1),
            constraint=m.group(2),
        )

    if m := _COMPOUND_PARAM.match(base):
        return PathSegment(
            raw=raw,
            kind=SegmentKind.COMPOUND_PARAM,
            normalized=":param-:param",
            param_name=f"{m.group(1)}-{m.group(2)}",
        )

    return PathSegment(
        raw=raw,
        kind=SegmentKind.OPTIONAL_PARAM if optional else SegmentKind.PARAM,
        normalized=":param?" if optional else ":param",
        param_name=base[1:],
    )


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path template into segments.

    Examples::

        "/"                 -> []
        "/users"            -> [PathSegment("users", STATIC)]
        "/users/:id"        -> [PathSegment("users", ...), PathSegment(":id", PARAM, ...)]
        "//api//v1/"        -> [PathSegment("api", ...), PathSegment("v1", ...)]
    """
    return [parse_segment(part) for part in path_segments(path)]


def is_static_segment(raw: str) -> bool:
    return parse_segment(raw).kind is SegmentKind.STATIC


def is_param_segment(raw: str) -> bool:
    return parse_segment(raw).kind in (
        SegmentKind.PARAM,
        SegmentKind.OPTIONAL_PARAM,
        SegmentKind.CONSTRAINED_PARAM,
        SegmentKind.COMPOUND_PARAM,
    )


def is_wildcard_segment(raw: str) -> bool:
    return parse_segment(raw).kind is SegmentKind.WILDCARD


def extract_param_constraint(raw: str) -> re.Pattern[str] | None:
    """Compile the constraint of a constrained parameter segment.

    Returns ``None`` for segments without a constraint and for constraint
    text that is not a valid regular expression.
    """
    segment = parse_segment(raw)
    if segment.kind is not SegmentKind.CONSTRAINED_PARAM or not segment.constraint:
        return None
    try:
        return re.compile(segment.constraint[1:-1])
    except re.error:
        return None
