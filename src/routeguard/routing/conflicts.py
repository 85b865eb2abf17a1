"""Pairwise route conflict classification.

Given two paths registered for the same method, decide whether they are
the same route, the same route under different parameter names, or
overlapping shapes that a router would resolve ambiguously.

Rules are applied in order and the first match wins:

1. identical raw strings                  -> EXACT_DUPLICATE
2. different segment counts               -> NONE
3. first index-aligned segment pair where
   - exactly one side is a wildcard       -> WILDCARD_CONFLICT
   - exactly one side is static           -> STATIC_VS_DYNAMIC
   - both constrained, constraints differ -> DIFFERENT_CONSTRAINTS
4. equal canonical forms at level > 0     -> PARAM_NAME_CONFLICT
5. otherwise                              -> NONE
"""

from dataclasses import dataclass
from enum import Enum

from routeguard._internal.types import NormalizationLevel
from routeguard.routing.normalize import PathNormalizer
from routeguard.routing.segments import PathSegment, SegmentKind, parse_path


class ConflictKind(Enum):
    """Relationship between two route paths."""

    NONE = "none"
    EXACT_DUPLICATE = "exact"
    PARAM_NAME_CONFLICT = "param-name"
    STATIC_VS_DYNAMIC = "static-dynamic"
    WILDCARD_CONFLICT = "wildcard"
    DIFFERENT_CONSTRAINTS = "different-constraints"

    @property
    def is_duplicate(self) -> bool:
        """True for kinds that describe the same route registered twice."""
        return self in (ConflictKind.EXACT_DUPLICATE, ConflictKind.PARAM_NAME_CONFLICT)


@dataclass(frozen=True, slots=True)
class ConflictRecord:
    """Result of ``detect_conflict()``."""

    kind: ConflictKind
    message: str
    segments: tuple[PathSegment, PathSegment] | None = None

    def __bool__(self) -> bool:
        return self.kind is not ConflictKind.NONE


_MESSAGES: dict[ConflictKind, str] = {
    ConflictKind.NONE: "No conflict detected",
    ConflictKind.EXACT_DUPLICATE: "Exact duplicate route paths",
    ConflictKind.PARAM_NAME_CONFLICT: "Routes have different parameter names but same structure",
    ConflictKind.STATIC_VS_DYNAMIC: "Static path segment conflicts with dynamic parameter",
    ConflictKind.WILDCARD_CONFLICT: "Wildcard conflicts with specific path segment",
    ConflictKind.DIFFERENT_CONSTRAINTS: "Parameters have different regex constraints",
}


def _record(kind: ConflictKind, pair: tuple[PathSegment, PathSegment] | None = None) -> ConflictRecord:
    return ConflictRecord(kind=kind, message=_MESSAGES[kind], segments=pair)


def _classify_pair(a: PathSegment, b: PathSegment) -> ConflictKind | None:
    """Segment-level rule for one aligned pair, or ``None`` to keep walking."""
    if a.is_wildcard != b.is_wildcard:
        return ConflictKind.WILDCARD_CONFLICT
    if a.is_static != b.is_static:
        return ConflictKind.STATIC_VS_DYNAMIC
    if (
        a.kind is SegmentKind.CONSTRAINED_PARAM
        and b.kind is SegmentKind.CONSTRAINED_PARAM
        and a.constraint != b.constraint
    ):
        return ConflictKind.DIFFERENT_CONSTRAINTS
    return None


def detect_conflict(
    path_a: str,
    path_b: str,
    level: NormalizationLevel = 1,
    normalizer: PathNormalizer | None = None,
) -> ConflictRecord:
    """Classify the relationship between two raw paths.

    Pass the run's ``normalizer`` so canonical forms come from its cache;
    a private one is created otherwise.
    """
    if path_a == path_b:
        return _record(ConflictKind.EXACT_DUPLICATE)

    segments_a = parse_path(path_a)
    segments_b = parse_path(path_b)
    if len(segments_a) != len(segments_b):
        return ConflictRecord(kind=ConflictKind.NONE, message="Different path lengths")

    for a, b in zip(segments_a, segments_b, strict=True):
        kind = _classify_pair(a, b)
        if kind is not None:
            return _record(kind, (a, b))

    if level > 0:
        normalizer = normalizer or PathNormalizer()
        if normalizer.normalize(path_a, level) == normalizer.normalize(path_b, level):
            return _record(ConflictKind.PARAM_NAME_CONFLICT)

    return _record(ConflictKind.NONE)
