"""Canonical path forms for duplicate detection.

Level 0 compares raw templates. Levels 1 and 2 erase parameter names so
``/users/:id`` and ``/users/:userId`` share one canonical form. Constraint
text is never part of the canonical form, whatever ``preserve_constraints``
says; the flag only separates cache entries.
"""

from routeguard._internal.cache import NORMALIZATION_CACHE_SIZE, BoundedCache, CacheStats
from routeguard._internal.types import NormalizationLevel
from routeguard.errors import ConfigurationError
from routeguard.routing.segments import SegmentKind, parse_path

NORMALIZATION_LEVELS: frozenset[int] = frozenset({0, 1, 2})


class PathNormalizer:
    """Produces canonical strings for ``(path, level, preserve_constraints)``.

    Results for levels 1 and 2 are memoized in a ``BoundedCache`` owned by
    the normalizer (or shared with the caller when one is passed in).
    """

    __slots__ = ("_cache",)

    def __init__(self, cache: BoundedCache[tuple[str, int, bool], str] | None = None) -> None:
        self._cache = cache if cache is not None else BoundedCache(NORMALIZATION_CACHE_SIZE)

    def normalize(
        self,
        path: str,
        level: NormalizationLevel = 1,
        preserve_constraints: bool = False,
    ) -> str:
        if level not in NORMALIZATION_LEVELS:
            msg = f"Normalization level must be 0, 1 or 2, got {level!r}."
            raise ConfigurationError(msg)

        if not path:
            return "/"

        if level == 0:
            return "/" + path.lstrip("/")

        key = (path, level, preserve_constraints)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        parts: list[str] = []
        for segment in parse_path(path):
            match segment.kind:
                case SegmentKind.CONSTRAINED_PARAM:
                    parts.append(":param")
                case (
                    SegmentKind.STATIC
                    | SegmentKind.PARAM
                    | SegmentKind.OPTIONAL_PARAM
                    | SegmentKind.WILDCARD
                    | SegmentKind.COMPOUND_PARAM
                ):
                    parts.append(segment.normalized)

        result = "/" + "/".join(parts) if parts else "/"
        self._cache.set(key, result)
        return result

    def clear(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def stats(self) -> CacheStats:
        return self._cache.stats()
