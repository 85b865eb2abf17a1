"""routeguard — duplicate and conflicting HTTP route detection.

Consumes route registrations and router mount events reported by a
source extractor, resolves sub-router prefixes across files, and
classifies every collision.

Basic usage::

    from routeguard import Analyzer, AnalysisConfig, load_events_file

    analyzer = Analyzer(AnalysisConfig(normalization_level=1))
    result = analyzer.run(load_events_file("events.json"))
    print(result.summary())

Engine pieces can be used on their own::

    from routeguard import detect_conflict

    detect_conflict("/users/:id", "/users/:userId").kind   # PARAM_NAME_CONFLICT
"""

import importlib

__version__ = "0.1.0-dev"
__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "Analyzer",
    "BoundedCache",
    "ConfigurationError",
    "ConflictKind",
    "ConflictRecord",
    "EventError",
    "FileEvents",
    "Finding",
    "PathNormalizer",
    "RouteGuardError",
    "RouteLedger",
    "RouteRecord",
    "RouterGraph",
    "detect_conflict",
    "join_paths",
    "load_events",
    "load_events_file",
    "parse_path",
]


# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AnalysisConfig": "routeguard.config",
    "AnalysisResult": "routeguard.analysis",
    "Analyzer": "routeguard.analysis",
    "BoundedCache": "routeguard._internal.cache",
    "ConfigurationError": "routeguard.errors",
    "ConflictKind": "routeguard.routing.conflicts",
    "ConflictRecord": "routeguard.routing.conflicts",
    "EventError": "routeguard.errors",
    "FileEvents": "routeguard.events",
    "Finding": "routeguard.analysis",
    "PathNormalizer": "routeguard.routing.normalize",
    "RouteGuardError": "routeguard.errors",
    "RouteLedger": "routeguard.routing.ledger",
    "RouteRecord": "routeguard.routing.ledger",
    "RouterGraph": "routeguard.routing.prefixes",
    "detect_conflict": "routeguard.routing.conflicts",
    "join_paths": "routeguard.routing.paths",
    "load_events": "routeguard.events",
    "load_events_file": "routeguard.events",
    "parse_path": "routeguard.routing.segments",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeguard`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_path), name)
