"""Router prefix resolution.

Tracks sub-router bindings (``const api = express.Router()``), the
prefixes they are mounted under (``app.use("/api", api)``), and routers
exported from one file and used in another. Routes registered on a
router are resolved to their effective path with ``effective_prefix()``.

Each binding moves through ``depth 0 -> 1 -> ... -> max_depth``; mounts
only ever append. Every failure degrades to ``False``/``None`` plus a
log message so an analysis run always completes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from routeguard._internal.cache import PREFIX_CACHE_SIZE, BoundedCache
from routeguard.errors import ConfigurationError
from routeguard.routing.paths import is_root_path, join_paths

if TYPE_CHECKING:
    from collections.abc import Sequence

    from routeguard._internal.types import FrameworkHint
    from routeguard.events import Argument, Callee

logger = logging.getLogger("routeguard.routing")

DEFAULT_MAX_DEPTH = 5
MAX_DEPTH_RANGE = range(1, 11)

_ROUTER_FACTORIES = frozenset({"Router", "router"})


@dataclass(slots=True)
class RouterBinding:
    """A router instance known in the current file."""

    identifier: str
    framework: FrameworkHint
    file: str
    prefixes: list[str] = field(default_factory=list)
    depth: int = 0
    exported: bool = False


@dataclass(frozen=True, slots=True)
class ExportEntry:
    """One export of a router name. Holds the live binding."""

    identifier: str
    file: str
    binding: RouterBinding


@dataclass(frozen=True, slots=True)
class ImportEntry:
    """One imported router name. Recorded for introspection only."""

    imported_name: str
    local_name: str
    source: str
    file: str


@dataclass(frozen=True, slots=True)
class MountInfo:
    """What a ``<x>.use(prefix, router)`` call contributes."""

    target: str | None
    prefix: str | None
    dynamic: bool = False


class RouterGraph:
    """Per-run registry of router bindings and their mount prefixes.

    Usage::

        graph = RouterGraph(max_depth=5)
        graph.reset_file("src/app.js")
        graph.detect_router_creation("api", Callee("Router", "express"), "express")
        graph.apply_prefix("api", "/api")
        graph.apply_prefix("api", "/v1")
        graph.effective_prefix("api")   # "/api/v1"
    """

    __slots__ = ("_bindings", "_current_file", "_exports", "_imports", "_max_depth", "_prefix_cache")

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        prefix_cache: BoundedCache[tuple[str, ...], str] | None = None,
    ) -> None:
        if max_depth not in MAX_DEPTH_RANGE:
            msg = f"max_depth must be between 1 and 10, got {max_depth!r}."
            raise ConfigurationError(msg)
        self._max_depth = max_depth
        self._prefix_cache = prefix_cache if prefix_cache is not None else BoundedCache(PREFIX_CACHE_SIZE)
        self._bindings: dict[str, RouterBinding] = {}
        self._exports: dict[str, list[ExportEntry]] = {}
        self._imports: dict[str, list[ImportEntry]] = {}
        self._current_file = ""

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def current_file(self) -> str:
        return self._current_file

    # -- Lifecycle ------------------------------------------------------------

    def reset_file(self, path: str) -> None:
        """Start a new file: drop local bindings, keep the export table."""
        self._current_file = path
        self._bindings.clear()
        logger.debug("Reset router bindings for file: %s", path)

    def reset(self) -> None:
        """Start a new run: drop bindings, exports, imports and cached joins."""
        self._bindings.clear()
        self._exports.clear()
        self._imports.clear()
        self._prefix_cache.clear()
        self._current_file = ""
        logger.debug("Full router graph reset")

    # -- Creation and mounting ------------------------------------------------

    def detect_router_creation(self, identifier: str, callee: Callee, framework: FrameworkHint) -> bool:
        """Register *identifier* if *callee* is ``x.Router()`` or ``Router()``."""
        if callee.name not in _ROUTER_FACTORIES:
            return False
        self._bindings[identifier] = RouterBinding(
            identifier=identifier,
            framework=framework,
            file=self._current_file,
        )
        logger.debug("Registered router binding: %s (%s)", identifier, framework)
        return True

    def detect_mount(self, callee: Callee, arguments: Sequence[Argument]) -> MountInfo | None:
        """Interpret a ``<receiver>.use(prefix, router)`` call.

        Returns ``None`` when the call is not a two-argument ``use``.
        """
        if callee.receiver is None or callee.name != "use" or len(arguments) < 2:
            return None

        prefix_arg, router_arg = arguments[0], arguments[1]
        prefix = prefix_arg.static_text
        dynamic = prefix is None
        if dynamic:
            logger.debug("Skipping dynamic prefix (not a literal string)")

        target = router_arg.value if router_arg.kind == "identifier" else None
        return MountInfo(target=target, prefix=prefix, dynamic=dynamic)

    def mount(self, callee: Callee, arguments: Sequence[Argument]) -> bool:
        """Detect a mount and apply its prefix. Dropped mounts return ``False``."""
        info = self.detect_mount(callee, arguments)
        if info is None or info.dynamic or info.target is None or info.prefix is None:
            return False
        return self.apply_prefix(info.target, info.prefix)

    def apply_prefix(self, identifier: str, prefix: str) -> bool:
        binding = self._bindings.get(identifier)
        if binding is None:
            logger.debug("Cannot apply prefix to unknown router %r", identifier)
            return False

        if is_root_path(prefix):
            logger.debug("Skipping empty/root prefix for router %r", identifier)
            return True

        new_depth = binding.depth + 1
        if new_depth > self._max_depth:
            logger.warning(
                "Router nesting depth (%d) exceeds maximum (%d). "
                "Prefix resolution may be incomplete for %r.",
                new_depth,
                self._max_depth,
                identifier,
            )
            return False

        binding.prefixes.append(prefix)
        binding.depth = new_depth
        logger.debug("Applied prefix %r to router %r (depth: %d)", prefix, identifier, new_depth)
        return True

    # -- Resolution -----------------------------------------------------------

    def effective_prefix(self, identifier: str) -> str | None:
        """Joined mount prefixes for *identifier*, or ``None`` when it has none.

        Falls back to the export table when the name is not bound locally.
        """
        binding = self._bindings.get(identifier)
        if binding is None:
            return self._resolve_exported(identifier)
        return self._join(binding.prefixes)

    def _resolve_exported(self, identifier: str) -> str | None:
        matches = self._exports.get(identifier)
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Multiple exports found for %r (%s). Cross-file resolution uncertain (using first match).",
                identifier,
                ", ".join(entry.file for entry in matches),
            )
        prefix = self._join(matches[0].binding.prefixes)
        logger.debug("Resolved imported router %r with prefix: %s", identifier, prefix)
        return prefix

    def _join(self, prefixes: list[str]) -> str | None:
        if not prefixes:
            return None
        key = tuple(prefixes)
        cached = self._prefix_cache.get(key)
        if cached is not None:
            return cached
        joined = join_paths(*prefixes)
        self._prefix_cache.set(key, joined)
        return joined

    # -- Cross-file bookkeeping -----------------------------------------------

    def mark_exported(self, identifier: str) -> bool:
        """Publish a local binding in the export table. Unknown names return ``False``."""
        binding = self._bindings.get(identifier)
        if binding is None:
            return False
        binding.exported = True
        entry = ExportEntry(identifier=identifier, file=self._current_file, binding=binding)
        self._exports.setdefault(identifier, []).append(entry)
        logger.debug("Marked router %r as exported from %s", identifier, self._current_file)
        return True

    def register_import(self, imported_name: str, local_name: str, source: str) -> None:
        entry = ImportEntry(
            imported_name=imported_name,
            local_name=local_name,
            source=source,
            file=self._current_file,
        )
        self._imports.setdefault(local_name, []).append(entry)
        logger.debug("Registered import: %s as %s from %s", imported_name, local_name, source)

    # -- Introspection ----------------------------------------------------------

    @property
    def bindings(self) -> dict[str, RouterBinding]:
        """Copy of the current file's bindings."""
        return dict(self._bindings)

    def exports(self, identifier: str) -> list[ExportEntry]:
        return list(self._exports.get(identifier, ()))

    def imports(self, local_name: str) -> list[ImportEntry]:
        return list(self._imports.get(local_name, ()))
