"""Analysis runs — feed extraction events through the engine.

An ``Analyzer`` owns every piece of run-scoped state: the route ledger,
the router graph and the caches. Files are processed strictly in the
order given, because cross-file router resolution depends on earlier
files' exports.

Usage::

    analyzer = Analyzer(AnalysisConfig(normalization_level=1))
    result = analyzer.run(load_events_file("events.json"))
    print(result.summary())
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from routeguard._internal.cache import BoundedCache, CacheStats
from routeguard.config import AnalysisConfig, validate_config
from routeguard.events import (
    Event,
    FileEvents,
    PrefixMountAttempted,
    RouteRegistered,
    RouterCreated,
    RouterExported,
    RouterImported,
)
from routeguard.routing.conflicts import ConflictKind, ConflictRecord, detect_conflict
from routeguard.routing.ledger import RouteLedger, RouteRecord
from routeguard.routing.normalize import PathNormalizer
from routeguard.routing.paths import join_paths
from routeguard.routing.prefixes import RouterGraph

logger = logging.getLogger("routeguard.analysis")


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


class Severity(Enum):
    """Severity of a finding."""

    ERROR = "error"
    WARNING = "warning"


DUPLICATE_ROUTE = "duplicate-route"
CONFLICTING_ROUTE = "conflicting-route"


@dataclass(frozen=True, slots=True)
class Finding:
    """A registration that collided with an earlier one."""

    severity: Severity
    message_id: str
    route: RouteRecord
    first: RouteRecord
    conflict: ConflictRecord

    @property
    def message(self) -> str:
        head = f"{self.route.method} {self.route.effective_path}"
        if self.message_id == DUPLICATE_ROUTE:
            return f"Duplicate route: {head}\n  First defined: {self.first.location}\n  Also defined here"
        return (
            f"Conflicting route: {head}\n"
            f"  Conflict type: {self.conflict.kind.value}\n"
            f"  First defined: {self.first.location}\n"
            f"  {self.conflict.message}"
        )


@dataclass(slots=True)
class AnalysisResult:
    """Result of an analysis run."""

    findings: list[Finding] = field(default_factory=list)
    files_processed: int = 0
    routes_registered: int = 0
    cancelled: bool = False
    cache_stats: dict[str, CacheStats] = field(default_factory=dict)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checked {self.files_processed} files, "
            f"registered {self.routes_registered} unique routes.",
        ]
        if self.cancelled:
            lines.append("Run cancelled before all files were processed.")
        if self.ok and not self.warnings:
            lines.append("No issues found.")
        elif self.ok:
            lines.append(f"No errors. {len(self.warnings)} warning(s).")
        else:
            lines.append(f"{len(self.errors)} error(s), {len(self.warnings)} warning(s).")
        for finding in self.findings:
            prefix = finding.severity.value.upper()
            route = finding.route
            lines.append(f"  [{prefix}] {route.location}")
            lines.extend(f"    {line}" for line in finding.message.splitlines())
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class Analyzer:
    """Runs extraction events through the ledger, graph and detector.

    Not thread-safe. Give each concurrent worker its own ``Analyzer``.
    """

    __slots__ = ("_config", "_graph", "_ledger", "_normalization_cache", "_normalizer", "_prefix_cache")

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()
        validate_config(self._config)

        self._normalization_cache: BoundedCache[tuple[str, int, bool], str] = BoundedCache(
            self._config.normalization_cache_size
        )
        self._prefix_cache: BoundedCache[tuple[str, ...], str] = BoundedCache(self._config.prefix_cache_size)
        self._normalizer = PathNormalizer(self._normalization_cache)
        self._graph = RouterGraph(self._config.max_router_depth, self._prefix_cache)
        self._ledger = RouteLedger()

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    @property
    def ledger(self) -> RouteLedger:
        return self._ledger

    @property
    def graph(self) -> RouterGraph:
        return self._graph

    @property
    def normalizer(self) -> PathNormalizer:
        return self._normalizer

    def begin_run(self, run_id: str | None = None) -> str:
        """Start (or continue) a run and return its id.

        A new id resets the router graph and clears the ledger. Passing
        the current id again keeps both, for incremental re-analysis.
        """
        run_id = run_id or uuid.uuid4().hex
        if self._ledger.run_id != run_id:
            self._graph.reset()
            logger.debug("Initialized analysis run: %s", run_id)
        self._ledger.begin_run(run_id)
        return run_id

    def run(
        self,
        files: Iterable[FileEvents],
        run_id: str | None = None,
        cancel: threading.Event | None = None,
    ) -> AnalysisResult:
        """Process *files* in order as one run.

        *cancel* is checked between files; a set event stops the run and
        marks the result ``cancelled``.
        """
        self.begin_run(run_id)
        result = AnalysisResult()
        for file_events in files:
            if cancel is not None and cancel.is_set():
                logger.info("Analysis cancelled after %d file(s)", result.files_processed)
                result.cancelled = True
                break
            result.findings.extend(self.process_file(file_events))
            result.files_processed += 1

        result.routes_registered = len(self._ledger)
        result.cache_stats = {
            "normalization": self._normalization_cache.stats(),
            "prefix": self._prefix_cache.stats(),
        }
        return result

    def process_file(self, file_events: FileEvents) -> list[Finding]:
        """Apply one file's events. Requires ``begin_run()`` first."""
        self._graph.reset_file(file_events.path)
        logger.debug("Processing file: %s", file_events.path)

        findings: list[Finding] = []
        for event in file_events.events:
            finding = self._dispatch(event, file_events.path)
            if finding is not None:
                findings.append(finding)
        return findings

    def _dispatch(self, event: Event, file: str) -> Finding | None:
        match event:
            case RouterCreated():
                if self._graph.detect_router_creation(event.identifier, event.callee, event.framework):
                    logger.debug("Detected router creation: %s", event.identifier)
            case PrefixMountAttempted():
                self._graph.mount(event.callee, event.arguments)
            case RouterExported():
                self._graph.mark_exported(event.identifier)
            case RouterImported():
                self._graph.register_import(event.imported_name, event.local_name, event.source)
            case RouteRegistered():
                return self._register_route(event, file)
        return None

    def _register_route(self, event: RouteRegistered, file: str) -> Finding | None:
        cfg = self._config
        method = event.method.upper()

        if not event.path.strip():
            logger.debug("Skipped route: %s - empty path", method)
            return None

        effective_path = event.path
        if event.router is not None:
            prefix = self._graph.effective_prefix(event.router)
            if prefix:
                effective_path = join_paths(prefix, event.path)
                logger.debug("Effective path: %s -> %s", event.path, effective_path)
        if cfg.global_prefix:
            effective_path = join_paths(cfg.global_prefix, effective_path)

        normalized = self._normalizer.normalize(
            effective_path,
            cfg.normalization_level,
            cfg.preserve_constraints,
        )
        record = RouteRecord(
            method=method,
            path=normalized,
            file=file,
            line=event.line,
            column=event.column,
            effective_path=effective_path,
        )
        logger.debug(
            "Registering route: %s %s (normalized: %s) at %s",
            method,
            effective_path,
            normalized,
            record.location,
        )

        existing = self._ledger.register(record)
        if existing is None:
            return None

        # Classified against the stored key, which shares our canonical form.
        conflict = detect_conflict(
            effective_path,
            existing.path,
            cfg.normalization_level,
            self._normalizer,
        )
        if not conflict:
            conflict = ConflictRecord(kind=ConflictKind.EXACT_DUPLICATE, message="Same normalized path")
        logger.debug(
            "Collision: %s %s at %s, first defined at %s (%s)",
            method,
            effective_path,
            record.location,
            existing.location,
            conflict.kind.value,
        )
        return self._finding(record, existing, conflict)

    def _finding(self, record: RouteRecord, first: RouteRecord, conflict: ConflictRecord) -> Finding | None:
        if conflict.kind.is_duplicate:
            if self._config.severity == "warn":
                severity, message_id = Severity.WARNING, CONFLICTING_ROUTE
            else:
                severity, message_id = Severity.ERROR, DUPLICATE_ROUTE
            return Finding(severity, message_id, record, first, conflict)

        if conflict.kind is ConflictKind.NONE or not self._config.warn_on_static_vs_dynamic:
            return None
        return Finding(Severity.WARNING, CONFLICTING_ROUTE, record, first, conflict)
