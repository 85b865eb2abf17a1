"""Run-scoped route ledger.

Maps ``METHOD:normalized-path`` to the first registration seen during
the current analysis run. The ledger does no normalization of its own:
callers register already-normalized paths.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A route registration.

    ``path`` is the effective normalized path used as the ledger key;
    ``effective_path`` is the same route before normalization.
    """

    method: str
    path: str
    file: str
    line: int
    column: int = 0
    effective_path: str = ""

    @property
    def key(self) -> str:
        return f"{self.method}:{self.path}"

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class RouteLedger:
    """First-seen registry of routes for one analysis run.

    Usage::

        ledger = RouteLedger()
        ledger.begin_run("run-1")
        ledger.register(RouteRecord("GET", "/x", "a.js", 1))   # None
        ledger.register(RouteRecord("GET", "/x", "b.js", 9))   # the a.js record
    """

    __slots__ = ("_records", "_run_id")

    def __init__(self) -> None:
        self._records: dict[str, RouteRecord] = {}
        self._run_id: str | None = None

    @property
    def run_id(self) -> str | None:
        return self._run_id

    def begin_run(self, run_id: str) -> None:
        """Clear records when *run_id* differs from the current run.

        Repeated calls with the same id keep the records, so incremental
        re-analysis within a run does not start over.
        """
        if self._run_id != run_id:
            self._records.clear()
            self._run_id = run_id

    def register(self, record: RouteRecord) -> RouteRecord | None:
        """Insert *record*, or return the record already holding its key."""
        existing = self._records.get(record.key)
        if existing is not None:
            return existing
        self._records[record.key] = record
        return None

    def snapshot(self) -> list[RouteRecord]:
        return list(self._records.values())

    def clear(self) -> None:
        self._records.clear()
        self._run_id = None

    def __len__(self) -> int:
        return len(self._records)
