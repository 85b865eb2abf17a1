"""Tests for routeguard.routing.ledger — run-scoped route registry."""

import pytest

from routeguard.routing.ledger import RouteLedger, RouteRecord


def _record(method: str = "GET", path: str = "/x", file: str = "a.js", line: int = 1) -> RouteRecord:
    return RouteRecord(method=method, path=path, file=file, line=line, effective_path=path)


@pytest.fixture
def ledger() -> RouteLedger:
    ledger = RouteLedger()
    ledger.begin_run("run-1")
    return ledger


class TestRegister:
    def test_first_registration_returns_none(self, ledger: RouteLedger) -> None:
        assert ledger.register(_record()) is None

    def test_duplicate_returns_first(self, ledger: RouteLedger) -> None:
        first = _record(file="a.js", line=1)
        ledger.register(first)
        assert ledger.register(_record(file="b.js", line=9)) is first
        assert len(ledger.snapshot()) == 1

    def test_does_not_overwrite(self, ledger: RouteLedger) -> None:
        first = _record(line=1)
        ledger.register(first)
        ledger.register(_record(line=2))
        ledger.register(_record(line=3))
        assert ledger.snapshot() == [first]

    def test_method_is_part_of_key(self, ledger: RouteLedger) -> None:
        ledger.register(_record(method="GET"))
        assert ledger.register(_record(method="POST")) is None
        assert len(ledger) == 2

    def test_case_sensitive(self, ledger: RouteLedger) -> None:
        ledger.register(_record(path="/Users"))
        assert ledger.register(_record(path="/users")) is None

    def test_no_normalization(self, ledger: RouteLedger) -> None:
        ledger.register(_record(path="/users/:id"))
        assert ledger.register(_record(path="/users/:userId")) is None


class TestRuns:
    def test_same_run_id_keeps_records(self, ledger: RouteLedger) -> None:
        ledger.register(_record())
        ledger.begin_run("run-1")
        assert len(ledger) == 1

    def test_new_run_id_clears(self, ledger: RouteLedger) -> None:
        ledger.register(_record())
        ledger.begin_run("run-2")
        assert ledger.snapshot() == []
        assert ledger.run_id == "run-2"

    def test_clear(self, ledger: RouteLedger) -> None:
        ledger.register(_record())
        ledger.clear()
        assert len(ledger) == 0
        assert ledger.run_id is None


class TestRouteRecord:
    def test_key(self) -> None:
        assert _record(method="POST", path="/a").key == "POST:/a"

    def test_location(self) -> None:
        record = RouteRecord(method="GET", path="/", file="src/app.js", line=3, column=4)
        assert record.location == "src/app.js:3:4"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            _record().path = "/y"  # type: ignore[misc]
