"""Tests for routeguard.cli._check — ``routeguard check`` subcommand."""

import json
from pathlib import Path
from typing import Any

import pytest

from routeguard.cli import main


def _route(path: str, line: int, router: str | None = None) -> dict[str, Any]:
    return {"type": "route", "method": "get", "path": path, "line": line, "router": router}


def _write(tmp_path: Path, files: list[dict[str, Any]]) -> str:
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"files": files}), encoding="utf-8")
    return str(path)


class TestRouteguardCheck:
    def test_clean_document(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(tmp_path, [{"path": "a.js", "events": [_route("/users", 1), _route("/orders", 2)]}])
        main(["check", events])
        captured = capsys.readouterr()
        assert "No issues found." in captured.out

    def test_duplicate_exits_one(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(
            tmp_path,
            [
                {"path": "a.js", "events": [_route("/users/:id", 1)]},
                {"path": "b.js", "events": [_route("/users/:userId", 4)]},
            ],
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["check", events])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "[ERROR] b.js:4:0" in captured.out
        assert "First defined: a.js:1:0" in captured.out

    def test_level_zero_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(tmp_path, [{"path": "a.js", "events": [_route("/u/:id", 1), _route("/u/:uid", 2)]}])
        main(["check", events, "--level", "0"])
        assert "No issues found." in capsys.readouterr().out

    def test_warn_severity_exits_zero(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(tmp_path, [{"path": "a.js", "events": [_route("/x", 1), _route("/x", 2)]}])
        main(["check", events, "--severity", "warn"])
        assert "[WARNING]" in capsys.readouterr().out

    def test_mounted_router(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(
            tmp_path,
            [
                {
                    "path": "a.js",
                    "events": [
                        {"type": "router", "identifier": "api", "callee": {"name": "Router", "receiver": "express"}},
                        {
                            "type": "mount",
                            "callee": {"name": "use", "receiver": "app"},
                            "arguments": [
                                {"kind": "literal", "value": "/api"},
                                {"kind": "identifier", "value": "api"},
                            ],
                        },
                        _route("/users", 3, "api"),
                        _route("/api/users", 4, "app"),
                    ],
                }
            ],
        )
        with pytest.raises(SystemExit):
            main(["check", events])
        assert "Duplicate route: GET /api/users" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_malformed_document(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(tmp_path, [{"path": "a.js", "events": [{"type": "bogus"}]}])
        with pytest.raises(SystemExit) as exc_info:
            main(["check", events])
        assert exc_info.value.code == 1
        assert "unknown event type" in capsys.readouterr().err

    def test_invalid_depth(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        events = _write(tmp_path, [])
        with pytest.raises(SystemExit) as exc_info:
            main(["check", events, "--max-depth", "20"])
        assert exc_info.value.code == 1
        assert "max_router_depth" in capsys.readouterr().err
