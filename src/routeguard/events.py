"""Extraction-layer events.

The engine never reads program syntax. A front end walks each source
file and reports what it found as a sequence of these events, in source
order. ``load_events()`` decodes the JSON form consumed by
``routeguard check``::

    {"files": [{"path": "src/app.js", "events": [
        {"type": "router", "identifier": "api", "callee": {"name": "Router", "receiver": "express"}},
        {"type": "mount", "callee": {"name": "use", "receiver": "app"},
         "arguments": [{"kind": "literal", "value": "/api"}, {"kind": "identifier", "value": "api"}]},
        {"type": "route", "method": "get", "path": "/users", "line": 4, "router": "api"}
    ]}]}
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, TypeAlias

from routeguard._internal.types import FrameworkHint
from routeguard.errors import EventError

ArgumentKind: TypeAlias = Literal["literal", "template", "identifier", "expression"]

_ARGUMENT_KINDS: frozenset[str] = frozenset({"literal", "template", "identifier", "expression"})
_FRAMEWORKS: frozenset[str] = frozenset({"express", "fastify", "generic"})


# ---------------------------------------------------------------------------
# Call shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Callee:
    """The callee of a call expression.

    ``express.Router()`` -> ``Callee("Router", receiver="express")``
    ``Router()``         -> ``Callee("Router")``
    """

    name: str
    receiver: str | None = None


@dataclass(frozen=True, slots=True)
class Argument:
    """One call argument, reduced to what prefix resolution needs.

    ``value`` holds the string for literals and templates and the name
    for identifiers. ``interpolated`` marks templates with ``${...}``.
    """

    kind: ArgumentKind
    value: str | None = None
    interpolated: bool = False

    @property
    def static_text(self) -> str | None:
        """The argument's text when it is known without running the program."""
        if self.kind == "literal":
            return self.value
        if self.kind == "template" and not self.interpolated:
            return self.value
        return None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RouterCreated:
    """``const <identifier> = <callee>()``."""

    identifier: str
    callee: Callee
    framework: FrameworkHint = "generic"


@dataclass(frozen=True, slots=True)
class PrefixMountAttempted:
    """``<receiver>.use(<arguments>)``."""

    callee: Callee
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True, slots=True)
class RouterExported:
    identifier: str


@dataclass(frozen=True, slots=True)
class RouterImported:
    imported_name: str
    local_name: str
    source: str


@dataclass(frozen=True, slots=True)
class RouteRegistered:
    """``<router>.<method>(<path>, ...)`` with a statically known path."""

    method: str
    path: str
    line: int
    column: int = 0
    router: str | None = None


Event: TypeAlias = RouterCreated | PrefixMountAttempted | RouterExported | RouterImported | RouteRegistered


@dataclass(frozen=True, slots=True)
class FileEvents:
    """All events of one source file, in source order."""

    path: str
    events: tuple[Event, ...] = ()


# ---------------------------------------------------------------------------
# JSON decoding
# ---------------------------------------------------------------------------


def _require(item: Mapping[str, Any], key: str, kind: type, *, file: str, index: int) -> Any:
    value = item.get(key)
    if not isinstance(value, kind):
        msg = f"{item.get('type', 'event')!r} event needs a {kind.__name__} {key!r} field"
        raise EventError(msg, file=file, index=index)
    return value


def _optional_str(item: Mapping[str, Any], key: str, *, file: str, index: int) -> str | None:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        msg = f"{key!r} must be a string or null"
        raise EventError(msg, file=file, index=index)
    return value


def _decode_callee(raw: Any, *, file: str, index: int) -> Callee:
    if not isinstance(raw, Mapping):
        raise EventError("'callee' must be an object", file=file, index=index)
    return Callee(
        name=_require(raw, "name", str, file=file, index=index),
        receiver=_optional_str(raw, "receiver", file=file, index=index),
    )


def _decode_argument(raw: Any, *, file: str, index: int) -> Argument:
    if not isinstance(raw, Mapping):
        raise EventError("each argument must be an object", file=file, index=index)
    kind = raw.get("kind")
    if kind not in _ARGUMENT_KINDS:
        msg = f"unknown argument kind {kind!r}"
        raise EventError(msg, file=file, index=index)
    return Argument(
        kind=kind,
        value=_optional_str(raw, "value", file=file, index=index),
        interpolated=bool(raw.get("interpolated", False)),
    )


def _decode_event(raw: Any, *, file: str, index: int) -> Event:
    if not isinstance(raw, Mapping):
        raise EventError("event must be an object", file=file, index=index)

    match raw.get("type"):
        case "router":
            framework = raw.get("framework", "generic")
            if framework not in _FRAMEWORKS:
                msg = f"unknown framework {framework!r}"
                raise EventError(msg, file=file, index=index)
            return RouterCreated(
                identifier=_require(raw, "identifier", str, file=file, index=index),
                callee=_decode_callee(raw.get("callee"), file=file, index=index),
                framework=framework,
            )
        case "mount":
            arguments = raw.get("arguments", [])
            if not isinstance(arguments, list):
                raise EventError("'arguments' must be a list", file=file, index=index)
            return PrefixMountAttempted(
                callee=_decode_callee(raw.get("callee"), file=file, index=index),
                arguments=tuple(_decode_argument(a, file=file, index=index) for a in arguments),
            )
        case "export":
            return RouterExported(identifier=_require(raw, "identifier", str, file=file, index=index))
        case "import":
            imported = _require(raw, "imported", str, file=file, index=index)
            return RouterImported(
                imported_name=imported,
                local_name=_optional_str(raw, "local", file=file, index=index) or imported,
                source=_require(raw, "source", str, file=file, index=index),
            )
        case "route":
            line = raw.get("line", 0)
            column = raw.get("column", 0)
            if not isinstance(line, int) or not isinstance(column, int):
                raise EventError("'line' and 'column' must be integers", file=file, index=index)
            return RouteRegistered(
                method=_require(raw, "method", str, file=file, index=index),
                path=_require(raw, "path", str, file=file, index=index),
                line=line,
                column=column,
                router=_optional_str(raw, "router", file=file, index=index),
            )
        case other:
            msg = f"unknown event type {other!r}"
            raise EventError(msg, file=file, index=index)


def load_events(data: Mapping[str, Any]) -> list[FileEvents]:
    """Decode an event document into ``FileEvents``, preserving order.

    Raises ``EventError`` on the first malformed file or event.
    """
    files = data.get("files")
    if not isinstance(files, Sequence) or isinstance(files, str):
        raise EventError("document needs a 'files' list")

    result: list[FileEvents] = []
    for position, entry in enumerate(files):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("path"), str):
            msg = f"file entry #{position} needs a string 'path'"
            raise EventError(msg)
        path = entry["path"]
        raw_events = entry.get("events", [])
        if not isinstance(raw_events, list):
            raise EventError("'events' must be a list", file=path)
        events = tuple(
            _decode_event(raw, file=path, index=index) for index, raw in enumerate(raw_events)
        )
        result.append(FileEvents(path=path, events=events))
    return result


def load_events_file(path: str | Path) -> list[FileEvents]:
    """Read and decode a JSON event document from disk.

    Raises ``OSError`` when the file cannot be read and ``EventError``
    when it is not a valid event document.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON: {exc}"
        raise EventError(msg, file=str(path)) from exc
    if not isinstance(data, Mapping):
        raise EventError("top-level JSON value must be an object", file=str(path))
    return load_events(data)
