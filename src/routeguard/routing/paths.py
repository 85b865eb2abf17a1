"""Slash handling for router prefixes and effective paths."""

import re

_REPEATED_SLASHES = re.compile(r"/+")


def join_paths(*parts: str) -> str:
    """Join path fragments into one absolute path.

    Each fragment loses its leading and trailing slashes, empty fragments
    are dropped, and the rest are joined with single slashes::

        join_paths("", "/users")          -> "/users"
        join_paths("/api/", "//users//")  -> "/api/users"
        join_paths("/", "/")              -> "/"
    """
    joined = "/".join(stripped for part in parts if (stripped := part.strip("/")))
    joined = _REPEATED_SLASHES.sub("/", joined)
    return f"/{joined}" if joined else "/"


def is_root_path(path: str | None) -> bool:
    """True for ``None``, ``""`` and ``"/"``: prefixes that contribute nothing."""
    return not path or path == "/"


def path_segments(path: str) -> list[str]:
    """Split *path* on ``/``, dropping empty fragments."""
    return [part for part in path.split("/") if part]
