"""routeguard exception hierarchy.

The engine itself never raises during an analysis run. These exceptions
are reserved for the API boundary: invalid configuration and malformed
event documents.
"""


class RouteGuardError(Exception):
    """Base for all routeguard-specific errors."""


class ConfigurationError(RouteGuardError):
    """Raised when analysis configuration is invalid.

    Typically raised by ``validate_config()`` before a run starts.
    """


class EventError(RouteGuardError):
    """Raised when an extraction-layer event document cannot be decoded.

    The message names the offending file and event position so the
    producer of the document can be fixed.
    """

    def __init__(self, message: str, *, file: str | None = None, index: int | None = None) -> None:
        self.file = file
        self.index = index
        location = ""
        if file is not None:
            location = f"{file}"
            if index is not None:
                location += f" (event #{index})"
            location += ": "
        super().__init__(f"{location}{message}")
