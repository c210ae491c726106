"""Observer port for the parser domain — defines events in domain language."""

from typing import Protocol


class ToolRequestObserver(Protocol):
    """Observer port for tool request extraction events.

    Implementations may log to structlog or record for tests.
    """

    def tool_request_skipped(self, reason: str, field: str, message: str) -> None: ...
