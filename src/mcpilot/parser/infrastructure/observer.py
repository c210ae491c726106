"""Structlog implementation of the ToolRequestObserver port."""

import structlog


class StructlogToolRequestObserver:
    """Delegates parser domain events to structlog.

    Satisfies the ToolRequestObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def tool_request_skipped(self, reason: str, field: str, message: str) -> None:
        self._log.warning(
            "parser.tool_request_skipped",
            reason=reason,
            field=field,
            message=message,
        )
