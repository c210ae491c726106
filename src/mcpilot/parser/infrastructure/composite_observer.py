"""CompositeToolRequestObserver — fans out all events to a list of observers."""

from mcpilot.parser.domain.observer import ToolRequestObserver


class CompositeToolRequestObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from ToolRequestObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[ToolRequestObserver]) -> None:
        self._observers = observers

    def tool_request_skipped(self, reason: str, field: str, message: str) -> None:
        for obs in self._observers:
            obs.tool_request_skipped(reason=reason, field=field, message=message)
