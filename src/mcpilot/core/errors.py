"""Base exception class for all mcpilot-specific errors."""


class McpilotError(Exception):
    """Base class for all mcpilot errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
