"""Error types raised by config infrastructure."""

from pathlib import Path

from mcpilot.core.errors import McpilotError


class ConfigLoadError(McpilotError):
    """Raised when the config file is missing, unreadable, or not a YAML mapping."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load config file {path}: {reason}")


class EnvOverrideError(McpilotError):
    """Raised when an MCPILOT_* environment variable holds an unusable value."""

    def __init__(self, var_name: str, value: str, reason: str) -> None:
        self.var_name = var_name
        super().__init__(
            f"Failed to apply environment override {var_name}={value!r}: {reason}"
        )


class ConfigValidationError(McpilotError):
    """Raised when the merged config fails schema or semantic validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")
