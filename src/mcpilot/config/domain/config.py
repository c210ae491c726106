"""Top-level McpilotConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from mcpilot.config.domain.logging import LoggingConfig
from mcpilot.config.domain.parser import ParserConfig

type ServerName = str


class McpServerEntry(BaseModel, frozen=True):
    """A server that tool requests are expected to address."""

    description: str = ""


class McpConfig(BaseModel, frozen=True):
    servers: dict[ServerName, McpServerEntry] = Field(default_factory=dict)


class McpilotConfig(BaseModel, frozen=True):
    """Root configuration aggregate for mcpilot."""

    name: str = Field(default="mcpilot", min_length=1)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)


def default_config() -> McpilotConfig:
    """Return a config with every setting at its default."""
    return McpilotConfig()
