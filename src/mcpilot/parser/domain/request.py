"""ParsedToolRequest and ToolRequestCandidate: the tool request value objects."""

from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel, Field


class ParsedToolRequest(BaseModel, frozen=True):
    """A validated request to invoke one tool on one MCP server.

    Handed to the dispatcher by value; raw_text is the matched block, kept for
    diagnostics and replay.
    """

    tool_name: str = Field(pattern=r"^[a-z][a-z0-9_]*$")
    server_name: str = Field(pattern=r"^[a-z][a-z0-9-]*$")
    arguments: dict[str, object]
    raw_text: str


@dataclass(frozen=True)
class ToolRequestCandidate:
    """An assembled but not yet validated tool request.

    Fields are untyped on purpose: candidates may come from markup or be built
    by callers, and the validator decides whether they hold up.
    """

    tool_name: object
    server_name: object
    arguments: object
    raw_text: str = ""


class RequestCandidate(Protocol):
    """Anything exposing the four tool request attributes."""

    @property
    def tool_name(self) -> object: ...

    @property
    def server_name(self) -> object: ...

    @property
    def arguments(self) -> object: ...

    @property
    def raw_text(self) -> str: ...
