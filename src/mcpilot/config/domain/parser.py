"""Parser configuration model."""

from pydantic import BaseModel, Field

from mcpilot.parser.domain.builder import DEFAULT_BLOCK_TAG
from mcpilot.parser.domain.parameters import DEFAULT_MAX_NESTING_DEPTH


class ParserConfig(BaseModel, frozen=True):
    # Tag name wrapping each tool-call block, e.g. <use_mcp_tool>.
    block_tag: str = Field(default=DEFAULT_BLOCK_TAG, pattern=r"^[A-Za-z_][\w.-]*$")
    max_nesting_depth: int = Field(default=DEFAULT_MAX_NESTING_DEPTH, ge=1)
