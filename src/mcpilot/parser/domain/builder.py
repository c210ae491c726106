"""Tool request building: turns one tool-call block into a ParsedToolRequest."""

import re
from collections.abc import Mapping

from mcpilot.parser.domain.errors import (
    InvalidStructureError,
    MalformedJsonError,
    MissingFieldError,
)
from mcpilot.parser.domain.parameters import (
    DEFAULT_MAX_NESTING_DEPTH,
    ParameterTree,
    ParameterValue,
    parse_parameters,
)
from mcpilot.parser.domain.request import ParsedToolRequest, ToolRequestCandidate
from mcpilot.parser.domain.validation import validate_tool_request
from mcpilot.parser.domain.value import load_strict_json

DEFAULT_BLOCK_TAG = "use_mcp_tool"

# Checked in this order; the first one absent or empty is reported.
REQUIRED_KEYS = ("server_name", "tool_name", "arguments")


def block_pattern(tag: str = DEFAULT_BLOCK_TAG) -> re.Pattern[str]:
    """Return the non-greedy pattern matching one ``<tag>...</tag>`` block."""
    escaped = re.escape(tag)
    return re.compile(rf"<{escaped}>(.*?)</{escaped}>", re.DOTALL)


_DEFAULT_BLOCK_PATTERN = block_pattern()


def build_tool_request(
    block: str,
    block_tag: str = DEFAULT_BLOCK_TAG,
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> ParsedToolRequest:
    """
    Build and validate a single tool request from a raw tool-call block.

    *block* must include its own ``<block_tag>`` delimiters; it is kept
    verbatim as the request's raw_text.

    Raises:
        InvalidStructureError: if *block* is not wrapped in the block markers,
            or arguments is not a mapping.
        MissingFieldError: if server_name, tool_name or arguments is absent
            or empty.
        MalformedJsonError: if textual arguments are not valid JSON.
        InvalidFormatError: if server_name or tool_name has an invalid format.
    """
    pattern = (
        _DEFAULT_BLOCK_PATTERN
        if block_tag == DEFAULT_BLOCK_TAG
        else block_pattern(block_tag)
    )
    match = pattern.search(block)
    if match is None:
        raise InvalidStructureError(field="block", raw_text=block)

    params = parse_parameters(match.group(1), max_nesting_depth=max_nesting_depth)
    _require_keys(params=params, raw_text=block)

    candidate = ToolRequestCandidate(
        tool_name=params["tool_name"],
        server_name=params["server_name"],
        arguments=_resolve_arguments(params["arguments"], raw_text=block),
        raw_text=block,
    )
    validate_tool_request(candidate)

    assert isinstance(candidate.tool_name, str)
    assert isinstance(candidate.server_name, str)
    assert isinstance(candidate.arguments, Mapping)
    return ParsedToolRequest(
        tool_name=candidate.tool_name,
        server_name=candidate.server_name,
        arguments=dict(candidate.arguments),
        raw_text=block,
    )


def _require_keys(params: ParameterTree, raw_text: str) -> None:
    for key in REQUIRED_KEYS:
        if params.get(key, "") == "":
            raise MissingFieldError(field=key, raw_text=raw_text)


def _resolve_arguments(value: ParameterValue, raw_text: str) -> object:
    """Parse textual arguments as JSON; pass structured values through."""
    if not isinstance(value, str):
        return value
    try:
        return load_strict_json(value)
    except ValueError as exc:
        raise MalformedJsonError(field="arguments", raw_text=raw_text) from exc
