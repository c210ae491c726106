"""Tool request validation: required fields, argument shape, and name formats."""

import re
from collections.abc import Mapping

from mcpilot.parser.domain.errors import (
    InvalidFormatError,
    InvalidStructureError,
    MissingFieldError,
)
from mcpilot.parser.domain.request import RequestCandidate

TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")
# Server names additionally allow hyphens.
SERVER_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")


def is_valid_tool_name(name: object) -> bool:
    return isinstance(name, str) and TOOL_NAME_PATTERN.fullmatch(name) is not None


def is_valid_server_name(name: object) -> bool:
    return isinstance(name, str) and SERVER_NAME_PATTERN.fullmatch(name) is not None


def validate_tool_request(candidate: RequestCandidate) -> None:
    """
    Check a candidate tool request, stopping at the first failure.

    Checks run in a fixed order: tool_name present, server_name present,
    arguments is a mapping, server_name format, tool_name format.

    Raises:
        MissingFieldError: if tool_name or server_name is absent or empty.
        InvalidStructureError: if arguments is not a mapping.
        InvalidFormatError: if server_name or tool_name has an invalid format.
    """
    raw_text = candidate.raw_text

    if _is_blank(candidate.tool_name):
        raise MissingFieldError(field="tool_name", raw_text=raw_text)

    if _is_blank(candidate.server_name):
        raise MissingFieldError(field="server_name", raw_text=raw_text)

    if not isinstance(candidate.arguments, Mapping):
        raise InvalidStructureError(field="arguments", raw_text=raw_text)

    if not is_valid_server_name(candidate.server_name):
        raise InvalidFormatError(
            field="server_name", value=candidate.server_name, raw_text=raw_text
        )

    if not is_valid_tool_name(candidate.tool_name):
        raise InvalidFormatError(
            field="tool_name", value=candidate.tool_name, raw_text=raw_text
        )


def _is_blank(value: object) -> bool:
    return value is None or value == ""
