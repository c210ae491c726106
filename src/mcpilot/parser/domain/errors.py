"""ParseFailure error types: recoverable, block-scoped tool request failures."""

from enum import StrEnum

from mcpilot.core.errors import McpilotError


class ParseFailureReason(StrEnum):
    MISSING_FIELD = "missing-field"
    MALFORMED_JSON = "malformed-json"
    INVALID_FORMAT = "invalid-format"
    INVALID_STRUCTURE = "invalid-structure"


class ToolRequestParseError(McpilotError):
    """Raised when a single tool-call block cannot become a valid request.

    Recoverable: the batch extractor logs it and skips the offending block.
    Any error that is NOT a ToolRequestParseError aborts the batch.
    """

    def __init__(
        self,
        reason: ParseFailureReason,
        field: str,
        detail: str,
        raw_text: str = "",
    ) -> None:
        super().__init__(f"Failed to parse tool request: {detail}")
        self.reason = reason
        self.field = field
        self.raw_text = raw_text


class MissingFieldError(ToolRequestParseError):
    """Raised when a required field is absent or empty."""

    def __init__(self, field: str, raw_text: str = "") -> None:
        super().__init__(
            reason=ParseFailureReason.MISSING_FIELD,
            field=field,
            detail=f"missing {field}",
            raw_text=raw_text,
        )


class MalformedJsonError(ToolRequestParseError):
    """Raised when a text payload that must be JSON does not parse."""

    def __init__(self, field: str, raw_text: str = "") -> None:
        super().__init__(
            reason=ParseFailureReason.MALFORMED_JSON,
            field=field,
            detail=f"invalid JSON in {field}",
            raw_text=raw_text,
        )


class InvalidFormatError(ToolRequestParseError):
    """Raised when a name field does not match its required pattern."""

    def __init__(self, field: str, value: object, raw_text: str = "") -> None:
        super().__init__(
            reason=ParseFailureReason.INVALID_FORMAT,
            field=field,
            detail=f"invalid {field} format: {value!r}",
            raw_text=raw_text,
        )
        self.value = value


class InvalidStructureError(ToolRequestParseError):
    """Raised when a field or block does not have the required shape."""

    def __init__(self, field: str, raw_text: str = "") -> None:
        super().__init__(
            reason=ParseFailureReason.INVALID_STRUCTURE,
            field=field,
            detail=f"invalid or missing {field} structure",
            raw_text=raw_text,
        )
