"""ToolRequestExtractor: finds every tool-call block in a text and builds requests."""

from mcpilot.parser.domain.builder import (
    DEFAULT_BLOCK_TAG,
    block_pattern,
    build_tool_request,
)
from mcpilot.parser.domain.errors import ToolRequestParseError
from mcpilot.parser.domain.observer import ToolRequestObserver
from mcpilot.parser.domain.parameters import DEFAULT_MAX_NESTING_DEPTH
from mcpilot.parser.domain.request import ParsedToolRequest


class ToolRequestExtractor:
    """Extracts all valid tool requests from a text, skipping malformed blocks."""

    def __init__(
        self,
        observer: ToolRequestObserver,
        block_tag: str = DEFAULT_BLOCK_TAG,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        self._observer = observer
        self._block_tag = block_tag
        self._max_nesting_depth = max_nesting_depth
        self._pattern = block_pattern(block_tag)

    def extract(self, text: str) -> list[ParsedToolRequest]:
        """
        Return the valid tool requests in *text*, in document order.

        Each block runs from an opening marker to the nearest closing marker.
        A block that fails with ToolRequestParseError is reported once through
        the observer and skipped.

        Raises:
            Exception: any error that is not a ToolRequestParseError aborts the
                whole extraction.
        """
        requests: list[ParsedToolRequest] = []
        for match in self._pattern.finditer(text):
            try:
                request = build_tool_request(
                    block=match.group(0),
                    block_tag=self._block_tag,
                    max_nesting_depth=self._max_nesting_depth,
                )
            except ToolRequestParseError as exc:
                self._observer.tool_request_skipped(
                    reason=str(exc.reason),
                    field=exc.field,
                    message=str(exc),
                )
                continue
            requests.append(request)
        return requests
