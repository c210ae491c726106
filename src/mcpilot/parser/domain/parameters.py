"""Parameter tree parsing: turns nested ``<name>...</name>`` pairs into a mapping.

Tag pairs are matched with a name backreference, so the closing tag must
repeat the opening name and the first such closing tag ends the pair. A pair
whose closing tag is missing or misnamed produces no entry at all.

Repeated sibling names overwrite: only the last occurrence in document order
survives. Markup that repeats an argument name therefore loses the earlier
values.
"""

import re

from mcpilot.parser.domain.value import Value, normalize_value

type ParameterValue = Value | ParameterTree
type ParameterTree = dict[str, ParameterValue]

DEFAULT_MAX_NESTING_DEPTH = 32

_TAG_PAIR_PATTERN = re.compile(r"<([^>]+)>(.*?)</\1>", re.DOTALL)


def has_nested_tags(content: str) -> bool:
    """Return True if *content* holds at least one complete tag pair."""
    return _TAG_PAIR_PATTERN.search(content.strip()) is not None


def parse_parameters(
    content: str, max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
) -> ParameterTree:
    """Parse every tag pair in *content* into a ParameterTree.

    Inner content that itself holds tag pairs becomes a nested tree. When that
    nested parse fails (the nesting goes deeper than *max_nesting_depth*) the
    inner content is normalized as a scalar instead.
    """
    return _parse_level(content=content, depth=1, max_depth=max_nesting_depth)


def _parse_level(content: str, depth: int, max_depth: int) -> ParameterTree:
    parameters: ParameterTree = {}
    for match in _TAG_PAIR_PATTERN.finditer(content):
        name, inner = match.group(1), match.group(2)
        parameters[name] = _parse_value(inner=inner, depth=depth, max_depth=max_depth)
    return parameters


def _parse_value(inner: str, depth: int, max_depth: int) -> ParameterValue:
    if not has_nested_tags(inner):
        return normalize_value(inner)

    nested = _try_parse_nested(inner=inner, depth=depth + 1, max_depth=max_depth)
    if nested is None:
        return normalize_value(inner)
    return nested


def _try_parse_nested(inner: str, depth: int, max_depth: int) -> ParameterTree | None:
    """Return the nested tree for *inner*, or None when it cannot be parsed."""
    if depth > max_depth:
        return None
    return _parse_level(content=inner, depth=depth, max_depth=max_depth)
