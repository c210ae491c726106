"""Section-wise merging of raw config layers."""

from typing import Any

type RawConfig = dict[str, Any]


def merge_config(base: RawConfig, source: RawConfig) -> RawConfig:
    """
    Return *base* with *source* layered on top, leaving both untouched.

    Top-level scalars are replaced. Sections (parser, logging, ...) are merged
    key by key. MCP servers are merged by server name, each entry replaced
    whole.
    """
    merged: RawConfig = dict(base)
    for key, value in source.items():
        current = merged.get(key)
        if key == "mcp" and isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _merge_mcp(current, value)
        elif isinstance(value, dict) and isinstance(current, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def _merge_mcp(base: RawConfig, source: RawConfig) -> RawConfig:
    merged = {**base, **source}
    base_servers = base.get("servers")
    source_servers = source.get("servers")
    if isinstance(base_servers, dict) and isinstance(source_servers, dict):
        merged["servers"] = {**base_servers, **source_servers}
    return merged
