"""YAML config loader — layers file, environment and overrides, then validates."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcpilot.config.domain.config import McpilotConfig
from mcpilot.config.domain.observer import ConfigObserver
from mcpilot.config.infrastructure.env_overrides import collect_env_overrides
from mcpilot.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
)
from mcpilot.config.infrastructure.merge import RawConfig, merge_config
from mcpilot.parser.domain.validation import is_valid_server_name

# Below this depth, ordinary nested arguments are already flattened to text.
_SHALLOW_NESTING_DEPTH = 4


class YamlConfigLoader:
    """Builds a McpilotConfig from defaults, a YAML file, MCPILOT_* env vars and overrides."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(
        self,
        path: Path | None = None,
        env: Mapping[str, str] | None = None,
        overrides: RawConfig | None = None,
    ) -> McpilotConfig:
        """
        Merge the config layers and return a validated McpilotConfig.

        Later layers win: defaults, then the YAML file at *path*, then the
        MCPILOT_* variables in *env*, then *overrides*.

        Raises:
            ConfigLoadError: if the file does not exist, is not valid YAML,
                or does not hold a mapping.
            EnvOverrideError: if an MCPILOT_* variable cannot be converted.
            ConfigValidationError: if a server name is invalid or the schema is violated.
        """
        merged: RawConfig = {}
        sources = ["defaults"]
        if path is not None:
            merged = merge_config(merged, _parse_yaml(path=path))
            sources.append(str(path))
        if env is not None:
            env_layer = collect_env_overrides(env)
            if env_layer:
                merged = merge_config(merged, env_layer)
                sources.append("environment")
        if overrides:
            merged = merge_config(merged, overrides)
            sources.append("overrides")

        _check_server_names(merged=merged)
        cfg = _build_config(merged=merged)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, sources=sources)
        return cfg


def _parse_yaml(path: Path) -> RawConfig:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path, reason="file not found") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigLoadError(
            path=path, reason=f"expected a mapping, got {type(raw).__name__}"
        )
    return raw


def _check_server_names(merged: Any) -> None:
    """
    Reject MCP server names that no parsed tool request could ever address.

    Raises:
        ConfigValidationError: listing ALL invalid names before raising.
    """
    mcp_raw = merged.get("mcp")
    servers_raw = mcp_raw.get("servers") if isinstance(mcp_raw, dict) else None
    if not isinstance(servers_raw, dict):
        # Shape errors are reported by schema validation.
        return

    invalid = [
        f"MCP server name '{name}' must match ^[a-z][a-z0-9-]*$"
        for name in servers_raw
        if not is_valid_server_name(name)
    ]
    if invalid:
        raise ConfigValidationError("; ".join(invalid))


def _build_config(merged: RawConfig) -> McpilotConfig:
    try:
        return McpilotConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: McpilotConfig, observer: ConfigObserver) -> None:
    if cfg.parser.max_nesting_depth < _SHALLOW_NESTING_DEPTH:
        observer.config_nesting_depth_warning(cfg.parser.max_nesting_depth)
