"""MCPILOT_* environment variables mapped onto config paths."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from mcpilot.config.infrastructure.errors import EnvOverrideError
from mcpilot.config.infrastructure.merge import RawConfig


@dataclass(frozen=True)
class EnvMapping:
    path: tuple[str, ...]
    transform: Callable[[str], object] = str


ENV_MAPPINGS: dict[str, EnvMapping] = {
    "MCPILOT_CONFIG_NAME": EnvMapping(path=("name",)),
    "MCPILOT_BLOCK_TAG": EnvMapping(path=("parser", "block_tag")),
    "MCPILOT_MAX_NESTING_DEPTH": EnvMapping(
        path=("parser", "max_nesting_depth"), transform=int
    ),
    "MCPILOT_LOG_FORMAT": EnvMapping(path=("logging", "format"), transform=str.lower),
    "MCPILOT_LOG_LEVEL": EnvMapping(path=("logging", "level"), transform=str.lower),
}


def collect_env_overrides(env: Mapping[str, str]) -> RawConfig:
    """
    Build a raw config fragment from the MCPILOT_* variables set in *env*.

    Unset and empty variables are ignored.

    Raises:
        EnvOverrideError: if a variable's value cannot be converted.
    """
    overrides: RawConfig = {}
    for var_name, mapping in ENV_MAPPINGS.items():
        value = env.get(var_name)
        if not value:
            continue
        try:
            converted = mapping.transform(value)
        except ValueError as exc:
            raise EnvOverrideError(var_name=var_name, value=value, reason=str(exc)) from exc
        _set_path(overrides, mapping.path, converted)
    return overrides


def _set_path(target: RawConfig, path: tuple[str, ...], value: object) -> None:
    current = target
    for key in path[:-1]:
        current = current.setdefault(key, {})
    current[path[-1]] = value
