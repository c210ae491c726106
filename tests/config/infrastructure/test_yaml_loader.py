"""Tests for YAML config loading infrastructure."""

from pathlib import Path

import pytest

from mcpilot.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    EnvOverrideError,
)
from mcpilot.config.infrastructure.yaml_loader import YamlConfigLoader
from tests.config.fake_observer import FakeConfigObserver

# Fixtures directory is absolute so tests are location-independent
# __file__ is tests/config/infrastructure/test_yaml_loader.py
# parent.parent.parent is the tests/ directory
FIXTURES = Path(__file__).parent.parent.parent / "fixtures"


def _fixture(name: str) -> Path:
    return FIXTURES / name


class TestValidConfigLoading:
    """A valid YAML config loads correctly with all fields populated."""

    def test_loads_name(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml")
        )
        assert cfg.name == "assistant-tools"

    def test_loads_parser_settings(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml")
        )
        assert cfg.parser.block_tag == "use_mcp_tool"
        assert cfg.parser.max_nesting_depth == 16

    def test_loads_logging_settings(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml")
        )
        assert cfg.logging.format == "json"
        assert cfg.logging.level == "warning"

    def test_loads_mcp_servers(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml")
        )
        assert cfg.mcp.servers["weather"].description == (
            "Forecasts and current conditions"
        )
        assert list(cfg.mcp.servers) == ["weather", "file-system"]

    def test_unset_sections_use_defaults(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("shallow_depth.yaml")
        )
        assert cfg.parser.block_tag == "use_mcp_tool"
        assert cfg.mcp.servers == {}

    def test_emits_config_loaded_event(self) -> None:
        observer = FakeConfigObserver()
        path = _fixture("valid_config.yaml")
        YamlConfigLoader(observer=observer).load(path=path)

        assert observer.loaded == [
            {"name": "assistant-tools", "sources": ["defaults", str(path)]}
        ]


class TestLayering:
    """Later layers win: defaults, file, environment, overrides."""

    def test_no_layers_gives_defaults(self) -> None:
        observer = FakeConfigObserver()
        cfg = YamlConfigLoader(observer=observer).load()

        assert cfg.name == "mcpilot"
        assert observer.loaded == [{"name": "mcpilot", "sources": ["defaults"]}]

    def test_environment_overrides_file(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml"),
            env={"MCPILOT_MAX_NESTING_DEPTH": "8", "MCPILOT_LOG_LEVEL": "DEBUG"},
        )

        assert cfg.parser.max_nesting_depth == 8
        assert cfg.parser.block_tag == "use_mcp_tool"
        assert cfg.logging.level == "debug"
        assert cfg.logging.format == "json"

    def test_overrides_win_over_environment(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            env={"MCPILOT_BLOCK_TAG": "tool_call"},
            overrides={"parser": {"block_tag": "invoke"}},
        )
        assert cfg.parser.block_tag == "invoke"

    def test_override_servers_merge_by_name(self) -> None:
        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(
            path=_fixture("valid_config.yaml"),
            overrides={"mcp": {"servers": {"github": {"description": "Issues"}}}},
        )
        assert list(cfg.mcp.servers) == ["weather", "file-system", "github"]

    def test_unrelated_environment_is_not_a_source(self) -> None:
        observer = FakeConfigObserver()
        YamlConfigLoader(observer=observer).load(env={"HOME": "/root"})

        assert observer.loaded[0]["sources"] == ["defaults"]

    def test_sources_are_reported_in_order(self) -> None:
        observer = FakeConfigObserver()
        path = _fixture("shallow_depth.yaml")
        YamlConfigLoader(observer=observer).load(
            path=path,
            env={"MCPILOT_CONFIG_NAME": "ci"},
            overrides={"logging": {"format": "json"}},
        )

        assert observer.loaded == [
            {
                "name": "ci",
                "sources": ["defaults", str(path), "environment", "overrides"],
            }
        ]

    def test_bad_environment_value_raises_env_override_error(self) -> None:
        with pytest.raises(EnvOverrideError):
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                env={"MCPILOT_MAX_NESTING_DEPTH": "deep"}
            )

    def test_environment_value_is_schema_validated(self) -> None:
        with pytest.raises(ConfigValidationError):
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                env={"MCPILOT_LOG_FORMAT": "xml"}
            )


class TestServerNameValidation:
    """Server names that no tool request could address fail at load time."""

    def test_all_invalid_names_reported(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                path=_fixture("invalid_server_name.yaml")
            )

        message = str(exc_info.value)
        assert message.startswith("Failed to ")
        assert "Weather" in message
        assert "file_system" in message

    def test_override_server_names_are_checked(self) -> None:
        with pytest.raises(ConfigValidationError):
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                overrides={"mcp": {"servers": {"My_Server": {}}}}
            )


class TestSchemaValidation:
    def test_schema_violation_raises_config_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                path=_fixture("invalid_schema.yaml")
            )
        assert "max_nesting_depth" in str(exc_info.value)


class TestFileErrors:
    def test_missing_file_raises_config_load_error(self) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                path=Path("/nonexistent/mcpilot.yaml")
            )
        assert str(exc_info.value).startswith("Failed to ")
        assert "file not found" in str(exc_info.value)

    def test_invalid_yaml_raises_config_load_error(self) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                path=_fixture("invalid_yaml.yaml")
            )
        assert "invalid YAML" in str(exc_info.value)

    def test_non_mapping_document_raises_config_load_error(self) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(observer=FakeConfigObserver()).load(
                path=_fixture("list_config.yaml")
            )
        assert "expected a mapping, got list" in str(exc_info.value)

    def test_empty_file_loads_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        cfg = YamlConfigLoader(observer=FakeConfigObserver()).load(path=path)

        assert cfg.name == "mcpilot"


class TestNestingDepthWarning:
    """A very low nesting depth triggers an observer warning."""

    def test_shallow_depth_emits_warning(self) -> None:
        observer = FakeConfigObserver()
        YamlConfigLoader(observer=observer).load(path=_fixture("shallow_depth.yaml"))

        assert observer.warnings == [{"max_nesting_depth": 2}]

    def test_normal_depth_no_warning(self) -> None:
        observer = FakeConfigObserver()
        YamlConfigLoader(observer=observer).load(path=_fixture("valid_config.yaml"))

        assert observer.warnings == []

    def test_environment_depth_is_checked(self) -> None:
        observer = FakeConfigObserver()
        YamlConfigLoader(observer=observer).load(
            env={"MCPILOT_MAX_NESTING_DEPTH": "3"}
        )

        assert observer.warnings == [{"max_nesting_depth": 3}]
