"""CLI entrypoint for mcpilot — typer app with `parse` and `validate-config` commands."""

import json
import logging
import os
import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from mcpilot.config.domain.config import McpilotConfig
from mcpilot.config.infrastructure.observer import StructlogConfigObserver
from mcpilot.config.infrastructure.yaml_loader import YamlConfigLoader
from mcpilot.core.errors import McpilotError
from mcpilot.parser.application.extractor import ToolRequestExtractor
from mcpilot.parser.domain.request import ParsedToolRequest
from mcpilot.parser.infrastructure.composite_observer import (
    CompositeToolRequestObserver,
)
from mcpilot.parser.infrastructure.observer import StructlogToolRequestObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str, log_level: str) -> None:
    """Configure structlog based on the requested format and level."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        typer.echo(f"Invalid log level: {log_level!r}.")
        raise typer.Exit(code=1)

    # Logs go to stderr so stdout carries only parsed requests.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


class _SkipCounter:
    """Counts skipped blocks for --strict."""

    def __init__(self) -> None:
        self.skipped = 0

    def tool_request_skipped(self, reason: str, field: str, message: str) -> None:
        self.skipped += 1


def _load_config(
    config_path: Path | None,
    log_format: str | None = None,
    log_level: str | None = None,
) -> McpilotConfig:
    # Command-line flags win over the file and MCPILOT_* variables.
    logging_overrides = {
        key: value.lower()
        for key, value in (("format", log_format), ("level", log_level))
        if value is not None
    }
    overrides = {"logging": logging_overrides} if logging_overrides else None
    return YamlConfigLoader(observer=StructlogConfigObserver()).load(
        path=config_path, env=os.environ, overrides=overrides
    )


def _read_input(input_path: Path | None) -> str:
    if input_path is None:
        return sys.stdin.read()
    if not input_path.exists():
        raise McpilotError(f"Failed to read input: file not found: {input_path}")
    return input_path.read_text(encoding="utf-8")


def _print_table(requests: list[ParsedToolRequest]) -> None:
    table = Table(title=f"Tool requests ({len(requests)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Server", style="cyan")
    table.add_column("Tool", style="green")
    table.add_column("Arguments")
    for idx, request in enumerate(requests):
        table.add_row(
            str(idx),
            request.server_name,
            request.tool_name,
            json.dumps(request.arguments, sort_keys=True),
        )
    Console().print(table)


@app.command()
def parse(
    input_path: Path | None = typer.Argument(
        None, help="Text file holding model output (default: stdin)"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to mcpilot config YAML"
    ),
    output: str = typer.Option(
        "json", "--output", "-o", help="Output format: 'json' or 'table'"
    ),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: 'console' or 'json'"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level"),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 1 if any block was skipped"
    ),
) -> None:
    """Extract tool requests from model output and print them."""
    if output not in ("json", "table"):
        typer.echo(f"Invalid output format: {output!r}. Must be 'json' or 'table'.")
        raise typer.Exit(code=1)

    try:
        # Bootstrap logging so config loading events are rendered too.
        _configure_structlog(log_format="console", log_level="info")
        config = _load_config(
            config_path=config_path, log_format=log_format, log_level=log_level
        )
        _configure_structlog(
            log_format=config.logging.format, log_level=config.logging.level
        )

        counter = _SkipCounter()
        extractor = ToolRequestExtractor(
            observer=CompositeToolRequestObserver(
                observers=[StructlogToolRequestObserver(), counter]
            ),
            block_tag=config.parser.block_tag,
            max_nesting_depth=config.parser.max_nesting_depth,
        )
        requests = extractor.extract(_read_input(input_path=input_path))
    except typer.Exit:
        raise
    except McpilotError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.", err=True)
        raise typer.Exit(code=1) from exc

    if output == "table":
        _print_table(requests=requests)
    else:
        for request in requests:
            typer.echo(json.dumps(request.model_dump()))

    if strict and counter.skipped:
        typer.echo(f"{counter.skipped} tool request(s) skipped", err=True)
        raise typer.Exit(code=1)


@app.command("validate-config")
def validate_config(
    config_path: Path = typer.Argument(..., help="Path to mcpilot config YAML"),
) -> None:
    """Load and validate a config file."""
    _configure_structlog(log_format="console", log_level="info")
    try:
        config = _load_config(config_path=config_path)
    except McpilotError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(
        f"Config '{config.name}' is valid:"
        f" {len(config.mcp.servers)} MCP server(s),"
        f" block tag <{config.parser.block_tag}>"
    )
    for name, server in config.mcp.servers.items():
        suffix = f": {server.description}" if server.description else ""
        typer.echo(f"  {name}{suffix}")


if __name__ == "__main__":
    app()
