"""Logging configuration model."""

from typing import Literal

from pydantic import BaseModel

type LogFormat = Literal["console", "json"]
type LogLevel = Literal["debug", "info", "warning", "error"]


class LoggingConfig(BaseModel, frozen=True):
    format: LogFormat = "console"
    level: LogLevel = "info"
