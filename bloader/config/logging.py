"""Logging section of the configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from bloader.config.basic import ConfigError, EnabledEnv, _mapping_list, _opt_str, _section, _str_list


class LoggingOutputType(StrEnum):
    FILE = "file"
    STDOUT = "stdout"
    TCP = "tcp"


class LoggingOutputFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


class LoggingOutputLevel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class LoggingOutputConfig:
    """One log destination."""

    type: LoggingOutputType
    format: LoggingOutputFormat
    level: LoggingOutputLevel = LoggingOutputLevel.INFO
    filename: str = ""
    address: str = ""
    enabled_env: EnabledEnv = field(default_factory=EnabledEnv)


@dataclass(frozen=True)
class LoggingConfig:
    """All log destinations."""

    output: tuple[LoggingOutputConfig, ...] = ()


def _validate_output(index: int, raw: Any) -> LoggingOutputConfig:
    prefix = f"output[{index}]"
    type_text = _opt_str(raw, "type")
    if type_text is None:
        raise ConfigError(f"{prefix}.type: logging output type is required")
    format_text = _opt_str(raw, "format")
    if format_text is None:
        raise ConfigError(f"{prefix}.format: logging output format is required")
    level_text = _opt_str(raw, "level")
    if level_text is None:
        raise ConfigError(f"{prefix}.level: logging output level is required")

    filename = address = ""
    try:
        output_type = LoggingOutputType(type_text)
    except ValueError as exc:
        raise ConfigError(f"{prefix}.type: invalid logging output type {type_text!r}") from exc
    if output_type is LoggingOutputType.FILE:
        filename = _opt_str(raw, "filename")
        if filename is None:
            raise ConfigError(f"{prefix}.filename: logging output filename is required")
    elif output_type is LoggingOutputType.TCP:
        address = _opt_str(raw, "address")
        if address is None:
            raise ConfigError(f"{prefix}.address: logging output address is required")

    try:
        output_format = LoggingOutputFormat(format_text)
    except ValueError as exc:
        raise ConfigError(f"{prefix}.format: invalid logging output format {format_text!r}") from exc
    try:
        level = LoggingOutputLevel(level_text)
    except ValueError as exc:
        raise ConfigError(f"{prefix}.level: invalid logging output level {level_text!r}") from exc

    return LoggingOutputConfig(
        type=output_type,
        format=output_format,
        level=level,
        filename=filename,
        address=address,
        enabled_env=EnabledEnv.from_raw(_str_list(raw, "enabled_env")),
    )


def validate_logging(raw: Any) -> LoggingConfig:
    """Validate the logging section."""
    section = _section(raw, "logging")
    outputs = _mapping_list(section, "output", "output")
    return LoggingConfig(
        output=tuple(_validate_output(index, entry) for index, entry in enumerate(outputs))
    )