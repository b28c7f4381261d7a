"""Output section of the configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bloader.config.basic import ConfigError, _mapping_list, _opt_str, _section


class OutputType(StrEnum):
    LOCAL = "local"


class OutputFormat(StrEnum):
    CSV = "csv"


@dataclass(frozen=True)
class OutputValueConfig:
    """Where and how one environment writes an output."""

    env: str
    type: OutputType
    format: OutputFormat
    base_path: str


@dataclass(frozen=True)
class OutputRespectiveConfig:
    """One named output and its per-environment settings."""

    id: str
    values: tuple[OutputValueConfig, ...] = ()


def validate_output_value(raw: Any) -> OutputValueConfig:
    """Validate the setting of one output for one environment."""
    section = _section(raw, "output value")
    env = _opt_str(section, "env")
    if env is None:
        raise ConfigError("output value env is required")
    type_text = _opt_str(section, "type")
    if type_text is None:
        raise ConfigError("output value type is required")
    try:
        output_type = OutputType(type_text)
    except ValueError as exc:
        raise ConfigError(f"invalid output value type {type_text!r}") from exc

    format_text = _opt_str(section, "format")
    if format_text is None:
        raise ConfigError("output value format is required")
    try:
        output_format = OutputFormat(format_text)
    except ValueError as exc:
        raise ConfigError(f"invalid output value format {format_text!r}") from exc
    base_path = _opt_str(section, "base_path")
    if base_path is None:
        raise ConfigError("output value base path is required")
    return OutputValueConfig(env=env, type=output_type, format=output_format, base_path=base_path)


def validate_outputs(raw: Any) -> tuple[OutputRespectiveConfig, ...]:
    """Validate the list of outputs; ids must be present and unique."""
    entries = _mapping_list({"outputs": raw}, "outputs", "outputs")
    seen: set[str] = set()
    outputs = []
    for index, entry in enumerate(entries):
        output_id = _opt_str(entry, "id")
        if output_id is None:
            raise ConfigError("output id is required")
        if output_id in seen:
            raise ConfigError(f"duplicate output id {output_id!r}")
        seen.add(output_id)

        values = []
        for value_index, value in enumerate(_mapping_list(entry, "values", f"output[{index}].values")):
            try:
                values.append(validate_output_value(value))
            except ConfigError as exc:
                raise ConfigError(f"output[{index}].values[{value_index}]: {exc}") from exc
        outputs.append(OutputRespectiveConfig(id=output_id, values=tuple(values)))
    return tuple(outputs)