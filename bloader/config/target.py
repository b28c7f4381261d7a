"""Target section of the configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bloader.config.basic import ConfigError, _mapping_list, _opt_str, _section


class TargetType(StrEnum):
    HTTP = "http"


@dataclass(frozen=True)
class TargetValueConfig:
    """The address of a target in one environment."""

    env: str
    url: str


@dataclass(frozen=True)
class TargetRespectiveConfig:
    """One named target and its per-environment addresses."""

    id: str
    type: TargetType
    values: tuple[TargetValueConfig, ...] = ()


def validate_target_value(raw: Any) -> TargetValueConfig:
    """Validate the address of a target for one environment."""
    section = _section(raw, "target value")
    env = _opt_str(section, "env")
    if env is None:
        raise ConfigError("target value env is required")
    url = _opt_str(section, "url")
    if url is None:
        raise ConfigError("target value url is required")
    return TargetValueConfig(env=env, url=url)


def validate_targets(raw: Any) -> tuple[TargetRespectiveConfig, ...]:
    """Validate the list of targets; ids must be present and unique."""
    entries = _mapping_list({"targets": raw}, "targets", "targets")
    seen: set[str] = set()
    targets = []
    for index, entry in enumerate(entries):
        prefix = f"target[{index}]"
        target_id = _opt_str(entry, "id")
        if target_id is None:
            raise ConfigError(f"{prefix}.id: target id is required")
        if target_id in seen:
            raise ConfigError(f"{prefix}.id: duplicate target id {target_id!r}")
        seen.add(target_id)

        type_text = _opt_str(entry, "type")
        if type_text is None:
            raise ConfigError(f"{prefix}.type: target type is required")
        try:
            target_type = TargetType(type_text)
        except ValueError as exc:
            raise ConfigError(f"{prefix}.type: invalid target type {type_text!r}") from exc

        values = []
        for value_index, value in enumerate(_mapping_list(entry, "values", f"{prefix}.values")):
            try:
                values.append(validate_target_value(value))
            except ConfigError as exc:
                raise ConfigError(f"{prefix}.values[{value_index}]: {exc}") from exc
        targets.append(TargetRespectiveConfig(id=target_id, type=target_type, values=tuple(values)))
    return tuple(targets)