"""Override settings: values or files layered over the loaded configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from bloader.config.basic import (
    ConfigError,
    EnabledEnv,
    _as_bool,
    _mapping_list,
    _opt_str,
    _section,
    _str_list,
)


class OverrideType(StrEnum):
    STATIC = "static"
    FILE = "file"


class OverrideFileType(StrEnum):
    YAML = "yaml"


@dataclass(frozen=True)
class OverrideVarConfig:
    """Copy the value at ``value`` in the override file to ``key`` in the configuration."""

    key: str
    value: str


@dataclass(frozen=True)
class OverrideRespectiveConfig:
    """One override: a static key and value, or a file merged whole or in part."""

    type: OverrideType
    file_type: OverrideFileType | None = None
    path: str = ""
    partial: bool = False
    vars: tuple[OverrideVarConfig, ...] = ()
    key: str = ""
    value: str = ""
    enabled_env: EnabledEnv = field(default_factory=EnabledEnv)


def validate_override_var(raw: Any) -> OverrideVarConfig:
    """Validate one variable of a partial file override."""
    section = _section(raw, "override var")
    key = _opt_str(section, "key")
    if key is None:
        raise ConfigError("override var key is required")
    value = _opt_str(section, "value")
    if value is None:
        raise ConfigError("override var value is required")
    return OverrideVarConfig(key=key, value=value)


def _validate_one(index: int, entry: Any) -> OverrideRespectiveConfig:
    prefix = f"override[{index}]"
    type_text = _opt_str(entry, "type")
    if type_text is None:
        raise ConfigError(f"{prefix}: override type is required")
    try:
        override_type = OverrideType(type_text)
    except ValueError as exc:
        raise ConfigError(f"invalid override type {type_text!r}") from exc

    enabled_env = EnabledEnv.from_raw(_str_list(entry, "enabled_env"))

    if override_type is OverrideType.STATIC:
        key = _opt_str(entry, "key")
        if key is None:
            raise ConfigError(f"{prefix}: override key is required")
        value = _opt_str(entry, "value")
        if value is None:
            raise ConfigError(f"{prefix}: override value is required")
        return OverrideRespectiveConfig(
            type=override_type, key=key, value=value, enabled_env=enabled_env
        )

    file_type_text = _opt_str(entry, "file_type")
    if file_type_text is None:
        raise ConfigError(f"{prefix}: override file type is required")
    try:
        file_type = OverrideFileType(file_type_text)
    except ValueError as exc:
        raise ConfigError(f"{prefix}: invalid override file type {file_type_text!r}") from exc
    path = _opt_str(entry, "path")
    if path is None:
        raise ConfigError(f"{prefix}: override path is required")
    partial = _as_bool(entry, "partial")

    variables: list[OverrideVarConfig] = []
    if partial:
        for var_index, var in enumerate(_mapping_list(entry, "vars", f"{prefix}.vars")):
            try:
                variables.append(validate_override_var(var))
            except ConfigError as exc:
                raise ConfigError(f"{prefix}.vars[{var_index}]: {exc}") from exc

    return OverrideRespectiveConfig(
        type=override_type,
        file_type=file_type,
        path=path,
        partial=partial,
        vars=tuple(variables),
        enabled_env=enabled_env,
    )


def validate_overrides(raw: Any) -> tuple[OverrideRespectiveConfig, ...]:
    """Validate the list of overrides."""
    entries = _mapping_list({"override": raw}, "override", "override")
    return tuple(_validate_one(index, entry) for index, entry in enumerate(entries))