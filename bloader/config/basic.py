"""Configuration error type, shared field readers and small sections."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ConfigError(ValueError):
    """A configuration value is missing or invalid."""


_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False", ""})


def _section(raw: Any, name: str = "configuration") -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{name}: expected a mapping, got {type(raw).__name__}")
    return raw


def _opt_str(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    raise ConfigError(f"{key}: expected a string, got {type(value).__name__}")


def _opt_int(raw: Mapping[str, Any], key: str) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError as exc:
            raise ConfigError(f"{key}: cannot parse {value!r} as an integer") from exc
    raise ConfigError(f"{key}: expected an integer, got {type(value).__name__}")


def _as_bool(raw: Mapping[str, Any], key: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
        raise ConfigError(f"{key}: cannot parse {value!r} as a boolean")
    raise ConfigError(f"{key}: expected a boolean, got {type(value).__name__}")


def _str_list(raw: Mapping[str, Any], key: str) -> list[str] | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        value = [value]
    if isinstance(value, Mapping) or not isinstance(value, Iterable):
        raise ConfigError(f"{key}: expected a list, got {type(value).__name__}")
    return [_opt_str({key: item}, key) or "" for item in value]


def _mapping_list(raw: Mapping[str, Any], key: str, name: str) -> list[Mapping[str, Any]]:
    value = raw.get(key)
    if value is None:
        return []
    if isinstance(value, Mapping):
        value = [value]
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ConfigError(f"{name}: expected a list, got {type(value).__name__}")
    return [_section(item, f"{name}[{index}]") for index, item in enumerate(value)]


@dataclass(frozen=True)
class EnabledEnv:
    """The environments a setting applies to; ``all`` means every one."""

    all: bool = True
    values: tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, values: Any) -> EnabledEnv:
        """Build from a raw list of environment names, or None for all."""
        if values is None:
            return cls(all=True)
        if isinstance(values, str):
            values = [values]
        return cls(all=False, values=tuple(str(value) for value in values))

    def allows(self, env: str) -> bool:
        """Tell whether the setting applies in ``env``."""
        return self.all or env in self.values


@dataclass(frozen=True)
class LoaderConfig:
    """Where loader definitions are read from."""

    base_path: str


@dataclass(frozen=True)
class ServerConfig:
    """Local server ports; ``redirect_port`` is None when not set."""

    port: int
    redirect_port: int | None = None


class LanguageType(StrEnum):
    ENGLISH = "en"
    JAPANESE = "ja"


@dataclass(frozen=True)
class LanguageConfig:
    """The default language for messages."""

    default: LanguageType


def validate_loader(raw: Any) -> LoaderConfig:
    """Validate the loader section."""
    section = _section(raw, "loader")
    base_path = _opt_str(section, "base_path")
    if base_path is None:
        raise ConfigError("loader.base_path: loader base path is required")
    return LoaderConfig(base_path=base_path)


def validate_server(raw: Any) -> ServerConfig:
    """Validate the server section."""
    section = _section(raw, "server")
    port = _opt_int(section, "port")
    if port is None:
        raise ConfigError("server.port: server port is required")
    return ServerConfig(port=port, redirect_port=_opt_int(section, "redirect_port"))


def validate_language(raw: Any) -> LanguageConfig:
    """Validate the language section."""
    section = _section(raw, "language")
    default = _opt_str(section, "default")
    if default is None:
        raise ConfigError("language.default: default language is required")
    try:
        language = LanguageType(default)
    except ValueError as exc:
        raise ConfigError(f"language.default: invalid default language {default!r}") from exc
    return LanguageConfig(default=language)