"""The whole application configuration and its validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from bloader.config.basic import (
    ConfigError,
    LanguageConfig,
    LoaderConfig,
    ServerConfig,
    _opt_str,
    _section,
    validate_language,
    validate_loader,
    validate_server,
)
from bloader.config.clock import ClockConfig, validate_clock
from bloader.config.encrypt import (
    EncryptRespectiveConfig,
    validate_encrypts,
    validate_encrypts_on_slave,
)
from bloader.config.logging import LoggingConfig, validate_logging
from bloader.config.output import OutputRespectiveConfig, validate_outputs
from bloader.config.override import OverrideRespectiveConfig, validate_overrides
from bloader.config.slave import SlaveSettingConfig, validate_slave_setting
from bloader.config.store import StoreConfig, validate_store
from bloader.config.target import TargetRespectiveConfig, validate_targets


class ConfigType(StrEnum):
    MASTER = "master"
    SLAVE = "slave"


@dataclass(frozen=True)
class OverrideSettings:
    """The environment and overrides read before the full configuration."""

    env: str
    override: tuple[OverrideRespectiveConfig, ...] = ()


@dataclass(frozen=True)
class Config:
    """The validated application configuration.

    Sections that the configuration type does not use keep their defaults.
    ``auth`` holds the raw authentication settings as given.
    """

    type: ConfigType
    env: str
    loader: LoaderConfig | None = None
    targets: tuple[TargetRespectiveConfig, ...] = ()
    outputs: tuple[OutputRespectiveConfig, ...] = ()
    store: StoreConfig = field(default_factory=StoreConfig)
    encrypts: tuple[EncryptRespectiveConfig, ...] = ()
    auth: Any = None
    server: ServerConfig | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    language: LanguageConfig | None = None
    override: tuple[OverrideRespectiveConfig, ...] = ()
    slave_setting: SlaveSettingConfig | None = None


def _required(section: Mapping[str, Any], key: str, message: str) -> Any:
    value = section.get(key)
    if value is None:
        raise ConfigError(message)
    return value


def _env(section: Mapping[str, Any]) -> str:
    env = _opt_str(section, "env")
    if env is None:
        raise ConfigError("env: env is required")
    return env


def validate_override_settings(raw: Any) -> OverrideSettings:
    """Validate the environment and the override list."""
    section = _section(raw)
    env = _env(section)
    overrides = validate_overrides(_required(section, "override", "override: override is required"))
    return OverrideSettings(env=env, override=overrides)


def _validate_master(section: Mapping[str, Any]) -> Config:
    env = _env(section)
    loader = validate_loader(_required(section, "loader", "loader: loader is required"))
    targets = validate_targets(_required(section, "targets", "targets: targets is required"))
    outputs = validate_outputs(_required(section, "outputs", "outputs: outputs is required"))
    store = validate_store(_required(section, "store", "store: store is required"))
    encrypts = validate_encrypts(_required(section, "encrypts", "encrypts: encrypts is required"))
    auth = _required(section, "auth", "auth: auth is required")
    server = validate_server(_required(section, "server", "server: server is required"))
    logging = validate_logging(_required(section, "logging", "logging: logging is required"))
    clock = validate_clock(_required(section, "clock", "clock: clock is required"))
    language = validate_language(_required(section, "language", "language: language is required"))
    override = validate_overrides(_required(section, "override", "override: override is required"))
    return Config(
        type=ConfigType.MASTER,
        env=env,
        loader=loader,
        targets=targets,
        outputs=outputs,
        store=store,
        encrypts=encrypts,
        auth=auth,
        server=server,
        logging=logging,
        clock=clock,
        language=language,
        override=override,
    )


def _validate_slave(section: Mapping[str, Any]) -> Config:
    env = _env(section)
    encrypts = validate_encrypts_on_slave(
        _required(section, "encrypts", "encrypts: encrypts is required")
    )
    logging = validate_logging(_required(section, "logging", "logging: logging is required"))
    clock = validate_clock(_required(section, "clock", "clock: clock is required"))
    language = validate_language(_required(section, "language", "language: language is required"))
    override = validate_overrides(_required(section, "override", "override: override is required"))
    slave_setting = validate_slave_setting(
        _required(section, "slave_setting", "slave_setting: slave setting is required")
    )
    return Config(
        type=ConfigType.SLAVE,
        env=env,
        encrypts=encrypts,
        logging=logging,
        clock=clock,
        language=language,
        override=override,
        slave_setting=slave_setting,
    )


def validate_config(raw: Any) -> Config:
    """Validate the whole configuration according to its type."""
    section = _section(raw)
    type_text = _opt_str(section, "type")
    if type_text is None:
        raise ConfigError("type: type is required")
    try:
        config_type = ConfigType(type_text)
    except ValueError as exc:
        raise ConfigError(f"type: invalid type {type_text!r}") from exc
    if config_type is ConfigType.MASTER:
        return _validate_master(section)
    return _validate_slave(section)