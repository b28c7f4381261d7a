"""Slave (worker node) settings of the configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bloader.config.basic import ConfigError, _as_bool, _opt_int, _opt_str, _section
from bloader.config.store import CredentialEncryptConfig, validate_credential_encrypt


@dataclass(frozen=True)
class SlaveCertificateConfig:
    """TLS certificate and key paths for the worker server, when enabled."""

    enabled: bool = False
    slave_cert: str = ""
    slave_key: str = ""


@dataclass(frozen=True)
class SlaveSettingConfig:
    """Port, certificate and encryption of the worker server."""

    port: int
    certificate: SlaveCertificateConfig = field(default_factory=SlaveCertificateConfig)
    encrypt: CredentialEncryptConfig = field(default_factory=CredentialEncryptConfig)


def validate_slave_certificate(raw: Any) -> SlaveCertificateConfig:
    """Validate the certificate setting; paths are required only when enabled."""
    section = _section(raw, "slave_setting.certificate")
    if not _as_bool(section, "enabled"):
        return SlaveCertificateConfig()
    slave_cert = _opt_str(section, "slave_cert")
    if slave_cert is None:
        raise ConfigError("slave_setting.certificate.slave_cert: slave certificate path is required")
    slave_key = _opt_str(section, "slave_key")
    if slave_key is None:
        raise ConfigError("slave_setting.certificate.slave_key: slave key path is required")
    return SlaveCertificateConfig(enabled=True, slave_cert=slave_cert, slave_key=slave_key)


def validate_slave_setting(raw: Any) -> SlaveSettingConfig:
    """Validate the slave setting section."""
    section = _section(raw, "slave_setting")
    port = _opt_int(section, "port")
    if port is None:
        raise ConfigError("slave_setting.port: slave setting port is required")
    certificate = validate_slave_certificate(section.get("certificate"))
    encrypt = validate_credential_encrypt(
        section.get("encrypt"),
        "slave_setting.encrypt.encrypt_id: slave setting encrypt id is required",
    )
    return SlaveSettingConfig(port=port, certificate=certificate, encrypt=encrypt)