"""Store section of the configuration and store references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bloader.config.basic import ConfigError, _as_bool, _mapping_list, _opt_str, _section, _str_list


@dataclass(frozen=True)
class StoreFileConfig:
    """Path of the store file used in one environment."""

    env: str
    path: str


@dataclass(frozen=True)
class StoreConfig:
    """Store files per environment and the buckets to create."""

    file: tuple[StoreFileConfig, ...] = ()
    buckets: tuple[str, ...] = ()


@dataclass(frozen=True)
class CredentialEncryptConfig:
    """Whether a stored value is encrypted, and with which encrypter."""

    enabled: bool = False
    encrypt_id: str = ""


@dataclass(frozen=True)
class StoreSpecifyConfig:
    """A reference to one object in the store."""

    bucket_id: str
    key: str
    encrypt: CredentialEncryptConfig = field(default_factory=CredentialEncryptConfig)


def validate_store(raw: Any) -> StoreConfig:
    """Validate the store section."""
    section = _section(raw, "store")
    files = []
    for index, entry in enumerate(_mapping_list(section, "file", "store.file")):
        env = _opt_str(entry, "env")
        if env is None:
            raise ConfigError(f"store.file[{index}].env: store file env is required")
        path = _opt_str(entry, "path")
        if path is None:
            raise ConfigError(f"store.file[{index}].path: store file path is required")
        files.append(StoreFileConfig(env=env, path=path))

    buckets = _str_list(section, "buckets") or []
    seen: set[str] = set()
    for index, bucket in enumerate(buckets):
        if bucket in seen:
            raise ConfigError(f"store.buckets[{index}]: duplicate bucket id {bucket!r}")
        seen.add(bucket)
    return StoreConfig(file=tuple(files), buckets=tuple(buckets))


def validate_credential_encrypt(raw: Any, error_message: str) -> CredentialEncryptConfig:
    """Validate an encrypt setting; ``error_message`` is used when the id is missing."""
    section = _section(raw, "encrypt")
    if not _as_bool(section, "enabled"):
        return CredentialEncryptConfig()
    encrypt_id = _opt_str(section, "encrypt_id")
    if encrypt_id is None:
        raise ConfigError(error_message)
    return CredentialEncryptConfig(enabled=True, encrypt_id=encrypt_id)


def validate_store_specify(raw: Any) -> StoreSpecifyConfig:
    """Validate a reference to a stored object."""
    section = _section(raw, "store")
    bucket_id = _opt_str(section, "bucket_id")
    if bucket_id is None:
        raise ConfigError("store.bucket_id: store bucket id is required")
    key = _opt_str(section, "key")
    if key is None:
        raise ConfigError("store.key: store key is required")
    encrypt = validate_credential_encrypt(
        section.get("encrypt"), "store.encrypt.encrypt_id: store encrypt id is required"
    )
    return StoreSpecifyConfig(bucket_id=bucket_id, key=key, encrypt=encrypt)