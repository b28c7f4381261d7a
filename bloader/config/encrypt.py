"""Encryption settings of the configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bloader.config.basic import ConfigError, _mapping_list, _opt_str
from bloader.config.store import StoreSpecifyConfig, validate_store_specify

_KEY_SIZES = (16, 24, 32)


class EncryptType(StrEnum):
    STATIC_CBC = "staticCBC"
    STATIC_CFB = "staticCFB"
    STATIC_CTR = "staticCTR"
    DYNAMIC_CBC = "dynamicCBC"
    DYNAMIC_CFB = "dynamicCFB"
    DYNAMIC_CTR = "dynamicCTR"


_STATIC = frozenset({EncryptType.STATIC_CBC, EncryptType.STATIC_CFB, EncryptType.STATIC_CTR})


@dataclass(frozen=True)
class EncryptRespectiveConfig:
    """One encrypter: a fixed key for static types, a stored key for dynamic ones."""

    id: str
    type: EncryptType
    key: bytes = b""
    store: StoreSpecifyConfig | None = None


def _validate(raw: Any, on_slave: bool) -> tuple[EncryptRespectiveConfig, ...]:
    entries = _mapping_list({"encrypts": raw}, "encrypts", "encrypts")
    seen: set[str] = set()
    configs = []
    for index, entry in enumerate(entries):
        prefix = f"encrypt[{index}]"
        encrypt_id = _opt_str(entry, "id")
        if encrypt_id is None:
            raise ConfigError(f"{prefix}.id: encrypt id is required")
        if encrypt_id in seen:
            raise ConfigError(f"{prefix}.id: duplicate encrypt id {encrypt_id!r}")
        seen.add(encrypt_id)

        type_text = _opt_str(entry, "type")
        if type_text is None:
            raise ConfigError(f"{prefix}.type: encrypt type is required")
        try:
            encrypt_type = EncryptType(type_text)
        except ValueError as exc:
            raise ConfigError(f"{prefix}.type: invalid encrypt type {type_text!r}") from exc

        if encrypt_type in _STATIC:
            key_text = _opt_str(entry, "key")
            if key_text is None:
                raise ConfigError(f"{prefix}.key: encrypt key is required")
            key = key_text.encode()
            if len(key) not in _KEY_SIZES:
                raise ConfigError(f"{prefix}.key: encrypt key must be 16, 24 or 32 bytes long")
            configs.append(EncryptRespectiveConfig(id=encrypt_id, type=encrypt_type, key=key))
            continue

        if on_slave:
            raise ConfigError(f"{prefix}.type: encrypt type {type_text!r} is not supported on slave")
        if entry.get("store") is None:
            raise ConfigError(f"{prefix}.store: encrypt store is required")
        try:
            store = validate_store_specify(entry.get("store"))
        except ConfigError as exc:
            raise ConfigError(f"{prefix}.store: {exc}") from exc
        configs.append(EncryptRespectiveConfig(id=encrypt_id, type=encrypt_type, store=store))
    return tuple(configs)


def validate_encrypts(raw: Any) -> tuple[EncryptRespectiveConfig, ...]:
    """Validate the list of encrypters."""
    return _validate(raw, on_slave=False)


def validate_encrypts_on_slave(raw: Any) -> tuple[EncryptRespectiveConfig, ...]:
    """Validate the list of encrypters for a worker node, where only static keys work."""
    return _validate(raw, on_slave=True)