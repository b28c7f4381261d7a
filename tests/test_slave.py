import pytest

from bloader.config.basic import ConfigError
from bloader.config.slave import SlaveCertificateConfig, validate_slave_certificate, validate_slave_setting


def test_certificate_disabled_ignores_paths():
    result = validate_slave_certificate({"enabled": False, "slave_cert": "a.pem"})
    assert result == SlaveCertificateConfig()


def test_certificate_enabled():
    result = validate_slave_certificate({"enabled": True, "slave_cert": "c.pem", "slave_key": "k.pem"})
    assert result == SlaveCertificateConfig(enabled=True, slave_cert="c.pem", slave_key="k.pem")


def test_certificate_missing_cert():
    with pytest.raises(ConfigError, match="slave_cert"):
        validate_slave_certificate({"enabled": True, "slave_key": "k.pem"})


def test_certificate_missing_key():
    with pytest.raises(ConfigError, match="slave_key"):
        validate_slave_certificate({"enabled": True, "slave_cert": "c.pem"})


def test_setting_minimal():
    result = validate_slave_setting({"port": 50051})
    assert result.port == 50051
    assert result.certificate.enabled is False
    assert result.encrypt.enabled is False


def test_setting_missing_port():
    with pytest.raises(ConfigError, match="port"):
        validate_slave_setting({})


def test_setting_encrypt_enabled():
    result = validate_slave_setting({"port": 1, "encrypt": {"enabled": True, "encrypt_id": "enc"}})
    assert result.encrypt.enabled is True
    assert result.encrypt.encrypt_id == "enc"


def test_setting_encrypt_requires_id():
    with pytest.raises(ConfigError, match="encrypt_id"):
        validate_slave_setting({"port": 1, "encrypt": {"enabled": True}})


def test_setting_certificate_error_propagates():
    with pytest.raises(ConfigError):
        validate_slave_setting({"port": 1, "certificate": {"enabled": True}})