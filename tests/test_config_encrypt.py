import pytest

from bloader.config.basic import ConfigError
from bloader.config.encrypt import EncryptType, validate_encrypts, validate_encrypts_on_slave

KEY16 = "password" * 2
KEY24 = "password" * 3
KEY32 = "password" * 4


def _dynamic(encrypt_id="dyn", type_="dynamicCBC"):
    return {"id": encrypt_id, "type": type_, "store": {"bucket_id": "bucket", "key": "enc"}}


@pytest.mark.parametrize("key_text", [KEY16, KEY24, KEY32])
def test_static_key_sizes(key_text):
    result = validate_encrypts([{"id": "s", "type": "staticCBC", "key": key_text}])
    assert result[0].key == key_text.encode()
    assert result[0].type is EncryptType.STATIC_CBC
    assert result[0].store is None


def test_static_bad_key_size():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.key"):
        validate_encrypts([{"id": "s", "type": "staticCFB", "key": "password"}])


def test_static_missing_key():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.key"):
        validate_encrypts([{"id": "s", "type": "staticCTR"}])


def test_dynamic_store():
    result = validate_encrypts([_dynamic(type_="dynamicCTR")])
    assert result[0].type is EncryptType.DYNAMIC_CTR
    assert result[0].store.bucket_id == "bucket"
    assert result[0].store.key == "enc"
    assert result[0].key == b""


def test_dynamic_missing_store():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.store"):
        validate_encrypts([{"id": "d", "type": "dynamicCFB"}])


def test_dynamic_store_error_wrapped():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.store"):
        validate_encrypts([{"id": "d", "type": "dynamicCBC", "store": {"key": "enc"}}])


def test_missing_id():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.id"):
        validate_encrypts([{"type": "staticCBC", "key": KEY16}])


def test_duplicate_id():
    raw = [{"id": "a", "type": "staticCBC", "key": KEY16}, {"id": "a", "type": "staticCBC", "key": KEY16}]
    with pytest.raises(ConfigError, match=r"encrypt\[1\]\.id"):
        validate_encrypts(raw)


def test_missing_and_invalid_type():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.type"):
        validate_encrypts([{"id": "a"}])
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.type"):
        validate_encrypts([{"id": "a", "type": "rsa"}])


def test_order_preserved():
    raw = [{"id": "b", "type": "staticCBC", "key": KEY16}, _dynamic("a")]
    assert [c.id for c in validate_encrypts(raw)] == ["b", "a"]


def test_slave_accepts_static():
    result = validate_encrypts_on_slave([{"id": "s", "type": "staticCTR", "key": KEY32}])
    assert result[0].type is EncryptType.STATIC_CTR


def test_slave_rejects_dynamic():
    with pytest.raises(ConfigError, match=r"encrypt\[0\]\.type"):
        validate_encrypts_on_slave([_dynamic()])


def test_none_is_empty():
    assert validate_encrypts(None) == ()
    assert validate_encrypts_on_slave(None) == ()