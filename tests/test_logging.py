import re

import pytest

from bloader.config.basic import ConfigError
from bloader.config.logging import (
    LoggingOutputFormat,
    LoggingOutputLevel,
    LoggingOutputType,
    validate_logging,
)


def _output(**overrides):
    entry = {"type": "stdout", "format": "text", "level": "info"}
    entry.update(overrides)
    return entry


def test_stdout_output():
    config = validate_logging({"output": [_output()]})
    (output,) = config.output
    assert output.type is LoggingOutputType.STDOUT
    assert output.format is LoggingOutputFormat.TEXT
    assert output.level is LoggingOutputLevel.INFO
    assert output.enabled_env.all


def test_empty_logging_has_no_outputs():
    assert validate_logging({}).output == ()


def test_file_output_requires_filename():
    with pytest.raises(ConfigError, match=re.escape("output[0].filename")):
        validate_logging({"output": [_output(type="file")]})


def test_file_output_keeps_filename():
    config = validate_logging({"output": [_output(type="file", filename="app.log", format="json")]})
    assert config.output[0].filename == "app.log"
    assert config.output[0].format is LoggingOutputFormat.JSON


def test_tcp_output_requires_address():
    with pytest.raises(ConfigError, match=re.escape("output[0].address")):
        validate_logging({"output": [_output(type="tcp")]})


def test_tcp_output_keeps_address():
    config = validate_logging({"output": [_output(type="tcp", address="localhost:5000")]})
    assert config.output[0].address == "localhost:5000"


@pytest.mark.parametrize("missing", ["type", "format", "level"])
def test_required_fields(missing):
    entry = _output()
    del entry[missing]
    with pytest.raises(ConfigError, match=re.escape(f"output[0].{missing}")):
        validate_logging({"output": [entry]})


@pytest.mark.parametrize(
    "field_name, bad_value",
    [("type", "syslog"), ("format", "xml"), ("level", "trace")],
)
def test_invalid_values(field_name, bad_value):
    with pytest.raises(ConfigError, match=bad_value):
        validate_logging({"output": [_output(**{field_name: bad_value})]})


def test_error_index_points_at_failing_entry():
    with pytest.raises(ConfigError, match=re.escape("output[1].level")):
        validate_logging({"output": [_output(), _output(level="loud")]})


def test_enabled_env_restricts_output():
    config = validate_logging({"output": [_output(enabled_env=["dev"])]})
    env = config.output[0].enabled_env
    assert env.allows("dev")
    assert not env.allows("prod")