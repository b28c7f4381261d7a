# bloader

Building blocks for a load-testing tool: strict validation of its
configuration, AES encryption of stored values, a controllable clock, and
parsing of the typed `key=value:type` data handed to a test run.

## Configuration

Raw settings are plain dictionaries, as read from YAML or TOML.
`bloader.config.config.validate_config` checks them against the rules for a
`master` or `slave` node and returns a validated `Config`. A missing or
malformed setting raises `bloader.config.basic.ConfigError`, and its message
names the offending field, for example `encrypt[0].key`.
`validate_override_settings` reads just the environment and the override list.

The individual sections can be validated on their own: `validate_loader`,
`validate_server`, `validate_language`, `validate_clock`, `validate_store`,
`validate_logging`, `validate_outputs`, `validate_targets`,
`validate_slave_setting`, `validate_encrypts`, `validate_encrypts_on_slave`
and `validate_overrides`.

`bloader.config.clock.parse_layout` parses a time against a reference layout
such as `2006-01-02T15:04:05Z`, the default clock format.

Nested values are addressed with dotted keys and list indexes:

```python
from bloader.config.nested import get_nested_value, set_nested_value

data = {"server": {"port": 8080}, "targets": [{"id": "api"}]}
get_nested_value(data, "targets[0].id")    # "api"
set_nested_value(data, "server.port", 9090)
```

Only keys that already exist are replaced; unknown paths leave the data as it is.

## Encryption

Values are encrypted with AES in CBC, CFB or CTR mode. A random IV is
prepended to the ciphertext and the result is base64 encoded.

```python
import os
from bloader.encrypt import CipherMode, StaticEncrypter

encrypter = StaticEncrypter(os.urandom(32), CipherMode.CBC)
ciphertext = encrypter.encrypt(b"hello")
assert encrypter.decrypt(ciphertext) == b"hello"
```

`DynamicEncrypter` keeps its key in an object store (anything with
`get_object` and `put_object`, see `ObjectStore`) and creates a random
256-bit key the first time it is used. `build_encrypters` turns validated
encrypt settings into a mapping of id to encrypter. Failures raise
`EncryptionError`.

## Run data

```python
from bloader.rundata import parse_run_data

parse_run_data(["count=3:i", "ratio=0.5:f", "ids=1,2,3:ai", "name=alice:s"])
# {"count": 3, "ratio": 0.5, "ids": [1, 2, 3], "name": "alice"}
```

Supported types are `i`, `u`, `f`, `b`, `s` and their list forms `ai`, `au`,
`af`, `ab`, `as`. An entry without a `:type` part gives an empty string. A
malformed entry raises `RunDataError`.

## Clock and errors

`bloader.clock.FakeClock` returns a fixed moment until `set_time` moves it,
which keeps time-dependent code testable; `default_clock()` gives the real
clock. `bloader.agerror.AggregateError` collects several errors under one
prefix and reports them together; `matches` tells whether any of them is of
a given type or is a given error.

## What it does not do

This package is a library only. It has no command-line program, does not
send load-test requests, run worker nodes, authenticate, write logs or
output files, and provides no object store of its own: `DynamicEncrypter`
expects the caller to supply one.