from bloader.config.nested import get_nested_value, set_nested_value


def _data():
    return {
        "server": {"port": 80, "hosts": ["a", "b"]},
        "items": [{"name": "first"}, 5],
        "env": "local",
    }


def test_get_leaf():
    data = _data()
    assert get_nested_value(data, "server.port") == 80
    assert get_nested_value(data, "env") == "local"


def test_get_missing_returns_innermost_map():
    data = _data()
    assert get_nested_value(data, "server.missing") is data["server"]
    assert get_nested_value(data, "nothing") is data


def test_get_list_without_index_returns_map():
    data = _data()
    assert get_nested_value(data, "server.hosts") is data["server"]


def test_get_indexed():
    data = _data()
    assert get_nested_value(data, "items[0].name") == "first"
    assert get_nested_value(data, "items[1]") == 5


def test_get_bad_index_returns_map():
    data = _data()
    assert get_nested_value(data, "items[9]") is data
    assert get_nested_value(data, "items[]") is data
    assert get_nested_value(data, "items[x]") is data


def test_get_map_with_no_remaining_keys():
    data = _data()
    assert get_nested_value(data, "server") is data["server"]


def test_set_leaf_in_place():
    data = _data()
    result = set_nested_value(data, "server.port", 9000)
    assert result is data
    assert data["server"]["port"] == 9000


def test_set_indexed():
    data = _data()
    set_nested_value(data, "items[0].name", "changed")
    set_nested_value(data, "items[1]", 6)
    assert data["items"] == [{"name": "changed"}, 6]


def test_set_missing_key_leaves_data_unchanged():
    data = _data()
    set_nested_value(data, "server.missing", 1)
    set_nested_value(data, "items[7]", 1)
    assert data == _data()


def test_set_does_not_replace_lists_or_maps():
    data = _data()
    set_nested_value(data, "server.hosts", "x")
    set_nested_value(data, "server", "x")
    assert data == _data()


def test_round_trip():
    data = _data()
    set_nested_value(data, "items[0].name", "value")
    assert get_nested_value(data, "items[0].name") == "value"