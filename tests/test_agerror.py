import pytest

from bloader.agerror import AggregateError


def test_str_joins_errors_after_prefix():
    agg = AggregateError("load failed", ValueError("first"), RuntimeError("second"))
    assert str(agg) == "load failed: first; second"


def test_str_without_errors_is_prefix_and_colon():
    assert str(AggregateError("load failed")) == "load failed:"


def test_trailing_semicolons_are_trimmed():
    agg = AggregateError("p", ValueError("x;;"))
    assert str(agg) == "p: x"


def test_add_appends_error():
    agg = AggregateError("prefix", ValueError("one"))
    agg.add(RuntimeError("two"))
    assert len(agg.errors) == 2
    assert str(agg).startswith("prefix: one;")
    assert str(agg).endswith(" two")


def test_matches_by_type():
    agg = AggregateError("prefix", ValueError("bad"))
    assert agg.matches(ValueError)
    assert not agg.matches(KeyError)


def test_matches_by_instance():
    target = ValueError("bad")
    agg = AggregateError("prefix", target)
    assert agg.matches(target)
    assert not agg.matches(ValueError("bad too"))


def test_matches_nested_aggregate():
    inner = AggregateError("inner", KeyError("k"))
    outer = AggregateError("outer", inner)
    assert outer.matches(KeyError)
    assert outer.matches(AggregateError)


def test_matches_follows_cause_chain():
    root = OSError("disk")
    try:
        try:
            raise root
        except OSError as exc:
            raise RuntimeError("wrapped") from exc
    except RuntimeError as wrapped:
        agg = AggregateError("prefix", wrapped)
    assert agg.matches(root)
    assert agg.matches(OSError)


def test_can_be_raised_and_caught():
    agg = AggregateError("boom")
    agg.add(ValueError("v"))
    with pytest.raises(AggregateError, match=r"^boom: v$"):
        raise agg
    assert str(agg) == "boom: v"
    assert agg.matches(ValueError)
    assert not agg.matches(KeyError)