"""Tests for the vendored Result and Maybe value types."""

import pytest

from gencont import NOTHING, Err, Nothing, Ok, Some


def test_nothing_is_a_singleton():
    assert Nothing() is NOTHING
    assert repr(NOTHING) == "Nothing()"


def test_some_compares_by_value():
    assert Some(1) == Some(1)
    assert Some(None) != NOTHING


def test_result_accessors():
    error = ValueError("error")

    assert Ok(1).ok() == 1 and Ok(1).err() is None
    assert Err(error).err() is error and Err(error).ok() is None
    assert Err(error).is_err() and not Ok(1).is_err()
    assert Ok("value").unwrap() == "value"

    with pytest.raises(ValueError, match="error"):
        Err(error).unwrap()
