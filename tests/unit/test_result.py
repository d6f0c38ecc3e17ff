"""Tests for the Ok/Err outcome container."""

from __future__ import annotations

import pytest

from pymodscan.exceptions import ResultError
from pymodscan.result import Err, Ok


class TestOutcome:
    """Tests for Ok and Err."""

    def test_ok(self) -> None:
        result = Ok({0: 23.5})
        assert result.is_ok is True
        assert result.unwrap() == {0: 23.5}

    def test_err(self) -> None:
        result = Err("device offline")
        assert result.is_ok is False
        with pytest.raises(ResultError, match="device offline"):
            result.unwrap()

    def test_equality(self) -> None:
        """Outcomes compare by value, so scans can be asserted directly."""
        assert Ok({0: None}) == Ok({0: None})
        assert Err("x") == Err("x")
        assert Ok("x") != Err("x")

    @pytest.mark.parametrize("outcome_type", [Ok, Err])
    def test_accessors_documented(self, outcome_type: type) -> None:
        """Both variants describe is_ok and unwrap for help() users."""
        assert outcome_type.is_ok.__doc__
        assert outcome_type.unwrap.__doc__
