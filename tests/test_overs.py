"""Tests for over notation helpers."""

import pytest

from cricket_pro.utils.overs import (
    balls_to_overs,
    format_overs,
    over_limit,
    overs_to_balls,
)


class TestOversToBalls:
    """Tests for O.B notation to delivery counts."""

    def test_partial_over(self):
        """3.4 overs is three overs and four balls."""
        assert overs_to_balls(3.4) == 22

    def test_zero_and_none(self):
        assert overs_to_balls(0) == 0
        assert overs_to_balls(None) == 0

    def test_whole_overs(self):
        assert overs_to_balls(20) == 120

    def test_invalid_ball_part_raises(self):
        """A ball part of 6 or more isn't valid notation."""
        with pytest.raises(ValueError, match="Invalid overs value"):
            overs_to_balls(2.6)


class TestBallsToOvers:
    """Tests for delivery counts to O.B notation."""

    def test_partial_over(self):
        assert balls_to_overs(22) == 3.4

    def test_rollover(self):
        """The sixth ball of an over rolls into the next whole over."""
        assert balls_to_overs(overs_to_balls(3.5) + 1) == 4.0

    def test_format_overs(self):
        assert format_overs(4.0) == "4.0"
        assert format_overs(0.3) == "0.3"


class TestOverLimit:
    """Tests for per-format over limits."""

    def test_limited_formats(self):
        assert over_limit("T20") == 20
        assert over_limit("odi") == 50

    def test_unlimited_formats(self):
        assert over_limit("Test") is None
        assert over_limit(None) is None
