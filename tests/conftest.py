"""Shared pytest fixtures for calexpr tests."""

from datetime import datetime

import pytest

from calexpr.calendar import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    """Friday, 15 March 2024, 09:30 local time."""
    return FixedClock(datetime(2024, 3, 15, 9, 30, 0))
