"""Time units and the words that name them.

Fixed-length unit constants represent durations in seconds. Months and years
have no fixed length and are only ever applied against a concrete calendar
date.
"""

from enum import Enum

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800


class Unit(Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def is_fixed(self) -> bool:
        """True for units that convert to elapsed real time."""
        return self in _SECONDS

    @property
    def seconds(self) -> int:
        if self not in _SECONDS:
            raise ValueError(
                f"{self.value} has no fixed length in seconds.\n"
                f"Hint: apply it to a Moment instead: moment + months(1)"
            )
        return _SECONDS[self]

    def render(self, magnitude: int) -> str:
        """Canonical word for this unit at the given magnitude."""
        return self.value if magnitude == 1 else f"{self.value}s"


_SECONDS = {
    Unit.SECOND: SECOND,
    Unit.MINUTE: MINUTE,
    Unit.HOUR: HOUR,
    Unit.DAY: DAY,
    Unit.WEEK: WEEK,
}

# Synonyms accepted after a number, e.g. "5min", "2 weeks"
UNIT_WORDS: dict[str, Unit] = {
    "seconds": Unit.SECOND,
    "second": Unit.SECOND,
    "secs": Unit.SECOND,
    "sec": Unit.SECOND,
    "s": Unit.SECOND,
    "minutes": Unit.MINUTE,
    "minute": Unit.MINUTE,
    "mins": Unit.MINUTE,
    "min": Unit.MINUTE,
    "hours": Unit.HOUR,
    "hour": Unit.HOUR,
    "hrs": Unit.HOUR,
    "hr": Unit.HOUR,
    "days": Unit.DAY,
    "day": Unit.DAY,
    "d": Unit.DAY,
    "weeks": Unit.WEEK,
    "week": Unit.WEEK,
    "w": Unit.WEEK,
    "months": Unit.MONTH,
    "month": Unit.MONTH,
    "years": Unit.YEAR,
    "year": Unit.YEAR,
    "yrs": Unit.YEAR,
}

# One word per unit, meaning a magnitude of 1
ALIAS_WORDS: dict[str, Unit] = {
    "secondly": Unit.SECOND,
    "minutely": Unit.MINUTE,
    "hourly": Unit.HOUR,
    "daily": Unit.DAY,
    "weekly": Unit.WEEK,
    "monthly": Unit.MONTH,
    "yearly": Unit.YEAR,
}

KEYWORDS = frozenset({"today", "yesterday", "tomorrow", "until", "times", "every"})
