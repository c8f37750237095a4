"""Domain enums for reservation requests."""

from enum import Enum
from typing import Any, Optional, Union


class LookupEnum(str, Enum):
    """String enum with tolerant lookup of request values."""

    @classmethod
    def lookup(cls, value: Any) -> Optional["LookupEnum"]:
        """
        Find the member matching a raw request value.

        Matches member values and member names (underscores removed),
        ignoring case, so "Monthly", "monthly" and "MONTHLY" all resolve.

        Returns:
            The matching member, or None if the value is not recognized
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None

        key = value.strip().replace("_", "").lower()
        for member in cls:
            if key == member.value.lower() or key == member.name.replace("_", "").lower():
                return member
        return None

    @classmethod
    def is_defined(cls, value: Any) -> bool:
        """Check whether a value is a recognized member."""
        return cls.lookup(value) is not None

    @classmethod
    def coerce(cls, value: Any) -> Union["LookupEnum", Any]:
        """Return the matching member, or the value unchanged if unrecognized."""
        member = cls.lookup(value)
        return member if member is not None else value


class RepeatType(LookupEnum):
    """How a reservation series repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RepeatMonthlyType(LookupEnum):
    """Monthly recurrence anchor."""

    DAY_OF_MONTH = "dayOfMonth"  # the 15th of every month
    DAY_OF_WEEK = "dayOfWeek"    # the third Tuesday of every month


class SeriesUpdateScope(LookupEnum):
    """Which occurrences of a series an update applies to."""

    THIS_INSTANCE = "this"
    FUTURE_INSTANCES = "future"
    FULL_SERIES = "full"
