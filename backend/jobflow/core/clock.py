"""Injectable time source for functions that read "now"."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """Build a clock that always returns ``moment``."""

    def _clock() -> datetime:
        return moment

    return _clock


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Datetime field type: naive inputs are read as UTC
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
