"""Freezable "today" for the request and command layer.

The calendar and zakat services never read the clock; they take today as an
argument. Routes that default it (the hawl endpoint) call today() here, and
tests pin it with freeze(). Dates are UTC.
"""
from datetime import datetime, timezone
from typing import Optional

from hijri_zakat.services.hijri import GregorianDate, parse_iso_date

_frozen: Optional[GregorianDate] = None


def freeze(value) -> GregorianDate:
    """Pin today() to a GregorianDate or a YYYY-MM-DD string."""
    global _frozen
    if isinstance(value, str):
        value = parse_iso_date(value)
    _frozen = GregorianDate(*value)
    return _frozen


def unfreeze() -> None:
    global _frozen
    _frozen = None


def today() -> GregorianDate:
    """Current UTC date, or the frozen one."""
    if _frozen is not None:
        return _frozen
    return GregorianDate.from_date(datetime.now(timezone.utc).date())
