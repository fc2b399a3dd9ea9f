"""Gregorian <-> Hijri calendar conversion.

Dates are converted through the integer Julian Day Number (JDN) using the
tabular Islamic calendar: a 30-year cycle of 10631 days and a mean lunar
month of 29.5 days. This is an arithmetic approximation, not an
astronomical ephemeris, and the displayed Hijri dates are defined by it.

Known properties of the approximation that are kept as-is:
- The month derived from the day-of-year can reach 13 on the last day of a
  355-day year; it is clamped to the final month (which then reports day 31).
- Day values are never checked against the length of the target month.
  Overflowing days normalise through the JDN.

Hijri months are 0-based (0 = Muharram). Gregorian months are 1-based.
"""
import math
from datetime import date, datetime
from typing import NamedTuple

from hijri_zakat.constants import (
    HIJRI_EPOCH_ASTRO,
    HIJRI_CYCLE_DAYS,
    HIJRI_MEAN_YEAR,
    HIJRI_SHIFT,
    HIJRI_MEAN_MONTH,
    GREGORIAN_REFORM_JDN,
    HIJRI_MIN_DAY,
    HIJRI_MAX_DAY,
)
from hijri_zakat.data.months import DEFAULT_LOCALE, get_month_names
from hijri_zakat.errors import InvalidInputError


class GregorianDate(NamedTuple):
    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> 'GregorianDate':
        return cls(value.year, value.month, value.day)

    def isoformat(self) -> str:
        return format_iso_date(self)


class HijriDate(NamedTuple):
    year: int
    month: int  # 0-based
    day: int

    def to_dict(self) -> dict:
        return {'day': self.day, 'month': self.month, 'year': self.year}


# ============================================================
# Julian Day Number pivots
# ============================================================

def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """Convert a civil date to a Julian Day Number.

    Years before 1583 get no Gregorian correction (treated as Julian), with
    the October 1582 cutover handled explicitly.
    """
    y, m = year, month
    if m < 3:
        y -= 1
        m += 12

    a = y // 100
    b = 2 - a + a // 4
    if y < 1583:
        b = 0
    if y == 1582:
        if m > 10:
            b = -10
        if m == 10:
            b = 0
            if day > 4:
                b = -10

    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + day + b - 1524


def jdn_to_gregorian(jdn: int) -> GregorianDate:
    """Convert a Julian Day Number to a civil date.

    The Gregorian correction applies only after the 1582 reform.
    """
    if jdn > GREGORIAN_REFORM_JDN:
        alpha = math.floor((jdn - 1867216.25) / 36524.25)
        a = jdn + 1 + alpha - alpha // 4
    else:
        a = jdn

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return GregorianDate(year, month, day)


def jdn_to_hijri(jdn: int) -> HijriDate:
    """Convert a Julian Day Number to a tabular Hijri date."""
    z = jdn - HIJRI_EPOCH_ASTRO
    cycle = z // HIJRI_CYCLE_DAYS
    z -= HIJRI_CYCLE_DAYS * cycle

    year_in_cycle = math.floor((z - HIJRI_SHIFT) / HIJRI_MEAN_YEAR)
    year = 30 * cycle + year_in_cycle
    z -= math.floor(year_in_cycle * HIJRI_MEAN_YEAR + HIJRI_SHIFT)

    month = math.floor((z + 28.5001) / HIJRI_MEAN_MONTH)
    if month > 12:
        month = 12
    day = z - math.floor(HIJRI_MEAN_MONTH * month - 29.0001)

    return HijriDate(year, month - 1, day)


def hijri_to_jdn(year: int, month: int, day: int) -> int:
    """Convert a tabular Hijri date (0-based month) to a Julian Day Number."""
    z = (
        day
        + math.floor(HIJRI_MEAN_MONTH * (month + 1) - 29.0001)
        + math.floor(year * HIJRI_MEAN_YEAR + HIJRI_SHIFT)
    )
    return z + HIJRI_EPOCH_ASTRO


# ============================================================
# Public conversions
# ============================================================

def gregorian_to_hijri(year: int, month: int, day: int) -> HijriDate:
    """Convert a Gregorian date (month 1-12) to a Hijri date (month 0-11)."""
    return jdn_to_hijri(gregorian_to_jdn(year, month, day))


def hijri_to_gregorian(day: int, month: int, year: int) -> GregorianDate:
    """Convert a Hijri date (month 0-11) to a Gregorian date (month 1-12)."""
    return jdn_to_gregorian(hijri_to_jdn(year, month, day))


def month_name(month_index: int, locale: str = DEFAULT_LOCALE) -> str:
    """Get the name of a Hijri month.

    Args:
        month_index: 0-based month index (0 = Muharram).
        locale: One of en, ur, ar, hi. Unknown locales fall back to en.

    Raises:
        InvalidInputError: If month_index is outside 0-11.
    """
    if not isinstance(month_index, int) or not 0 <= month_index <= 11:
        raise InvalidInputError(f'Hijri month index must be 0-11, got {month_index!r}')
    return get_month_names(locale)[month_index]


# ============================================================
# ISO-8601 boundary helpers
# ============================================================

def parse_iso_date(value: str) -> GregorianDate:
    """Parse a YYYY-MM-DD string into a GregorianDate."""
    try:
        parsed = datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise InvalidInputError(f'Invalid date format: {value!r}. Use YYYY-MM-DD')
    return GregorianDate.from_date(parsed)


def format_iso_date(value: GregorianDate) -> str:
    return f'{value.year:04d}-{value.month:02d}-{value.day:02d}'


def iso_to_hijri(value: str) -> HijriDate:
    """Convert a YYYY-MM-DD string to a Hijri date."""
    return gregorian_to_hijri(*parse_iso_date(value))


def hijri_to_iso(day: int, month: int, year: int) -> str:
    """Convert a Hijri date to a YYYY-MM-DD string.

    The day is clamped into 1-30 first, as the date picker does.
    """
    return format_iso_date(hijri_to_gregorian(clamp_hijri_day(day), month, year))


def clamp_hijri_day(day: int) -> int:
    return max(HIJRI_MIN_DAY, min(HIJRI_MAX_DAY, day))


def format_hijri(value: HijriDate, locale: str = DEFAULT_LOCALE) -> str:
    """Render a Hijri date as '<day> <month name> <year>'."""
    return f'{value.day} {month_name(value.month, locale)} {value.year}'


# ============================================================
# Hawl (one lunar year of ownership)
# ============================================================

def hawl_end_date(start: GregorianDate) -> GregorianDate:
    """Get the Gregorian date one Hijri year after start."""
    hijri = gregorian_to_hijri(*start)
    return hijri_to_gregorian(hijri.day, hijri.month, hijri.year + 1)


def is_hawl_complete(start: GregorianDate, today: GregorianDate) -> bool:
    """Check whether a full lunar year has passed between start and today."""
    return gregorian_to_jdn(*today) >= gregorian_to_jdn(*hawl_end_date(start))
