"""Configuration service for calculation defaults and app settings."""
import logging
import os

from hijri_zakat.constants import (
    DEFAULT_FIQH,
    DEFAULT_NISAB_STANDARD,
    DEFAULT_GOLD_PRICE_PER_GRAM,
    DEFAULT_SILVER_PRICE_PER_GRAM,
    DEFAULT_CURRENCY,
)
from hijri_zakat.data.months import DEFAULT_LOCALE, is_valid_locale
from hijri_zakat.services.calc import Fiqh, NisabStandard

logger = logging.getLogger(__name__)


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _get_choice(name: str, default: str, choices) -> str:
    """Read an env var that must name one of choices (case-insensitive)."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    for choice in choices:
        if raw.strip().lower() == choice.lower():
            return choice
    logger.warning(f"Ignoring unknown {name}={raw!r}, using {default}")
    return default


def get_default_locale() -> str:
    """Get the locale used for month names when none is requested.

    Controlled by HIJRI_ZAKAT_DEFAULT_LOCALE env var (default: en).
    """
    locale = os.environ.get('HIJRI_ZAKAT_DEFAULT_LOCALE', DEFAULT_LOCALE)
    if not is_valid_locale(locale):
        logger.warning(f"Ignoring unsupported HIJRI_ZAKAT_DEFAULT_LOCALE={locale!r}, using {DEFAULT_LOCALE}")
        return DEFAULT_LOCALE
    return locale


def get_default_fiqh() -> str:
    """Controlled by ZAKAT_DEFAULT_FIQH env var (default: Hanafi)."""
    return _get_choice('ZAKAT_DEFAULT_FIQH', DEFAULT_FIQH, [f.value for f in Fiqh])


def get_default_nisab_standard() -> str:
    """Controlled by ZAKAT_DEFAULT_NISAB env var (default: Silver)."""
    return _get_choice('ZAKAT_DEFAULT_NISAB', DEFAULT_NISAB_STANDARD, [n.value for n in NisabStandard])


def get_default_gold_price() -> float:
    """Gold price per gram used when a request omits it.

    Controlled by ZAKAT_GOLD_PRICE env var (default: 65.0).
    """
    return _get_float('ZAKAT_GOLD_PRICE', DEFAULT_GOLD_PRICE_PER_GRAM)


def get_default_silver_price() -> float:
    """Controlled by ZAKAT_SILVER_PRICE env var (default: 0.8)."""
    return _get_float('ZAKAT_SILVER_PRICE', DEFAULT_SILVER_PRICE_PER_GRAM)


def get_default_currency() -> str:
    return os.environ.get('ZAKAT_DEFAULT_CURRENCY', DEFAULT_CURRENCY).upper()


def get_log_level() -> str:
    return os.environ.get('LOG_LEVEL', 'INFO').upper()


def get_app_config() -> dict:
    """Get complete calculation defaults, as loaded into Flask config."""
    return {
        'DEFAULT_LOCALE': get_default_locale(),
        'DEFAULT_FIQH': get_default_fiqh(),
        'DEFAULT_NISAB_STANDARD': get_default_nisab_standard(),
        'DEFAULT_GOLD_PRICE': get_default_gold_price(),
        'DEFAULT_SILVER_PRICE': get_default_silver_price(),
        'DEFAULT_CURRENCY': get_default_currency(),
        'LOG_LEVEL': get_log_level(),
    }
