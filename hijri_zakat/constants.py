"""Shared constants for zakat calculation."""

# Nisab thresholds (minimum wealth for zakat obligation)
GOLD_NISAB_GRAMS = 87.48
SILVER_NISAB_GRAMS = 52.5

# Zakat rate (2.5%)
ZAKAT_RATE = 0.025

# Defaults carried over from the calculator's initial state
DEFAULT_GOLD_PRICE_PER_GRAM = 65.0
DEFAULT_SILVER_PRICE_PER_GRAM = 0.8
DEFAULT_FIQH = 'Hanafi'
DEFAULT_NISAB_STANDARD = 'Silver'
DEFAULT_CURRENCY = 'USD'

# ============================================================
# Tabular Islamic calendar constants
# ============================================================

# Astronomical epoch of the Hijri calendar as a Julian Day Number
HIJRI_EPOCH_ASTRO = 1948084

# 30-year cycle length in days and the mean lunar year derived from it
HIJRI_CYCLE_DAYS = 10631
HIJRI_MEAN_YEAR = 10631.0 / 30.0

# Epoch shift correction (days)
HIJRI_SHIFT = 8.01 / 60.0

# Mean lunar month (days)
HIJRI_MEAN_MONTH = 29.5

# Last Julian Day Number before the Gregorian reform (1582-10-15)
GREGORIAN_REFORM_JDN = 2299160

# Hijri picker bounds
HIJRI_MIN_DAY = 1
HIJRI_MAX_DAY = 30
