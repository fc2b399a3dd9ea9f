"""Zakat calculation service.

Computes a zakat snapshot from typed assets and liabilities, a fiqh school,
a nisab standard and metal prices per gram. Pure: nothing is fetched, cached
or mutated, and degenerate inputs (negative or NaN prices) propagate through
the arithmetic instead of being rejected.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real

from hijri_zakat.constants import GOLD_NISAB_GRAMS, SILVER_NISAB_GRAMS, ZAKAT_RATE
from hijri_zakat.errors import InvalidInputError

logger = logging.getLogger(__name__)


class Fiqh(Enum):
    """School of jurisprudence. Only affects jewelry."""

    HANAFI = 'Hanafi'
    SHAFI = 'Shafi'


class NisabStandard(Enum):
    """Metal that defines the nisab threshold."""

    GOLD = 'Gold'
    SILVER = 'Silver'

    @property
    def grams(self) -> float:
        return GOLD_NISAB_GRAMS if self is NisabStandard.GOLD else SILVER_NISAB_GRAMS


class AssetCategory(Enum):
    """Closed set of asset categories.

    For gold, silver and jewelry the asset value is a mass in grams; for the
    rest it is an amount in the operating currency.
    """

    CASH = 'cash'
    GOLD = 'gold'
    SILVER = 'silver'
    BUSINESS = 'business'
    INVESTMENT = 'investment'
    CRYPTO = 'crypto'
    JEWELRY = 'jewelry'

    @property
    def is_mass(self) -> bool:
        return self in (AssetCategory.GOLD, AssetCategory.SILVER, AssetCategory.JEWELRY)

    def valuation(self, value: float, fiqh: Fiqh, gold_price: float, silver_price: float) -> float:
        """Value an amount of this category in currency."""
        if self is AssetCategory.GOLD:
            return value * gold_price
        if self is AssetCategory.SILVER:
            return value * silver_price
        if self is AssetCategory.JEWELRY:
            # Shafi exempts jewelry worn as personal ornament; Hanafi treats it as gold
            if fiqh is Fiqh.SHAFI:
                return 0
            return value * gold_price
        # cash, business, investment, crypto
        return value


@dataclass(frozen=True)
class Asset:
    id: str
    category: AssetCategory | str
    name: str
    value: float
    is_zakatable: bool = True

    def __post_init__(self):
        if isinstance(self.category, str):
            try:
                object.__setattr__(self, 'category', AssetCategory(self.category.lower()))
            except ValueError:
                # Unrecognised categories are kept verbatim and valued as-is
                pass


@dataclass(frozen=True)
class Liability:
    id: str
    name: str
    amount: float


@dataclass(frozen=True)
class BreakdownItem:
    label: str
    amount: float


@dataclass(frozen=True)
class CalculationResult:
    total_assets_value: float
    total_liabilities: float
    net_zakatable_wealth: float
    nisab_threshold: float
    is_eligible: bool
    zakat_payable: float
    breakdown: tuple[BreakdownItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'total_assets_value': self.total_assets_value,
            'total_liabilities': self.total_liabilities,
            'net_zakatable_wealth': self.net_zakatable_wealth,
            'nisab_threshold': self.nisab_threshold,
            'is_eligible': self.is_eligible,
            'zakat_payable': self.zakat_payable,
            'breakdown': [{'label': item.label, 'amount': item.amount} for item in self.breakdown],
        }


def conditions_met(is_muslim: bool, has_ownership: bool, hawl_complete: bool) -> bool:
    """Combine the three preconditions for zakat liability."""
    return bool(is_muslim and has_ownership and hawl_complete)


def value_asset(asset: Asset, fiqh: Fiqh, gold_price: float, silver_price: float) -> float:
    """Get the zakatable currency value of a single asset.

    Non-zakatable assets are worth 0. Categories outside AssetCategory are
    taken at face value.
    """
    if not asset.is_zakatable:
        return 0
    if isinstance(asset.category, AssetCategory):
        return asset.category.valuation(asset.value, Fiqh(fiqh), gold_price, silver_price)
    logger.debug("Unknown asset category %r for %r, using face value", asset.category, asset.name)
    return asset.value


def calculate_zakat(
    assets: list,
    liabilities: list,
    fiqh: Fiqh,
    nisab_standard: NisabStandard,
    gold_price_per_gram: float,
    silver_price_per_gram: float,
    conditions_met: bool,
) -> CalculationResult:
    """Calculate zakat for a set of assets and liabilities.

    Args:
        assets: Asset records; only zakatable ones with a positive value count
        liabilities: Liability records, all deducted
        fiqh: Fiqh school (affects jewelry only)
        nisab_standard: Gold or Silver nisab basis
        gold_price_per_gram: Gold price in the operating currency
        silver_price_per_gram: Silver price in the operating currency
        conditions_met: Combined precondition flag (see conditions_met())

    Returns:
        CalculationResult snapshot. Breakdown lists positive contributions
        in input order.
    """
    fiqh = Fiqh(fiqh)
    nisab_standard = NisabStandard(nisab_standard)

    total_assets = 0.0
    breakdown = []
    for asset in assets:
        value = value_asset(asset, fiqh, gold_price_per_gram, silver_price_per_gram)
        if value > 0:
            total_assets += value
            breakdown.append(BreakdownItem(label=asset.name, amount=value))

    total_liabilities = sum((liability.amount for liability in liabilities), 0.0)

    net = total_assets - total_liabilities
    if net < 0:
        net = 0.0

    if nisab_standard is NisabStandard.GOLD:
        nisab_threshold = GOLD_NISAB_GRAMS * gold_price_per_gram
    else:
        nisab_threshold = SILVER_NISAB_GRAMS * silver_price_per_gram

    eligible = bool(conditions_met) and net >= nisab_threshold
    zakat = net * ZAKAT_RATE if eligible else 0.0

    return CalculationResult(
        total_assets_value=total_assets,
        total_liabilities=total_liabilities,
        net_zakatable_wealth=net,
        nisab_threshold=nisab_threshold,
        is_eligible=eligible,
        zakat_payable=zakat,
        breakdown=tuple(breakdown),
    )


# ============================================================
# Request payload decoding
# ============================================================

def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_fiqh(value: str) -> Fiqh:
    """Parse a fiqh name case-insensitively."""
    for member in Fiqh:
        if isinstance(value, str) and value.lower() == member.value.lower():
            return member
    raise InvalidInputError(f'Invalid fiqh: {value}. Must be one of: Hanafi, Shafi')


def parse_nisab_standard(value: str) -> NisabStandard:
    """Parse a nisab standard name case-insensitively."""
    for member in NisabStandard:
        if isinstance(value, str) and value.lower() == member.value.lower():
            return member
    raise InvalidInputError(f'Invalid nisab standard: {value}. Must be one of: Gold, Silver')


def asset_from_dict(data: dict, index: int = 0) -> Asset:
    """Build an Asset from a request item.

    Accepts 'category' or 'type' for the category and 'is_zakatable' or
    'isZakatable' for the flag (defaults to True).
    """
    if not isinstance(data, dict):
        raise InvalidInputError('Asset items must be objects')
    category = data.get('category', data.get('type'))
    value = data.get('value')
    if category is None or not _is_number(value):
        raise InvalidInputError('Asset items require category and numeric value')
    try:
        category = AssetCategory(str(category).lower())
    except ValueError:
        valid = ', '.join(c.value for c in AssetCategory)
        raise InvalidInputError(f'Invalid asset category: {category}. Must be one of: {valid}')
    is_zakatable = data.get('is_zakatable', data.get('isZakatable', True))
    return Asset(
        id=str(data.get('id', f'asset-{index}')),
        category=category,
        name=data.get('name', category.value.title()),
        value=value,
        is_zakatable=bool(is_zakatable),
    )


def liability_from_dict(data: dict, index: int = 0) -> Liability:
    """Build a Liability from a request item."""
    if not isinstance(data, dict) or not _is_number(data.get('amount')):
        raise InvalidInputError('Liability items require numeric amount')
    return Liability(
        id=str(data.get('id', f'liability-{index}')),
        name=data.get('name', 'Liability'),
        amount=data['amount'],
    )


@dataclass(frozen=True)
class CalculationRequest:
    """Decoded calculate payload, ready to pass to calculate_zakat."""

    assets: tuple
    liabilities: tuple
    fiqh: Fiqh
    nisab_standard: NisabStandard
    gold_price_per_gram: float
    silver_price_per_gram: float
    conditions_met: bool
    currency: str

    def calculate(self) -> CalculationResult:
        return calculate_zakat(
            list(self.assets),
            list(self.liabilities),
            self.fiqh,
            self.nisab_standard,
            self.gold_price_per_gram,
            self.silver_price_per_gram,
            self.conditions_met,
        )


def _get_price(body: dict, key: str, default: float) -> float:
    value = body.get(key, default)
    if not _is_number(value):
        raise InvalidInputError(f'{key} must be a number')
    return value


def request_from_dict(body, defaults: dict) -> CalculationRequest:
    """Decode a calculate payload (API body or CLI JSON file).

    Args:
        body: Decoded JSON; must be an object
        defaults: Mapping with DEFAULT_FIQH, DEFAULT_NISAB_STANDARD,
            DEFAULT_GOLD_PRICE, DEFAULT_SILVER_PRICE and DEFAULT_CURRENCY
            (the Flask app config)

    Instead of conditions_met, is_muslim, has_ownership and hawl_complete may
    be sent individually (each defaults to true).

    Raises:
        InvalidInputError: On any malformed field.
    """
    if not isinstance(body, dict):
        raise InvalidInputError('Request body must be a JSON object')

    raw_assets = body.get('assets', [])
    raw_liabilities = body.get('liabilities', [])
    if not isinstance(raw_assets, list) or not isinstance(raw_liabilities, list):
        raise InvalidInputError('assets and liabilities must be lists')

    if 'conditions_met' in body:
        met = bool(body['conditions_met'])
    else:
        met = conditions_met(
            body.get('is_muslim', True),
            body.get('has_ownership', True),
            body.get('hawl_complete', True),
        )

    return CalculationRequest(
        assets=tuple(asset_from_dict(item, i) for i, item in enumerate(raw_assets)),
        liabilities=tuple(liability_from_dict(item, i) for i, item in enumerate(raw_liabilities)),
        fiqh=parse_fiqh(body.get('fiqh', defaults['DEFAULT_FIQH'])),
        nisab_standard=parse_nisab_standard(body.get('nisab_standard', defaults['DEFAULT_NISAB_STANDARD'])),
        gold_price_per_gram=_get_price(body, 'gold_price_per_gram', defaults['DEFAULT_GOLD_PRICE']),
        silver_price_per_gram=_get_price(body, 'silver_price_per_gram', defaults['DEFAULT_SILVER_PRICE']),
        conditions_met=met,
        currency=str(body.get('currency', defaults['DEFAULT_CURRENCY'])).upper(),
    )
