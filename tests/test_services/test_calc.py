"""Tests for calc service."""
import math

import pytest

from hijri_zakat.errors import InvalidInputError
from hijri_zakat.services.calc import (
    Asset,
    AssetCategory,
    BreakdownItem,
    Fiqh,
    Liability,
    NisabStandard,
    asset_from_dict,
    calculate_zakat,
    conditions_met,
    liability_from_dict,
    parse_fiqh,
    parse_nisab_standard,
    request_from_dict,
    value_asset,
    GOLD_NISAB_GRAMS,
    SILVER_NISAB_GRAMS,
    ZAKAT_RATE,
)

GOLD_PRICE = 65.0
SILVER_PRICE = 0.8


def _asset(category, value, zakatable=True, name=None):
    return Asset(id=name or category, category=category, name=name or category.title(), value=value,
                 is_zakatable=zakatable)


def _calc(assets, liabilities=(), fiqh=Fiqh.HANAFI, nisab=NisabStandard.SILVER, met=True):
    return calculate_zakat(list(assets), list(liabilities), fiqh, nisab, GOLD_PRICE, SILVER_PRICE, met)


class TestValueAsset:
    """Tests for per-asset valuation."""

    @pytest.mark.parametrize('category', ['cash', 'business', 'investment', 'crypto'])
    def test_monetary_categories_at_face_value(self, category):
        assert value_asset(_asset(category, 1234.5), Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == 1234.5

    def test_gold_grams_times_price(self):
        assert value_asset(_asset('gold', 10), Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == 650.0

    def test_silver_grams_times_price(self):
        assert value_asset(_asset('silver', 100), Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == pytest.approx(80.0)

    def test_jewelry_hanafi_valued_as_gold(self):
        assert value_asset(_asset('jewelry', 50), Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == 3250.0

    def test_jewelry_shafi_exempt(self):
        assert value_asset(_asset('jewelry', 50), Fiqh.SHAFI, GOLD_PRICE, SILVER_PRICE) == 0

    def test_non_zakatable_is_zero(self):
        assert value_asset(_asset('cash', 500, zakatable=False), Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == 0

    def test_unknown_category_at_face_value(self):
        asset = Asset(id='x', category='property', name='Flat', value=900)
        assert asset.category == 'property'
        assert value_asset(asset, Fiqh.HANAFI, GOLD_PRICE, SILVER_PRICE) == 900

    def test_string_category_coerced_to_enum(self):
        assert _asset('Gold', 1).category is AssetCategory.GOLD

    def test_mass_categories(self):
        assert AssetCategory.GOLD.is_mass
        assert AssetCategory.JEWELRY.is_mass
        assert not AssetCategory.CASH.is_mass


class TestCalculateZakat:
    """Tests for calculate_zakat function."""

    def test_cash_above_silver_nisab(self):
        """10000 cash against a silver nisab of 52.5g x 0.8."""
        result = _calc([_asset('cash', 10000)])

        assert result.total_assets_value == 10000
        assert result.total_liabilities == 0
        assert result.net_zakatable_wealth == 10000
        assert result.nisab_threshold == pytest.approx(42.0)
        assert result.is_eligible is True
        assert result.zakat_payable == pytest.approx(250.0)
        assert result.breakdown == (BreakdownItem(label='Cash', amount=10000),)

    def test_conditions_not_met(self):
        """Wealth is still reported when the preconditions fail."""
        result = _calc([_asset('cash', 10000)], met=False)

        assert result.is_eligible is False
        assert result.zakat_payable == 0
        assert result.net_zakatable_wealth == 10000

    def test_jewelry_shafi_excluded_from_breakdown(self):
        result = _calc([_asset('jewelry', 50)], fiqh=Fiqh.SHAFI)

        assert result.total_assets_value == 0
        assert result.breakdown == ()

    def test_jewelry_hanafi_included(self):
        result = _calc([_asset('jewelry', 50)], fiqh=Fiqh.HANAFI)

        assert result.total_assets_value == 3250.0
        assert result.breakdown == (BreakdownItem(label='Jewelry', amount=3250.0),)

    def test_liabilities_exceed_assets(self):
        """Net wealth floors at zero and is never eligible."""
        for met in (True, False):
            result = _calc([_asset('cash', 100)], [Liability(id='l1', name='Loan', amount=500)], met=met)
            assert result.net_zakatable_wealth == 0
            assert result.is_eligible is False
            assert result.zakat_payable == 0

    def test_liabilities_deducted(self):
        result = _calc([_asset('cash', 10000)], [
            Liability(id='l1', name='Loan', amount=1500),
            Liability(id='l2', name='Bills', amount=500),
        ])

        assert result.total_liabilities == 2000
        assert result.net_zakatable_wealth == 8000
        assert result.zakat_payable == pytest.approx(200.0)

    def test_gold_nisab_standard(self):
        """Gold basis uses the gold nisab mass at the gold price."""
        result = _calc([_asset('cash', 1000)], nisab=NisabStandard.GOLD)

        assert result.nisab_threshold == pytest.approx(GOLD_NISAB_GRAMS * GOLD_PRICE)
        assert result.is_eligible is False
        assert result.zakat_payable == 0

    def test_at_threshold_is_eligible(self):
        threshold = SILVER_NISAB_GRAMS * SILVER_PRICE
        result = _calc([_asset('cash', threshold)])

        assert result.is_eligible is True
        assert result.zakat_payable == pytest.approx(threshold * ZAKAT_RATE)

    def test_breakdown_keeps_input_order_and_drops_non_positive(self):
        result = _calc([
            _asset('silver', 100, name='Coins'),
            _asset('cash', 0, name='Empty wallet'),
            _asset('cash', 500, zakatable=False, name='Trust'),
            _asset('cash', -20, name='Overdraft'),
            _asset('gold', 2, name='Ring'),
        ])

        assert [item.label for item in result.breakdown] == ['Coins', 'Ring']
        assert result.total_assets_value == pytest.approx(80.0 + 130.0)

    def test_liabilities_not_filtered(self):
        """Every liability counts, even with no zakatable assets."""
        result = _calc([_asset('cash', 100, zakatable=False)], [Liability(id='l', name='Loan', amount=10)])

        assert result.total_liabilities == 10
        assert result.net_zakatable_wealth == 0

    def test_empty_inputs(self):
        result = _calc([])

        assert result.total_assets_value == 0
        assert result.net_zakatable_wealth == 0
        assert result.is_eligible is False
        assert result.zakat_payable == 0

    def test_accepts_enum_values(self):
        result = calculate_zakat([_asset('cash', 10000)], [], 'Hanafi', 'Silver', GOLD_PRICE, SILVER_PRICE, True)
        assert result.zakat_payable == pytest.approx(250.0)

    def test_idempotent(self):
        assets = [_asset('cash', 1234.56), _asset('gold', 3.3), _asset('jewelry', 7.1)]
        liabilities = [Liability(id='l', name='Loan', amount=99.99)]

        first = _calc(assets, liabilities)
        second = _calc(assets, liabilities)

        assert first == second

    def test_net_never_negative(self):
        for assets_value in (0, 10, 1000):
            for debt in (0, 5, 5000):
                result = _calc([_asset('cash', assets_value)], [Liability(id='l', name='D', amount=debt)])
                assert result.net_zakatable_wealth >= 0

    def test_nan_price_propagates(self):
        result = calculate_zakat([_asset('gold', 10)], [], Fiqh.HANAFI, NisabStandard.GOLD,
                                 float('nan'), SILVER_PRICE, True)
        assert math.isnan(result.nisab_threshold)
        assert result.is_eligible is False

    def test_does_not_mutate_inputs(self):
        assets = [_asset('cash', 100)]
        liabilities = [Liability(id='l', name='Loan', amount=10)]
        _calc(assets, liabilities)
        assert assets == [_asset('cash', 100)]
        assert liabilities == [Liability(id='l', name='Loan', amount=10)]

    def test_to_dict(self):
        data = _calc([_asset('cash', 10000)]).to_dict()

        assert data['zakat_payable'] == pytest.approx(250.0)
        assert data['breakdown'] == [{'label': 'Cash', 'amount': 10000}]
        assert set(data) == {
            'total_assets_value', 'total_liabilities', 'net_zakatable_wealth',
            'nisab_threshold', 'is_eligible', 'zakat_payable', 'breakdown',
        }


class TestConditionsMet:
    def test_all_true(self):
        assert conditions_met(True, True, True) is True

    @pytest.mark.parametrize('flags', [(False, True, True), (True, False, True), (True, True, False)])
    def test_any_false(self, flags):
        assert conditions_met(*flags) is False


class TestParsing:
    """Tests for request payload decoding."""

    def test_parse_fiqh_case_insensitive(self):
        assert parse_fiqh('shafi') is Fiqh.SHAFI
        assert parse_fiqh('HANAFI') is Fiqh.HANAFI

    def test_parse_fiqh_invalid(self):
        with pytest.raises(InvalidInputError):
            parse_fiqh('Maliki')

    def test_parse_nisab_standard(self):
        assert parse_nisab_standard('gold') is NisabStandard.GOLD
        with pytest.raises(InvalidInputError):
            parse_nisab_standard('platinum')

    def test_nisab_standard_grams(self):
        assert NisabStandard.GOLD.grams == GOLD_NISAB_GRAMS
        assert NisabStandard.SILVER.grams == SILVER_NISAB_GRAMS

    def test_asset_from_dict(self):
        asset = asset_from_dict({'id': 'a1', 'category': 'gold', 'name': 'Bar', 'value': 10})

        assert asset == Asset(id='a1', category=AssetCategory.GOLD, name='Bar', value=10, is_zakatable=True)

    def test_asset_from_dict_accepts_camel_case(self):
        asset = asset_from_dict({'type': 'cash', 'value': 5, 'isZakatable': False}, index=3)

        assert asset.id == 'asset-3'
        assert asset.name == 'Cash'
        assert asset.is_zakatable is False

    @pytest.mark.parametrize('data', [
        {'category': 'cash'},
        {'value': 10},
        {'category': 'cash', 'value': '10'},
        {'category': 'cash', 'value': True},
        {'category': 'property', 'value': 10},
        'cash',
    ])
    def test_asset_from_dict_invalid(self, data):
        with pytest.raises(InvalidInputError):
            asset_from_dict(data)

    def test_liability_from_dict(self):
        liability = liability_from_dict({'name': 'Loan', 'amount': 250.5}, index=1)

        assert liability == Liability(id='liability-1', name='Loan', amount=250.5)

    def test_liability_from_dict_invalid(self):
        with pytest.raises(InvalidInputError):
            liability_from_dict({'name': 'Loan'})


DEFAULTS = {
    'DEFAULT_FIQH': 'Hanafi',
    'DEFAULT_NISAB_STANDARD': 'Silver',
    'DEFAULT_GOLD_PRICE': GOLD_PRICE,
    'DEFAULT_SILVER_PRICE': SILVER_PRICE,
    'DEFAULT_CURRENCY': 'USD',
}


class TestRequestFromDict:
    """Tests for decoding a whole calculate payload."""

    def test_defaults_fill_missing_fields(self):
        req = request_from_dict({}, DEFAULTS)

        assert req.assets == ()
        assert req.fiqh is Fiqh.HANAFI
        assert req.nisab_standard is NisabStandard.SILVER
        assert req.gold_price_per_gram == GOLD_PRICE
        assert req.conditions_met is True
        assert req.currency == 'USD'

    def test_calculate(self):
        req = request_from_dict({
            'assets': [{'category': 'cash', 'name': 'Cash', 'value': 10000}],
            'currency': 'pkr',
        }, DEFAULTS)

        assert req.currency == 'PKR'
        assert req.calculate() == _calc([_asset('cash', 10000)])

    def test_individual_conditions(self):
        req = request_from_dict({'is_muslim': True, 'has_ownership': True, 'hawl_complete': False}, DEFAULTS)
        assert req.conditions_met is False

    @pytest.mark.parametrize('body', [[1, 2], 'assets', 5])
    def test_body_must_be_object(self, body):
        with pytest.raises(InvalidInputError, match='JSON object'):
            request_from_dict(body, DEFAULTS)

    @pytest.mark.parametrize('key', ['gold_price_per_gram', 'silver_price_per_gram'])
    @pytest.mark.parametrize('value', ['abc', None, True, [65]])
    def test_price_must_be_number(self, key, value):
        with pytest.raises(InvalidInputError, match=key):
            request_from_dict({key: value}, DEFAULTS)

    def test_liabilities_must_be_list(self):
        with pytest.raises(InvalidInputError):
            request_from_dict({'liabilities': {'amount': 5}}, DEFAULTS)
