"""API routes for calendar conversion and zakat calculation."""
from flask import Blueprint, jsonify, request, current_app

from hijri_zakat.constants import GOLD_NISAB_GRAMS, SILVER_NISAB_GRAMS, ZAKAT_RATE
from hijri_zakat.data.months import get_month_names, get_supported_locales, is_valid_locale, is_rtl
from hijri_zakat.errors import InvalidInputError
from hijri_zakat.services.calc import AssetCategory, request_from_dict
from hijri_zakat.services.hijri import (
    GregorianDate,
    gregorian_to_hijri,
    gregorian_to_jdn,
    hijri_to_gregorian,
    clamp_hijri_day,
    month_name,
    format_hijri,
    format_iso_date,
    parse_iso_date,
    hawl_end_date,
    is_hawl_complete,
)
from hijri_zakat.services.history import record_from_dict, total_arrears
from hijri_zakat.services import time_provider

api_bp = Blueprint('api', __name__)


@api_bp.errorhandler(InvalidInputError)
def _invalid_input(e):
    current_app.logger.info(f"Rejected request to {request.path}: {e}")
    return jsonify({'error': str(e)}), 400


def _get_locale() -> str:
    locale = request.args.get('locale', current_app.config['DEFAULT_LOCALE'])
    if not is_valid_locale(locale):
        return current_app.config['DEFAULT_LOCALE']
    return locale


def _hijri_payload(gregorian: GregorianDate, locale: str) -> dict:
    hijri = gregorian_to_hijri(*gregorian)
    return {
        'gregorian': format_iso_date(gregorian),
        'hijri': hijri.to_dict(),
        'month_name': month_name(hijri.month, locale),
        'formatted': format_hijri(hijri, locale),
        'locale': locale,
        'jdn': gregorian_to_jdn(*gregorian),
    }


@api_bp.route('/hijri/from-gregorian')
def from_gregorian():
    """Convert a Gregorian date to Hijri.

    Query Parameters:
        date: YYYY-MM-DD (required)
        locale: en, ur, ar or hi (default: configured locale)
    """
    date_str = request.args.get('date')
    if not date_str:
        return jsonify({'error': 'Missing date parameter. Use YYYY-MM-DD'}), 400
    gregorian = parse_iso_date(date_str)
    return jsonify(_hijri_payload(gregorian, _get_locale()))


@api_bp.route('/hijri/to-gregorian')
def to_gregorian():
    """Convert a Hijri date to Gregorian.

    Query Parameters:
        day: 1-30 (values outside are clamped, like the date picker)
        month: 0-11 (0 = Muharram)
        year: Hijri year
    """
    day = request.args.get('day', type=int)
    month = request.args.get('month', type=int)
    year = request.args.get('year', type=int)
    if day is None or month is None or year is None:
        return jsonify({'error': 'day, month and year are required integers'}), 400
    if not 0 <= month <= 11:
        return jsonify({'error': f'Invalid month: {month}. Must be 0-11'}), 400

    locale = _get_locale()
    day = clamp_hijri_day(day)
    gregorian = hijri_to_gregorian(day, month, year)
    return jsonify({
        'hijri': {'day': day, 'month': month, 'year': year},
        'month_name': month_name(month, locale),
        'gregorian': format_iso_date(gregorian),
        'locale': locale,
    })


@api_bp.route('/hijri/months')
def months():
    """Return the twelve Hijri month names for a locale."""
    locale = _get_locale()
    return jsonify({
        'locale': locale,
        'rtl': is_rtl(locale),
        'months': [{'index': i, 'name': name} for i, name in enumerate(get_month_names(locale))],
    })


@api_bp.route('/hawl')
def hawl():
    """Return the end of the hawl (one lunar year) started on a date.

    Query Parameters:
        start: YYYY-MM-DD (required)
        today: YYYY-MM-DD (default: today, UTC)
    """
    start_str = request.args.get('start')
    if not start_str:
        return jsonify({'error': 'Missing start parameter. Use YYYY-MM-DD'}), 400
    start = parse_iso_date(start_str)
    today_str = request.args.get('today')
    today = parse_iso_date(today_str) if today_str else time_provider.today()

    end = hawl_end_date(start)
    return jsonify({
        'start': format_iso_date(start),
        'hijri_start': gregorian_to_hijri(*start).to_dict(),
        'hawl_end': format_iso_date(end),
        'today': format_iso_date(today),
        'is_complete': is_hawl_complete(start, today),
        'days_remaining': max(0, gregorian_to_jdn(*end) - gregorian_to_jdn(*today)),
    })


@api_bp.route('/config')
def config():
    """Return fixed constants and calculation defaults."""
    return jsonify({
        'zakat_rate': ZAKAT_RATE,
        'nisab': {'gold_grams': GOLD_NISAB_GRAMS, 'silver_grams': SILVER_NISAB_GRAMS},
        'asset_categories': [
            {'id': c.value, 'unit': 'grams' if c.is_mass else 'currency'} for c in AssetCategory
        ],
        'locales': get_supported_locales(),
        'defaults': {
            'fiqh': current_app.config['DEFAULT_FIQH'],
            'nisab_standard': current_app.config['DEFAULT_NISAB_STANDARD'],
            'gold_price_per_gram': current_app.config['DEFAULT_GOLD_PRICE'],
            'silver_price_per_gram': current_app.config['DEFAULT_SILVER_PRICE'],
            'currency': current_app.config['DEFAULT_CURRENCY'],
            'locale': current_app.config['DEFAULT_LOCALE'],
        },
    })


@api_bp.route('/calculate', methods=['POST'])
def calculate():
    """Calculate zakat from submitted assets and liabilities.

    Request body:
    {
        "assets": [{"id": "1", "category": "cash", "name": "Savings", "value": 10000, "is_zakatable": true}],
        "liabilities": [{"id": "1", "name": "Loan", "amount": 500}],
        "fiqh": "Hanafi",
        "nisab_standard": "Silver",
        "gold_price_per_gram": 65,
        "silver_price_per_gram": 0.8,
        "conditions_met": true,
        "currency": "USD"
    }

    Instead of conditions_met, is_muslim, has_ownership and hawl_complete may
    be sent individually (each defaults to true).
    """
    body = request.get_json(silent=True)
    calc_request = request_from_dict({} if body is None else body, current_app.config)
    result = calc_request.calculate()

    response = result.to_dict()
    response.update({
        'currency': calc_request.currency,
        'fiqh': calc_request.fiqh.value,
        'nisab_standard': calc_request.nisab_standard.value,
        'nisab_grams': calc_request.nisab_standard.grams,
        'conditions_met': calc_request.conditions_met,
        'zakat_rate': ZAKAT_RATE,
    })
    return jsonify(response)


@api_bp.route('/history/arrears', methods=['POST'])
def history_arrears():
    """Total unpaid zakat across saved records in one currency.

    Request body: {"history": [...records...], "currency": "USD"}
    """
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    raw_history = body.get('history', [])
    if not isinstance(raw_history, list):
        return jsonify({'error': 'history must be a list'}), 400
    currency = str(body.get('currency', current_app.config['DEFAULT_CURRENCY'])).upper()

    history = [record_from_dict(item) for item in raw_history]
    unpaid = [r for r in history if not r.is_paid and r.currency == currency]
    return jsonify({
        'currency': currency,
        'total_arrears': total_arrears(history, currency),
        'unpaid_count': len(unpaid),
    })
