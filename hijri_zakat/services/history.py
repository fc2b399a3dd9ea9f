"""Saved calculation history and unpaid zakat (arrears) tracking.

Records are immutable; every operation returns a new tuple with the newest
record first. Storage is the caller's concern.
"""
import uuid
from dataclasses import dataclass, replace

from hijri_zakat.errors import InvalidInputError
from hijri_zakat.services.calc import CalculationResult


@dataclass(frozen=True)
class HistoryRecord:
    id: str
    timestamp: int  # milliseconds since the epoch, supplied by the caller
    hawl_date: str  # YYYY-MM-DD
    currency: str
    net_wealth: float
    zakat_payable: float
    is_paid: bool = False

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'hawl_date': self.hawl_date,
            'currency': self.currency,
            'net_wealth': self.net_wealth,
            'zakat_payable': self.zakat_payable,
            'is_paid': self.is_paid,
        }


def build_record(
    result: CalculationResult,
    hawl_date: str,
    currency: str,
    timestamp: int,
    record_id: str | None = None,
) -> HistoryRecord:
    """Snapshot a calculation result. New records start unpaid."""
    return HistoryRecord(
        id=record_id or uuid.uuid4().hex,
        timestamp=timestamp,
        hawl_date=hawl_date,
        currency=currency,
        net_wealth=result.net_zakatable_wealth,
        zakat_payable=result.zakat_payable,
    )


def add_record(history: tuple, record: HistoryRecord) -> tuple:
    return (record, *history)


def toggle_paid(history: tuple, record_id: str) -> tuple:
    """Flip the paid flag of one record; others are returned unchanged."""
    return tuple(
        replace(record, is_paid=not record.is_paid) if record.id == record_id else record
        for record in history
    )


def delete_record(history: tuple, record_id: str) -> tuple:
    return tuple(record for record in history if record.id != record_id)


def total_arrears(history, currency: str) -> float:
    """Sum zakat still owed in one currency.

    Records in other currencies are not converted and are left out.
    """
    return sum(
        (record.zakat_payable for record in history if not record.is_paid and record.currency == currency),
        0.0,
    )


def record_from_dict(data: dict) -> HistoryRecord:
    """Build a HistoryRecord from a request item (snake or camel case keys)."""
    if not isinstance(data, dict):
        raise InvalidInputError('History items must be objects')
    try:
        return HistoryRecord(
            id=str(data['id']),
            timestamp=int(data.get('timestamp', 0)),
            hawl_date=data.get('hawl_date', data.get('hawlDate', '')),
            currency=data['currency'],
            net_wealth=float(data.get('net_wealth', data.get('netWealth', 0))),
            zakat_payable=float(data.get('zakat_payable', data.get('zakatPayable', 0))),
            is_paid=bool(data.get('is_paid', data.get('isPaid', False))),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInputError(f'Invalid history record: {e}')
