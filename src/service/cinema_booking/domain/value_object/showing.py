from datetime import date, datetime
import re

import attrs

from src.platform.exception.exceptions import DomainError


SHOW_DATE_FORMAT = '%Y-%m-%d'
# strptime alone accepts '2026-1-5'
_SHOW_DATE_SHAPE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


def parse_show_date(value: str) -> date:
    if not isinstance(value, str) or not _SHOW_DATE_SHAPE.fullmatch(value):
        raise DomainError('invalid date format')
    try:
        return datetime.strptime(value, SHOW_DATE_FORMAT).date()
    except ValueError:
        raise DomainError('invalid date format')


@attrs.frozen
class Showing:
    """One sellable unit: a seat of a cinema at a (date, time)."""

    cinema_id: int
    seat_id: int
    show_date: date
    show_time: str
