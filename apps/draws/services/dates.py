from __future__ import annotations

import re
from datetime import date, datetime

from .errors import DateParseError

DOTTED = 'dd.mm.yyyy'
DASHED = 'dd-mm-yyyy'
SLASHED = 'dd/mm/yyyy'
CSV = 'dd-Mon-yyyy'

MONTH_ABBREVIATIONS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

# strptime alone accepts unpadded fields, so the shape is checked first.
DATE_FORMATS = {
    DOTTED: (re.compile(r'\d{2}\.\d{2}\.\d{4}'), '%d.%m.%Y'),
    DASHED: (re.compile(r'\d{2}-\d{2}-\d{4}'), '%d-%m-%Y'),
    SLASHED: (re.compile(r'\d{2}/\d{2}/\d{4}'), '%d/%m/%Y'),
    CSV: (re.compile(r'\d{2}-(?:%s)-\d{4}' % '|'.join(MONTH_ABBREVIATIONS)), '%d-%b-%Y'),
}


def normalize_date(value: str, date_format: str) -> date:
    try:
        shape, pattern = DATE_FORMATS[date_format]
    except KeyError as exc:
        raise ValueError(f'Unsupported date format: {date_format}') from exc

    text = (value or '').strip()
    if not shape.fullmatch(text):
        raise DateParseError(text, date_format)
    try:
        return datetime.strptime(text, pattern).date()
    except ValueError as exc:
        raise DateParseError(text, date_format) from exc


def canonical(value: date) -> str:
    return value.isoformat()
