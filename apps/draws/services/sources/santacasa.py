from __future__ import annotations

import re

from ..dates import SLASHED
from ..errors import LOCATE_DATE, LOCATE_NUMBERS
from ..validation import split_groups
from .base import HTML, DrawRecord, RawFetchResult, SourceAdapter, SourceDescriptor

DATE_PATTERN = re.compile(r'Data do Sorteio - (\d{2}/\d{2}/\d{4})')
# Five main numbers, a literal "+", then the two stars.
NUMBERS_PATTERN = re.compile(
    r'<li>(\d{1,2})\s+(\d{1,2})\s+(\d{1,2})\s+(\d{1,2})\s+(\d{1,2})'
    r'\s+\+\s+(\d{1,2})\s+(\d{1,2})'
)


class SantaCasaAdapter(SourceAdapter):
    descriptor = SourceDescriptor(
        source_id=3,
        name='santa-casa',
        url='https://www.jogossantacasa.pt/web/SCCartazResult/',
        content_kind=HTML,
        date_format=SLASHED,
    )

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        date_match = DATE_PATTERN.search(raw.text)
        if date_match is None:
            raise self._fail(LOCATE_DATE, 'draw date label not found')
        draw_date = self._parse_date(date_match.group(1))

        numbers_match = NUMBERS_PATTERN.search(raw.text)
        if numbers_match is None:
            raise self._fail(LOCATE_NUMBERS, 'no "n n n n n + s s" results line found')
        groups = numbers_match.groups()
        main, stars = split_groups(groups[:5], groups[5:])
        return DrawRecord(date=draw_date, main_numbers=main, star_numbers=stars)
