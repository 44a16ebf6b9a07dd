from __future__ import annotations

import csv
import io

from ..dates import CSV as CSV_DATE
from ..errors import COUNT_NUMBERS, LOCATE_DATE
from ..validation import split_numbers
from .base import CSV, DrawRecord, RawFetchResult, SourceAdapter, SourceDescriptor

DATE_COLUMN = 0
# Ball 1-5 then Lucky Star 1-2.
NUMBER_COLUMNS = slice(1, 8)
MIN_COLUMNS = 8


class NationalLotteryCsvAdapter(SourceAdapter):
    descriptor = SourceDescriptor(
        source_id=5,
        name='national-lottery',
        url='https://www.national-lottery.co.uk/results/euromillions/draw-history/csv',
        content_kind=CSV,
        date_format=CSV_DATE,
    )

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        reader = csv.reader(io.StringIO(raw.text))
        header = next(reader, None)
        if header is None:
            raise self._fail(LOCATE_DATE, 'CSV feed is empty')
        row = next(reader, None)
        if row is None:
            raise self._fail(LOCATE_DATE, 'CSV feed has no data rows')
        if len(row) < MIN_COLUMNS:
            raise self._fail(COUNT_NUMBERS, f'expected at least {MIN_COLUMNS} columns, got {len(row)}')

        draw_date = self._parse_date(row[DATE_COLUMN])
        main, stars = split_numbers(row[NUMBER_COLUMNS])
        return DrawRecord(date=draw_date, main_numbers=main, star_numbers=stars)
