from __future__ import annotations

from bs4 import BeautifulSoup

from ..dates import DASHED
from ..errors import LOCATE_DATE, LOCATE_NUMBERS
from ..validation import split_numbers
from .base import HTML, DrawRecord, RawFetchResult, SourceAdapter, SourceDescriptor, digit_runs

RESULTS_PATH = '/results/'


class EuroMillionsResultsAdapter(SourceAdapter):
    """Latest draw from the euro-millions.com results page.

    The date only appears in the href of the first results-detail link
    (``/results/dd-mm-yyyy``); the first ``ul.balls`` holds the numbers.
    """

    descriptor = SourceDescriptor(
        source_id=2,
        name='euro-millions',
        url='https://www.euro-millions.com/results',
        content_kind=HTML,
        date_format=DASHED,
    )

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        soup = BeautifulSoup(raw.text, 'html.parser')
        link = soup.select_one(f'li > a[href^="{RESULTS_PATH}"]')
        if link is None:
            raise self._fail(LOCATE_DATE, 'no results-detail link found')
        fragment = link['href'][len(RESULTS_PATH):].strip('/')
        draw_date = self._parse_date(fragment)

        balls = soup.select_one('ul.balls')
        if balls is None:
            raise self._fail(LOCATE_NUMBERS, 'balls list not found')
        main, stars = split_numbers(digit_runs(balls))
        return DrawRecord(date=draw_date, main_numbers=main, star_numbers=stars)
