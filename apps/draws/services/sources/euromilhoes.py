from __future__ import annotations

import re

from bs4 import BeautifulSoup

from ..dates import DOTTED
from ..errors import LOCATE_DATE, LOCATE_NUMBERS
from ..validation import split_numbers
from .base import HTML, DrawRecord, RawFetchResult, SourceAdapter, SourceDescriptor, digit_runs, logger

EUROMILHOES_URL = 'https://www.euromilhoes.com/'

SECTION_DATE_PATTERN = re.compile(r'^\s*\d{2}\.\d{2}\.\d{4}\s*$')


class EuromilhoesLatestAdapter(SourceAdapter):
    """Latest draw from the ``last-results-container`` block.

    The date is the first bare ``<span>`` in the block and the results list
    holds the five main numbers followed by the two stars.
    """

    descriptor = SourceDescriptor(
        source_id=1,
        name='euromilhoes-latest',
        url=EUROMILHOES_URL,
        content_kind=HTML,
        date_format=DOTTED,
    )

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        soup = BeautifulSoup(raw.text, 'html.parser')
        container = soup.find(class_='last-results-container')
        if container is None:
            raise self._fail(LOCATE_DATE, 'last-results-container block not found')

        date_node = container.find(lambda tag: tag.name == 'span' and not tag.attrs)
        if date_node is None:
            raise self._fail(LOCATE_DATE, 'no date element inside last-results-container')
        draw_date = self._parse_date(date_node.get_text(strip=True))

        results = container.select_one('ul.results')
        if results is None:
            raise self._fail(LOCATE_NUMBERS, 'results list not found inside last-results-container')
        main, stars = split_numbers(digit_runs(results))
        return DrawRecord(date=draw_date, main_numbers=main, star_numbers=stars)


class EuromilhoesSectionAdapter(SourceAdapter):
    """Same page as source 1, read from the ``section.last-results`` block.

    Kept apart from :class:`EuromilhoesLatestAdapter` since the two blocks
    are laid out independently upstream and can drift on their own.
    """

    descriptor = SourceDescriptor(
        source_id=4,
        name='euromilhoes-section',
        url=EUROMILHOES_URL,
        content_kind=HTML,
        date_format=DOTTED,
    )

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        soup = BeautifulSoup(raw.text, 'html.parser')
        section = soup.select_one('section.last-results')
        if section is None:
            raise self._fail(LOCATE_DATE, 'last-results section not found')

        date_node = section.find('span', string=SECTION_DATE_PATTERN)
        if date_node is None:
            raise self._fail(LOCATE_DATE, 'no dd.mm.yyyy date inside last-results section')
        draw_date = self._parse_date(date_node.get_text(strip=True))

        results = soup.select_one('ul.results')
        if results is None:
            raise self._fail(LOCATE_NUMBERS, 'results list not found')
        tokens = digit_runs(results)
        logger.debug('Source %s numbers found: %s', self.source_id, tokens)
        main, stars = split_numbers(tokens)
        return DrawRecord(date=draw_date, main_numbers=main, star_numbers=stars)
