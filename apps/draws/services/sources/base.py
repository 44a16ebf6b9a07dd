from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

import requests

from ..config import draws_config
from ..dates import canonical, normalize_date
from ..errors import ExtractError, FetchError
from ..validation import split_groups

HTML = 'html'
CSV = 'csv'

DEFAULT_USER_AGENTS = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36',
)
DEFAULT_REFERER = 'https://www.bing.com/?cc=pt'
DEFAULT_TIMEOUT = 120

DIGIT_RUN = re.compile(r'^\s*(\d+)\s*$')

logger = logging.getLogger('draws')


@dataclass(frozen=True)
class SourceDescriptor:
    source_id: int
    name: str
    url: str
    content_kind: str
    date_format: str


@dataclass(frozen=True)
class RawFetchResult:
    descriptor: SourceDescriptor
    text: str
    content_kind: str


@dataclass(frozen=True)
class DrawRecord:
    date: date
    main_numbers: Tuple[int, ...]
    star_numbers: Tuple[int, ...]

    def __post_init__(self):
        main, stars = split_groups(self.main_numbers, self.star_numbers)
        object.__setattr__(self, 'main_numbers', tuple(main))
        object.__setattr__(self, 'star_numbers', tuple(stars))

    @property
    def iso_date(self) -> str:
        return canonical(self.date)

    @property
    def numbers(self) -> Tuple[int, ...]:
        return self.main_numbers + self.star_numbers


class HeaderPolicy:
    """Request headers sent to the draw sources.

    A random User-Agent is chosen for every request. HTML pages also get a
    fixed Referer; the CSV feed is requested without one.
    """

    def __init__(
        self,
        user_agents: Optional[Sequence[str]] = None,
        referer: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        config = draws_config()
        self.user_agents = list(user_agents or config.get('USER_AGENTS') or DEFAULT_USER_AGENTS)
        self.referer = referer if referer is not None else config.get('REFERER', DEFAULT_REFERER)
        self.random = rng or random.Random()

    def headers_for(self, descriptor: SourceDescriptor) -> dict:
        headers = {'User-Agent': self.random.choice(self.user_agents)}
        if descriptor.content_kind == HTML and self.referer:
            headers['Referer'] = self.referer
        return headers


class SourceAdapter:
    descriptor: SourceDescriptor

    def __init__(
        self,
        descriptor: Optional[SourceDescriptor] = None,
        header_policy: Optional[HeaderPolicy] = None,
        timeout: Optional[float] = None,
    ):
        if descriptor is not None:
            self.descriptor = descriptor
        self.header_policy = header_policy or HeaderPolicy()
        self.timeout = timeout if timeout is not None else draws_config().get('REQUEST_TIMEOUT', DEFAULT_TIMEOUT)

    @property
    def source_id(self) -> int:
        return self.descriptor.source_id

    def fetch(self) -> RawFetchResult:
        url = self.descriptor.url
        logger.info('Fetching source %s (%s) from %s', self.source_id, self.descriptor.name, url)
        try:
            response = requests.get(
                url,
                headers=self.header_policy.headers_for(self.descriptor),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError('Failed to fetch source content', self.source_id, str(exc)) from exc
        return RawFetchResult(descriptor=self.descriptor, text=response.text, content_kind=self.descriptor.content_kind)

    def extract(self, raw: RawFetchResult) -> DrawRecord:
        raise NotImplementedError

    def _parse_date(self, value: str) -> date:
        return normalize_date(value, self.descriptor.date_format)

    def _fail(self, stage: str, reason: str) -> ExtractError:
        return ExtractError(stage, reason, source=self.source_id)


def digit_runs(node) -> List[str]:
    """Text nodes under ``node`` that are nothing but a run of digits."""
    runs = []
    for text in node.find_all(string=True):
        match = DIGIT_RUN.match(text)
        if match:
            runs.append(match.group(1))
    return runs
