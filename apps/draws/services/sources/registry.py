from __future__ import annotations

from typing import List

from ..config import draws_config
from ..errors import UnknownSourceError
from .base import SourceAdapter
from .euro_millions import EuroMillionsResultsAdapter
from .euromilhoes import EuromilhoesLatestAdapter, EuromilhoesSectionAdapter
from .national_lottery import NationalLotteryCsvAdapter
from .santacasa import SantaCasaAdapter

ADAPTERS = {
    1: EuromilhoesLatestAdapter,
    2: EuroMillionsResultsAdapter,
    3: SantaCasaAdapter,
    4: EuromilhoesSectionAdapter,
    5: NationalLotteryCsvAdapter,
}

SOURCE_ORDER = tuple(sorted(ADAPTERS))


def parse_source_id(value) -> int:
    try:
        source_id = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise UnknownSourceError('Unsupported site id', detail=str(value)) from exc
    if source_id not in ADAPTERS:
        raise UnknownSourceError('Unsupported site id', source_id, f'choose one of {list(SOURCE_ORDER)}')
    return source_id


def get_adapter(source_id, **kwargs) -> SourceAdapter:
    return ADAPTERS[parse_source_id(source_id)](**kwargs)


def get_enabled_adapters(**kwargs) -> List[SourceAdapter]:
    enabled = set(draws_config().get('ENABLED_SOURCES', SOURCE_ORDER))
    return [ADAPTERS[source_id](**kwargs) for source_id in SOURCE_ORDER if source_id in enabled]
