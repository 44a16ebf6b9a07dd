from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, List, Optional

from ..models import IngestionLog
from .config import draws_config
from .errors import PersistenceError, SourceFailed, ValidationError
from .persistence import DrawGateway
from .sources.base import DrawRecord, SourceAdapter
from .sources.registry import SOURCE_ORDER, get_adapter, get_enabled_adapters, parse_source_id
from .validation import validate_record

logger = logging.getLogger('draws')

ALL_SOURCES = 'all'

FETCHING = 'fetching'
EXTRACTING = 'extracting'
VALIDATING = 'validating'
COMPARING = 'comparing'
PERSISTING = 'persisting'

PERSISTED = IngestionLog.PERSISTED
SKIP_SAME = IngestionLog.SKIP_SAME
SKIP_STALE = IngestionLog.SKIP_STALE
FAILED = IngestionLog.FAILED

DEFAULT_DELAY_SECONDS = 1


@dataclass(frozen=True)
class AttemptResult:
    source_id: int
    outcome: str
    record: Optional[DrawRecord] = None
    latest: Optional[date] = None
    stage: str = ''
    message: str = ''


@dataclass
class RunSummary:
    target: str
    results: List[AttemptResult] = field(default_factory=list)

    def count(self, outcome: str) -> int:
        return sum(1 for result in self.results if result.outcome == outcome)

    @property
    def failed(self) -> bool:
        return self.count(FAILED) > 0

    @property
    def message(self) -> str:
        return (
            f"Processed {len(self.results)} sources: persisted {self.count(PERSISTED)}, "
            f"unchanged {self.count(SKIP_SAME)}, stale {self.count(SKIP_STALE)}, failed {self.count(FAILED)}"
        )


def freshness(new_date: date, latest: Optional[date]) -> str:
    """Decide what to do with a draw dated ``new_date``.

    Dates compare chronologically, which matches comparing their
    zero-padded ISO strings. An empty store accepts anything.
    """
    if latest is None or new_date > latest:
        return PERSISTED
    if new_date == latest:
        return SKIP_SAME
    return SKIP_STALE


class IngestionCoordinator:
    def __init__(
        self,
        gateway: Optional[DrawGateway] = None,
        adapters: Optional[Iterable[SourceAdapter]] = None,
        delay_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.gateway = gateway or DrawGateway()
        if adapters is None:
            adapters = get_enabled_adapters()
        self.adapters = {adapter.source_id: adapter for adapter in adapters}
        if delay_seconds is None:
            delay_seconds = draws_config().get('SOURCE_DELAY_SECONDS', DEFAULT_DELAY_SECONDS)
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def run(self, target: str = ALL_SOURCES) -> RunSummary:
        if str(target).strip().lower() == ALL_SOURCES:
            return self.run_all()
        source_id = parse_source_id(target)
        summary = RunSummary(target=str(source_id))
        summary.results.append(self.run_source(source_id))
        logger.info('Update completed: %s', summary.message)
        return summary

    def run_all(self) -> RunSummary:
        summary = RunSummary(target=ALL_SOURCES)
        source_ids = [source_id for source_id in SOURCE_ORDER if source_id in self.adapters]
        for index, source_id in enumerate(source_ids):
            if index:
                self.sleep(self.delay_seconds)
            try:
                summary.results.append(self.run_source(source_id))
            except SourceFailed as exc:
                logger.error('Error processing source %s: %s', source_id, exc)
                summary.results.append(exc.result)
        logger.info('Update completed: %s', summary.message)
        return summary

    def run_source(self, source_id: int) -> AttemptResult:
        adapter = self._adapter(source_id)
        logger.info('Updating from source %s (%s)', source_id, adapter.descriptor.name)
        stage = FETCHING
        record = None
        latest = None
        try:
            raw = adapter.fetch()
            stage = EXTRACTING
            record = adapter.extract(raw)
            stage = VALIDATING
            validate_record(record)
            stage = COMPARING
            # Re-read every attempt: an earlier source in this run may have inserted.
            latest = self.gateway.latest_date()
            logger.debug('Latest stored date before source %s: %s', source_id, latest)
            outcome = freshness(record.date, latest)
            if outcome == PERSISTED:
                stage = PERSISTING
                self.gateway.insert_draw(record)
        except Exception as exc:
            if isinstance(exc, ValidationError) and stage == EXTRACTING:
                stage = VALIDATING
            result = AttemptResult(
                source_id=source_id,
                outcome=FAILED,
                record=record,
                latest=latest,
                stage=stage,
                message=str(exc),
            )
            self._record(result)
            raise SourceFailed(source_id, stage, exc, result=result) from exc

        result = AttemptResult(
            source_id=source_id,
            outcome=outcome,
            record=record,
            latest=latest,
            message=self._describe(outcome, record, latest),
        )
        if outcome == SKIP_STALE:
            logger.warning('Source %s: %s', source_id, result.message)
        else:
            logger.info('Source %s: %s', source_id, result.message)
        self._record(result)
        return result

    def _adapter(self, source_id: int) -> SourceAdapter:
        adapter = self.adapters.get(source_id)
        if adapter is None:
            adapter = get_adapter(source_id)
            self.adapters[source_id] = adapter
        return adapter

    def _describe(self, outcome: str, record: DrawRecord, latest: Optional[date]) -> str:
        if outcome == PERSISTED:
            numbers = ', '.join(str(n) for n in record.numbers)
            return f"new draw {record.iso_date} stored (numbers: {numbers})"
        if outcome == SKIP_SAME:
            return f"draw {record.iso_date} is already the latest stored"
        return f"draw {record.iso_date} is older than the latest stored {latest.isoformat()}"

    def _record(self, result: AttemptResult) -> None:
        try:
            self.gateway.record_attempt(result)
        except PersistenceError as exc:
            logger.warning('Could not record attempt for source %s: %s', result.source_id, exc)


def update_draws(target: str = ALL_SOURCES, **kwargs) -> RunSummary:
    return IngestionCoordinator(**kwargs).run(target)
