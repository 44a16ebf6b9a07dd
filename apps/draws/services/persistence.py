from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

from django.db import DatabaseError, IntegrityError, transaction

from ..models import Draw, IngestionLog
from .errors import DuplicateDateError, StorageError
from .sources.base import DrawRecord

if TYPE_CHECKING:
    from .ingestion import AttemptResult


class DrawGateway:
    """Append-only access to the stored draw history."""

    def latest_date(self) -> Optional[date]:
        try:
            return Draw.objects.order_by('-date').values_list('date', flat=True).first()
        except DatabaseError as exc:
            raise StorageError('Failed to read latest draw date', detail=str(exc)) from exc

    def insert_draw(self, record: DrawRecord) -> Draw:
        main = record.main_numbers
        stars = record.star_numbers
        try:
            with transaction.atomic():
                return Draw.objects.create(
                    date=record.date,
                    number_1=main[0],
                    number_2=main[1],
                    number_3=main[2],
                    number_4=main[3],
                    number_5=main[4],
                    star_1=stars[0],
                    star_2=stars[1],
                )
        except IntegrityError as exc:
            raise DuplicateDateError(f'A draw for {record.iso_date} is already stored', detail=str(exc)) from exc
        except DatabaseError as exc:
            raise StorageError(f'Failed to store draw for {record.iso_date}', detail=str(exc)) from exc

    def record_attempt(self, result: 'AttemptResult') -> IngestionLog:
        try:
            return IngestionLog.objects.create(
                source=result.source_id,
                outcome=result.outcome,
                stage=result.stage or '',
                draw_date=result.record.date if result.record else None,
                message=result.message,
            )
        except DatabaseError as exc:
            raise StorageError('Failed to record ingestion attempt', result.source_id, str(exc)) from exc
