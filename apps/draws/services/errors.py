from __future__ import annotations

LOCATE_DATE = 'locate-date'
PARSE_DATE = 'parse-date'
LOCATE_NUMBERS = 'locate-numbers'
COUNT_NUMBERS = 'count-numbers'

EXTRACT_STAGES = (LOCATE_DATE, PARSE_DATE, LOCATE_NUMBERS, COUNT_NUMBERS)


class IngestionError(RuntimeError):
    def __init__(self, message: str, source: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.source = source
        self.detail = detail or ''


class FetchError(IngestionError):
    pass


class ExtractError(IngestionError):
    """Source content did not have the structure the extraction recipe expects."""

    def __init__(self, stage: str, reason: str, source: int | None = None):
        if stage not in EXTRACT_STAGES:
            raise ValueError(f'unknown extraction stage: {stage}')
        super().__init__(f'{stage}: {reason}', source, reason)
        self.stage = stage
        self.reason = reason


class DateParseError(ExtractError):
    def __init__(self, value: str, expected: str, source: int | None = None):
        super().__init__(PARSE_DATE, f'{value!r} does not match {expected}', source)
        self.value = value
        self.expected = expected


class ValidationError(IngestionError):
    TOO_FEW = 'too-few'
    TOO_MANY = 'too-many'
    NON_NUMERIC = 'non-numeric'

    def __init__(self, kind: str, message: str, token: str | None = None, source: int | None = None):
        super().__init__(message, source, token)
        self.kind = kind
        self.token = token


class PersistenceError(IngestionError):
    pass


class DuplicateDateError(PersistenceError):
    pass


class StorageError(PersistenceError):
    pass


class UnknownSourceError(IngestionError):
    pass


class SourceFailed(IngestionError):
    """Raised by the coordinator when one source attempt ends in error."""

    def __init__(self, source: int, stage: str, cause: Exception, result=None):
        super().__init__(f"Source {source} failed while {stage}: {cause}", source, str(cause))
        self.stage = stage
        self.cause = cause
        self.result = result
