from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from .errors import ValidationError

MAIN_COUNT = 5
STAR_COUNT = 2
TOTAL_COUNT = MAIN_COUNT + STAR_COUNT

DIGITS = re.compile(r'[0-9]+')


def parse_tokens(tokens: Sequence[str]) -> List[int]:
    numbers = []
    for token in tokens:
        value = str(token).strip()
        if not DIGITS.fullmatch(value):
            raise ValidationError(ValidationError.NON_NUMERIC, f'non-numeric token {value!r}', token=value)
        numbers.append(int(value))
    return numbers


def _check_count(tokens: Sequence[str], expected: int, label: str) -> None:
    if len(tokens) < expected:
        raise ValidationError(
            ValidationError.TOO_FEW,
            f'expected {expected} {label}, got {len(tokens)}',
        )
    if len(tokens) > expected:
        raise ValidationError(
            ValidationError.TOO_MANY,
            f'expected {expected} {label}, got {len(tokens)}: extra token {tokens[expected]!r}',
            token=str(tokens[expected]),
        )


def split_numbers(tokens: Sequence[str]) -> Tuple[List[int], List[int]]:
    """Split a combined token list into main and star numbers.

    The first five tokens are the main numbers and the last two the stars.
    This positional rule is all the combined-list sources give us.
    """
    _check_count(tokens, TOTAL_COUNT, 'numbers')
    numbers = parse_tokens(tokens)
    return numbers[:MAIN_COUNT], numbers[MAIN_COUNT:]


def split_groups(main_tokens: Sequence[str], star_tokens: Sequence[str]) -> Tuple[List[int], List[int]]:
    _check_count(main_tokens, MAIN_COUNT, 'main numbers')
    _check_count(star_tokens, STAR_COUNT, 'star numbers')
    return parse_tokens(main_tokens), parse_tokens(star_tokens)


def validate_record(record) -> None:
    """Re-check a built draw before it reaches storage."""
    _check_count(record.main_numbers, MAIN_COUNT, 'main numbers')
    _check_count(record.star_numbers, STAR_COUNT, 'star numbers')
    for value in record.numbers:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(ValidationError.NON_NUMERIC, f'non-integer number {value!r}', token=str(value))
