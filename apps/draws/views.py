from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .models import Draw
from .services.formats import render_draws

logger = logging.getLogger('draws')


def _parse(value: Optional[str], fmt: str):
    if not value:
        return None
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        return None


def _error(message: str, status: int) -> JsonResponse:
    return JsonResponse({'error': message}, status=status)


def _respond(request, query: Callable[[], List[Draw]], not_found: str):
    try:
        draws = query()
    except DatabaseError as exc:
        logger.error('Error querying draws for %s: %s', request.path, exc)
        return _error('Error querying database', 500)
    if not draws:
        return _error(not_found, 404)
    return render_draws(draws, request.GET.get('format'))


@require_GET
def latest(request):
    logger.debug('GET %s from %s', request.path, request.META.get('REMOTE_ADDR'))
    return _respond(request, lambda: list(Draw.objects.order_by('-date')[:1]), 'No results found')


@require_GET
def results(request):
    logger.debug('GET %s from %s', request.path, request.META.get('REMOTE_ADDR'))
    return _respond(request, lambda: list(Draw.objects.order_by('-date')), 'No results found')


@require_GET
def results_by_date(request, value: str = ''):
    logger.debug('GET %s from %s', request.path, request.META.get('REMOTE_ADDR'))
    if not value:
        return _error('Date parameter is required (format YYYY-MM-DD)', 400)
    parsed = _parse(value, '%Y-%m-%d')
    if parsed is None or parsed.date().isoformat() != value:
        return _error('Invalid date format (use YYYY-MM-DD)', 400)
    return _respond(
        request,
        lambda: list(Draw.objects.filter(date=parsed.date())),
        'No results found for the specified date',
    )


@require_GET
def results_by_year(request, value: str = ''):
    logger.debug('GET %s from %s', request.path, request.META.get('REMOTE_ADDR'))
    if not value:
        return _error('Year parameter is required (format YYYY)', 400)
    parsed = _parse(value, '%Y')
    if parsed is None or len(value) != 4:
        return _error('Invalid year format (use YYYY)', 400)
    return _respond(
        request,
        lambda: list(Draw.objects.filter(date__year=parsed.year).order_by('-date')),
        f'No results found for the year {value}',
    )


@require_GET
def results_by_month(request, value: str = ''):
    logger.debug('GET %s from %s', request.path, request.META.get('REMOTE_ADDR'))
    if not value:
        return _error('Month/Year parameter is required (format YYYY-MM)', 400)
    parsed = _parse(value, '%Y-%m')
    if parsed is None or parsed.strftime('%Y-%m') != value:
        return _error('Invalid month/year format (use YYYY-MM)', 400)
    return _respond(
        request,
        lambda: list(
            Draw.objects.filter(date__year=parsed.year, date__month=parsed.month).order_by('-date')
        ),
        f'No results found for {value}',
    )
