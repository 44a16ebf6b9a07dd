from __future__ import annotations

import logging
from contextlib import contextmanager

from django.core.management.base import BaseCommand, CommandError

from ...services.errors import IngestionError
from ...services.ingestion import update_draws

LOG_FORMAT = '%(asctime)s %(levelname)s %(message)s'


@contextmanager
def draws_logging(verbose: bool, output: str | None):
    """Raise the ``draws`` logger to DEBUG and/or send it to a file for one run."""
    logger = logging.getLogger('draws')
    previous_level = logger.level
    previous_handlers = list(logger.handlers)
    handler = None
    if output:
        try:
            handler = logging.FileHandler(output, mode='a', encoding='utf-8')
        except OSError as exc:
            raise CommandError(f'Failed to open log file {output}: {exc}') from exc
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        for existing in previous_handlers:
            logger.removeHandler(existing)
        logger.addHandler(handler)
    if verbose:
        logger.setLevel(logging.DEBUG)
    try:
        yield logger
    finally:
        logger.setLevel(previous_level)
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
            for existing in previous_handlers:
                logger.addHandler(existing)


class Command(BaseCommand):
    help = 'Fetch the latest EuroMillions draw from one source (1-5) or all of them and store it if new.'

    def add_arguments(self, parser):
        parser.add_argument('--site', '-s', type=str, required=True, help="Site id (1, 2, 3, 4, 5) or 'all'")
        parser.add_argument('--verbose', action='store_true', help='Enable verbose logging')
        parser.add_argument('--output', '-o', type=str, help='Append log output to this file instead of the console')

    def handle(self, *args, **options):
        verbose = bool(options.get('verbose')) or options.get('verbosity', 1) >= 2
        with draws_logging(verbose, options.get('output')):
            try:
                summary = update_draws(options['site'])
            except IngestionError as exc:
                message = str(exc)
                if exc.detail and exc.detail not in message:
                    message = f"{message} ({exc.detail})"
                raise CommandError(message) from exc

        if summary.failed:
            self.stdout.write(self.style.WARNING(summary.message))
        else:
            self.stdout.write(self.style.SUCCESS(summary.message))
