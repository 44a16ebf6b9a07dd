"""Stand-alone entry point for the draw updater.

Usage::

    euromillions-update --database ./euromillions.db --site all
    euromillions-update -d ./euromillions.db -s 3 -v -o update.log
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import django


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='euromillions-update',
        description='Fetch the latest EuroMillions draw and store it if it is new.',
    )
    parser.add_argument('--database', '-d', required=True, metavar='PATH', help='Path to the SQLite database file.')
    parser.add_argument(
        '--site', '-s',
        required=True,
        help="The site ID to update (1, 2, 3, 4, 5) or 'all' to run all.",
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging.')
    parser.add_argument(
        '--output', '-o',
        metavar='FILE',
        help='Path to a log file. Output is to console by default.',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    database = Path(args.database).expanduser().resolve()
    os.environ['EUROMILLIONS_DATABASE_URL'] = f"sqlite:///{database}"
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'euromillions.settings')
    django.setup()

    from django.core.management import call_command
    from django.core.management.base import CommandError
    from django.db import DatabaseError

    try:
        # An existing results table is adopted as is; only missing tables are created.
        call_command('migrate', 'draws', fake_initial=True, verbosity=0, interactive=False)
        call_command('update_draws', site=args.site, verbose=args.verbose, output=args.output)
    except CommandError as exc:
        sys.stderr.write(f'Error: {exc}\n')
        return 1
    except DatabaseError as exc:
        sys.stderr.write(f'Database error: {exc}\n')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
