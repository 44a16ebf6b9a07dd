import os
import sqlite3
import subprocess
import sys
import tempfile
from datetime import date
from io import StringIO
from pathlib import Path
from unittest import mock

import requests
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase, override_settings

from apps.draws.models import Draw, IngestionLog
from euromillions import cli

FIXTURES = Path(__file__).parent / 'fixtures'
PROJECT_ROOT = Path(__file__).resolve().parents[3]

PAGES = {
    'https://www.euromilhoes.com/': 'euromilhoes_sample.html',
    'https://www.euro-millions.com/results': 'euro_millions_sample.html',
    'https://www.jogossantacasa.pt/web/SCCartazResult/': 'santacasa_sample.html',
    'https://www.national-lottery.co.uk/results/euromillions/draw-history/csv': 'national_lottery_sample.csv',
}


def fake_get(url, headers=None, timeout=None):
    return mock.Mock(text=(FIXTURES / PAGES[url]).read_text(encoding='utf-8'))


@override_settings(DRAWS_CONFIG={'SOURCE_DELAY_SECONDS': 0})
class UpdateDrawsCommandTests(TestCase):
    def test_all_sources(self):
        out = StringIO()
        with mock.patch('apps.draws.services.sources.base.requests.get', side_effect=fake_get) as get:
            call_command('update_draws', site='all', stdout=out)

        assert get.call_count == 5
        assert list(Draw.objects.values_list('date', flat=True)) == [date(2024, 2, 5)]
        outcomes = dict(IngestionLog.objects.values_list('source', 'outcome'))
        assert outcomes == {
            1: IngestionLog.PERSISTED,
            2: IngestionLog.SKIP_STALE,
            3: IngestionLog.SKIP_STALE,
            4: IngestionLog.SKIP_SAME,
            5: IngestionLog.SKIP_STALE,
        }
        assert 'persisted 1' in out.getvalue()

    def test_rerun_is_idempotent(self):
        with mock.patch('apps.draws.services.sources.base.requests.get', side_effect=fake_get):
            call_command('update_draws', site='5', stdout=StringIO())
            call_command('update_draws', site='5', stdout=StringIO())
        assert Draw.objects.count() == 1
        assert IngestionLog.objects.filter(outcome=IngestionLog.SKIP_SAME).count() == 1

    def test_all_mode_survives_network_errors(self):
        def flaky_get(url, headers=None, timeout=None):
            if 'euro-millions' in url:
                raise requests.ConnectionError('connection refused')
            return fake_get(url)

        out = StringIO()
        with mock.patch('apps.draws.services.sources.base.requests.get', side_effect=flaky_get):
            call_command('update_draws', site='all', stdout=out)
        assert Draw.objects.count() == 1
        assert 'failed 1' in out.getvalue()

    def test_single_source_failure_is_a_command_error(self):
        with mock.patch(
            'apps.draws.services.sources.base.requests.get',
            side_effect=requests.Timeout('read timed out'),
        ):
            with self.assertRaises(CommandError) as ctx:
                call_command('update_draws', site='2', stdout=StringIO())
        assert 'fetching' in str(ctx.exception)
        assert Draw.objects.count() == 0

    def test_unsupported_site(self):
        with self.assertRaises(CommandError):
            call_command('update_draws', site='7', stdout=StringIO())

    def test_output_file_receives_log(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / 'update.log'
            with mock.patch('apps.draws.services.sources.base.requests.get', side_effect=fake_get):
                call_command('update_draws', site='3', verbose=True, output=str(log_path), stdout=StringIO())
            content = log_path.read_text(encoding='utf-8')
        assert 'Fetching source 3' in content
        assert 'DEBUG' in content


class CliTests(TestCase):
    def test_required_flags(self):
        for argv in ([], ['--database', 'x.db'], ['--site', 'all']):
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as ctx:
                    cli.create_parser().parse_args(argv)
                assert ctx.exception.code == 2

    def test_short_flags(self):
        args = cli.create_parser().parse_args(['-d', 'draws.db', '-s', '4', '-v', '-o', 'run.log'])
        assert (args.database, args.site, args.verbose, args.output) == ('draws.db', '4', True, 'run.log')

    def test_main_runs_update(self):
        with mock.patch.dict(os.environ), mock.patch('django.core.management.call_command') as command:
            code = cli.main(['--database', 'draws.db', '--site', 'all', '--verbose'])
            database_url = os.environ['EUROMILLIONS_DATABASE_URL']
        assert code == 0
        assert database_url.startswith('sqlite:///') and database_url.endswith('draws.db')
        command.assert_any_call('migrate', 'draws', fake_initial=True, verbosity=0, interactive=False)
        command.assert_called_with('update_draws', site='all', verbose=True, output=None)

    def test_main_reports_failure(self):
        with mock.patch.dict(os.environ), mock.patch(
            'django.core.management.call_command',
            side_effect=[None, CommandError('Source 2 failed while fetching: timed out')],
        ), mock.patch('sys.stderr', new_callable=StringIO) as stderr:
            code = cli.main(['-d', 'draws.db', '-s', '2'])
        assert code == 1
        assert 'Source 2 failed' in stderr.getvalue()


def run_cli(*argv):
    env = dict(os.environ, DJANGO_SETTINGS_MODULE='euromillions.settings')
    env.pop('EUROMILLIONS_DATABASE_URL', None)
    return subprocess.run(
        [sys.executable, '-m', 'euromillions.cli', *argv],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


class CliStoreTests(SimpleTestCase):
    """Runs the entry point in a child process against real SQLite files."""

    def test_existing_results_table_is_adopted(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / 'existing.db'
            with sqlite3.connect(db_path) as db:
                db.execute(
                    'CREATE TABLE results (id INTEGER PRIMARY KEY AUTOINCREMENT, date TEXT NOT NULL UNIQUE, '
                    'number_1 INTEGER, number_2 INTEGER, number_3 INTEGER, number_4 INTEGER, number_5 INTEGER, '
                    'star_1 INTEGER, star_2 INTEGER)'
                )
                db.execute("INSERT INTO results VALUES (1, '2024-01-30', 1, 2, 3, 4, 5, 1, 2)")
            db.close()

            proc = run_cli('-d', str(db_path), '-s', '9')

            db = sqlite3.connect(db_path)
            try:
                rows = db.execute('SELECT date FROM results').fetchall()
                tables = {name for (name,) in db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
                applied = {name for (name,) in db.execute("SELECT name FROM django_migrations WHERE app = 'draws'")}
            finally:
                db.close()

        assert proc.returncode == 1
        assert 'Traceback' not in proc.stderr
        assert 'Unsupported site id' in proc.stderr
        assert rows == [('2024-01-30',)]
        assert 'draws_ingestionlog' in tables
        assert applied == {'0001_initial', '0002_ingestionlog'}

    def test_fresh_database_is_created(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / 'fresh.db'
            proc = run_cli('-d', str(db_path), '-s', '9')
            db = sqlite3.connect(db_path)
            try:
                tables = {name for (name,) in db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
            finally:
                db.close()

        assert proc.returncode == 1
        assert {'results', 'draws_ingestionlog'} <= tables

    def test_unusable_database_exits_cleanly(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            # A directory cannot be opened as a database file.
            proc = run_cli('-d', tmpdir, '-s', 'all')

        assert proc.returncode == 1
        assert 'Traceback' not in proc.stderr
        assert 'unable to open database file' in proc.stderr
