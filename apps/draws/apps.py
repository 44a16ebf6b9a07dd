from django.apps import AppConfig
from django.db.backends.signals import connection_created


def _tune_sqlite(sender, connection, **kwargs):
    if connection.vendor != 'sqlite':
        return
    with connection.cursor() as cursor:
        cursor.execute('PRAGMA journal_mode = WAL;')
        cursor.execute('PRAGMA synchronous = NORMAL;')


class DrawsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.draws'
    label = 'draws'

    def ready(self):
        connection_created.connect(_tune_sqlite, dispatch_uid='draws.tune_sqlite')
