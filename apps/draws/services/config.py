from django.conf import settings


def draws_config() -> dict:
    """The ``DRAWS_CONFIG`` settings dict, empty when the project omits it."""
    return getattr(settings, 'DRAWS_CONFIG', None) or {}
