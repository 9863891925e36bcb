"""WSGI entry point.

Loads the Django application and, when ``SEED_SAMPLE_DATA`` is enabled,
fills an empty catalog with the demonstration products.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

from modules.products.seeding import seed_on_startup  # noqa: E402

seed_on_startup()
