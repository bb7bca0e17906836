"""
With these settings, tests run faster.
"""

from .base import *  # noqa
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="c3VvGvQ0bB8hZ1mTqL5rW9xN2kJ7sD4fY6aE0uP3iHgRtC8zMnXjKwSe1lOdAyFb",
)
TEST_RUNNER = "django.test.runner.DiscoverRunner"
ALLOWED_HOSTS = ["testserver"]
WEBSTATUS_API_URL = "http://webstatus.test"

# DEBUGGING FOR TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES[0]["OPTIONS"]["debug"] = True  # type: ignore # noqa: F405
