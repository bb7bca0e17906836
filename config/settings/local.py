from .base import *  # noqa
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = True
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="Kx6h0cmS4Nw0PZQ2vBq8yT7fJrL1aE9dWgU3iXoV5sYjHnMpCbRtF2zG8eAkD4lQ",
)
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"] + env.list("DJANGO_ALLOWED_HOSTS", default=[])

# Web Platform Status
# ------------------------------------------------------------------------------
LOGGING["loggers"]["webstatus"] = {"handlers": ["console"], "level": "DEBUG", "propagate": False}  # noqa: F405
