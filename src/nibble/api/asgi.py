"""ASGI entrypoint, e.g. ``uvicorn nibble.api.asgi:app``."""

from nibble.api.app import create_app
from nibble.app_logging import configure_logging
from nibble.config import Settings
from nibble.containers import build_container

settings = Settings()
configure_logging(settings.log_level)
app = create_app(build_container(settings))
