"""ASGI entrypoint for the Forq API."""

from forq.api.app import create_app
from forq.containers import build_container

app = create_app(build_container())
