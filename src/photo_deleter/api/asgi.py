"""ASGI entrypoint for the photo deleter API."""

from photo_deleter.api.app import create_app
from photo_deleter.containers import build_container

app = create_app(build_container())
