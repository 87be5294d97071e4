"""ASGI entrypoint for the abstract review portal."""

from abstract_portal.api.app import create_app
from abstract_portal.containers import build_container

app = create_app(build_container())
