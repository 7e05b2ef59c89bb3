"""ASGI entrypoint for the wellness booking API."""

from wellness_booking.api.app import create_app
from wellness_booking.containers import build_container

app = create_app(build_container())
