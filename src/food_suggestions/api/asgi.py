"""ASGI entrypoint for the food suggestion API."""

from food_suggestions.api.app import create_app
from food_suggestions.containers import build_container

app = create_app(build_container())
