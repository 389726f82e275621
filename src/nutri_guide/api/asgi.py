"""ASGI entrypoint for the NutriGuide API."""

from nutri_guide.api.app import create_app
from nutri_guide.containers import build_container

app = create_app(build_container())
