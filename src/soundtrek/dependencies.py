"""Shared FastAPI dependencies."""

from fastapi import Request

from soundtrek.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running app was created with."""
    return request.app.state.settings  # type: ignore[no-any-return]
