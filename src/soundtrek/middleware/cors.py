"""CORS middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from soundtrek.config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the map clients to call the API and read the headers it sets."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["Location", "X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit"],
    )
