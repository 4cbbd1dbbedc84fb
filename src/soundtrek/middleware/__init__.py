"""HTTP middleware and exception handlers for the SoundTrek app."""

from fastapi import FastAPI

from soundtrek.config import Settings
from soundtrek.middleware.cors import setup_cors
from soundtrek.middleware.error_handler import setup_error_handlers
from soundtrek.middleware.logging import setup_logging
from soundtrek.middleware.rate_limit import RateLimitMiddleware
from soundtrek.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure logging, the JSON error handlers and the middleware stack.

    Starlette runs the last-added middleware first. From the outside in the
    stack is CORS, request id, rate limit: 429 responses still carry CORS
    headers and are logged under their request id.
    """
    setup_logging(settings)
    setup_error_handlers(app)

    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
