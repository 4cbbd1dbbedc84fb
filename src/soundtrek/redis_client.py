"""Optional Redis client shared by rate limiting and the readiness probe.

Redis is only connected when ``redis_url`` is configured. Everything that
uses it keeps working without it.
"""

import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError

logger = structlog.get_logger()

_client: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 50) -> None:
    """Create the shared client. The connection is opened lazily on first use."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )
    logger.info("redis_configured", max_connections=max_connections)


async def close_redis() -> None:
    """Close the shared client if one was created."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None


def get_redis() -> redis.Redis:
    """Return the shared client, or raise RuntimeError when Redis is not configured."""
    if _client is None:
        msg = "Redis not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _client


async def check_redis() -> str:
    """Readiness status: ``"ok"`` or a short error description."""
    try:
        await get_redis().ping()
    except (RuntimeError, RedisError) as exc:
        return f"error: {exc}"
    return "ok"
