"""Redis client construction for the key-value store."""

import redis

from quizapp.core.config import Settings
from quizapp.core.logging import get_logger

logger = get_logger(__name__)


def create_redis_client(config: Settings) -> redis.Redis:
    """Build a Redis client from settings. Does not open a connection."""
    if not config.REDIS_URL:
        raise ValueError("REDIS_URL (or KV_URL) must be set")

    client = redis.from_url(
        config.REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=config.REDIS_CONNECT_TIMEOUT,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        health_check_interval=30,
    )
    logger.info("Redis client configured", extra={"event": "redis_client_configured"})
    return client
