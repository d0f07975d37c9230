"""Shared FastAPI dependencies."""

from partybank.redis_client import get_optional_redis as _get_optional_redis


async def get_optional_redis() -> object | None:
    """Redis client for notification pushes; None disables them."""
    return _get_optional_redis()
