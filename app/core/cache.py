from typing import Any, Optional
import json
import logging
import redis
from app.core.config import settings

logger = logging.getLogger(__name__)

redis_client = redis.Redis(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    decode_responses=True,
    socket_connect_timeout=1,
)

CATEGORY_TREE_PATTERN = "category:tree:*"

def category_tree_key(include_inactive: bool) -> str:
    return f"category:tree:{'all' if include_inactive else 'active'}"

def set_cache(key: str, value: Any, expire: int = 3600) -> bool:
    """
    Set a cache value with expiration time (default 1 hour)
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        redis_client.setex(key, expire, json.dumps(value))
        return True
    except redis.RedisError as e:
        logger.warning(f"Cache write failed for {key}: {e}")
        return False

def get_cache(key: str) -> Optional[Any]:
    """
    Get a cached value
    """
    if not settings.CACHE_ENABLED:
        return None
    try:
        data = redis_client.get(key)
        return json.loads(data) if data else None
    except (redis.RedisError, ValueError) as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        return None

def delete_cache(key: str) -> bool:
    """
    Delete a cached value
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        redis_client.delete(key)
        return True
    except redis.RedisError as e:
        logger.warning(f"Cache delete failed for {key}: {e}")
        return False

def clear_cache_pattern(pattern: str) -> bool:
    """
    Clear all cache keys matching a pattern
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        keys = redis_client.keys(pattern)
        if keys:
            redis_client.delete(*keys)
        return True
    except redis.RedisError as e:
        logger.warning(f"Cache clear failed for {pattern}: {e}")
        return False
