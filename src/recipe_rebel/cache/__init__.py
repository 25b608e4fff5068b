"""Redis connections and rate limiting."""

from recipe_rebel.cache.rate_limit import (
    limiter,
    rate_limit,
    rate_limit_assistant,
    setup_rate_limiting,
)
from recipe_rebel.cache.redis import (
    check_redis_health,
    close_redis_pools,
    get_cache_client,
    get_cache_client_optional,
    init_redis_pools,
)


__all__ = [
    "check_redis_health",
    "close_redis_pools",
    "get_cache_client",
    "get_cache_client_optional",
    "init_redis_pools",
    "limiter",
    "rate_limit",
    "rate_limit_assistant",
    "setup_rate_limiting",
]
