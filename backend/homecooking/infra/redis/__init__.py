from .redis_refresh_token_registry import RedisRefreshTokenRegistry

__all__ = ["RedisRefreshTokenRegistry"]
