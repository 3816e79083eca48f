import json
import logging
from typing import Annotated, Any, AsyncIterable

from dishka import Provider, Scope, provide, FromComponent
from redis.asyncio import Redis

from core.environment.config import Settings


class RedisProvider(Provider):
    """
    Provider for the Redis connection backing the metadata cache.
    """

    scope = Scope.APP
    component = "redis"

    @provide(scope=Scope.APP)
    async def provide_redis_client(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> AsyncIterable[Redis]:
        """
        Open the Redis client for the app lifetime.

        An unreachable server is not fatal: the client reconnects on the
        next command and the cache treats failures as misses meanwhile.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Yields
        ------
        Redis
            Redis client
        """
        redis_client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password or None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )

        try:
            await redis_client.ping()
        except Exception as e:
            logger.warning(
                f"Redis at {settings.redis_host}:{settings.redis_port} is unreachable, "
                f"token metadata will not be cached: {e}"
            )

        try:
            yield redis_client
        finally:
            await redis_client.aclose()


class CacheService:
    """
    JSON cache for values that never change on-chain, such as token metadata.

    Every key is namespaced under `KEY_PREFIX`. Redis outages degrade to
    cache misses, so callers always fall back to the node.

    Parameters
    ----------
    redis_client : Redis
        Redis client instance
    logger : logging.Logger
        Logger instance
    """

    KEY_PREFIX = "tokenhub"

    def __init__(self, redis_client: Redis, logger: logging.Logger):
        self.redis = redis_client
        self.logger = logger

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}:{key}"

    async def get(self, key: str) -> dict[str, Any] | None:
        try:
            raw = await self.redis.get(self._key(key))
            return json.loads(raw) if raw else None
        except Exception as e:
            self.logger.debug(f"Cache miss on {key}: {e}")
            return None

    async def set(self, key: str, value: dict[str, Any], ttl: int) -> bool:
        """
        Store a value for `ttl` seconds.

        Returns
        -------
        bool
            False when Redis rejected the write
        """
        try:
            await self.redis.set(self._key(key), json.dumps(value), ex=ttl)
        except Exception as e:
            self.logger.debug(f"Dropped cache write for {key}: {e}")
            return False
        return True


class CacheProvider(Provider):
    """
    Provider for the metadata cache.
    """

    component = "cache"
    scope = Scope.APP

    @provide(scope=Scope.APP)
    def provide_cache_service(
        self,
        redis_client: Annotated[Redis, FromComponent("redis")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> CacheService:
        return CacheService(redis_client, logger)
