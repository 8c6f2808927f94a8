import logging
from contextlib import contextmanager

import redis
import redis.exceptions
from redis.connection import ConnectionPool

from linktrack.services.errors import StorageUnavailable

logger = logging.getLogger(__name__)

_UNAVAILABLE = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


class RedisStore:
    """Owns the Redis client shared by the link registry and visit recorder.

    Created once per process (see the lifespan in linktrack.main) and handed
    to the services, instead of a module-level client.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, max_connections: int = 50) -> "RedisStore":
        pool = ConnectionPool.from_url(
            url,
            decode_responses=True,
            max_connections=max_connections,
            socket_connect_timeout=2,
            socket_keepalive=True,
            retry_on_timeout=True,
        )
        return cls(redis.Redis(connection_pool=pool))

    @contextmanager
    def guard(self):
        """Translate connectivity failures into StorageUnavailable."""
        try:
            yield self.client
        except _UNAVAILABLE as e:
            logger.error(f"Redis unavailable: {e}")
            raise StorageUnavailable(str(e)) from e

    def connect(self):
        with self.guard() as client:
            client.ping()
        logger.info("Redis connection verified")

    def ping(self) -> bool:
        try:
            self.connect()
            return True
        except StorageUnavailable:
            return False

    def close(self):
        self.client.close()
        self.client.connection_pool.disconnect()
        logger.info("Redis connection pool closed")
