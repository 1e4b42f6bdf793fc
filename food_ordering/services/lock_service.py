import uuid
from contextlib import contextmanager

import redis

from food_ordering.domain.errors import CheckoutInProgressError, StorageError
from food_ordering.utils.retry import redis_retry
from food_ordering.utils.settings import REDIS_URL, CHECKOUT_LOCK_TTL_SECONDS
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua jako jedna nieprzerywalna operacje
#nie mozna wcisnac sie miedzy GET a DEL, wiec nie zwolnimy cudzego locka


class LockService:
    """
    -blokada checkoutu per user (podwojne klikniecie "zamow")
    -zwalnianie tylko przez wlasciciela tokenu
    -TTL, zeby lock nie wisial po padnietym procesie
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def checkout_key(user_id: int) -> str:
        return f"checkout:user:{user_id}:lock"

    @redis_retry()
    def acquire(self, key: str, token: str, ttl: int) -> bool:
        logger.info(f"Acquire lock {key}")
        #SET checkout:user:1:lock "<token>" NX EX 30
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release(self, key: str, token: str) -> bool:
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def checkout_lock(self, user_id: int, ttl: int = CHECKOUT_LOCK_TTL_SECONDS):
        key = self.checkout_key(user_id)
        token = uuid.uuid4().hex

        try:
            acquired = self.acquire(key, token, ttl)
        except redis.RedisError as e:
            logger.error(f"Checkout lock unavailable for {key}: {e}")
            raise StorageError("Checkout lock unavailable") from e

        if not acquired:
            raise CheckoutInProgressError(user_id)

        try:
            yield
        finally:
            try:
                self.release(key, token)
            except redis.RedisError as e:
                # wygasnie samo po TTL
                logger.warning(f"Failed to release lock {key}: {e}")
