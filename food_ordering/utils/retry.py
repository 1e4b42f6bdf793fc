# food_ordering/utils/retry.py
import logging

import redis
import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from food_ordering.utils.logging import get_logger
from food_ordering.utils.settings import RETRY_ATTEMPTS

logger = get_logger(__name__)

# checkout i anulowanie nie sa ponawiane


def _retry(exc_type, multiplier: float, max_wait: float):
    return retry(
        reraise=True,
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=multiplier, min=multiplier, max=max_wait),
        retry=retry_if_exception_type(exc_type),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


def http_retry():
    """Katalog po HTTP - bledy sieci i 5xx."""
    return _retry(requests.RequestException, 0.3, 3)


def redis_retry():
    return _retry(redis.RedisError, 0.2, 2)
