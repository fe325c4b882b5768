# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import redis

from storefront.domain.errors import CartConflictError, CheckoutConflictError
from storefront.utils.settings import CHECKOUT_MAX_ATTEMPTS


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def conflict_retry(attempts: int | None = None):
    #a retried command re-reads the cart, a retried checkout either goes through or sees the emptied cart
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or CHECKOUT_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type((CheckoutConflictError, CartConflictError)),
    )
