"""
Tests for the Redis checkout lock against a mocked client.
"""
from unittest.mock import MagicMock

import pytest
import redis

from food_ordering.data.models import OrderModel
from food_ordering.domain.errors import CheckoutInProgressError, StorageError
from food_ordering.services.address_store import AddressStore
from food_ordering.services.checkout_service import CheckoutService
from food_ordering.services.lock_service import LockService
from tests.conftest import HOME_ADDRESS, MARGHERITA, PIZZA_ID, USER_ID


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.set.return_value = True
    client.eval.return_value = 1
    return client


def test_checkout_lock_acquires_and_releases(redis_client):
    svc = LockService(client=redis_client)

    with svc.checkout_lock(7, ttl=15):
        redis_client.set.assert_called_once()
        redis_client.eval.assert_not_called()

    kwargs = redis_client.set.call_args.kwargs
    assert kwargs["name"] == "checkout:user:7:lock"
    assert kwargs["nx"] is True
    assert kwargs["ex"] == 15

    # zwalniamy tym samym tokenem
    _, _, key, token = redis_client.eval.call_args.args
    assert key == "checkout:user:7:lock"
    assert token == kwargs["value"]


def test_lock_released_when_body_fails(redis_client):
    svc = LockService(client=redis_client)

    with pytest.raises(RuntimeError):
        with svc.checkout_lock(7):
            raise RuntimeError("boom")

    redis_client.eval.assert_called_once()


def test_held_lock_rejects_checkout(redis_client):
    redis_client.set.return_value = None
    svc = LockService(client=redis_client)

    with pytest.raises(CheckoutInProgressError):
        with svc.checkout_lock(7):
            pytest.fail("body must not run")

    redis_client.eval.assert_not_called()


def test_tokens_differ_per_attempt(redis_client):
    svc = LockService(client=redis_client)

    with svc.checkout_lock(7):
        pass
    with svc.checkout_lock(7):
        pass

    first, second = [c.kwargs["value"] for c in redis_client.set.call_args_list]
    assert first != second


def test_release_failure_is_not_raised(redis_client):
    redis_client.eval.side_effect = redis.ConnectionError("redis down")
    svc = LockService(client=redis_client)

    with svc.checkout_lock(7):
        pass

    assert redis_client.eval.call_count == 3


def test_unreachable_redis_is_storage_error(redis_client):
    redis_client.set.side_effect = redis.ConnectionError("redis down")
    svc = LockService(client=redis_client)

    with pytest.raises(StorageError) as exc_info:
        with svc.checkout_lock(7):
            pytest.fail("body must not run")

    assert exc_info.value.message == "Checkout lock unavailable"
    assert redis_client.set.call_count == 3
    redis_client.eval.assert_not_called()


def test_unreachable_redis_fails_checkout_with_storage_error(cart_service, db_session, catalog, notifier):
    client = MagicMock()
    client.set.side_effect = redis.ConnectionError("redis down")
    svc = CheckoutService(db_session, catalog, AddressStore(db_session), LockService(client=client), notifier)
    cart_service.add_item(USER_ID, PIZZA_ID, MARGHERITA, 1)

    with pytest.raises(StorageError):
        svc.place_order(USER_ID, HOME_ADDRESS, "cash")

    assert db_session.query(OrderModel).count() == 0
    assert cart_service.get_cart(USER_ID)["item_count"] == 1
    assert notifier.sent == []
