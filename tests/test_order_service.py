"""
Tests for the order read model and the cancellation policy.
"""
import threading
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from food_ordering.data.database import Base
from food_ordering.data.models import MenuItemModel, OrderModel, OrderTrackingModel
from food_ordering.domain.errors import InvalidTransitionError, NotFoundError, OrderingError, StorageError
from food_ordering.services.address_store import AddressStore
from food_ordering.services.cart_service import CartService
from food_ordering.services.catalog import SqlCatalogReader
from food_ordering.services.checkout_service import CheckoutService
from food_ordering.services.order_service import OrderService
from tests.conftest import (
    HOME_ADDRESS,
    MARGHERITA,
    NAAN,
    OTHER_USER_ID,
    PIZZA_ID,
    USER_ID,
    VEGGIE_ID,
    FakeLockService,
    RecordingNotifier,
    seed_catalog,
)


def _statuses(db_session, order_id):
    return [
        e.status
        for e in db_session.execute(
            select(OrderTrackingModel)
            .where(OrderTrackingModel.order_id == order_id)
            .order_by(OrderTrackingModel.timestamp, OrderTrackingModel.id)
        ).scalars()
    ]


def test_list_orders_newest_first(placed_order, cart_service, checkout_service, order_service):
    cart_service.add_item(USER_ID, VEGGIE_ID, NAAN, 4)
    second = checkout_service.place_order(USER_ID, HOME_ADDRESS, "card")

    orders = order_service.list_orders(USER_ID)

    assert [o["order_id"] for o in orders] == [second["order_id"], placed_order["order_id"]]
    assert orders[0]["restaurant_name"] == "Veggie Delight"
    assert orders[0]["item_count"] == 1
    assert orders[1]["restaurant_name"] == "Pizza Paradise"
    assert orders[1]["item_count"] == 2
    assert orders[1]["grand_total"] == Decimal("738")
    assert order_service.list_orders(OTHER_USER_ID) == []


def test_get_order_detail(placed_order, order_service):
    detail = order_service.get_order(placed_order["order_id"], USER_ID)

    assert detail["restaurant_name"] == "Pizza Paradise"
    assert detail["restaurant_address"] == "123 Food Street, Mumbai"
    assert detail["delivery_address"] == "12 Marine Drive, Mumbai, Maharashtra - 400002"
    assert detail["item_subtotal"] == Decimal("698")
    assert detail["grand_total"] == Decimal("738")
    assert [i["name"] for i in detail["items"]] == ["Margherita Pizza", "Pepperoni Pizza"]
    assert [t["status"] for t in detail["tracking"]] == ["placed", "confirmed"]


def test_get_order_of_another_user_is_not_found(placed_order, order_service):
    with pytest.raises(NotFoundError):
        order_service.get_order(placed_order["order_id"], OTHER_USER_ID)

    with pytest.raises(NotFoundError):
        order_service.get_order(12345, USER_ID)


def test_order_lines_ignore_later_price_changes(placed_order, order_service, db_session):
    db_session.get(MenuItemModel, MARGHERITA).price = Decimal("999")
    db_session.commit()

    detail = order_service.get_order(placed_order["order_id"], USER_ID)

    assert detail["items"][0]["price"] == Decimal("299")
    assert detail["item_subtotal"] == Decimal("698")


def test_cancel_confirmed_order(placed_order, order_service, db_session, notifier):
    order_id = placed_order["order_id"]

    result = order_service.cancel_order(order_id, USER_ID)

    assert result == {"order_id": order_id, "status": "cancelled"}
    assert db_session.get(OrderModel, order_id).status == "cancelled"
    assert _statuses(db_session, order_id) == ["placed", "confirmed", "cancelled"]
    assert notifier.sent[-1] == (USER_ID, order_id, "cancelled")


def test_cancel_twice_fails_and_appends_one_event(placed_order, order_service, db_session):
    order_id = placed_order["order_id"]
    order_service.cancel_order(order_id, USER_ID)

    with pytest.raises(InvalidTransitionError) as exc_info:
        order_service.cancel_order(order_id, USER_ID)

    assert exc_info.value.current_status == "cancelled"
    assert _statuses(db_session, order_id).count("cancelled") == 1


def test_cancel_delivered_order_fails(placed_order, order_service, db_session):
    order_id = placed_order["order_id"]
    db_session.get(OrderModel, order_id).status = "delivered"
    db_session.commit()

    with pytest.raises(InvalidTransitionError):
        order_service.cancel_order(order_id, USER_ID)

    assert db_session.get(OrderModel, order_id).status == "delivered"
    assert "cancelled" not in _statuses(db_session, order_id)


def test_cancel_order_of_another_user_is_not_found(placed_order, order_service, db_session):
    order_id = placed_order["order_id"]

    with pytest.raises(NotFoundError):
        order_service.cancel_order(order_id, OTHER_USER_ID)

    assert db_session.get(OrderModel, order_id).status == "confirmed"


def test_cancel_from_second_session_sees_committed_cancellation(placed_order, order_service, db_session):
    # druga sesja na tej samej bazie, jak drugi request
    other = sessionmaker(bind=db_session.get_bind())()
    try:
        late = OrderService(other, SqlCatalogReader(other), AddressStore(other), RecordingNotifier())
        order_service.cancel_order(placed_order["order_id"], USER_ID)

        with pytest.raises(InvalidTransitionError):
            late.cancel_order(placed_order["order_id"], USER_ID)
    finally:
        other.close()

    assert _statuses(db_session, placed_order["order_id"]).count("cancelled") == 1


def test_concurrent_cancellations_append_one_event(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    setup = Session()
    seed_catalog(setup)
    catalog = SqlCatalogReader(setup)
    CartService(setup, catalog).add_item(USER_ID, PIZZA_ID, MARGHERITA, 1)
    order_id = CheckoutService(
        setup, catalog, AddressStore(setup), FakeLockService(), RecordingNotifier()
    ).place_order(USER_ID, HOME_ADDRESS, "cash")["order_id"]
    setup.close()

    barrier = threading.Barrier(2)
    outcomes = []

    def cancel():
        session = Session()
        try:
            svc = OrderService(session, SqlCatalogReader(session), AddressStore(session), RecordingNotifier())
            barrier.wait()
            svc.cancel_order(order_id, USER_ID)
            outcomes.append("ok")
        except OrderingError as e:
            outcomes.append(e.code)
        finally:
            session.close()

    threads = [threading.Thread(target=cancel) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    check = Session()
    try:
        assert len(outcomes) == 2
        assert outcomes.count("ok") == 1
        assert check.get(OrderModel, order_id).status == "cancelled"
        assert _statuses(check, order_id).count("cancelled") == 1
    finally:
        check.close()
        engine.dispose()


def test_database_failure_on_order_reads_is_storage_error(placed_order, order_service, monkeypatch):
    def failing(*args):
        raise OperationalError("SELECT orders", {}, Exception("server closed the connection"))

    monkeypatch.setattr(order_service.repo, "list_orders_with_counts", failing)
    monkeypatch.setattr(order_service.repo, "get_order_for_user", failing)

    with pytest.raises(StorageError):
        order_service.list_orders(USER_ID)
    with pytest.raises(StorageError):
        order_service.get_order(placed_order["order_id"], USER_ID)
