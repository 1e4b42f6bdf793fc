"""
Pytest configuration and fixtures.

SQLite in-memory per test, services built on the test session, fakes for the
Redis checkout lock and the Celery notifier.
"""
import os

# przed importem aplikacji - settings czytaja env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATALOG_SERVICE_URL"] = ""

from contextlib import contextmanager
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from food_ordering.api.dependencies import get_lock_service, get_notification_service
from food_ordering.data.database import Base, get_db
from food_ordering.data.models import AddressModel, MenuItemModel, RestaurantModel
from food_ordering.domain.errors import CheckoutInProgressError
from food_ordering.main import app
from food_ordering.services.address_store import AddressStore
from food_ordering.services.cart_service import CartService
from food_ordering.services.catalog import SqlCatalogReader
from food_ordering.services.checkout_service import CheckoutService
from food_ordering.services.lock_service import LockService
from food_ordering.services.order_service import OrderService

USER_ID = 1
OTHER_USER_ID = 2

PIZZA_ID = 1
VEGGIE_ID = 2
CLOSED_ID = 3

MARGHERITA = 1  # 299, Pizza Paradise
PEPPERONI = 2  # 399, Pizza Paradise
PANEER = 3  # 250, Veggie Delight
NAAN = 4  # 50, Veggie Delight
SOUP = 5  # 120, Night Kitchen (closed)

HOME_ADDRESS = 1  # USER_ID
OTHER_ADDRESS = 2  # OTHER_USER_ID


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeLockService:
    """Zamiast Redisa - ten sam kontrakt checkout_lock()."""

    def __init__(self):
        self.held = set()
        self.acquired = []

    @contextmanager
    def checkout_lock(self, user_id: int, ttl: int = 30):
        key = LockService.checkout_key(user_id)
        if key in self.held:
            raise CheckoutInProgressError(user_id)
        self.held.add(key)
        self.acquired.append(key)
        try:
            yield
        finally:
            self.held.discard(key)


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id: int, order_id: int, status: str) -> bool:
        self.sent.append((user_id, order_id, status))
        return True


def seed_catalog(session):
    session.add_all(
        [
            RestaurantModel(id=PIZZA_ID, name="Pizza Paradise", address="123 Food Street, Mumbai",
                            status="open", min_order_amount=Decimal("200"), delivery_fee=Decimal("40"),
                            avg_prep_time=30),
            RestaurantModel(id=VEGGIE_ID, name="Veggie Delight", address="45 Green Park, Mumbai",
                            status="open", min_order_amount=Decimal("150"), delivery_fee=Decimal("20"),
                            avg_prep_time=25),
            RestaurantModel(id=CLOSED_ID, name="Night Kitchen", address="9 Late Lane, Mumbai",
                            status="closed", min_order_amount=Decimal("0"), delivery_fee=Decimal("10"),
                            avg_prep_time=20),
        ]
    )
    session.flush()
    session.add_all(
        [
            MenuItemModel(id=MARGHERITA, restaurant_id=PIZZA_ID, name="Margherita Pizza", price=Decimal("299")),
            MenuItemModel(id=PEPPERONI, restaurant_id=PIZZA_ID, name="Pepperoni Pizza", price=Decimal("399")),
            MenuItemModel(id=PANEER, restaurant_id=VEGGIE_ID, name="Paneer Butter Masala", price=Decimal("250")),
            MenuItemModel(id=NAAN, restaurant_id=VEGGIE_ID, name="Butter Naan", price=Decimal("50")),
            MenuItemModel(id=SOUP, restaurant_id=CLOSED_ID, name="Midnight Soup", price=Decimal("120")),
            AddressModel(id=HOME_ADDRESS, user_id=USER_ID, address_line1="12 Marine Drive",
                         city="Mumbai", state="Maharashtra", pincode="400002"),
            AddressModel(id=OTHER_ADDRESS, user_id=OTHER_USER_ID, address_line1="7 Hill Road",
                         city="Mumbai", state="Maharashtra", pincode="400050"),
        ]
    )
    session.commit()


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def catalog(db_session):
    seed_catalog(db_session)
    return SqlCatalogReader(db_session)


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def cart_service(db_session, catalog):
    return CartService(db_session, catalog)


@pytest.fixture
def checkout_service(db_session, catalog, lock_service, notifier):
    return CheckoutService(db_session, catalog, AddressStore(db_session), lock_service, notifier)


@pytest.fixture
def order_service(db_session, catalog, notifier):
    return OrderService(db_session, catalog, AddressStore(db_session), notifier)


@pytest.fixture
def placed_order(cart_service, checkout_service):
    """Zamowienie z przykladu: margherita + pepperoni, 698 + 40."""
    cart_service.add_item(USER_ID, PIZZA_ID, MARGHERITA, 1)
    cart_service.add_item(USER_ID, PIZZA_ID, PEPPERONI, 1)
    return checkout_service.place_order(USER_ID, HOME_ADDRESS, "cash")


@pytest.fixture
def client(db_session, catalog, lock_service, notifier):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
