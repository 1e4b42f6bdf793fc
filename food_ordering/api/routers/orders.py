# food_ordering/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from food_ordering.api.dependencies import (
    get_address_store,
    get_catalog,
    get_lock_service,
    get_notification_service,
    get_user_id,
)
from food_ordering.data.database import get_db
from food_ordering.domain.schemas import (
    CancelOut,
    OrderDetailOut,
    OrderPlacedOut,
    OrderSummaryOut,
    PlaceOrderIn,
)
from food_ordering.services.address_store import AddressStore
from food_ordering.services.catalog import CatalogReader
from food_ordering.services.checkout_service import CheckoutService
from food_ordering.services.lock_service import LockService
from food_ordering.services.notification_service import NotificationService
from food_ordering.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_checkout_service(
    db: Session = Depends(get_db),
    catalog: CatalogReader = Depends(get_catalog),
    addresses: AddressStore = Depends(get_address_store),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CheckoutService:
    return CheckoutService(db, catalog, addresses, lock_service, notification_service)


def get_service(
    db: Session = Depends(get_db),
    catalog: CatalogReader = Depends(get_catalog),
    addresses: AddressStore = Depends(get_address_store),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(db, catalog, addresses, notification_service)


@router.post("", response_model=OrderPlacedOut, status_code=201)
def place_order(
    payload: PlaceOrderIn,
    user_id: int = Depends(get_user_id),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Sklada zamowienie z koszyka usera, koszyk znika po sukcesie.
    """
    return svc.place_order(
        user_id=user_id,
        address_id=payload.address_id,
        payment_method=payload.payment_method,
        special_instructions=payload.special_instructions,
    )


@router.get("", response_model=List[OrderSummaryOut])
def list_orders(
    user_id: int = Depends(get_user_id),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user_id)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user_id: int = Depends(get_user_id),
    svc: OrderService = Depends(get_service),
):
    """
    Pobiera szczegoly zamowienia z historia statusow.
    """
    return svc.get_order(order_id, user_id)


@router.post("/{order_id}/cancel", response_model=CancelOut)
def cancel_order(
    order_id: int,
    user_id: int = Depends(get_user_id),
    svc: OrderService = Depends(get_service),
):
    return svc.cancel_order(order_id, user_id)
