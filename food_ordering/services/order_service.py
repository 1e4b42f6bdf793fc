# food_ordering/services/order_service.py
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from food_ordering.data.models.order import ORDER_CONFIRMED, ORDER_CANCELLED
from food_ordering.data.unit_of_work import UnitOfWork, storage_guard
from food_ordering.domain.errors import InvalidTransitionError, NotFoundError
from food_ordering.repos.order_repo import OrderRepo
from food_ordering.services.address_store import AddressStore
from food_ordering.services.catalog import CatalogReader
from food_ordering.services.notification_service import NotificationService
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za zlozone zamowienia: odczyt (lista, szczegoly)
    i anulowanie. Separacja od CheckoutService.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogReader,
        addresses: AddressStore,
        notification_service: NotificationService,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.catalog = catalog
        self.addresses = addresses
        self.notification_service = notification_service

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        """
        Use Case: Historia zamowien usera, od najnowszego.
        """
        names: Dict[int, str | None] = {}
        result = []

        with storage_guard(self.db, "list-orders"):
            rows = self.repo.list_orders_with_counts(user_id)

        for order, item_count in rows:
            if order.restaurant_id not in names:
                restaurant = self.catalog.get_restaurant(order.restaurant_id)
                names[order.restaurant_id] = restaurant.name if restaurant else None

            result.append(
                {
                    "order_id": order.id,
                    "restaurant_id": order.restaurant_id,
                    "restaurant_name": names[order.restaurant_id],
                    "item_count": item_count,
                    "item_subtotal": order.item_subtotal,
                    "delivery_fee": order.delivery_fee,
                    "grand_total": order.grand_total,
                    "status": order.status,
                    "ordered_at": order.created_at,
                }
            )

        return result

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Szczegoly zamowienia (Query).
        Cudze zamowienie wyglada jak nieistniejace.
        """
        with storage_guard(self.db, "get-order"):
            order = self.repo.get_order_for_user(order_id, user_id)
            if not order:
                raise NotFoundError("Order not found", order_id=order_id)

            items = self.repo.get_order_items(order.id)
            tracking = self.repo.get_tracking(order.id)
            delivery_address = self.addresses.describe(order.address_id)

        restaurant = self.catalog.get_restaurant(order.restaurant_id)

        return {
            "order_id": order.id,
            "user_id": order.user_id,
            "restaurant_id": order.restaurant_id,
            "restaurant_name": restaurant.name if restaurant else None,
            "restaurant_address": restaurant.address if restaurant else None,
            "address_id": order.address_id,
            "delivery_address": delivery_address,
            "status": order.status,
            "item_subtotal": order.item_subtotal,
            "delivery_fee": order.delivery_fee,
            "grand_total": order.grand_total,
            "payment_method": order.payment_method,
            "special_instructions": order.special_instructions,
            "created_at": order.created_at,
            "items": [
                {
                    "item_id": i.item_id,
                    "name": i.name,
                    "price": i.price,
                    "quantity": i.quantity,
                    "special_instructions": i.special_instructions,
                }
                for i in items
            ],
            "tracking": [
                {"status": t.status, "timestamp": t.timestamp}
                for t in tracking
            ],
        }

    def cancel_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Anulowanie zamowienia, tylko confirmed -> cancelled.

        Sprawdzenie statusu i zmiana to jeden warunkowy UPDATE, event
        `cancelled` dopisujemy tylko gdy UPDATE zmienil wiersz. Dwa rownolegle
        anulowania daja jeden event.
        """
        with UnitOfWork(self.db, "cancel-order") as uow:
            changed = self.repo.transition_status(order_id, user_id, ORDER_CONFIRMED, ORDER_CANCELLED)

            if changed == 0:
                order = self.repo.get_order_for_user(order_id, user_id)
                if not order:
                    raise NotFoundError("Order not found", order_id=order_id)
                raise InvalidTransitionError(order_id, order.status, ORDER_CANCELLED)

            self.repo.add_tracking_event(order_id, ORDER_CANCELLED)
            uow.commit()

        logger.info(f"Order {order_id} cancelled by user {user_id}")

        self.notification_service.send_order_notification(user_id, order_id, ORDER_CANCELLED)

        return {"order_id": order_id, "status": ORDER_CANCELLED}
