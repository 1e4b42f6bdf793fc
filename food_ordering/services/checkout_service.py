# food_ordering/services/checkout_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from food_ordering.data.models.catalog import RESTAURANT_OPEN
from food_ordering.data.models.order import OrderModel, ORDER_PLACED, ORDER_CONFIRMED
from food_ordering.data.models.order_item import OrderItemModel
from food_ordering.data.unit_of_work import UnitOfWork, storage_guard
from food_ordering.domain.errors import (
    EmptyCartError,
    InvalidAddressError,
    MinimumOrderNotMetError,
    OrderingError,
    RestaurantClosedError,
    ValidationError,
)
from food_ordering.repos.cart_repo import CartRepo
from food_ordering.repos.order_repo import OrderRepo
from food_ordering.services.address_store import AddressStore
from food_ordering.services.cart_service import CartService
from food_ordering.services.catalog import CatalogReader
from food_ordering.services.lock_service import LockService
from food_ordering.services.notification_service import NotificationService
from food_ordering.utils.settings import DELIVERY_WINDOW_MINUTES
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Zamiana koszyka w zamowienie.

    Kolejnosc sprawdzen jest stala (adres, koszyk, restauracja, minimum),
    pierwszy blad wygrywa i dalszych nie liczymy. Zapis zamowienia, snapshotu
    pozycji, trackingu i usuniecie koszyka to jedna transakcja.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogReader,
        addresses: AddressStore,
        lock_service: LockService,
        notification_service: NotificationService,
        delivery_window: int = DELIVERY_WINDOW_MINUTES,
    ):
        self.db = db
        self.catalog = catalog
        self.addresses = addresses
        self.lock_service = lock_service
        self.notification_service = notification_service
        self.delivery_window = delivery_window

        self.carts = CartService(db, catalog)
        self.cart_repo = CartRepo(db)
        self.order_repo = OrderRepo(db)

    def place_order(
        self,
        user_id: int,
        address_id: int,
        payment_method: str,
        special_instructions: str | None = None,
    ) -> Dict[str, Any]:

        if not user_id or not address_id or not payment_method:
            raise ValidationError("Missing required fields")

        with self.lock_service.checkout_lock(user_id):
            try:
                #odczyty walidacyjne sa poza UnitOfWork
                with storage_guard(self.db, "checkout"):
                    result = self._place_order(user_id, address_id, payment_method, special_instructions)
            except OrderingError as e:
                logger.info(f"Checkout rejected for user {user_id}: {e.code} ({e.message})")
                raise

        # po commicie, blad wysylki nie cofa zamowienia
        self.notification_service.send_order_notification(user_id, result["order_id"], ORDER_CONFIRMED)

        return result

    def _place_order(
        self,
        user_id: int,
        address_id: int,
        payment_method: str,
        special_instructions: str | None,
    ) -> Dict[str, Any]:

        # 1. adres usera
        if not self.addresses.address_belongs_to_user(address_id, user_id):
            raise InvalidAddressError(address_id)

        # 2. koszyk z cenami z katalogu (te ceny trafia do snapshotu)
        cart, lines = self.carts.read_cart(user_id)
        if not cart or not lines:
            raise EmptyCartError()

        # 3. restauracja otwarta
        restaurant = self.catalog.get_restaurant(cart.restaurant_id)
        if not restaurant:
            raise RestaurantClosedError(cart.restaurant_id, "Restaurant not found")
        if restaurant.status != RESTAURANT_OPEN:
            raise RestaurantClosedError(restaurant.id)

        # 4. minimum zamowienia
        item_subtotal = sum((line.line_total for line in lines), Decimal("0.00"))
        if item_subtotal < restaurant.min_order_amount:
            raise MinimumOrderNotMetError(restaurant.min_order_amount, item_subtotal)

        # 5. sumy
        delivery_fee = restaurant.delivery_fee
        grand_total = item_subtotal + delivery_fee

        # 6. zapis atomowy
        with UnitOfWork(self.db, "checkout") as uow:
            order = self.order_repo.create_order(
                OrderModel(
                    user_id=user_id,
                    restaurant_id=restaurant.id,
                    address_id=address_id,
                    status=ORDER_CONFIRMED,
                    item_subtotal=item_subtotal,
                    delivery_fee=delivery_fee,
                    payment_method=payment_method,
                    special_instructions=special_instructions,
                )
            )

            for line in lines:
                self.order_repo.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        item_id=line.item_id,
                        name=line.name,
                        price=line.price,
                        quantity=line.quantity,
                        special_instructions=line.special_instructions,
                    )
                )

            self.order_repo.add_tracking_event(order.id, ORDER_PLACED)
            self.order_repo.add_tracking_event(order.id, ORDER_CONFIRMED)

            self.cart_repo.clear_items(cart.id)
            #rownolegly checkout mogl juz skonsumowac koszyk
            if self.cart_repo.delete_cart(cart.id) == 0:
                raise EmptyCartError("Cart was already checked out")

            order_id = order.id
            uow.commit()

        logger.info(
            f"Order {order_id} placed by user {user_id}: {len(lines)} line(s), "
            f"subtotal {item_subtotal}, total {grand_total}"
        )

        # 7. odpowiedz
        eta_min = restaurant.avg_prep_time
        eta_max = restaurant.avg_prep_time + self.delivery_window

        return {
            "order_id": order_id,
            "item_subtotal": item_subtotal,
            "delivery_fee": delivery_fee,
            "grand_total": grand_total,
            "estimated_delivery": {"min_minutes": eta_min, "max_minutes": eta_max},
            "estimated_delivery_time": f"{eta_min}-{eta_max} minutes",
            "status": ORDER_CONFIRMED,
        }
