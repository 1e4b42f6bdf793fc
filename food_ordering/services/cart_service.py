from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from food_ordering.data.models.cart import CartModel
from food_ordering.data.models.cart_item import CartItemModel
from food_ordering.data.unit_of_work import UnitOfWork, storage_guard
from food_ordering.domain.errors import NotFoundError, StorageError, ValidationError
from food_ordering.repos.cart_repo import CartRepo
from food_ordering.services.catalog import CatalogReader
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    """Pozycja koszyka zlaczona z aktualna nazwa i cena z katalogu."""

    item_id: int
    name: str
    price: Decimal
    quantity: int
    special_instructions: str | None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartService:
    """
    Prosta implementacja cqrs dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt

    Jeden koszyk na usera, zawsze z jednej restauracji.
    """

    def __init__(self, db: Session, catalog: CatalogReader):
        self.db = db
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query - odczyt
    def read_cart(self, user_id: int) -> tuple[CartModel | None, list[CartLine]]:
        with storage_guard(self.db, "read-cart"):
            cart = self.repo.get_cart_by_user(user_id)
            if not cart:
                return None, []
            items = self.repo.get_cart_items(cart.id)

        # katalog sam zamienia swoje bledy na StorageError
        lines = []
        for item in items:
            menu_item = self.catalog.get_menu_item(item.item_id)
            if not menu_item:
                #pozycja zniknela z katalogu, nie pokazujemy jej i nie zamawiamy
                logger.warning(f"Menu item {item.item_id} in cart {cart.id} no longer in catalog")
                continue

            lines.append(
                CartLine(
                    item_id=item.item_id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=item.quantity,
                    special_instructions=item.special_instructions,
                )
            )

        return cart, lines

    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart, lines = self.read_cart(user_id)

        #dict przyksztalcany w jsona
        return {
            "cart_id": cart.id if cart else None,
            "restaurant_id": cart.restaurant_id if cart else None,
            "items": [
                {
                    "item_id": line.item_id,
                    "name": line.name,
                    "price": line.price,
                    "quantity": line.quantity,
                    "special_instructions": line.special_instructions,
                    "line_total": line.line_total,
                }
                for line in lines
            ],
            "cart_total": sum((line.line_total for line in lines), Decimal("0.00")),
            "item_count": sum(line.quantity for line in lines),
        }

    #commands
    def add_item(
        self,
        user_id: int,
        restaurant_id: int,
        item_id: int,
        quantity: int,
        special_instructions: str | None = None,
    ) -> Dict[str, Any]:

        # Walidacje, zanim cokolwiek dotknie bazy
        if not user_id or not restaurant_id or not item_id or quantity is None:
            raise ValidationError("Missing required fields")

        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", quantity=quantity)

        if not self.catalog.get_restaurant(restaurant_id):
            raise ValidationError("Unknown restaurant", restaurant_id=restaurant_id)

        menu_item = self.catalog.get_menu_item(item_id)
        if not menu_item or menu_item.restaurant_id != restaurant_id:
            raise ValidationError(
                "Menu item does not belong to this restaurant",
                item_id=item_id,
                restaurant_id=restaurant_id,
            )

        try:
            self._add_to_cart(user_id, restaurant_id, item_id, quantity, special_instructions)
        except StorageError as e:
            #rownolegly pierwszy insert koszyka albo pozycji wygral, drugie podejscie zsumuje ilosc
            if not isinstance(e.__cause__, IntegrityError):
                raise
            logger.info(f"Concurrent add for user {user_id}, item {item_id}, retrying as increment")
            self._add_to_cart(user_id, restaurant_id, item_id, quantity, special_instructions)

        return self.get_cart(user_id)

    def _add_to_cart(
        self,
        user_id: int,
        restaurant_id: int,
        item_id: int,
        quantity: int,
        special_instructions: str | None,
    ) -> None:
        with UnitOfWork(self.db, "add-to-cart") as uow:
            cart = self.repo.get_cart_by_user(user_id)

            if not cart:
                cart = self.repo.create_cart(CartModel(user_id=user_id, restaurant_id=restaurant_id))
                logger.info(f"Created cart {cart.id} for user {user_id} (restaurant {restaurant_id})")
            elif cart.restaurant_id != restaurant_id:
                # koszyk z innej restauracji - zawartosc przepada
                dropped = self.repo.rebind_cart(cart, restaurant_id)
                logger.info(
                    f"Cart {cart.id} of user {user_id} switched to restaurant {restaurant_id}, "
                    f"dropped {dropped} line(s)"
                )

            if self.repo.get_cart_item(cart.id, item_id):
                self.repo.increment_item(cart.id, item_id, quantity, special_instructions)
                logger.info(f"Item {item_id} already in cart {cart.id}, quantity +{quantity}")
            else:
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        item_id=item_id,
                        quantity=quantity,
                        special_instructions=special_instructions,
                    )
                )
                logger.info(f"Added item {item_id} x{quantity} to cart {cart.id}")

            uow.commit()

    def update_line(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        """
        Ustawia ilosc wprost. quantity == 0 usuwa pozycje, ujemne -> ValidationError.
        Brak koszyka albo pozycji -> NotFoundError.
        """
        if quantity is None or quantity < 0:
            raise ValidationError("Quantity must be zero or more", quantity=quantity)

        with UnitOfWork(self.db, "update-cart-line") as uow:
            cart = self.repo.get_cart_by_user(user_id)
            if not cart:
                raise NotFoundError("Cart not found")

            if quantity == 0:
                changed = self.repo.delete_cart_item(cart.id, item_id)
            else:
                changed = self.repo.set_item_quantity(cart.id, item_id, quantity)

            if changed == 0:
                raise NotFoundError("Item not in cart", item_id=item_id)

            uow.commit()

        logger.info(f"Cart {cart.id}: item {item_id} quantity set to {quantity}")
        return self.get_cart(user_id)

    def remove_line(self, user_id: int, item_id: int) -> Dict[str, Any]:
        removed = 0

        with UnitOfWork(self.db, "remove-cart-line") as uow:
            cart = self.repo.get_cart_by_user(user_id)
            if cart:
                removed = self.repo.delete_cart_item(cart.id, item_id)
            uow.commit()

        logger.info(f"User {user_id}: removed item {item_id} from cart ({removed} line(s))")

        result = self.get_cart(user_id)
        result["removed"] = removed
        return result

    def clear(self, user_id: int) -> Dict[str, Any]:
        removed = 0

        with UnitOfWork(self.db, "clear-cart") as uow:
            cart = self.repo.get_cart_by_user(user_id)
            if cart:
                removed = self.repo.clear_items(cart.id)
            uow.commit()

        logger.info(f"User {user_id}: cart cleared ({removed} line(s))")

        result = self.get_cart(user_id)
        result["removed"] = removed
        return result
