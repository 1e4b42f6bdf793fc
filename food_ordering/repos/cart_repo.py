# food_ordering/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from food_ordering.data.models.cart import CartModel
from food_ordering.data.models.cart_item import CartItemModel


class CartRepo:
    """Dostep do koszykow. Repo nie commituje samo, decyduje serwis."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def rebind_cart(self, cart: CartModel, restaurant_id: int) -> int:
        removed = self.clear_items(cart.id)
        cart.restaurant_id = restaurant_id
        self.db.flush()
        return removed

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_item(self, cart_id: int, item_id: int, quantity: int, special_instructions: str | None) -> int:
        #quantity = quantity + :q liczone w bazie, dwa rownolegle dodania sie sumuja
        values = {"quantity": CartItemModel.quantity + quantity}
        if special_instructions:
            values["special_instructions"] = special_instructions

        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.item_id == item_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def set_item_quantity(self, cart_id: int, item_id: int, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.item_id == item_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.item_id == item_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartModel)
            .where(CartModel.id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
