#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from food_ordering.data.models.catalog import RestaurantModel, MenuItemModel, AddressModel
from food_ordering.data.models.cart import CartModel
from food_ordering.data.models.cart_item import CartItemModel
from food_ordering.data.models.order import OrderModel
from food_ordering.data.models.order_item import OrderItemModel
from food_ordering.data.models.order_tracking import OrderTrackingModel

__all__ = [
    "RestaurantModel",
    "MenuItemModel",
    "AddressModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "OrderTrackingModel",
]
