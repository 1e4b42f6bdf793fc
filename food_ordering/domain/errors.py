# food_ordering/domain/errors.py
"""
Bledy domenowe rdzenia zamowien.

Kazdy blad ma staly `code` (do odpowiedzi API) i `http_status`, zeby routery
mogly go przetlumaczyc bez znajomosci szczegolow. Nic z tego nie jest
fatalne dla procesu - blad dotyczy tylko jednej operacji.
"""
from decimal import Decimal
from typing import Any


class OrderingError(Exception):
    code = "ordering_error"
    http_status = 400

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        for key, value in self.details.items():
            payload[key] = str(value) if isinstance(value, Decimal) else value
        return payload


class ValidationError(OrderingError):
    code = "validation_error"
    http_status = 400


class NotFoundError(OrderingError):
    code = "not_found"
    http_status = 404


class InvalidAddressError(OrderingError):
    code = "invalid_address"
    http_status = 400

    def __init__(self, address_id: int | None):
        super().__init__("Invalid address", address_id=address_id)


class EmptyCartError(OrderingError):
    code = "empty_cart"
    http_status = 400

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class RestaurantClosedError(OrderingError):
    code = "restaurant_closed"
    http_status = 409

    def __init__(self, restaurant_id: int, message: str = "Restaurant is closed"):
        super().__init__(message, restaurant_id=restaurant_id)


class MinimumOrderNotMetError(OrderingError):
    code = "minimum_order_not_met"
    http_status = 409

    def __init__(self, minimum: Decimal, subtotal: Decimal):
        super().__init__(
            f"Minimum order amount is {minimum}",
            minimum=minimum,
            subtotal=subtotal,
            shortfall=minimum - subtotal,
        )
        self.minimum = minimum
        self.subtotal = subtotal


class InvalidTransitionError(OrderingError):
    code = "invalid_transition"
    http_status = 409

    def __init__(self, order_id: int, current_status: str, target_status: str):
        super().__init__(
            f"Order cannot go from {current_status} to {target_status}",
            order_id=order_id,
            current_status=current_status,
        )
        self.current_status = current_status


class CheckoutInProgressError(OrderingError):
    code = "checkout_in_progress"
    http_status = 409

    def __init__(self, user_id: int):
        super().__init__("Another checkout is already in progress", user_id=user_id)


class StorageError(OrderingError):
    code = "storage_error"
    http_status = 500

    def __init__(self, message: str = "Storage failure, nothing was saved"):
        super().__init__(message)
