# food_ordering/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class AddItemIn(BaseModel):
    """Schema dla dodawania pozycji menu do koszyka."""

    restaurant_id: int = Field(..., gt=0, description="ID restauracji (musi być > 0)")
    item_id: int = Field(..., gt=0, description="ID pozycji menu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość (musi być > 0)")
    special_instructions: str | None = Field(None, max_length=500)


class UpdateItemIn(BaseModel):
    """Schema dla zmiany ilości. 0 usuwa pozycję z koszyka."""

    quantity: int = Field(..., ge=0, description="Nowa ilość (>= 0)")


class CartLineOut(BaseModel):
    item_id: int
    name: str
    price: Decimal
    quantity: int
    special_instructions: str | None = None
    line_total: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response). Brak koszyka = pusty koszyk."""

    cart_id: int | None = None
    restaurant_id: int | None = None
    items: List[CartLineOut]
    cart_total: Decimal
    item_count: int
    removed: int | None = None


class PlaceOrderIn(BaseModel):
    """Schema dla składania zamówienia z koszyka."""

    address_id: int = Field(..., gt=0, description="ID adresu dostawy")
    payment_method: str = Field(..., min_length=1, max_length=50, description="Etykieta metody płatności")
    special_instructions: str | None = Field(None, max_length=500)


class EstimatedDelivery(BaseModel):
    min_minutes: int
    max_minutes: int


class OrderPlacedOut(BaseModel):
    order_id: int
    item_subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    estimated_delivery: EstimatedDelivery
    estimated_delivery_time: str
    status: str


class OrderSummaryOut(BaseModel):
    order_id: int
    restaurant_id: int
    restaurant_name: str | None = None
    item_count: int
    item_subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    status: str
    ordered_at: datetime


class OrderItemOut(BaseModel):
    item_id: int
    name: str
    price: Decimal
    quantity: int
    special_instructions: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TrackingEventOut(BaseModel):
    status: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(BaseModel):
    order_id: int
    user_id: int
    restaurant_id: int
    restaurant_name: str | None = None
    restaurant_address: str | None = None
    address_id: int
    delivery_address: str | None = None
    status: str
    item_subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    payment_method: str
    special_instructions: str | None = None
    created_at: datetime
    items: List[OrderItemOut]
    tracking: List[TrackingEventOut]


class CancelOut(BaseModel):
    order_id: int
    status: str
