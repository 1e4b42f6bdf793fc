from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from food_ordering.data.database import Base

# placed -> confirmed -> (delivered | cancelled)
ORDER_PLACED = "placed"
ORDER_CONFIRMED = "confirmed"
ORDER_DELIVERED = "delivered"
ORDER_CANCELLED = "cancelled"


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    restaurant_id = Column(Integer, nullable=False)
    address_id = Column(Integer, nullable=False)

    #jedyne pole zmienne po utworzeniu
    status = Column(String(20), nullable=False, default=ORDER_PLACED)

    item_subtotal = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), nullable=False)
    special_instructions = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship("OrderItemModel", back_populates="order", cascade="all, delete-orphan")
    tracking = relationship("OrderTrackingModel", back_populates="order", cascade="all, delete-orphan")

    @property
    def grand_total(self):
        return self.item_subtotal + self.delivery_fee
