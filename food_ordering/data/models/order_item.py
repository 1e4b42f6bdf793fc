from sqlalchemy import Column, Integer, ForeignKey, String, Numeric
from sqlalchemy.orm import relationship

from food_ordering.data.database import Base


class OrderItemModel(Base):
    """Snapshot pozycji menu z chwili zamowienia, nie czytamy ponownie z katalogu."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, nullable=False)

    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    special_instructions = Column(String, nullable=True)

    order = relationship("OrderModel", back_populates="items")
