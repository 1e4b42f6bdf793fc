# food_ordering/data/models/catalog.py
# tabele katalogu i ksiazki adresowej, wlasnosc zewnetrznych modulow
# rdzen zamowien tylko je czyta
from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, Boolean

from food_ordering.data.database import Base

RESTAURANT_OPEN = "open"
RESTAURANT_CLOSED = "closed"


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    status = Column(String(20), nullable=False, default=RESTAURANT_OPEN)

    min_order_amount = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    avg_prep_time = Column(Integer, nullable=False, default=30)


class MenuItemModel(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    is_veg = Column(Boolean, nullable=False, default=False)


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    address_line1 = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    pincode = Column(String(10), nullable=False)
