# food_ordering/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from food_ordering.data.database import Base, engine, get_db_context
from food_ordering.data.models import AddressModel, MenuItemModel, RestaurantModel
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


def seed(db: Session) -> bool:
    """Przykladowy katalog i adres, tylko gdy baza jest pusta."""
    # not forcing: only seed if empty
    if db.query(RestaurantModel).first():
        return False

    pizza = RestaurantModel(
        name="Pizza Paradise",
        address="123 Food Street, Mumbai",
        status="open",
        min_order_amount=Decimal("200"),
        delivery_fee=Decimal("40"),
        avg_prep_time=30,
    )
    veggie = RestaurantModel(
        name="Veggie Delight",
        address="45 Green Park, Mumbai",
        status="open",
        min_order_amount=Decimal("150"),
        delivery_fee=Decimal("20"),
        avg_prep_time=25,
    )
    db.add_all([pizza, veggie])
    db.flush()

    db.add_all(
        [
            MenuItemModel(restaurant_id=pizza.id, name="Margherita Pizza",
                          description="Classic pizza with mozzarella and basil", price=Decimal("299"), is_veg=True),
            MenuItemModel(restaurant_id=pizza.id, name="Pepperoni Pizza",
                          description="Loaded with pepperoni & cheese", price=Decimal("399"), is_veg=False),
            MenuItemModel(restaurant_id=veggie.id, name="Paneer Butter Masala",
                          description="Creamy tomato-based curry with paneer cubes", price=Decimal("250"), is_veg=True),
            MenuItemModel(restaurant_id=veggie.id, name="Butter Naan",
                          description="Soft naan with butter topping", price=Decimal("50"), is_veg=True),
            AddressModel(user_id=1, address_line1="12 Marine Drive", city="Mumbai",
                         state="Maharashtra", pincode="400002"),
        ]
    )
    db.commit()

    logger.info("Seed data inserted")
    return True


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    with get_db_context() as session:
        seed(session)
