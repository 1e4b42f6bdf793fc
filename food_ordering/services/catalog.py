# food_ordering/services/catalog.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from sqlalchemy.orm import Session

from food_ordering.data.models.catalog import MenuItemModel, RestaurantModel
from food_ordering.data.unit_of_work import storage_guard


@dataclass(frozen=True)
class RestaurantInfo:
    id: int
    name: str
    status: str
    min_order_amount: Decimal
    delivery_fee: Decimal
    avg_prep_time: int
    address: str | None = None


@dataclass(frozen=True)
class MenuItemInfo:
    id: int
    restaurant_id: int
    name: str
    price: Decimal


class CatalogReader(Protocol):
    """Waski interfejs do katalogu restauracji, tylko odczyt."""

    def get_restaurant(self, restaurant_id: int) -> RestaurantInfo | None: ...

    def get_menu_item(self, item_id: int) -> MenuItemInfo | None: ...


class SqlCatalogReader:
    """Katalog w tej samej bazie co koszyki i zamowienia. Bledy bazy -> StorageError."""

    def __init__(self, db: Session):
        self.db = db

    def get_restaurant(self, restaurant_id: int) -> RestaurantInfo | None:
        with storage_guard(self.db, "catalog"):
            r = self.db.get(RestaurantModel, restaurant_id)
        if not r:
            return None
        return RestaurantInfo(
            id=r.id,
            name=r.name,
            status=r.status,
            min_order_amount=Decimal(r.min_order_amount),
            delivery_fee=Decimal(r.delivery_fee),
            avg_prep_time=r.avg_prep_time,
            address=r.address,
        )

    def get_menu_item(self, item_id: int) -> MenuItemInfo | None:
        with storage_guard(self.db, "catalog"):
            m = self.db.get(MenuItemModel, item_id)
        if not m:
            return None
        return MenuItemInfo(
            id=m.id,
            restaurant_id=m.restaurant_id,
            name=m.name,
            price=Decimal(m.price),
        )
