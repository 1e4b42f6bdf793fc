# food_ordering/api/dependencies.py
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from food_ordering.data.database import get_db
from food_ordering.services.address_store import AddressStore
from food_ordering.services.catalog import CatalogReader, SqlCatalogReader
from food_ordering.services.catalog_client import HttpCatalogReader
from food_ordering.services.lock_service import LockService
from food_ordering.services.notification_service import NotificationService
from food_ordering.utils.settings import CATALOG_SERVICE_URL


def get_user_id(user_id: int = Query(..., gt=0, description="ID uwierzytelnionego usera")) -> int:
    # tozsamosc ustala gateway przed tym serwisem
    return user_id


def get_catalog(db: Session = Depends(get_db)) -> CatalogReader:
    if CATALOG_SERVICE_URL:
        return HttpCatalogReader(CATALOG_SERVICE_URL)
    return SqlCatalogReader(db)


def get_address_store(db: Session = Depends(get_db)) -> AddressStore:
    return AddressStore(db)


def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()
