# food_ordering/services/catalog_client.py
from decimal import Decimal

import requests
from requests import RequestException

from food_ordering.domain.errors import StorageError
from food_ordering.services.catalog import MenuItemInfo, RestaurantInfo
from food_ordering.utils.retry import http_retry
from food_ordering.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


class HttpCatalogReader:
    """
    Katalog czytany z zewnetrznego catalog-service.
    404 -> brak encji (None), bledy sieci ponawiane przez tenacity,
    po wyczerpaniu prob -> StorageError.
    """

    def __init__(self, base_url: str | None = None, timeout: int = CATALOG_TIMEOUT_SECONDS):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _fetch(self, path: str) -> dict | None:
        url = f"{self.base_url}{path}"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def _get(self, path: str) -> dict | None:
        try:
            return self._fetch(path)
        except RequestException as e:
            logger.error(f"Catalog service unavailable for {path}: {e}")
            raise StorageError("Catalog service unavailable") from e

    def get_restaurant(self, restaurant_id: int) -> RestaurantInfo | None:
        data = self._get(f"/restaurants/{restaurant_id}")
        if data is None:
            return None
        return RestaurantInfo(
            id=data["id"],
            name=data["name"],
            status=data["status"],
            min_order_amount=Decimal(str(data["min_order_amount"])),
            delivery_fee=Decimal(str(data["delivery_fee"])),
            avg_prep_time=int(data["avg_prep_time"]),
            address=data.get("address"),
        )

    def get_menu_item(self, item_id: int) -> MenuItemInfo | None:
        data = self._get(f"/menu-items/{item_id}")
        if data is None:
            return None
        return MenuItemInfo(
            id=data["id"],
            restaurant_id=data["restaurant_id"],
            name=data["name"],
            price=Decimal(str(data["price"])),
        )
