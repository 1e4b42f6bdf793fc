# food_ordering/services/address_store.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from food_ordering.data.models.catalog import AddressModel


class AddressStore:
    """Odczyt ksiazki adresowej - CRUD adresow jest poza tym serwisem."""

    def __init__(self, db: Session):
        self.db = db

    def address_belongs_to_user(self, address_id: int, user_id: int) -> bool:
        found = self.db.execute(
            select(AddressModel.id).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()
        return found is not None

    def describe(self, address_id: int) -> str | None:
        a = self.db.get(AddressModel, address_id)
        if not a:
            return None
        return f"{a.address_line1}, {a.city}, {a.state} - {a.pincode}"
