#food_ordering/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from food_ordering.api.dependencies import get_catalog, get_user_id
from food_ordering.data.database import get_db
from food_ordering.domain.schemas import AddItemIn, CartOut, UpdateItemIn
from food_ordering.services.cart_service import CartService
from food_ordering.services.catalog import CatalogReader

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    catalog: CatalogReader = Depends(get_catalog),
) -> CartService:
    return CartService(db=db, catalog=catalog)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: AddItemIn,
    user_id: int = Depends(get_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.add_item(
        user_id=user_id,
        restaurant_id=payload.restaurant_id,
        item_id=payload.item_id,
        quantity=payload.quantity,
        special_instructions=payload.special_instructions,
    )


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Depends(get_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(user_id)


@router.put("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: UpdateItemIn,
    user_id: int = Depends(get_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.update_line(user_id, item_id, payload.quantity)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    user_id: int = Depends(get_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.remove_line(user_id, item_id)


@router.delete("", response_model=CartOut)
def clear_cart(
    user_id: int = Depends(get_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.clear(user_id)
