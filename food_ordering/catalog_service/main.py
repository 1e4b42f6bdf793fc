# catalog_service/main.py
# dev mock catalog-service dla HttpCatalogReader, czyta tabele katalogu
from dataclasses import asdict

from fastapi import FastAPI, Depends, HTTPException
from sqlalchemy.orm import Session

from food_ordering.data.database import get_db
from food_ordering.services.catalog import SqlCatalogReader

app = FastAPI(title="Catalog Service (dev mock)")


@app.get("/restaurants/{restaurant_id}")
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    restaurant = SqlCatalogReader(db).get_restaurant(restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return asdict(restaurant)


@app.get("/menu-items/{item_id}")
def get_menu_item(item_id: int, db: Session = Depends(get_db)):
    item = SqlCatalogReader(db).get_menu_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return asdict(item)
