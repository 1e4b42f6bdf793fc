# food_ordering/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from food_ordering.api import create_app
from food_ordering.data.database import Base, engine
from food_ordering.utils.logging import get_logger, setup_logging

# import wszystkich modeli przed create_all
import food_ordering.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")

    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    logger.info("Database ready")
    yield


app = create_app(lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
