# food_ordering/celery_worker.py
from celery import Celery

from food_ordering.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "orders",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# Explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "food_ordering.services.notification_service",
)

celery_app.conf.timezone = "UTC"
