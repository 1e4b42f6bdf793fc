# food_ordering/services/notification_service.py
from food_ordering.celery_worker import celery_app
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zmianach statusu zamowienia.
    Uzywa Celery, wysylka nigdy nie blokuje ani nie cofa zapisanego zamowienia.
    """

    def send_order_notification(self, user_id: int, order_id: int, status: str) -> bool:
        try:
            send_order_notification_task.delay(user_id, order_id, status)
        except Exception as e:
            # broker niedostepny - zamowienie juz jest zapisane
            logger.warning(f"Notification for order {order_id} not dispatched: {e}")
            return False
        return True


@celery_app.task(name="food_ordering.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status}
