# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Purchase notifications.
    Uses Celery so checkout never waits on delivery.
    """

    @staticmethod
    def send_purchase_notification(user_id: int, purchase_id: int, total: Decimal):
        """
        Enqueues the "purchase received" notification. The purchase is already
        committed at this point, a broker failure is logged and not re-raised.
        """
        try:
            send_purchase_notification_task.delay(user_id, purchase_id, str(total))
        except Exception as e:
            logger.warning(f"Could not enqueue notification for purchase {purchase_id}: {e}")


@celery_app.task(name="storefront.services.notification_service.send_purchase_notification_task")
def send_purchase_notification_task(user_id: int, purchase_id: int, total: str):
    """
    Celery task - a real deployment would hand this to an email/SMS/push provider.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: purchase {purchase_id} received, total {total}")

    return {"user_id": user_id, "purchase_id": purchase_id, "status": "sent"}
