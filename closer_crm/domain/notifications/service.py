"""Notification service - Admin-sent messages with a read flag"""

import logging

from sqlalchemy.orm import Session

from ...auth import Identity, ensure_can_access
from ...errors import NotFound
from ...models import Notification
from ..users.repository import UserRepository
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def send(self, recipient_id: int, message: str) -> Notification:
        if not UserRepository.get_user_by_id(self.db, recipient_id):
            raise NotFound("Recipient not found")
        notification = self.repo.create_notification(self.db, recipient_id, message)
        logger.info(f"🔔 Notification {notification.id} sent to user {recipient_id}")
        return notification

    def list_for_user(self, user_id: int) -> list[Notification]:
        return self.repo.get_notifications_by_user(self.db, user_id)

    def _get_owned(self, notification_id: int, identity: Identity, action: str) -> Notification:
        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise NotFound("Notification not found")
        ensure_can_access(identity, notification.user_id, f"You cannot {action} this notification")
        return notification

    def mark_read(self, notification_id: int, identity: Identity) -> None:
        """Idempotent: marking an already-read notification is not an error"""
        self._get_owned(notification_id, identity, "mark")
        self.repo.mark_as_read(self.db, notification_id)

    def delete(self, notification_id: int, identity: Identity) -> None:
        self._get_owned(notification_id, identity, "delete")
        self.repo.delete_notification(self.db, notification_id)
        logger.info(f"🗑️ Notification {notification_id} deleted by user {identity.user_id}")
