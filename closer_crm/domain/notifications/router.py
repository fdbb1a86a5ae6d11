from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_admin
from ...database import get_db
from .schemas import NotificationCreate, NotificationCreated, NotificationResponse
from .service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


@router.post("", response_model=NotificationCreated, status_code=201)
def send_notification(
    data: NotificationCreate,
    _admin: Identity = Depends(require_admin),
    service: NotificationService = Depends(get_notification_service),
):
    """Send a notification to a user (ADMIN only)"""
    notification = service.send(data.userId, data.message)
    return NotificationCreated(notificationId=notification.id, message="Notification sent")


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    identity: Identity = Depends(get_current_identity),
    service: NotificationService = Depends(get_notification_service),
):
    """Notifications of the current user, newest first"""
    return [
        NotificationResponse(
            notificationId=n.id,
            message=n.message,
            isRead=n.is_read,
            createdAt=n.created_at,
        )
        for n in service.list_for_user(identity.user_id)
    ]


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    identity: Identity = Depends(get_current_identity),
    service: NotificationService = Depends(get_notification_service),
):
    service.mark_read(notification_id, identity)
    return {"message": "Notification marked as read"}


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: int,
    identity: Identity = Depends(get_current_identity),
    service: NotificationService = Depends(get_notification_service),
):
    service.delete(notification_id, identity)
    return {"message": "Notification deleted"}
