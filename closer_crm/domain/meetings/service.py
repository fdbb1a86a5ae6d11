"""Meeting service - Business logic for meeting records"""

import logging

from sqlalchemy.orm import Session

from ...auth import Identity, ensure_can_access
from ...errors import NotFound
from ...models import Meeting
from ..clients.repository import ClientRepository
from .repository import MeetingRepository
from .schemas import MeetingCreate, MeetingUpdate

logger = logging.getLogger(__name__)


class MeetingService:
    """Service layer for meeting business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MeetingRepository()

    def _check_client(self, client_id: int, identity: Identity) -> None:
        """A meeting may only point at a client the caller can access"""
        client = ClientRepository.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")
        ensure_can_access(identity, client.closer_id, "You do not have permission to use this client")

    def schedule(self, data: MeetingCreate, identity: Identity) -> Meeting:
        """Create a meeting owned by the caller"""
        if data.clientId is not None:
            self._check_client(data.clientId, identity)

        meeting = self.repo.create_meeting(
            self.db,
            closer_id=identity.user_id,
            client_id=data.clientId,
            meeting_date=data.meetingDate,
            location=data.location,
            notes=data.notes,
        )
        logger.info(f"📅 Meeting {meeting.id} scheduled by user {identity.user_id}")
        return meeting

    def get_meeting(self, meeting_id: int, identity: Identity, action: str = "view") -> Meeting:
        meeting = self.repo.get_meeting_by_id(self.db, meeting_id)
        if not meeting:
            raise NotFound("Meeting not found")
        ensure_can_access(identity, meeting.closer_id, f"You do not have permission to {action} this meeting")
        return meeting

    def list_for_closer(self, closer_id: int) -> list[Meeting]:
        return self.repo.get_meetings_by_closer(self.db, closer_id)

    def list_for_client(self, client_id: int, identity: Identity) -> list[Meeting]:
        """All meetings of a client; a Closer only sees the ones it owns"""
        meetings = self.repo.get_meetings_by_client(self.db, client_id)
        if identity.is_closer:
            return [m for m in meetings if m.closer_id == identity.user_id]
        return meetings

    def update(self, meeting_id: int, data: MeetingUpdate, identity: Identity) -> None:
        self.get_meeting(meeting_id, identity, action="modify")

        changes = data.changes()
        if changes.get("client_id") is not None:
            self._check_client(changes["client_id"], identity)

        self.repo.update_meeting(self.db, meeting_id, changes)
        logger.info(f"✏️ Meeting {meeting_id} updated: {sorted(changes)}")

    def delete(self, meeting_id: int, identity: Identity) -> None:
        self.get_meeting(meeting_id, identity, action="delete")
        self.repo.delete_meeting(self.db, meeting_id)
        logger.info(f"🗑️ Meeting {meeting_id} deleted by user {identity.user_id}")
