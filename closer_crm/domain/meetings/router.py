"""Meeting router - FastAPI endpoints for meeting records"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_closer
from ...database import get_db
from ...models import Meeting
from .schemas import (
    MeetingCreate,
    MeetingCreated,
    MeetingDetailResponse,
    MeetingResponse,
    MeetingUpdate,
    PersonSummary,
)
from .service import MeetingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["Meetings"])


def get_meeting_service(db: Session = Depends(get_db)) -> MeetingService:
    """Dependency injection for MeetingService"""
    return MeetingService(db)


def meeting_to_response(meeting: Meeting) -> MeetingResponse:
    return MeetingResponse(
        id=meeting.id,
        closerId=meeting.closer_id,
        clientId=meeting.client_id,
        meetingDate=meeting.meeting_date,
        location=meeting.location,
        notes=meeting.notes,
        createdAt=meeting.created_at,
        updatedAt=meeting.updated_at,
    )


def meeting_to_detail(meeting: Meeting) -> MeetingDetailResponse:
    closer = meeting.closer
    client = meeting.client
    return MeetingDetailResponse(
        **meeting_to_response(meeting).model_dump(),
        closer=PersonSummary(id=closer.id, name=closer.name, email=closer.email),
        client=PersonSummary(id=client.id, name=client.name, email=client.email) if client else None,
    )


@router.post("", response_model=MeetingCreated, status_code=201)
def schedule_meeting(
    data: MeetingCreate,
    identity: Identity = Depends(get_current_identity),
    service: MeetingService = Depends(get_meeting_service),
):
    """Schedule a meeting owned by the caller (clientId optional)"""
    meeting = service.schedule(data, identity)
    return MeetingCreated(meetingId=meeting.id, message="Meeting created")


# Static paths are declared before /{meeting_id} so they are not captured by it
@router.get("/closer", response_model=list[MeetingResponse])
def list_meetings_for_closer(
    identity: Identity = Depends(require_closer),
    service: MeetingService = Depends(get_meeting_service),
):
    """All meetings of the calling Closer"""
    return [meeting_to_response(m) for m in service.list_for_closer(identity.user_id)]


@router.get("/client/{client_id}", response_model=list[MeetingDetailResponse])
def list_meetings_for_client(
    client_id: int,
    identity: Identity = Depends(get_current_identity),
    service: MeetingService = Depends(get_meeting_service),
):
    """Meetings of a client; Closers only see their own"""
    return [meeting_to_detail(m) for m in service.list_for_client(client_id, identity)]


@router.get("/{meeting_id}", response_model=MeetingDetailResponse)
def get_meeting(
    meeting_id: int,
    identity: Identity = Depends(get_current_identity),
    service: MeetingService = Depends(get_meeting_service),
):
    return meeting_to_detail(service.get_meeting(meeting_id, identity))


@router.put("/{meeting_id}")
def update_meeting(
    meeting_id: int,
    data: MeetingUpdate,
    identity: Identity = Depends(get_current_identity),
    service: MeetingService = Depends(get_meeting_service),
):
    service.update(meeting_id, data, identity)
    return {"message": "Meeting updated"}


@router.delete("/{meeting_id}")
def delete_meeting(
    meeting_id: int,
    identity: Identity = Depends(get_current_identity),
    service: MeetingService = Depends(get_meeting_service),
):
    service.delete(meeting_id, identity)
    return {"message": "Meeting deleted"}
