"""Meeting domain schemas - Pydantic models for validation"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator


def to_naive_utc(value: datetime) -> datetime:
    """meeting_date is stored without offset, as UTC wall-clock time"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class MeetingCreate(BaseModel):
    """Schema for scheduling a meeting; clientId is null for prospecting meetings"""

    clientId: Optional[int] = None
    meetingDate: datetime
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("meetingDate")
    @classmethod
    def normalize_meeting_date(cls, v):
        return to_naive_utc(v)


class MeetingUpdate(BaseModel):
    """
    Partial update. Only keys present in the request body are applied
    (see ``model_fields_set``); an explicit null clears location, notes or
    clientId, while a missing key leaves the column untouched.
    """

    meetingDate: Optional[datetime] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    clientId: Optional[int] = None

    @field_validator("meetingDate")
    @classmethod
    def meeting_date_not_null(cls, v):
        # Only runs when the key is sent; a meeting always needs a date
        if v is None:
            raise ValueError("meetingDate cannot be null")
        return to_naive_utc(v)

    def changes(self) -> dict:
        """Fields explicitly sent by the client, keyed by column name"""
        columns = {
            "meetingDate": "meeting_date",
            "location": "location",
            "notes": "notes",
            "clientId": "client_id",
        }
        return {
            columns[field]: getattr(self, field)
            for field in self.model_fields_set
            if field in columns
        }


class MeetingCreated(BaseModel):
    meetingId: int
    message: str


class MeetingResponse(BaseModel):
    id: int
    closerId: int
    clientId: Optional[int] = None
    meetingDate: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class PersonSummary(BaseModel):
    id: int
    name: str
    email: str


class MeetingDetailResponse(MeetingResponse):
    """Meeting with its Closer and (optional) Client"""

    closer: PersonSummary
    client: Optional[PersonSummary] = None
