"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...models import ClientStatus
from ..meetings.schemas import MeetingResponse
from ..payments.schemas import PaymentProofResponse


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(min_length=1)
    companyName: Optional[str] = None
    email: str = Field(min_length=1)
    status: Optional[ClientStatus] = None


class ClientStatusUpdate(BaseModel):
    status: ClientStatus


class ClientReassign(BaseModel):
    newCloserId: int


class ClientCreated(BaseModel):
    clientId: int
    message: str


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    name: str
    companyName: Optional[str] = None
    email: str
    closerId: int
    status: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ClientFormResponse(BaseModel):
    id: int
    formData: Optional[dict] = None
    submittedAt: Optional[datetime] = None


class ClientDetailResponse(ClientResponse):
    """Client with its form, payment proofs and meetings"""

    form: Optional[ClientFormResponse] = None
    paymentProofs: list[PaymentProofResponse]
    meetings: list[MeetingResponse]
