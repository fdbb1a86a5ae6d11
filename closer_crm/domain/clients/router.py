"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_admin, require_closer
from ...database import get_db
from ...models import Client
from ..meetings.router import meeting_to_response
from ..payments.router import proof_to_response
from .schemas import (
    ClientCreate,
    ClientCreated,
    ClientDetailResponse,
    ClientFormResponse,
    ClientReassign,
    ClientResponse,
    ClientStatusUpdate,
)
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def client_to_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        companyName=client.company_name,
        email=client.email,
        closerId=client.closer_id,
        status=client.status,
        createdAt=client.created_at,
        updatedAt=client.updated_at,
    )


@router.post("", response_model=ClientCreated, status_code=201)
def create_client(
    data: ClientCreate,
    identity: Identity = Depends(require_closer),
    service: ClientService = Depends(get_client_service),
):
    """Create a client owned by the calling Closer"""
    client = service.create_client(data, identity)
    return ClientCreated(clientId=client.id, message="Client created")


@router.get("/{client_id}", response_model=ClientDetailResponse)
def get_client_detail(
    client_id: int,
    identity: Identity = Depends(get_current_identity),
    service: ClientService = Depends(get_client_service),
):
    """Get a client with its form, payment proofs and meetings"""
    client, form, proofs, meetings = service.get_detail(client_id, identity)
    base = client_to_response(client)
    return ClientDetailResponse(
        **base.model_dump(),
        form=(
            ClientFormResponse(id=form.id, formData=form.form_data, submittedAt=form.submitted_at)
            if form
            else None
        ),
        paymentProofs=[proof_to_response(p) for p in proofs],
        meetings=[meeting_to_response(m) for m in meetings],
    )


@router.put("/{client_id}/status")
def update_client_status(
    client_id: int,
    data: ClientStatusUpdate,
    identity: Identity = Depends(get_current_identity),
    service: ClientService = Depends(get_client_service),
):
    service.set_status(client_id, data.status, identity)
    return {"message": "Client status updated"}


@router.put("/{client_id}/reassign")
def reassign_client(
    client_id: int,
    data: ClientReassign,
    _admin: Identity = Depends(require_admin),
    service: ClientService = Depends(get_client_service),
):
    """Reassign a client to another Closer (ADMIN only)"""
    service.reassign(client_id, data.newCloserId)
    return {"message": "Client reassigned"}


@router.delete("/{client_id}")
def delete_client(
    client_id: int,
    _admin: Identity = Depends(require_admin),
    service: ClientService = Depends(get_client_service),
):
    """Delete a client (ADMIN only)"""
    service.delete_client(client_id)
    return {"message": "Client deleted"}
