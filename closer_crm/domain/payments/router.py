"""Payment proof routers.

Proofs are reachable both as a sub-resource of a client
(/clients/{id}/payment-proof[s]) and through /payments/{clientId}.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity
from ...database import get_db
from ...models import PaymentProof
from .schemas import PaymentProofCreated, PaymentProofResponse
from .service import PaymentProofService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Payment Proofs"])
payments_router = APIRouter(prefix="/payments", tags=["Payment Proofs"])


def get_payment_service(request: Request, db: Session = Depends(get_db)) -> PaymentProofService:
    """Dependency injection for PaymentProofService"""
    return PaymentProofService(db, request.app.state.file_store)


def proof_to_response(proof: PaymentProof) -> PaymentProofResponse:
    return PaymentProofResponse(
        proofId=proof.id,
        clientId=proof.client_id,
        fileUrl=proof.file_url,
        uploadedAt=proof.uploaded_at,
    )


def _upload(service: PaymentProofService, client_id: int, identity: Identity, file: Optional[UploadFile]):
    proof = service.upload(client_id, identity, file)
    return PaymentProofCreated(proofId=proof.id, fileUrl=proof.file_url, message="Payment proof uploaded")


@router.post("/{client_id}/payment-proof", response_model=PaymentProofCreated, status_code=201)
def upload_payment_proof(
    client_id: int,
    file: Optional[UploadFile] = File(None),
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    """Upload a proof of payment (multipart field 'file')"""
    return _upload(service, client_id, identity, file)


@router.get("/{client_id}/payment-proofs", response_model=list[PaymentProofResponse])
def list_payment_proofs(
    client_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    return [proof_to_response(p) for p in service.list_for_client(client_id, identity)]


@router.delete("/{client_id}/payment-proofs/{proof_id}")
def delete_payment_proof(
    client_id: int,
    proof_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    service.delete(client_id, proof_id, identity)
    return {"message": "Payment proof deleted"}


@payments_router.post("/{client_id}", response_model=PaymentProofCreated, status_code=201)
def upload_proof(
    client_id: int,
    file: Optional[UploadFile] = File(None),
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    return _upload(service, client_id, identity, file)


@payments_router.get("/{client_id}", response_model=list[PaymentProofResponse])
def list_proofs(
    client_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    return [proof_to_response(p) for p in service.list_for_client(client_id, identity)]


@payments_router.delete("/{client_id}/{proof_id}")
def delete_proof(
    client_id: int,
    proof_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PaymentProofService = Depends(get_payment_service),
):
    service.delete(client_id, proof_id, identity)
    return {"message": "Payment proof deleted"}
