"""Payment proof service - Upload, list and delete proofs attached to a client"""

import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ...auth import Identity
from ...config import MAX_UPLOAD_BYTES
from ...errors import InvalidInput, NotFound
from ...models import PaymentProof
from ..clients.service import ClientService
from .repository import PaymentProofRepository

logger = logging.getLogger(__name__)


class PaymentProofService:
    """Service layer for payment proofs; access follows the owning client"""

    def __init__(self, db: Session, file_store):
        self.db = db
        self.file_store = file_store
        self.repo = PaymentProofRepository()
        self.clients = ClientService(db)

    def upload(self, client_id: int, identity: Identity, file: Optional[UploadFile]) -> PaymentProof:
        self.clients.get_client(client_id, identity, action="upload proofs for")

        # Read at most one byte past the limit, and only for an allowed caller
        content = file.file.read(MAX_UPLOAD_BYTES + 1) if file is not None else None
        if not content:
            raise InvalidInput("No file received")
        if len(content) > MAX_UPLOAD_BYTES:
            raise InvalidInput(f"File too large (max {MAX_UPLOAD_BYTES // (1024 * 1024)}MB)")

        file_url = self.file_store.save(content, file.filename, file.content_type)
        proof = self.repo.add_proof(self.db, client_id, file_url)
        logger.info(f"🧾 Payment proof {proof.id} uploaded for client {client_id}")
        return proof

    def list_for_client(self, client_id: int, identity: Identity) -> list[PaymentProof]:
        self.clients.get_client(client_id, identity, action="view proofs of")
        return self.repo.get_proofs_by_client(self.db, client_id)

    def delete(self, client_id: int, proof_id: int, identity: Identity) -> None:
        self.clients.get_client(client_id, identity, action="delete proofs of")

        # The proof must belong to the client in the path
        proof = self.repo.get_client_proof(self.db, client_id, proof_id)
        if not proof:
            raise NotFound("Payment proof not found")

        self.repo.delete_proof(self.db, proof_id)
        logger.info(f"🗑️ Payment proof {proof_id} of client {client_id} deleted")
