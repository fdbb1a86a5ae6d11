"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import Identity, ensure_can_access
from ...errors import InvalidInput, NotFound
from ...models import Client, ClientForm, ClientStatus, Meeting, PaymentProof, Role
from ..users.repository import UserRepository
from .repository import ClientRepository
from .schemas import ClientCreate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_client(self, client_id: int, identity: Identity, action: str = "view") -> Client:
        """Fetch a client the caller is allowed to act on"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")
        ensure_can_access(identity, client.closer_id, f"You do not have permission to {action} this client")
        return client

    def create_client(self, data: ClientCreate, identity: Identity) -> Client:
        """Create a new client owned by the calling Closer"""
        client_data = {
            "name": data.name,
            "company_name": data.companyName,
            "email": data.email,
            "status": (data.status or ClientStatus.PAGO_PENDIENTE).value,
        }
        client = self.repo.create_client(self.db, identity.user_id, **client_data)
        logger.info(f"📥 Client {client.id} created by closer {identity.user_id}")
        return client

    def get_detail(
        self, client_id: int, identity: Identity
    ) -> tuple[Client, Optional[ClientForm], list[PaymentProof], list[Meeting]]:
        """Client plus its form, payment proofs and meetings"""
        client = self.get_client(client_id, identity)
        form = self.repo.get_form(self.db, client_id)
        proofs = self.repo.get_payment_proofs(self.db, client_id)
        meetings = self.repo.get_meetings(self.db, client_id)
        return client, form, proofs, meetings

    def set_status(self, client_id: int, status: ClientStatus, identity: Identity) -> None:
        self.get_client(client_id, identity, action="update")
        self.repo.update_status(self.db, client_id, status.value)
        logger.info(f"🔄 Client {client_id} status -> {status.value} (by user {identity.user_id})")

    def reassign(self, client_id: int, new_closer_id: int) -> None:
        """Move a client to another Closer (Admin only, enforced by the router)"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")

        target = UserRepository.get_user_by_id(self.db, new_closer_id)
        if not target or target.role != Role.CLOSER.value:
            raise InvalidInput("newCloserId must reference an existing Closer")

        previous = client.closer_id
        self.repo.reassign(self.db, client_id, new_closer_id)
        logger.info(f"🔀 Client {client_id} reassigned from closer {previous} to {new_closer_id}")

    def delete_client(self, client_id: int) -> None:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")
        self.repo.delete_client(self.db, client_id)
        logger.info(f"🗑️ Client {client_id} deleted")
