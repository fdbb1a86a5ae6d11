"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ...models import Client, ClientForm, Meeting, PaymentProof


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, closer_id: int, **client_data) -> Client:
        """Create a new client"""
        client = Client(closer_id=closer_id, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def get_form(db: Session, client_id: int) -> Optional[ClientForm]:
        return db.query(ClientForm).filter(ClientForm.client_id == client_id).first()

    @staticmethod
    def get_payment_proofs(db: Session, client_id: int) -> list[PaymentProof]:
        return (
            db.query(PaymentProof)
            .filter(PaymentProof.client_id == client_id)
            .order_by(PaymentProof.uploaded_at.desc(), PaymentProof.id.desc())
            .all()
        )

    @staticmethod
    def get_meetings(db: Session, client_id: int) -> list[Meeting]:
        return (
            db.query(Meeting)
            .filter(Meeting.client_id == client_id)
            .order_by(Meeting.meeting_date.desc())
            .all()
        )

    @staticmethod
    def update_status(db: Session, client_id: int, status: str) -> None:
        db.execute(
            update(Client)
            .where(Client.id == client_id)
            .values(status=status, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        db.commit()

    @staticmethod
    def reassign(db: Session, client_id: int, new_closer_id: int) -> None:
        db.execute(
            update(Client)
            .where(Client.id == client_id)
            .values(closer_id=new_closer_id, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        db.commit()

    @staticmethod
    def delete_client(db: Session, client_id: int) -> None:
        """
        Delete a client. The form and payment proofs go with it (ON DELETE
        CASCADE) and meetings keep existing with client_id set to NULL
        (ON DELETE SET NULL).
        """
        db.execute(
            delete(Client)
            .where(Client.id == client_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
