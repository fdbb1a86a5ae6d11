"""Payment proof repository - Database operations for uploaded-file references"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ...models import PaymentProof


class PaymentProofRepository:
    """Repository for payment proof database operations"""

    @staticmethod
    def add_proof(db: Session, client_id: int, file_url: str) -> PaymentProof:
        proof = PaymentProof(client_id=client_id, file_url=file_url)
        db.add(proof)
        db.commit()
        db.refresh(proof)
        return proof

    @staticmethod
    def get_proofs_by_client(db: Session, client_id: int) -> list[PaymentProof]:
        return (
            db.query(PaymentProof)
            .filter(PaymentProof.client_id == client_id)
            .order_by(PaymentProof.uploaded_at.desc(), PaymentProof.id.desc())
            .all()
        )

    @staticmethod
    def get_client_proof(db: Session, client_id: int, proof_id: int) -> Optional[PaymentProof]:
        return (
            db.query(PaymentProof)
            .filter(PaymentProof.id == proof_id, PaymentProof.client_id == client_id)
            .first()
        )

    @staticmethod
    def delete_proof(db: Session, proof_id: int) -> None:
        db.execute(
            delete(PaymentProof)
            .where(PaymentProof.id == proof_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
