import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    CLOSER = "CLOSER"


class ClientStatus(str, enum.Enum):
    PAGO_PENDIENTE = "PAGO_PENDIENTE"
    PAGO_REALIZADO = "PAGO_REALIZADO"
    EN_PROCESO = "EN_PROCESO"
    COMPLETADO = "COMPLETADO"
    CANCELADO = "CANCELADO"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # ADMIN or CLOSER
    password_hash = Column(String(255), nullable=False)
    # Closer-only sales bookkeeping
    objective = Column(Float, default=0, nullable=False)
    achieved = Column(Float, default=0, nullable=False)
    percent_complete = Column(Float, default=0, nullable=False)  # achieved / objective * 100
    # Admin-only aggregates
    group_objective = Column(Float, nullable=True)
    group_achieved = Column(Float, default=0, nullable=False)
    group_percent_complete = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clients = relationship("Client", back_populates="closer")
    meetings = relationship("Meeting", back_populates="closer")
    notifications = relationship("Notification", back_populates="user")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False)
    closer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(30), default=ClientStatus.PAGO_PENDIENTE.value, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    closer = relationship("User", back_populates="clients")
    # Deletes are left to the database's ON DELETE rules
    form = relationship("ClientForm", back_populates="client", uselist=False, passive_deletes=True)
    payment_proofs = relationship("PaymentProof", back_populates="client", passive_deletes=True)
    meetings = relationship("Meeting", back_populates="client", passive_deletes=True)


class ClientForm(Base):
    __tablename__ = "client_forms"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    form_data = Column(JSON, nullable=True)
    submitted_at = Column(DateTime, server_default=func.now())

    client = relationship("Client", back_populates="form")


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)
    closer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True
    )
    meeting_date = Column(DateTime, nullable=False)
    location = Column(String(500), nullable=True)  # Address or video-call URL
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    closer = relationship("User", back_populates="meetings")
    client = relationship("Client", back_populates="meetings")


class PaymentProof(Base):
    __tablename__ = "payment_proofs"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_url = Column(String(500), nullable=False)  # Reference to the stored file, not its content
    uploaded_at = Column(DateTime, server_default=func.now())

    client = relationship("Client", back_populates="payment_proofs")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="notifications")
