"""User service - Authentication and Closer bookkeeping"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import Conflict, InvalidCredentials, InvalidInput, NotFound
from ...models import Client, Meeting, Role, User
from ...security import create_access_token, hash_password, verify_password
from .repository import UserRepository
from .schemas import RegisterRequest

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def authenticate(self, email: str, password: str) -> tuple[str, User]:
        """Check credentials and issue an access token"""
        user = self.repo.get_user_by_email(self.db, email)
        # Unknown email and wrong password are indistinguishable to the caller
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"🔒 Failed login attempt for {email}")
            raise InvalidCredentials("Invalid credentials")

        token = create_access_token(user.id, user.role)
        logger.info(f"✅ User {user.id} logged in ({user.role})")
        return token, user

    def register(self, data: RegisterRequest) -> User:
        """Create an Admin or Closer account"""
        if data.role not in (Role.ADMIN.value, Role.CLOSER.value):
            raise InvalidInput("Invalid role")

        if self.repo.get_user_by_email(self.db, data.email):
            raise Conflict("Email already registered")

        is_closer = data.role == Role.CLOSER.value
        user_data = {
            "email": data.email,
            "password_hash": hash_password(data.password),
            "name": data.name,
            "role": data.role,
            "objective": (data.objective or 0) if is_closer else 0,
            "achieved": 0,
            "percent_complete": 0,
            "group_objective": None if is_closer else (data.groupObjective or 0),
            "group_achieved": 0,
            "group_percent_complete": 0,
        }

        try:
            user = self.repo.create_user(self.db, **user_data)
        except IntegrityError as e:
            # Email taken between the check and the insert
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate email on insert: {data.email}")
            raise Conflict("Email already registered") from e

        logger.info(f"🆕 Registered {user.role} account {user.id} ({user.email})")
        return user

    def get_profile(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.get_profile(user_id)
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentials("Current password is incorrect")

        self.repo.update_password(self.db, user, hash_password(new_password))
        logger.info(f"🔑 Password changed for user {user_id}")

    def set_objective(self, user_id: int, objective: float) -> None:
        if objective < 0:
            raise InvalidInput("Objective must not be negative")
        updated = self.repo.set_objective(self.db, user_id, objective)
        logger.info(f"🎯 Objective set to {objective} for closer {user_id} (rows={updated})")

    def add_achievement(self, user_id: int, amount: float) -> None:
        """Silently ignored when the account is missing or not a Closer"""
        updated = self.repo.increment_achieved(self.db, user_id, amount)
        if updated:
            logger.info(f"📈 Closer {user_id} achieved +{amount}")
        else:
            logger.debug(f"Achievement for non-closer or unknown user {user_id} ignored")

    def list_clients(self, closer_id: int) -> list[Client]:
        return self.repo.get_clients_by_closer(self.db, closer_id)

    def list_meetings(self, closer_id: int) -> list[Meeting]:
        return self.repo.get_meetings_by_closer(self.db, closer_id)

    def list_closers(self) -> list[User]:
        return self.repo.get_closers(self.db)
