"""User repository - Database operations for Admin and Closer accounts"""

from typing import Optional

from sqlalchemy import Numeric, case, cast, func, update
from sqlalchemy.orm import Session

from ...models import Client, Meeting, Role, User


# Unbounded NUMERIC on PostgreSQL; MySQL needs an explicit precision or DECIMAL means DECIMAL(10, 0)
PERCENT_TYPE = Numeric().with_variant(Numeric(65, 4), "mysql", "mariadb")


def _percent_expr(achieved, objective):
    """SQL expression for round(achieved / objective * 100, 2)"""
    return func.round(cast(achieved * 100.0 / objective, PERCENT_TYPE), 2)


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_password(db: Session, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        db.commit()

    @staticmethod
    def set_objective(db: Session, user_id: int, objective: float) -> int:
        """
        Set a Closer's objective and recompute percent_complete in one statement.
        Returns the number of rows updated (0 when the account is not a Closer).
        """
        if objective == 0:
            percent = 0
        else:
            percent = _percent_expr(User.achieved, objective)

        result = db.execute(
            update(User)
            .where(User.id == user_id, User.role == Role.CLOSER.value)
            .values(objective=objective, percent_complete=percent, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount

    @staticmethod
    def increment_achieved(db: Session, user_id: int, amount: float) -> int:
        """
        Add to a Closer's achieved total with the increment evaluated by the
        database, so concurrent increments never overwrite each other.
        percent_complete is assigned first because MySQL evaluates SET
        clauses left to right.
        """
        new_achieved = User.achieved + amount
        percent = case(
            (User.objective > 0, _percent_expr(new_achieved, User.objective)),
            else_=0,
        )
        result = db.execute(
            update(User)
            .where(User.id == user_id, User.role == Role.CLOSER.value)
            .ordered_values(
                (User.percent_complete, percent),
                (User.achieved, new_achieved),
                (User.updated_at, func.now()),
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount

    @staticmethod
    def get_clients_by_closer(db: Session, closer_id: int) -> list[Client]:
        return (
            db.query(Client)
            .filter(Client.closer_id == closer_id)
            .order_by(Client.updated_at.desc(), Client.id.desc())
            .all()
        )

    @staticmethod
    def get_meetings_by_closer(db: Session, closer_id: int) -> list[Meeting]:
        return (
            db.query(Meeting)
            .filter(Meeting.closer_id == closer_id)
            .order_by(Meeting.meeting_date.desc())
            .all()
        )

    @staticmethod
    def get_closers(db: Session) -> list[User]:
        return db.query(User).filter(User.role == Role.CLOSER.value).order_by(User.name).all()
