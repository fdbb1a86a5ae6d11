"""Meeting repository - Database operations for meetings"""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import func

from ...models import Meeting


class MeetingRepository:
    """Repository for meeting database operations"""

    @staticmethod
    def create_meeting(db: Session, **meeting_data) -> Meeting:
        meeting = Meeting(**meeting_data)
        db.add(meeting)
        db.commit()
        db.refresh(meeting)
        return meeting

    @staticmethod
    def get_meeting_by_id(db: Session, meeting_id: int) -> Optional[Meeting]:
        """Meeting with its closer and client eagerly loaded"""
        return (
            db.query(Meeting)
            .options(joinedload(Meeting.closer), joinedload(Meeting.client))
            .filter(Meeting.id == meeting_id)
            .first()
        )

    @staticmethod
    def get_meetings_by_closer(db: Session, closer_id: int) -> list[Meeting]:
        return (
            db.query(Meeting)
            .options(joinedload(Meeting.client))
            .filter(Meeting.closer_id == closer_id)
            .order_by(Meeting.meeting_date.desc())
            .all()
        )

    @staticmethod
    def get_meetings_by_client(db: Session, client_id: int) -> list[Meeting]:
        return (
            db.query(Meeting)
            .options(joinedload(Meeting.closer))
            .filter(Meeting.client_id == client_id)
            .order_by(Meeting.meeting_date.desc())
            .all()
        )

    @staticmethod
    def update_meeting(db: Session, meeting_id: int, changes: dict) -> None:
        """Apply only the given columns; no-op when changes is empty"""
        if not changes:
            return
        db.execute(
            update(Meeting)
            .where(Meeting.id == meeting_id)
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        db.commit()

    @staticmethod
    def delete_meeting(db: Session, meeting_id: int) -> None:
        db.execute(
            delete(Meeting)
            .where(Meeting.id == meeting_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
