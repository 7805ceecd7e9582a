"""
SQLAlchemy-based Notification repository.

Soft-deleted notifications are excluded from every read.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import func, select, update

from lawdesk.models.notification import Notification
from lawdesk.repos.base import SqlAlchemyRepo

__all__ = ["SqlAlchemyNotificationRepo"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyNotificationRepo(SqlAlchemyRepo):
    """
    Concrete Notification repository using SQLAlchemy ORM.
    """

    def create(self, fields: Mapping[str, Any]) -> Notification:
        notification = Notification(**fields)
        return self._save(notification, "Notification creation failed due to constraint violation")

    def get_for_recipient(self, recipient_id: int, notification_id: int) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == recipient_id,
            Notification.is_deleted.is_(False),
        )
        return self.session.execute(stmt).scalars().first()

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        type: Optional[str] = None,
        priority: Optional[str] = None,
        unread_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Notification], int]:
        conditions: List[Any] = [
            Notification.recipient_id == recipient_id,
            Notification.is_deleted.is_(False),
        ]
        if type:
            conditions.append(Notification.type == type)
        if priority:
            conditions.append(Notification.priority == priority)
        if unread_only:
            conditions.append(Notification.read_at.is_(None))
        return self._page(
            Notification,
            conditions,
            [Notification.created_at.desc(), Notification.id.desc()],
            offset,
            limit,
        )

    def count_unread(self, recipient_id: int) -> int:
        stmt = select(func.count(Notification.id)).where(
            Notification.recipient_id == recipient_id,
            Notification.is_deleted.is_(False),
            Notification.read_at.is_(None),
        )
        return int(self.session.execute(stmt).scalar() or 0)

    def mark_read(self, notification: Notification) -> Notification:
        if notification.read_at is None:
            notification.read_at = _utcnow()
            self.session.commit()
            self.session.refresh(notification)
        return notification

    def mark_all_read(self, recipient_id: int) -> int:
        stmt = (
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_deleted.is_(False),
                Notification.read_at.is_(None),
            )
            .values(read_at=_utcnow())
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return int(result.rowcount or 0)

    def soft_delete(self, notification: Notification) -> None:
        notification.is_deleted = True
        self.session.commit()
