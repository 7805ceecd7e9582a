"""
Notification service.

Used directly by the notifications API and indirectly by the case and document
services, which emit case_update / document_uploaded messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from lawdesk.core.contracts import NotificationRepo, UserRepo
from lawdesk.core.errors import NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.models.enums import NotificationPriority
from lawdesk.models.notification import Notification
from lawdesk.models.user import User
from lawdesk.schemas.notification import NotificationCreate

__all__ = ["NotificationService"]

log = get_logger(__name__)


class NotificationService:
    def __init__(self, notification_repo: NotificationRepo, user_repo: UserRepo) -> None:
        self.notification_repo = notification_repo
        self.user_repo = user_repo

    def notify(
        self,
        *,
        law_firm_id: int,
        recipient_id: int,
        sender_id: Optional[int],
        title: str,
        message: str,
        type: str,
        priority: str = NotificationPriority.NORMAL.value,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        notification = self.notification_repo.create(
            {
                "law_firm_id": law_firm_id,
                "recipient_id": recipient_id,
                "sender_id": sender_id,
                "title": title,
                "message": message,
                "type": type,
                "priority": priority,
                "data": dict(data or {}),
            }
        )
        log.debug(
            "notification created",
            extra={"notification_id": notification.id, "recipient_id": recipient_id, "type": type},
        )
        return notification

    def create(self, actor: User, payload: NotificationCreate) -> Notification:
        recipient = self.user_repo.get_in_firm(actor.law_firm_id, payload.recipient_id)
        if recipient is None:
            raise NotFoundError("Recipient not found")
        return self.notify(
            law_firm_id=actor.law_firm_id,
            recipient_id=recipient.id,
            sender_id=actor.id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            priority=payload.priority,
            data=payload.data,
        )

    def list_for(
        self,
        user: User,
        *,
        type: Optional[str] = None,
        priority: Optional[str] = None,
        unread_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Notification], int, int]:
        """Returns (items, total, unread_count)."""
        items, total = self.notification_repo.list_for_recipient(
            user.id,
            type=type,
            priority=priority,
            unread_only=unread_only,
            offset=offset,
            limit=limit,
        )
        return items, total, self.notification_repo.count_unread(user.id)

    def _get_own(self, user: User, notification_id: int) -> Notification:
        notification = self.notification_repo.get_for_recipient(user.id, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def mark_read(self, user: User, notification_id: int) -> Notification:
        return self.notification_repo.mark_read(self._get_own(user, notification_id))

    def mark_all_read(self, user: User) -> int:
        return self.notification_repo.mark_all_read(user.id)

    def delete(self, user: User, notification_id: int) -> None:
        self.notification_repo.soft_delete(self._get_own(user, notification_id))
