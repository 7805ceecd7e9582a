"""
Notification routes.

Endpoints:
- POST   /api/v1/notifications             -> send to a user in the firm (admin only)
- GET    /api/v1/notifications             -> own notifications with unread_count
- PUT    /api/v1/notifications/read-all    -> mark all own notifications read
- PUT    /api/v1/notifications/{id}/read   -> mark one read
- DELETE /api/v1/notifications/{id}        -> soft delete
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.core.deps import (
    Pagination,
    get_current_user,
    get_notification_service,
    pagination,
    require_roles,
)
from lawdesk.models.enums import NotificationPriority, NotificationType, UserRole
from lawdesk.models.user import User
from lawdesk.schemas.common import MessageResponse, page_meta
from lawdesk.schemas.notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationOut,
)
from lawdesk.services.notification_service import NotificationService

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    user: User = Depends(require_roles(UserRole.ADMIN.value)),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationOut:
    return NotificationOut.model_validate(service.create(user, payload))


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    type: Optional[NotificationType] = Query(None),
    priority: Optional[NotificationPriority] = Query(None),
    unread_only: bool = Query(False),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    items, total, unread = service.list_for(
        user,
        type=type.value if type else None,
        priority=priority.value if priority else None,
        unread_only=unread_only,
        offset=paging.offset,
        limit=paging.limit,
    )
    return NotificationListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[NotificationOut.model_validate(n) for n in items],
        unread_count=unread,
    )


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(modified_count=service.mark_all_read(user))


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_read(
    notification_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationOut:
    return NotificationOut.model_validate(service.mark_read(user, notification_id))


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    service.delete(user, notification_id)
    return MessageResponse(message="Notification deleted")
