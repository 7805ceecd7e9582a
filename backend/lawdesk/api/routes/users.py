"""
Staff user management routes. Every operation is scoped to the caller's firm.

Endpoints:
- GET    /api/v1/users         -> list users (paginated; role, is_active, search)
- GET    /api/v1/users/{id}    -> one user
- POST   /api/v1/users         -> create a staff user (admin only)
- PUT    /api/v1/users/{id}    -> update name, role, is_active (admin only)
- DELETE /api/v1/users/{id}    -> deactivate (admin only)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.core.deps import Pagination, get_current_user, get_user_service, pagination, require_roles
from lawdesk.models.enums import UserRole
from lawdesk.models.user import User
from lawdesk.schemas.auth import UserCreate, UserListResponse, UserOut, UserUpdate
from lawdesk.schemas.common import page_meta
from lawdesk.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

admin_only = require_roles(UserRole.ADMIN.value)


@router.get("", response_model=UserListResponse)
def list_users(
    role: Optional[UserRole] = Query(None),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    items, total = service.list_users(
        user,
        role=role.value if role else None,
        is_active=is_active,
        search=search,
        offset=paging.offset,
        limit=paging.limit,
    )
    return UserListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[UserOut.model_validate(u) for u in items],
    )


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(service.get(user, user_id))


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(service.create(user, payload))


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    payload: UserUpdate,
    user_id: int = Path(..., ge=1),
    user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(service.update(user, user_id, payload))


@router.delete("/{user_id}", response_model=UserOut)
def deactivate_user(
    user_id: int = Path(..., ge=1),
    user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(service.deactivate(user, user_id))
