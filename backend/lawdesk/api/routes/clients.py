"""
Client routes (firm-scoped).

Endpoints:
- GET    /api/v1/clients                        -> list (paginated; status, client_type, search)
- POST   /api/v1/clients                        -> create
- GET    /api/v1/clients/{id}                   -> detail with case_count and notes
- PUT    /api/v1/clients/{id}                   -> update (email is immutable)
- DELETE /api/v1/clients/{id}                   -> delete with cases and documents
- GET    /api/v1/clients/{id}/notes             -> notes
- POST   /api/v1/clients/{id}/notes             -> add a note
- PUT    /api/v1/clients/{id}/portal-password   -> enable portal login
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.core.deps import Pagination, get_client_service, get_current_user, pagination
from lawdesk.models.client import Client
from lawdesk.models.enums import ClientStatus, ClientType
from lawdesk.models.user import User
from lawdesk.schemas.client import (
    ClientCreate,
    ClientDetail,
    ClientListResponse,
    ClientOut,
    ClientUpdate,
    PortalPasswordRequest,
)
from lawdesk.schemas.common import MessageResponse, NoteCreate, NoteOut, page_meta
from lawdesk.services.client_service import ClientService

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])


def _detail(service: ClientService, client: Client) -> ClientDetail:
    detail = ClientDetail.model_validate(client)
    return detail.model_copy(update={"case_count": service.case_count(client)})


@router.get("", response_model=ClientListResponse)
def list_clients(
    status_filter: Optional[ClientStatus] = Query(None, alias="status"),
    client_type: Optional[ClientType] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> ClientListResponse:
    items, total = service.list_clients(
        user,
        status=status_filter.value if status_filter else None,
        client_type=client_type.value if client_type else None,
        search=search,
        offset=paging.offset,
        limit=paging.limit,
    )
    return ClientListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[ClientOut.model_validate(c) for c in items],
    )


@router.post("", response_model=ClientDetail, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> ClientDetail:
    return _detail(service, service.create(user, payload))


@router.get("/{client_id}", response_model=ClientDetail)
def get_client(
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> ClientDetail:
    return _detail(service, service.get(user, client_id))


@router.put("/{client_id}", response_model=ClientDetail)
def update_client(
    payload: ClientUpdate,
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> ClientDetail:
    return _detail(service, service.update(user, client_id, payload))


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    service.delete(user, client_id)
    return MessageResponse(message="Client deleted successfully")


@router.get("/{client_id}/notes", response_model=List[NoteOut])
def list_client_notes(
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> List[NoteOut]:
    return [NoteOut.model_validate(n) for n in service.get(user, client_id).notes]


@router.post("/{client_id}/notes", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def add_client_note(
    payload: NoteCreate,
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> NoteOut:
    return NoteOut.model_validate(service.add_note(user, client_id, payload.content))


@router.put("/{client_id}/portal-password", response_model=ClientOut)
def set_portal_password(
    payload: PortalPasswordRequest,
    client_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
) -> ClientOut:
    return ClientOut.model_validate(service.set_portal_password(user, client_id, payload.password))
