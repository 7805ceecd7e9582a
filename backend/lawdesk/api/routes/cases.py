"""
Case routes (firm-scoped).

Endpoints:
- GET    /api/v1/cases                 -> list (paginated, newest first)
- POST   /api/v1/cases                 -> create
- GET    /api/v1/cases/{id}            -> detail with notes
- PUT    /api/v1/cases/{id}            -> update; status changes notify the assigned lawyer
- DELETE /api/v1/cases/{id}            -> delete with documents
- GET    /api/v1/cases/{id}/notes      -> notes
- POST   /api/v1/cases/{id}/notes      -> add a note
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.core.deps import Pagination, get_case_service, get_current_user, pagination
from lawdesk.models.enums import CaseStatus, CaseType, Priority
from lawdesk.models.user import User
from lawdesk.schemas.case import CaseCreate, CaseDetail, CaseListResponse, CaseOut, CaseUpdate
from lawdesk.schemas.common import MessageResponse, NoteCreate, NoteOut, page_meta
from lawdesk.services.case_service import CaseService

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])


@router.get("", response_model=CaseListResponse)
def list_cases(
    status_filter: Optional[CaseStatus] = Query(None, alias="status"),
    case_type: Optional[CaseType] = Query(None),
    priority: Optional[Priority] = Query(None),
    client_id: Optional[int] = Query(None, ge=1),
    assigned_lawyer_id: Optional[int] = Query(None, ge=1),
    search: Optional[str] = Query(None, max_length=100),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> CaseListResponse:
    items, total = service.list_cases(
        user,
        offset=paging.offset,
        limit=paging.limit,
        status=status_filter.value if status_filter else None,
        case_type=case_type.value if case_type else None,
        priority=priority.value if priority else None,
        client_id=client_id,
        assigned_lawyer_id=assigned_lawyer_id,
        search=search,
    )
    return CaseListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[CaseOut.model_validate(c) for c in items],
    )


@router.post("", response_model=CaseDetail, status_code=status.HTTP_201_CREATED)
def create_case(
    payload: CaseCreate,
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> CaseDetail:
    return CaseDetail.model_validate(service.create(user, payload))


@router.get("/{case_id}", response_model=CaseDetail)
def get_case(
    case_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> CaseDetail:
    return CaseDetail.model_validate(service.get(user, case_id))


@router.put("/{case_id}", response_model=CaseDetail)
def update_case(
    payload: CaseUpdate,
    case_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> CaseDetail:
    return CaseDetail.model_validate(service.update(user, case_id, payload))


@router.delete("/{case_id}", response_model=MessageResponse)
def delete_case(
    case_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> MessageResponse:
    service.delete(user, case_id)
    return MessageResponse(message="Case deleted successfully")


@router.get("/{case_id}/notes", response_model=List[NoteOut])
def list_case_notes(
    case_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> List[NoteOut]:
    return [NoteOut.model_validate(n) for n in service.get(user, case_id).notes]


@router.post("/{case_id}/notes", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def add_case_note(
    payload: NoteCreate,
    case_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CaseService = Depends(get_case_service),
) -> NoteOut:
    return NoteOut.model_validate(service.add_note(user, case_id, payload.content))
