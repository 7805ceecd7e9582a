"""
Client portal routes. Every endpoint except login needs a client token.

Endpoints:
- POST /api/v1/client-portal/login        -> portal password login (rate limited)
- GET  /api/v1/client-portal/me           -> own profile
- GET  /api/v1/client-portal/dashboard    -> statistics plus recent cases and documents
- GET  /api/v1/client-portal/cases        -> own cases (paginated; status)
- GET  /api/v1/client-portal/cases/{id}   -> one own case
- GET  /api/v1/client-portal/documents    -> own non-archived documents
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from lawdesk.core.deps import Pagination, get_client_portal_service, get_current_client, pagination
from lawdesk.core.rate_limit import auth_rate_limit
from lawdesk.models.client import Client
from lawdesk.models.enums import CaseStatus
from lawdesk.schemas.client_portal import (
    PortalCaseListResponse,
    PortalCaseOut,
    PortalClientOut,
    PortalDashboard,
    PortalDocumentListResponse,
    PortalDocumentOut,
    PortalLoginRequest,
    PortalLoginResponse,
)
from lawdesk.schemas.common import page_meta
from lawdesk.services.client_portal_service import ClientPortalService

router = APIRouter(prefix="/api/v1/client-portal", tags=["client-portal"])


@router.post("/login", response_model=PortalLoginResponse, dependencies=[Depends(auth_rate_limit)])
def portal_login(
    payload: PortalLoginRequest,
    service: ClientPortalService = Depends(get_client_portal_service),
) -> PortalLoginResponse:
    client, token = service.login(payload.email, payload.password)
    return PortalLoginResponse(client=PortalClientOut.model_validate(client), token=token)


@router.get("/me", response_model=PortalClientOut)
def portal_me(client: Client = Depends(get_current_client)) -> PortalClientOut:
    return PortalClientOut.model_validate(client)


@router.get("/dashboard", response_model=PortalDashboard)
def portal_dashboard(
    client: Client = Depends(get_current_client),
    service: ClientPortalService = Depends(get_client_portal_service),
) -> PortalDashboard:
    return PortalDashboard.model_validate(service.dashboard(client), from_attributes=True)


@router.get("/cases", response_model=PortalCaseListResponse)
def portal_cases(
    status_filter: Optional[CaseStatus] = Query(None, alias="status"),
    paging: Pagination = Depends(pagination),
    client: Client = Depends(get_current_client),
    service: ClientPortalService = Depends(get_client_portal_service),
) -> PortalCaseListResponse:
    items, total = service.cases(
        client,
        status=status_filter.value if status_filter else None,
        offset=paging.offset,
        limit=paging.limit,
    )
    return PortalCaseListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[PortalCaseOut.model_validate(c) for c in items],
    )


@router.get("/cases/{case_id}", response_model=PortalCaseOut)
def portal_case(
    case_id: int = Path(..., ge=1),
    client: Client = Depends(get_current_client),
    service: ClientPortalService = Depends(get_client_portal_service),
) -> PortalCaseOut:
    return PortalCaseOut.model_validate(service.case(client, case_id))


@router.get("/documents", response_model=PortalDocumentListResponse)
def portal_documents(
    paging: Pagination = Depends(pagination),
    client: Client = Depends(get_current_client),
    service: ClientPortalService = Depends(get_client_portal_service),
) -> PortalDocumentListResponse:
    items, total = service.documents(client, offset=paging.offset, limit=paging.limit)
    return PortalDocumentListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[PortalDocumentOut.model_validate(d) for d in items],
    )
