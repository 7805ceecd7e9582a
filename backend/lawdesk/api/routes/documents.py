"""
Document routes (firm-scoped).

Endpoints:
- POST   /api/v1/documents                     -> multipart upload (version 1)
- GET    /api/v1/documents                     -> list (paginated; archived hidden by default)
- GET    /api/v1/documents/templates           -> non-archived templates, by title
- GET    /api/v1/documents/{id}                -> detail with review history
- GET    /api/v1/documents/{id}/download       -> stream the stored file
- PUT    /api/v1/documents/{id}                -> update metadata
- POST   /api/v1/documents/{id}/versions       -> multipart upload of a new version
- GET    /api/v1/documents/{id}/versions       -> all versions of the root document
- POST   /api/v1/documents/{id}/review         -> record a review outcome
- PUT    /api/v1/documents/{id}/archive        -> archive
- PUT    /api/v1/documents/{id}/unarchive      -> unarchive
- DELETE /api/v1/documents/{id}                -> delete row and file

Upload metadata arrives as form fields next to the file; `tags` is a
comma-separated string.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from fastapi.responses import FileResponse

from lawdesk.core.deps import Pagination, get_current_user, get_document_service, pagination
from lawdesk.models.enums import DocumentStatus, DocumentType
from lawdesk.models.user import User
from lawdesk.schemas.common import MessageResponse, page_meta
from lawdesk.schemas.document import (
    DocumentCreate,
    DocumentDetail,
    DocumentListResponse,
    DocumentOut,
    DocumentUpdate,
    DocumentVersionCreate,
    DocumentVersionsResponse,
    ReviewOut,
    ReviewRequest,
)
from lawdesk.services.document_service import DocumentService

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


def _split_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


@router.post("", response_model=DocumentDetail, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    title: str = Form(...),
    document_type: str = Form(...),
    case_id: int = Form(...),
    title_ar: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    description_ar: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    is_template: bool = Form(False),
    template_category: Optional[str] = Form(None),
    expiry_date: Optional[date] = Form(None),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentDetail:
    # pydantic.ValidationError here is mapped to 422 by the error handlers
    payload = DocumentCreate(
        title=title,
        title_ar=title_ar,
        description=description,
        description_ar=description_ar,
        document_type=document_type,
        case_id=case_id,
        tags=_split_tags(tags),
        is_template=is_template,
        template_category=template_category,
        expiry_date=expiry_date,
    )
    document = service.upload(
        user,
        payload,
        file_name=file.filename,
        content_type=file.content_type,
        stream=file.file,
    )
    return DocumentDetail.model_validate(document)


@router.get("", response_model=DocumentListResponse)
def list_documents(
    case_id: Optional[int] = Query(None, ge=1),
    client_id: Optional[int] = Query(None, ge=1),
    document_type: Optional[DocumentType] = Query(None),
    status_filter: Optional[DocumentStatus] = Query(None, alias="status"),
    is_template: Optional[bool] = Query(None),
    include_archived: bool = Query(False),
    search: Optional[str] = Query(None, max_length=100),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    items, total = service.list_documents(
        user,
        offset=paging.offset,
        limit=paging.limit,
        case_id=case_id,
        client_id=client_id,
        document_type=document_type.value if document_type else None,
        status=status_filter.value if status_filter else None,
        is_template=is_template,
        include_archived=include_archived,
        search=search,
    )
    return DocumentListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[DocumentOut.model_validate(d) for d in items],
    )


@router.get("/templates", response_model=List[DocumentOut])
def list_templates(
    category: Optional[str] = Query(None, max_length=100),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> List[DocumentOut]:
    return [DocumentOut.model_validate(d) for d in service.list_templates(user, category)]


@router.get("/{document_id}", response_model=DocumentDetail)
def get_document(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentDetail:
    return DocumentDetail.model_validate(service.get(user, document_id))


@router.get("/{document_id}/download")
def download_document(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> FileResponse:
    document, path = service.file_for(user, document_id)
    return FileResponse(path, media_type=document.mime_type, filename=document.file_name)


@router.put("/{document_id}", response_model=DocumentDetail)
def update_document(
    payload: DocumentUpdate,
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentDetail:
    return DocumentDetail.model_validate(service.update(user, document_id, payload))


@router.post(
    "/{document_id}/versions",
    response_model=DocumentDetail,
    status_code=status.HTTP_201_CREATED,
)
def upload_version(
    document_id: int = Path(..., ge=1),
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentDetail:
    payload = DocumentVersionCreate(description=description)
    document = service.upload_version(
        user,
        document_id,
        description=payload.description,
        file_name=file.filename,
        content_type=file.content_type,
        stream=file.file,
    )
    return DocumentDetail.model_validate(document)


@router.get("/{document_id}/versions", response_model=DocumentVersionsResponse)
def list_versions(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentVersionsResponse:
    root_id, items = service.versions(user, document_id)
    return DocumentVersionsResponse(
        root_id=root_id,
        items=[DocumentOut.model_validate(d) for d in items],
        total=len(items),
    )


@router.post("/{document_id}/review", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def review_document(
    payload: ReviewRequest,
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> ReviewOut:
    return ReviewOut.model_validate(service.review(user, document_id, payload.status, payload.comments))


@router.put("/{document_id}/archive", response_model=DocumentOut)
def archive_document(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentOut:
    return DocumentOut.model_validate(service.archive(user, document_id))


@router.put("/{document_id}/unarchive", response_model=DocumentOut)
def unarchive_document(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> DocumentOut:
    return DocumentOut.model_validate(service.unarchive(user, document_id))


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    service.delete(user, document_id)
    return MessageResponse(message="Document deleted successfully")
