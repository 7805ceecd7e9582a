"""
Document service.

Coordinates file storage, document rows and notifications:
- upload: validate + store the file, create version 1, notify the case lawyer
- new version: store the file, create a row pointing at the root document
- review: record the outcome and move the document's status accordingly
- archive / unarchive / delete
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Sequence, Tuple

from lawdesk.core.contracts import CaseRepo, DocumentRepo
from lawdesk.core.errors import NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.models.case import Case
from lawdesk.models.document import Document, DocumentReview
from lawdesk.models.enums import (
    REVIEW_STATUS_MAP,
    DocumentStatus,
    NotificationPriority,
    NotificationType,
    ReviewOutcome,
)
from lawdesk.models.user import User
from lawdesk.schemas.document import DocumentCreate, DocumentUpdate
from lawdesk.services.document_storage import DocumentStorage, StoredFile
from lawdesk.services.notification_service import NotificationService

__all__ = ["DocumentService"]

log = get_logger(__name__)

_NOT_NULL_FIELDS = ("title", "document_type", "status", "tags", "is_template")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentService:
    def __init__(
        self,
        document_repo: DocumentRepo,
        case_repo: CaseRepo,
        storage: DocumentStorage,
        notifications: NotificationService,
    ) -> None:
        self.document_repo = document_repo
        self.case_repo = case_repo
        self.storage = storage
        self.notifications = notifications

    # -------------------------------
    # Lookups
    # -------------------------------

    def get(self, actor: User, document_id: int) -> Document:
        document = self.document_repo.get(actor.law_firm_id, document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return document

    def list_documents(
        self,
        actor: User,
        *,
        offset: int = 0,
        limit: int = 20,
        **filters: Any,
    ) -> Tuple[Sequence[Document], int]:
        return self.document_repo.list_documents(actor.law_firm_id, offset=offset, limit=limit, **filters)

    def list_templates(self, actor: User, category: Optional[str] = None) -> Sequence[Document]:
        return self.document_repo.list_templates(actor.law_firm_id, category=category)

    def file_for(self, actor: User, document_id: int) -> Tuple[Document, Path]:
        document = self.get(actor, document_id)
        return document, self.storage.resolve(document.file_path)

    def _case_for(self, actor: User, case_id: int) -> Case:
        case = self.case_repo.get(actor.law_firm_id, case_id)
        if case is None:
            raise NotFoundError("Case not found")
        return case

    # -------------------------------
    # Upload and versions
    # -------------------------------

    def _create_row(self, fields: Dict[str, Any], stored: StoredFile) -> Document:
        fields.update(
            file_path=stored.path,
            file_name=stored.file_name,
            file_size=stored.file_size,
            mime_type=stored.mime_type,
            checksum=stored.checksum,
        )
        try:
            return self.document_repo.create(fields)
        except ValueError:
            # Row failed; do not leave the file behind
            self.storage.delete(stored.path)
            raise

    def upload(
        self,
        actor: User,
        payload: DocumentCreate,
        *,
        file_name: Optional[str],
        content_type: Optional[str],
        stream: BinaryIO,
    ) -> Document:
        case = self._case_for(actor, payload.case_id)
        stored = self.storage.save(
            law_firm_id=actor.law_firm_id,
            original_name=file_name,
            mime_type=content_type,
            stream=stream,
        )

        fields = payload.model_dump()
        fields.update(
            law_firm_id=actor.law_firm_id,
            client_id=case.client_id,
            uploaded_by=actor.id,
            status=DocumentStatus.DRAFT.value,
            version=1,
        )
        document = self._create_row(fields, stored)

        log.info(
            "document uploaded",
            extra={
                "document_id": document.id,
                "case_id": case.id,
                "law_firm_id": actor.law_firm_id,
                "size": document.file_size,
            },
        )
        self._notify_upload(actor, case, document)
        return document

    def _notify_upload(self, actor: User, case: Case, document: Document) -> None:
        if case.assigned_lawyer_id == actor.id:
            return
        self.notifications.notify(
            law_firm_id=case.law_firm_id,
            recipient_id=case.assigned_lawyer_id,
            sender_id=actor.id,
            title="New document uploaded",
            message=f'"{document.title}" was added to case "{case.title}"',
            type=NotificationType.DOCUMENT_UPLOADED.value,
            priority=NotificationPriority.NORMAL.value,
            data={"document_id": document.id, "case_id": case.id, "version": document.version},
        )

    def upload_version(
        self,
        actor: User,
        document_id: int,
        *,
        description: Optional[str],
        file_name: Optional[str],
        content_type: Optional[str],
        stream: BinaryIO,
    ) -> Document:
        base = self.get(actor, document_id)
        root_id = base.parent_document_id or base.id
        root = self.get(actor, root_id)

        stored = self.storage.save(
            law_firm_id=actor.law_firm_id,
            original_name=file_name,
            mime_type=content_type,
            stream=stream,
        )
        fields: Dict[str, Any] = {
            "law_firm_id": root.law_firm_id,
            "case_id": root.case_id,
            "client_id": root.client_id,
            "uploaded_by": actor.id,
            "title": root.title,
            "title_ar": root.title_ar,
            "description": description if description is not None else root.description,
            "description_ar": root.description_ar,
            "document_type": root.document_type,
            "status": DocumentStatus.DRAFT.value,
            "version": self.document_repo.next_version_number(root.id),
            "parent_document_id": root.id,
            "is_template": root.is_template,
            "template_category": root.template_category,
            "tags": list(root.tags or []),
            "expiry_date": root.expiry_date,
        }
        document = self._create_row(fields, stored)
        log.info(
            "document version uploaded",
            extra={"document_id": document.id, "root_id": root.id, "version": document.version},
        )
        return document

    def versions(self, actor: User, document_id: int) -> Tuple[int, Sequence[Document]]:
        document = self.get(actor, document_id)
        root_id = document.parent_document_id or document.id
        return root_id, self.document_repo.list_versions(root_id)

    # -------------------------------
    # Metadata and lifecycle
    # -------------------------------

    def update(self, actor: User, document_id: int, payload: DocumentUpdate) -> Document:
        document = self.get(actor, document_id)
        changes = payload.model_dump(exclude_unset=True)
        for key in _NOT_NULL_FIELDS:
            if key in changes and changes[key] is None:
                del changes[key]
        if "metadata" in changes:
            changes["doc_metadata"] = changes.pop("metadata") or {}
        if not changes:
            return document
        return self.document_repo.update(document, changes)

    def review(
        self, actor: User, document_id: int, outcome: str, comments: Optional[str]
    ) -> DocumentReview:
        document = self.get(actor, document_id)
        status = REVIEW_STATUS_MAP[ReviewOutcome(outcome)].value
        review = self.document_repo.add_review(
            document, reviewed_by=actor.id, status=status, comments=comments
        )
        log.info(
            "document reviewed",
            extra={"document_id": document.id, "outcome": outcome, "reviewer_id": actor.id},
        )
        return review

    def archive(self, actor: User, document_id: int) -> Document:
        document = self.get(actor, document_id)
        return self.document_repo.update(
            document,
            {"is_archived": True, "archived_at": _utcnow(), "archived_by": actor.id},
        )

    def unarchive(self, actor: User, document_id: int) -> Document:
        document = self.get(actor, document_id)
        return self.document_repo.update(
            document,
            {"is_archived": False, "archived_at": None, "archived_by": None},
        )

    def delete(self, actor: User, document_id: int) -> None:
        document = self.get(actor, document_id)
        file_path = document.file_path
        self.document_repo.delete(document)
        self.storage.delete(file_path)
        log.info(
            "document deleted",
            extra={"document_id": document_id, "law_firm_id": actor.law_firm_id, "actor_id": actor.id},
        )
