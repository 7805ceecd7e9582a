"""
SQLAlchemy-based Document repository.

Versions of a document share the root's id in parent_document_id; the root
itself has parent_document_id NULL and version 1.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select

from lawdesk.models.document import Document, DocumentReview
from lawdesk.repos.base import SqlAlchemyRepo, like_pattern

__all__ = ["SqlAlchemyDocumentRepo"]


class SqlAlchemyDocumentRepo(SqlAlchemyRepo):
    """
    Concrete Document repository using SQLAlchemy ORM.
    """

    def get(self, law_firm_id: int, document_id: int) -> Optional[Document]:
        stmt = select(Document).where(Document.id == document_id, Document.law_firm_id == law_firm_id)
        return self.session.execute(stmt).scalars().first()

    def list_documents(
        self,
        law_firm_id: int,
        *,
        case_id: Optional[int] = None,
        client_id: Optional[int] = None,
        document_type: Optional[str] = None,
        status: Optional[str] = None,
        is_template: Optional[bool] = None,
        include_archived: bool = False,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Document], int]:
        conditions: List[Any] = [Document.law_firm_id == law_firm_id]
        if case_id is not None:
            conditions.append(Document.case_id == case_id)
        if client_id is not None:
            conditions.append(Document.client_id == client_id)
        if document_type:
            conditions.append(Document.document_type == document_type)
        if status:
            conditions.append(Document.status == status)
        if is_template is not None:
            conditions.append(Document.is_template.is_(bool(is_template)))
        if not include_archived:
            conditions.append(Document.is_archived.is_(False))
        if search and search.strip():
            pattern = like_pattern(search)
            conditions.append(
                or_(
                    Document.title.ilike(pattern, escape="\\"),
                    Document.title_ar.ilike(pattern, escape="\\"),
                )
            )
        return self._page(
            Document, conditions, [Document.created_at.desc(), Document.id.desc()], offset, limit
        )

    def list_templates(self, law_firm_id: int, *, category: Optional[str] = None) -> Sequence[Document]:
        stmt = select(Document).where(
            Document.law_firm_id == law_firm_id,
            Document.is_template.is_(True),
            Document.is_archived.is_(False),
        )
        if category:
            stmt = stmt.where(Document.template_category == category)
        stmt = stmt.order_by(Document.title.asc(), Document.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def list_versions(self, root_id: int) -> Sequence[Document]:
        stmt = (
            select(Document)
            .where(or_(Document.id == root_id, Document.parent_document_id == root_id))
            .order_by(Document.version.asc(), Document.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def next_version_number(self, root_id: int) -> int:
        stmt = select(func.max(Document.version)).where(
            or_(Document.id == root_id, Document.parent_document_id == root_id)
        )
        current_max = self.session.execute(stmt).scalar()
        return int(current_max or 0) + 1

    def file_paths(self, *, case_id: Optional[int] = None, client_id: Optional[int] = None) -> List[str]:
        stmt = select(Document.file_path)
        if case_id is not None:
            stmt = stmt.where(Document.case_id == case_id)
        if client_id is not None:
            stmt = stmt.where(Document.client_id == client_id)
        if case_id is None and client_id is None:
            return []
        return list(self.session.execute(stmt).scalars().all())

    def create(self, fields: Mapping[str, Any]) -> Document:
        document = Document(**fields)
        return self._save(document, "Document creation failed due to constraint violation")

    def update(self, document: Document, changes: Mapping[str, Any]) -> Document:
        return self._apply(document, changes, "Document update failed due to constraint violation")

    def delete(self, document: Document) -> None:
        self.session.delete(document)
        self.session.commit()

    def add_review(
        self, document: Document, *, reviewed_by: int, status: str, comments: Optional[str]
    ) -> DocumentReview:
        review = DocumentReview(
            document_id=document.id,
            reviewed_by=reviewed_by,
            status=status,
            comments=comments,
        )
        document.status = status
        self.session.add(review)
        self.session.commit()
        self.session.refresh(review)
        self.session.refresh(document)
        return review
