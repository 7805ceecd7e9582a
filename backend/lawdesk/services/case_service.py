"""
Case service.

Business rules:
- The client must belong to the caller's firm.
- The assigned lawyer defaults to the caller and must be an active admin or
  lawyer of the firm.
- expected_end_date must fall after start_date; actual_end_date may not fall
  before it.
- A status change made by someone other than the assigned lawyer notifies
  that lawyer (case_update).
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

from lawdesk.core.contracts import CaseRepo, ClientRepo, DocumentRepo, UserRepo
from lawdesk.core.errors import BadRequestError, ConflictError, NotFoundError, ValidationFailedError
from lawdesk.core.logging import get_logger
from lawdesk.models.case import Case, CaseNote
from lawdesk.models.enums import ASSIGNABLE_ROLES, NotificationPriority, NotificationType
from lawdesk.models.user import User
from lawdesk.schemas.case import CaseCreate, CaseUpdate
from lawdesk.services.document_storage import DocumentStorage
from lawdesk.services.notification_service import NotificationService

__all__ = ["CaseService", "check_case_dates"]

log = get_logger(__name__)

# Columns that reject NULL; an explicit null in an update is ignored
_NOT_NULL_FIELDS = ("title", "description", "case_type", "status", "priority", "start_date", "tags")


def check_case_dates(
    start_date: Optional[date],
    expected_end_date: Optional[date],
    actual_end_date: Optional[date],
) -> None:
    """Raise ValidationFailedError when end dates are inconsistent with the start."""
    if start_date is None:
        return
    errors = []
    if expected_end_date is not None and expected_end_date <= start_date:
        errors.append({"field": "expected_end_date", "message": "Expected end date must be after start date"})
    if actual_end_date is not None and actual_end_date < start_date:
        errors.append({"field": "actual_end_date", "message": "Actual end date cannot be before start date"})
    if errors:
        raise ValidationFailedError("Invalid case dates", details={"errors": errors})


class CaseService:
    def __init__(
        self,
        case_repo: CaseRepo,
        client_repo: ClientRepo,
        user_repo: UserRepo,
        notifications: NotificationService,
        document_repo: DocumentRepo,
        storage: DocumentStorage,
    ) -> None:
        self.case_repo = case_repo
        self.client_repo = client_repo
        self.user_repo = user_repo
        self.notifications = notifications
        self.document_repo = document_repo
        self.storage = storage

    def _check_lawyer(self, actor: User, lawyer_id: int) -> User:
        lawyer = self.user_repo.get_in_firm(actor.law_firm_id, lawyer_id)
        if lawyer is None or lawyer.role not in ASSIGNABLE_ROLES or not lawyer.is_active:
            raise BadRequestError(
                "Assigned lawyer must be an active lawyer or admin of this firm",
                details={"assigned_lawyer_id": lawyer_id},
            )
        return lawyer

    def list_cases(
        self,
        actor: User,
        *,
        offset: int = 0,
        limit: int = 20,
        **filters: Any,
    ) -> Tuple[Sequence[Case], int]:
        return self.case_repo.list_cases(actor.law_firm_id, offset=offset, limit=limit, **filters)

    def get(self, actor: User, case_id: int) -> Case:
        case = self.case_repo.get(actor.law_firm_id, case_id)
        if case is None:
            raise NotFoundError("Case not found")
        return case

    def create(self, actor: User, payload: CaseCreate) -> Case:
        client = self.client_repo.get(actor.law_firm_id, payload.client_id)
        if client is None:
            raise NotFoundError("Client not found")

        fields: Dict[str, Any] = payload.model_dump()
        lawyer_id = fields.get("assigned_lawyer_id") or actor.id
        self._check_lawyer(actor, lawyer_id)
        fields["assigned_lawyer_id"] = lawyer_id
        fields["law_firm_id"] = actor.law_firm_id
        if fields.get("start_date") is None:
            fields["start_date"] = date.today()
        check_case_dates(fields["start_date"], fields.get("expected_end_date"), fields.get("actual_end_date"))

        try:
            case = self.case_repo.create(fields)
        except ValueError as exc:
            raise ConflictError("Case number already exists") from exc

        log.info(
            "case created",
            extra={"case_id": case.id, "law_firm_id": case.law_firm_id, "client_id": case.client_id},
        )
        return case

    def update(self, actor: User, case_id: int, payload: CaseUpdate) -> Case:
        case = self.get(actor, case_id)
        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for key in _NOT_NULL_FIELDS:
            if key in changes and changes[key] is None:
                del changes[key]
        if changes.get("assigned_lawyer_id") is None:
            changes.pop("assigned_lawyer_id", None)
        else:
            self._check_lawyer(actor, changes["assigned_lawyer_id"])

        check_case_dates(
            changes.get("start_date", case.start_date),
            changes.get("expected_end_date", case.expected_end_date),
            changes.get("actual_end_date", case.actual_end_date),
        )

        previous_status = case.status
        try:
            case = self.case_repo.update(case, changes)
        except ValueError as exc:
            raise ConflictError("Case number already exists") from exc

        if case.status != previous_status:
            self._notify_status_change(actor, case, previous_status)
        return case

    def _notify_status_change(self, actor: User, case: Case, previous_status: str) -> None:
        log.info(
            "case status changed",
            extra={"case_id": case.id, "from_status": previous_status, "to_status": case.status},
        )
        if case.assigned_lawyer_id == actor.id:
            return
        self.notifications.notify(
            law_firm_id=case.law_firm_id,
            recipient_id=case.assigned_lawyer_id,
            sender_id=actor.id,
            title="Case status updated",
            message=f'Case "{case.title}" moved from {previous_status} to {case.status}',
            type=NotificationType.CASE_UPDATE.value,
            priority=NotificationPriority.NORMAL.value,
            data={"case_id": case.id, "from_status": previous_status, "to_status": case.status},
        )

    def delete(self, actor: User, case_id: int) -> None:
        case = self.get(actor, case_id)
        # Document rows go with the case through the FK cascade; their files do not
        file_paths = self.document_repo.file_paths(case_id=case.id)
        self.case_repo.delete(case)
        for path in file_paths:
            self.storage.delete(path)
        log.info("case deleted", extra={"case_id": case_id, "law_firm_id": actor.law_firm_id})

    def add_note(self, actor: User, case_id: int, content: str) -> CaseNote:
        case = self.get(actor, case_id)
        return self.case_repo.add_note(case, content=content, added_by=actor.id)

