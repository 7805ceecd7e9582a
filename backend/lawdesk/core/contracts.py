"""
Repository contracts (Protocols) for data access layers.

Services depend on these Protocols only; the SQLAlchemy adapters under
lawdesk.repos satisfy them. List methods return ``(items, total)`` so callers
can build paginated responses without a second query.

Protocols:
- LawFirmRepo
- UserRepo
- ClientRepo
- CaseRepo
- CourtSessionRepo
- DocumentRepo
- PreferenceRepo
- NotificationRepo
"""

from __future__ import annotations

from datetime import datetime
from typing import (
    TYPE_CHECKING,
    Any,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

if TYPE_CHECKING:
    # Imported only for type checking to avoid runtime import cycles
    from lawdesk.models.case import Case, CaseNote
    from lawdesk.models.client import Client, ClientNote
    from lawdesk.models.court_session import CourtSession
    from lawdesk.models.document import Document, DocumentReview
    from lawdesk.models.law_firm import LawFirm
    from lawdesk.models.lawyer_preference import LawyerPreference
    from lawdesk.models.notification import Notification
    from lawdesk.models.user import User

__all__ = [
    "LawFirmRepo",
    "UserRepo",
    "ClientRepo",
    "CaseRepo",
    "CourtSessionRepo",
    "DocumentRepo",
    "PreferenceRepo",
    "NotificationRepo",
]


# -------------------------------
# Law firm Repository
# -------------------------------

@runtime_checkable
class LawFirmRepo(Protocol):
    """
    Contract for law firm (tenant) data access.
    """

    def get_by_id(self, law_firm_id: int) -> Optional["LawFirm"]:
        """Fetch a firm by id."""
        raise NotImplementedError()

    def get_by_email(self, email: str) -> Optional["LawFirm"]:
        """Fetch a firm by its (lowercased) contact email."""
        raise NotImplementedError()

    def create_with_admin(
        self, *, firm_fields: Mapping[str, Any], admin_fields: Mapping[str, Any]
    ) -> Tuple["LawFirm", "User"]:
        """Create a firm and its first admin user in one transaction."""
        raise NotImplementedError()

    def update(self, firm: "LawFirm", changes: Mapping[str, Any]) -> "LawFirm":
        """Apply field changes to a firm."""
        raise NotImplementedError()

    def count_users(self, law_firm_id: int) -> int:
        """Number of users belonging to the firm."""
        raise NotImplementedError()


# -------------------------------
# User Repository
# -------------------------------

@runtime_checkable
class UserRepo(Protocol):
    """
    Contract for staff user data access.
    """

    def get_by_id(self, user_id: int) -> Optional["User"]:
        raise NotImplementedError()

    def get_by_email(self, email: str) -> Optional["User"]:
        raise NotImplementedError()

    def get_in_firm(self, law_firm_id: int, user_id: int) -> Optional["User"]:
        """Fetch a user only when it belongs to the given firm."""
        raise NotImplementedError()

    def list_users(
        self,
        law_firm_id: int,
        *,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence["User"], int]:
        raise NotImplementedError()

    def create(
        self, *, law_firm_id: int, email: str, name: str, password_hash: str, role: str
    ) -> "User":
        raise NotImplementedError()

    def update(self, user: "User", changes: Mapping[str, Any]) -> "User":
        raise NotImplementedError()


# -------------------------------
# Client Repository
# -------------------------------

@runtime_checkable
class ClientRepo(Protocol):
    """
    Contract for client data access. Every lookup is firm-scoped.
    """

    def get(self, law_firm_id: int, client_id: int) -> Optional["Client"]:
        raise NotImplementedError()

    def get_by_id(self, client_id: int) -> Optional["Client"]:
        """Unscoped lookup used by the client portal."""
        raise NotImplementedError()

    def get_by_email(self, law_firm_id: int, email: str) -> Optional["Client"]:
        raise NotImplementedError()

    def find_for_portal(self, email: str) -> Sequence["Client"]:
        """Clients with the given email across firms."""
        raise NotImplementedError()

    def list_clients(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        client_type: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence["Client"], int]:
        raise NotImplementedError()

    def create(self, fields: Mapping[str, Any]) -> "Client":
        raise NotImplementedError()

    def update(self, client: "Client", changes: Mapping[str, Any]) -> "Client":
        raise NotImplementedError()

    def delete(self, client: "Client") -> None:
        raise NotImplementedError()

    def add_note(self, client: "Client", *, content: str, added_by: Optional[int]) -> "ClientNote":
        raise NotImplementedError()


# -------------------------------
# Case Repository
# -------------------------------

@runtime_checkable
class CaseRepo(Protocol):
    """
    Contract for case data access.
    """

    def get(self, law_firm_id: int, case_id: int) -> Optional["Case"]:
        raise NotImplementedError()

    def list_cases(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        case_type: Optional[str] = None,
        priority: Optional[str] = None,
        client_id: Optional[int] = None,
        assigned_lawyer_id: Optional[int] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence["Case"], int]:
        raise NotImplementedError()

    def list_all(self, law_firm_id: int) -> Sequence["Case"]:
        """Every case of a firm, unpaginated (analytics)."""
        raise NotImplementedError()

    def count_for_client(self, client_id: int, *, statuses: Optional[Sequence[str]] = None) -> int:
        raise NotImplementedError()

    def create(self, fields: Mapping[str, Any]) -> "Case":
        raise NotImplementedError()

    def update(self, case: "Case", changes: Mapping[str, Any]) -> "Case":
        raise NotImplementedError()

    def delete(self, case: "Case") -> None:
        raise NotImplementedError()

    def add_note(self, case: "Case", *, content: str, added_by: Optional[int]) -> "CaseNote":
        raise NotImplementedError()


# -------------------------------
# Court Session Repository
# -------------------------------

@runtime_checkable
class CourtSessionRepo(Protocol):
    """
    Contract for court session data access. Every lookup is firm-scoped except
    the reminder scan, which may run across firms.
    """

    def get(self, law_firm_id: int, session_id: int) -> Optional["CourtSession"]:
        raise NotImplementedError()

    def list_sessions(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        session_type: Optional[str] = None,
        case_id: Optional[int] = None,
        participant_id: Optional[int] = None,
        starts_after: Optional[datetime] = None,
        starts_before: Optional[datetime] = None,
        pending_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence["CourtSession"], int]:
        raise NotImplementedError()

    def last_session_number(self, law_firm_id: int, prefix: str) -> Optional[str]:
        """Highest session number of the firm starting with `prefix`."""
        raise NotImplementedError()

    def starting_between(
        self, start: datetime, end: datetime, *, law_firm_id: Optional[int] = None
    ) -> Sequence["CourtSession"]:
        """Pending sessions with no reminder sent that start inside [start, end]."""
        raise NotImplementedError()

    def create(self, fields: Mapping[str, Any], participant_ids: Sequence[int]) -> "CourtSession":
        raise NotImplementedError()

    def update(
        self,
        court_session: "CourtSession",
        changes: Mapping[str, Any],
        participant_ids: Optional[Sequence[int]] = None,
    ) -> "CourtSession":
        """Apply field changes; a participant list, when given, replaces the current one."""
        raise NotImplementedError()


# -------------------------------
# Document Repository
# -------------------------------

@runtime_checkable
class DocumentRepo(Protocol):
    """
    Contract for document data access.
    """

    def get(self, law_firm_id: int, document_id: int) -> Optional["Document"]:
        raise NotImplementedError()

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
    ) -> Tuple[Sequence["Document"], int]:
        raise NotImplementedError()

    def list_templates(self, law_firm_id: int, *, category: Optional[str] = None) -> Sequence["Document"]:
        raise NotImplementedError()

    def list_versions(self, root_id: int) -> Sequence["Document"]:
        """The root document and every version pointing at it, oldest first."""
        raise NotImplementedError()

    def next_version_number(self, root_id: int) -> int:
        raise NotImplementedError()

    def file_paths(self, *, case_id: Optional[int] = None, client_id: Optional[int] = None) -> List[str]:
        """Stored file paths of every document under a case or client."""
        raise NotImplementedError()

    def create(self, fields: Mapping[str, Any]) -> "Document":
        raise NotImplementedError()

    def update(self, document: "Document", changes: Mapping[str, Any]) -> "Document":
        raise NotImplementedError()

    def delete(self, document: "Document") -> None:
        raise NotImplementedError()

    def add_review(
        self, document: "Document", *, reviewed_by: int, status: str, comments: Optional[str]
    ) -> "DocumentReview":
        """Record a review and move the document to `status`."""
        raise NotImplementedError()


# -------------------------------
# Preference Repository
# -------------------------------

@runtime_checkable
class PreferenceRepo(Protocol):
    """
    Contract for lawyer preference data access.
    """

    def get_by_user(self, user_id: int) -> Optional["LawyerPreference"]:
        raise NotImplementedError()

    def create(self, *, user_id: int, law_firm_id: int) -> "LawyerPreference":
        """Create a preference row holding the default values."""
        raise NotImplementedError()

    def update(self, preference: "LawyerPreference", changes: Mapping[str, Any]) -> "LawyerPreference":
        raise NotImplementedError()


# -------------------------------
# Notification Repository
# -------------------------------

@runtime_checkable
class NotificationRepo(Protocol):
    """
    Contract for notification data access. Soft-deleted rows are invisible.
    """

    def create(self, fields: Mapping[str, Any]) -> "Notification":
        raise NotImplementedError()

    def get_for_recipient(self, recipient_id: int, notification_id: int) -> Optional["Notification"]:
        raise NotImplementedError()

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        type: Optional[str] = None,
        priority: Optional[str] = None,
        unread_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence["Notification"], int]:
        raise NotImplementedError()

    def count_unread(self, recipient_id: int) -> int:
        raise NotImplementedError()

    def mark_read(self, notification: "Notification") -> "Notification":
        raise NotImplementedError()

    def mark_all_read(self, recipient_id: int) -> int:
        """Mark every unread notification read; returns how many changed."""
        raise NotImplementedError()

    def soft_delete(self, notification: "Notification") -> None:
        raise NotImplementedError()
