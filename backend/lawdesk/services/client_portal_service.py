"""
Client portal service.

Clients sign in with the portal password staff set for them and see only
their own cases and non-archived documents.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from lawdesk.core.contracts import CaseRepo, ClientRepo, DocumentRepo, LawFirmRepo
from lawdesk.core.errors import AuthenticationError, NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.core.security import TOKEN_TYPE_CLIENT, create_access_token, verify_password
from lawdesk.models.case import Case
from lawdesk.models.client import Client
from lawdesk.models.document import Document
from lawdesk.models.enums import ACTIVE_CASE_STATUSES, ClientStatus

__all__ = ["ClientPortalService", "is_portal_client_allowed"]

log = get_logger(__name__)

_BLOCKED_STATUSES = frozenset({ClientStatus.ARCHIVED.value, ClientStatus.SUSPENDED.value})

RECENT_LIMIT = 10


def is_portal_client_allowed(client: Client) -> bool:
    return bool(client.is_active) and client.status not in _BLOCKED_STATUSES


class ClientPortalService:
    def __init__(
        self,
        client_repo: ClientRepo,
        firm_repo: LawFirmRepo,
        case_repo: CaseRepo,
        document_repo: DocumentRepo,
    ) -> None:
        self.client_repo = client_repo
        self.firm_repo = firm_repo
        self.case_repo = case_repo
        self.document_repo = document_repo

    def _firm_active(self, law_firm_id: int) -> bool:
        firm = self.firm_repo.get_by_id(law_firm_id)
        return firm is not None and bool(firm.is_active)

    def login(self, email: str, password: str) -> Tuple[Client, str]:
        # The same email may exist in several firms; the password picks one
        client = next(
            (c for c in self.client_repo.find_for_portal(email) if verify_password(password, c.portal_password_hash)),
            None,
        )
        if client is None:
            log.info("portal login failed", extra={"email": email})
            raise AuthenticationError("Invalid credentials")
        if not is_portal_client_allowed(client) or not self._firm_active(client.law_firm_id):
            raise AuthenticationError("Account is not active")

        token = create_access_token(
            subject_id=client.id,
            email=client.email,
            law_firm_id=client.law_firm_id,
            token_type=TOKEN_TYPE_CLIENT,
        )
        log.info("portal login", extra={"client_id": client.id, "law_firm_id": client.law_firm_id})
        return client, token

    def resolve_client(self, client_id: int, law_firm_id: int) -> Client:
        """Load the client behind a portal token; any mismatch is a 401."""
        client = self.client_repo.get_by_id(client_id)
        if client is None or client.law_firm_id != law_firm_id:
            raise AuthenticationError("Client not found")
        if not is_portal_client_allowed(client) or not self._firm_active(client.law_firm_id):
            raise AuthenticationError("Account is not active")
        return client

    def dashboard(self, client: Client) -> Dict[str, Any]:
        total_cases = self.case_repo.count_for_client(client.id)
        active_cases = self.case_repo.count_for_client(client.id, statuses=sorted(ACTIVE_CASE_STATUSES))
        recent_cases, _ = self.case_repo.list_cases(client.law_firm_id, client_id=client.id, limit=RECENT_LIMIT)
        recent_documents, total_documents = self.document_repo.list_documents(
            client.law_firm_id, client_id=client.id, limit=RECENT_LIMIT
        )
        return {
            "client": client,
            "statistics": {
                "total_cases": total_cases,
                "active_cases": active_cases,
                "closed_cases": total_cases - active_cases,
                "total_documents": total_documents,
            },
            "recent_cases": recent_cases,
            "recent_documents": recent_documents,
        }

    def cases(
        self, client: Client, *, status: Optional[str] = None, offset: int = 0, limit: int = 20
    ) -> Tuple[Sequence[Case], int]:
        return self.case_repo.list_cases(
            client.law_firm_id, client_id=client.id, status=status, offset=offset, limit=limit
        )

    def case(self, client: Client, case_id: int) -> Case:
        case = self.case_repo.get(client.law_firm_id, case_id)
        if case is None or case.client_id != client.id:
            raise NotFoundError("Case not found")
        return case

    def documents(
        self, client: Client, *, offset: int = 0, limit: int = 20
    ) -> Tuple[Sequence[Document], int]:
        return self.document_repo.list_documents(
            client.law_firm_id, client_id=client.id, offset=offset, limit=limit
        )
