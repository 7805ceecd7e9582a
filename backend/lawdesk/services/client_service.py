"""
Client service.

Business rules:
- Email is unique within a firm (409 otherwise) and immutable after creation.
- Individuals never carry a commercial register; companies never carry a
  national id.
- An assigned lawyer must be an admin or lawyer of the same firm.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from lawdesk.core.contracts import CaseRepo, ClientRepo, DocumentRepo, UserRepo
from lawdesk.core.errors import BadRequestError, ConflictError, NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.core.security import hash_password
from lawdesk.models.client import Client, ClientNote
from lawdesk.models.enums import ASSIGNABLE_ROLES, ClientType
from lawdesk.models.user import User
from lawdesk.schemas.client import ClientCreate, ClientPreferences, ClientUpdate
from lawdesk.services.document_storage import DocumentStorage

__all__ = ["ClientService", "apply_type_rules"]

log = get_logger(__name__)


def apply_type_rules(fields: Dict[str, Any], client_type: str) -> Dict[str, Any]:
    """Clear identifiers that do not apply to the client's type."""
    if client_type == ClientType.INDIVIDUAL.value:
        fields["commercial_register"] = None
    elif client_type == ClientType.COMPANY.value:
        fields["national_id"] = None
    return fields


class ClientService:
    def __init__(
        self,
        client_repo: ClientRepo,
        case_repo: CaseRepo,
        user_repo: UserRepo,
        document_repo: DocumentRepo,
        storage: DocumentStorage,
    ) -> None:
        self.client_repo = client_repo
        self.case_repo = case_repo
        self.user_repo = user_repo
        self.document_repo = document_repo
        self.storage = storage

    def _check_lawyer(self, actor: User, lawyer_id: Optional[int]) -> None:
        if lawyer_id is None:
            return
        lawyer = self.user_repo.get_in_firm(actor.law_firm_id, lawyer_id)
        if lawyer is None or lawyer.role not in ASSIGNABLE_ROLES or not lawyer.is_active:
            raise BadRequestError(
                "Assigned lawyer must be an active lawyer or admin of this firm",
                details={"assigned_lawyer_id": lawyer_id},
            )

    def list_clients(
        self,
        actor: User,
        *,
        status: Optional[str] = None,
        client_type: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Client], int]:
        return self.client_repo.list_clients(
            actor.law_firm_id,
            status=status,
            client_type=client_type,
            search=search,
            offset=offset,
            limit=limit,
        )

    def get(self, actor: User, client_id: int) -> Client:
        client = self.client_repo.get(actor.law_firm_id, client_id)
        if client is None:
            raise NotFoundError("Client not found")
        return client

    def case_count(self, client: Client) -> int:
        return self.case_repo.count_for_client(client.id)

    def create(self, actor: User, payload: ClientCreate) -> Client:
        self._check_lawyer(actor, payload.assigned_lawyer_id)
        if self.client_repo.get_by_email(actor.law_firm_id, payload.email) is not None:
            raise ConflictError("Client already exists with this email")

        fields = payload.model_dump()
        fields["law_firm_id"] = actor.law_firm_id
        apply_type_rules(fields, fields["client_type"])
        try:
            client = self.client_repo.create(fields)
        except ValueError as exc:
            raise ConflictError("Client email or national id already registered") from exc

        log.info("client created", extra={"client_id": client.id, "law_firm_id": client.law_firm_id})
        return client

    def update(self, actor: User, client_id: int, payload: ClientUpdate) -> Client:
        client = self.get(actor, client_id)
        changes = payload.model_dump(exclude_unset=True)
        # Only nullable columns may be cleared explicitly
        for key in ("client_type", "status", "name", "phone", "tags", "is_active", "preferences"):
            if key in changes and changes[key] is None:
                del changes[key]
        if "assigned_lawyer_id" in changes:
            self._check_lawyer(actor, changes["assigned_lawyer_id"])
        if "preferences" in changes:
            merged = dict(client.preferences or {})
            merged.update(changes["preferences"])
            changes["preferences"] = ClientPreferences(**merged).model_dump()

        apply_type_rules(changes, changes.get("client_type", client.client_type))
        try:
            return self.client_repo.update(client, changes)
        except ValueError as exc:
            raise ConflictError("Client national id already registered") from exc

    def delete(self, actor: User, client_id: int) -> None:
        client = self.get(actor, client_id)
        file_paths = self.document_repo.file_paths(client_id=client.id)
        self.client_repo.delete(client)
        for path in file_paths:
            self.storage.delete(path)
        log.info("client deleted", extra={"client_id": client_id, "law_firm_id": actor.law_firm_id})

    def add_note(self, actor: User, client_id: int, content: str) -> ClientNote:
        client = self.get(actor, client_id)
        return self.client_repo.add_note(client, content=content, added_by=actor.id)

    def set_portal_password(self, actor: User, client_id: int, password: str) -> Client:
        client = self.get(actor, client_id)
        client = self.client_repo.update(client, {"portal_password_hash": hash_password(password)})
        log.info(
            "client portal access granted",
            extra={"client_id": client.id, "law_firm_id": client.law_firm_id, "actor_id": actor.id},
        )
        return client
