"""
SQLAlchemy-based Client repository.

Search matches name, Arabic name, email, phone, national id and the company
name stored inside the ``company`` JSON column.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import String, cast, or_, select

from lawdesk.models.client import Client, ClientNote
from lawdesk.repos.base import SqlAlchemyRepo, like_pattern

__all__ = ["SqlAlchemyClientRepo"]


class SqlAlchemyClientRepo(SqlAlchemyRepo):
    """
    Concrete Client repository using SQLAlchemy ORM.
    """

    def get(self, law_firm_id: int, client_id: int) -> Optional[Client]:
        stmt = select(Client).where(Client.id == client_id, Client.law_firm_id == law_firm_id)
        return self.session.execute(stmt).scalars().first()

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self.session.get(Client, client_id)

    def get_by_email(self, law_firm_id: int, email: str) -> Optional[Client]:
        stmt = select(Client).where(
            Client.law_firm_id == law_firm_id, Client.email == email.strip().lower()
        )
        return self.session.execute(stmt).scalars().first()

    def find_for_portal(self, email: str) -> Sequence[Client]:
        stmt = (
            select(Client)
            .where(Client.email == email.strip().lower(), Client.portal_password_hash.is_not(None))
            .order_by(Client.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_clients(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        client_type: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Client], int]:
        conditions: List[Any] = [Client.law_firm_id == law_firm_id]
        if status:
            conditions.append(Client.status == status)
        if client_type:
            conditions.append(Client.client_type == client_type)
        if search and search.strip():
            pattern = like_pattern(search)
            conditions.append(
                or_(
                    Client.name.ilike(pattern, escape="\\"),
                    Client.name_ar.ilike(pattern, escape="\\"),
                    Client.email.ilike(pattern, escape="\\"),
                    Client.phone.ilike(pattern, escape="\\"),
                    Client.national_id.ilike(pattern, escape="\\"),
                    # JSON text match; other company keys may also hit
                    cast(Client.company, String).ilike(pattern, escape="\\"),
                )
            )
        return self._page(Client, conditions, [Client.created_at.desc(), Client.id.desc()], offset, limit)

    def create(self, fields: Mapping[str, Any]) -> Client:
        client = Client(**fields)
        return self._save(client, "Client creation failed due to uniqueness constraint")

    def update(self, client: Client, changes: Mapping[str, Any]) -> Client:
        return self._apply(client, changes, "Client update failed due to uniqueness constraint")

    def delete(self, client: Client) -> None:
        self.session.delete(client)
        self.session.commit()

    def add_note(self, client: Client, *, content: str, added_by: Optional[int]) -> ClientNote:
        note = ClientNote(client_id=client.id, content=content, added_by=added_by)
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        self.session.refresh(client)
        return note
