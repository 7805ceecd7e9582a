"""
Dependency wiring for repositories, services and authentication.

This module exposes factory functions that construct concrete implementations
behind the Protocol interfaces. It must not contain business logic.

Provided factories:
- get_*_repo: SQLAlchemy repositories bound to the request session
- get_*_service: services composed from the repositories
- get_current_user / require_roles: staff bearer-token authentication
- get_current_client: client-portal bearer-token authentication
- pagination: page/limit query parameters
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lawdesk.core.contracts import (
    CaseRepo,
    ClientRepo,
    CourtSessionRepo,
    DocumentRepo,
    LawFirmRepo,
    NotificationRepo,
    PreferenceRepo,
    UserRepo,
)
from lawdesk.core.errors import AuthenticationError, PermissionDeniedError
from lawdesk.core.security import TOKEN_TYPE_CLIENT, TOKEN_TYPE_USER, decode_access_token
from lawdesk.db.session import get_db
from lawdesk.models.client import Client
from lawdesk.models.user import User
from lawdesk.services.analytics_service import AnalyticsService
from lawdesk.services.auth_service import AuthService
from lawdesk.services.case_service import CaseService
from lawdesk.services.client_portal_service import ClientPortalService
from lawdesk.services.client_service import ClientService
from lawdesk.services.court_session_service import CourtSessionService
from lawdesk.services.document_service import DocumentService
from lawdesk.services.document_storage import DocumentStorage, get_document_storage
from lawdesk.services.law_firm_service import LawFirmService
from lawdesk.services.notification_service import NotificationService
from lawdesk.services.preference_service import PreferenceService
from lawdesk.services.user_service import UserService

__all__ = [
    # repos
    "get_law_firm_repo",
    "get_user_repo",
    "get_client_repo",
    "get_case_repo",
    "get_court_session_repo",
    "get_document_repo",
    "get_preference_repo",
    "get_notification_repo",
    # services
    "get_auth_service",
    "get_law_firm_service",
    "get_user_service",
    "get_notification_service",
    "get_client_service",
    "get_case_service",
    "get_court_session_service",
    "get_document_service",
    "get_preference_service",
    "get_analytics_service",
    "get_client_portal_service",
    # auth
    "get_current_user",
    "require_roles",
    "get_current_client",
    # pagination
    "Pagination",
    "pagination",
]

bearer_scheme = HTTPBearer(auto_error=False)


# -------------------------------
# Repository Providers
# -------------------------------

def get_law_firm_repo(db: Session = Depends(get_db)) -> LawFirmRepo:
    """Provide a LawFirmRepo bound to the current DB session."""
    from lawdesk.repos.law_firm_repo import SqlAlchemyLawFirmRepo
    return SqlAlchemyLawFirmRepo(db)


def get_user_repo(db: Session = Depends(get_db)) -> UserRepo:
    """Provide a UserRepo bound to the current DB session."""
    from lawdesk.repos.user_repo import SqlAlchemyUserRepo
    return SqlAlchemyUserRepo(db)


def get_client_repo(db: Session = Depends(get_db)) -> ClientRepo:
    from lawdesk.repos.client_repo import SqlAlchemyClientRepo
    return SqlAlchemyClientRepo(db)


def get_case_repo(db: Session = Depends(get_db)) -> CaseRepo:
    from lawdesk.repos.case_repo import SqlAlchemyCaseRepo
    return SqlAlchemyCaseRepo(db)


def get_court_session_repo(db: Session = Depends(get_db)) -> CourtSessionRepo:
    from lawdesk.repos.court_session_repo import SqlAlchemyCourtSessionRepo
    return SqlAlchemyCourtSessionRepo(db)


def get_document_repo(db: Session = Depends(get_db)) -> DocumentRepo:
    from lawdesk.repos.document_repo import SqlAlchemyDocumentRepo
    return SqlAlchemyDocumentRepo(db)


def get_preference_repo(db: Session = Depends(get_db)) -> PreferenceRepo:
    from lawdesk.repos.preference_repo import SqlAlchemyPreferenceRepo
    return SqlAlchemyPreferenceRepo(db)


def get_notification_repo(db: Session = Depends(get_db)) -> NotificationRepo:
    from lawdesk.repos.notification_repo import SqlAlchemyNotificationRepo
    return SqlAlchemyNotificationRepo(db)


# -------------------------------
# Service Providers
# -------------------------------

def get_auth_service(
    user_repo: UserRepo = Depends(get_user_repo),
    firm_repo: LawFirmRepo = Depends(get_law_firm_repo),
) -> AuthService:
    return AuthService(user_repo=user_repo, firm_repo=firm_repo)


def get_law_firm_service(
    firm_repo: LawFirmRepo = Depends(get_law_firm_repo),
    user_repo: UserRepo = Depends(get_user_repo),
) -> LawFirmService:
    return LawFirmService(firm_repo=firm_repo, user_repo=user_repo)


def get_user_service(user_repo: UserRepo = Depends(get_user_repo)) -> UserService:
    return UserService(user_repo=user_repo)


def get_notification_service(
    notification_repo: NotificationRepo = Depends(get_notification_repo),
    user_repo: UserRepo = Depends(get_user_repo),
) -> NotificationService:
    return NotificationService(notification_repo=notification_repo, user_repo=user_repo)


def get_client_service(
    client_repo: ClientRepo = Depends(get_client_repo),
    case_repo: CaseRepo = Depends(get_case_repo),
    user_repo: UserRepo = Depends(get_user_repo),
    document_repo: DocumentRepo = Depends(get_document_repo),
    storage: DocumentStorage = Depends(get_document_storage),
) -> ClientService:
    return ClientService(
        client_repo=client_repo,
        case_repo=case_repo,
        user_repo=user_repo,
        document_repo=document_repo,
        storage=storage,
    )


def get_case_service(
    case_repo: CaseRepo = Depends(get_case_repo),
    client_repo: ClientRepo = Depends(get_client_repo),
    user_repo: UserRepo = Depends(get_user_repo),
    notifications: NotificationService = Depends(get_notification_service),
    document_repo: DocumentRepo = Depends(get_document_repo),
    storage: DocumentStorage = Depends(get_document_storage),
) -> CaseService:
    return CaseService(
        case_repo=case_repo,
        client_repo=client_repo,
        user_repo=user_repo,
        notifications=notifications,
        document_repo=document_repo,
        storage=storage,
    )


def get_court_session_service(
    session_repo: CourtSessionRepo = Depends(get_court_session_repo),
    case_repo: CaseRepo = Depends(get_case_repo),
    user_repo: UserRepo = Depends(get_user_repo),
    notifications: NotificationService = Depends(get_notification_service),
) -> CourtSessionService:
    return CourtSessionService(
        session_repo=session_repo,
        case_repo=case_repo,
        user_repo=user_repo,
        notifications=notifications,
    )


def get_document_service(
    document_repo: DocumentRepo = Depends(get_document_repo),
    case_repo: CaseRepo = Depends(get_case_repo),
    storage: DocumentStorage = Depends(get_document_storage),
    notifications: NotificationService = Depends(get_notification_service),
) -> DocumentService:
    return DocumentService(
        document_repo=document_repo,
        case_repo=case_repo,
        storage=storage,
        notifications=notifications,
    )


def get_preference_service(
    preference_repo: PreferenceRepo = Depends(get_preference_repo),
) -> PreferenceService:
    return PreferenceService(preference_repo=preference_repo)


def get_analytics_service(case_repo: CaseRepo = Depends(get_case_repo)) -> AnalyticsService:
    return AnalyticsService(case_repo=case_repo)


def get_client_portal_service(
    client_repo: ClientRepo = Depends(get_client_repo),
    firm_repo: LawFirmRepo = Depends(get_law_firm_repo),
    case_repo: CaseRepo = Depends(get_case_repo),
    document_repo: DocumentRepo = Depends(get_document_repo),
) -> ClientPortalService:
    return ClientPortalService(
        client_repo=client_repo,
        firm_repo=firm_repo,
        case_repo=case_repo,
        document_repo=document_repo,
    )


# -------------------------------
# Authentication
# -------------------------------

def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or (credentials.scheme or "").lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError(
            "Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    user_repo: UserRepo = Depends(get_user_repo),
) -> User:
    """
    Resolve the staff user behind a bearer token.

    Raises:
        AuthenticationError: missing/invalid/expired token, client token,
        unknown user, or deactivated account.
    """
    payload = decode_access_token(_bearer_token(credentials), expected_type=TOKEN_TYPE_USER)
    user = user_repo.get_by_id(payload["sub"])
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    """
    Build a dependency that admits only users whose role is listed.
    """
    allowed = frozenset(roles)

    def _dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise PermissionDeniedError(
                "Insufficient permissions",
                details={"required_roles": sorted(allowed), "role": user.role},
            )
        return user

    return _dependency


def get_current_client(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    portal: ClientPortalService = Depends(get_client_portal_service),
) -> Client:
    """Resolve the portal client behind a client bearer token."""
    payload = decode_access_token(_bearer_token(credentials), expected_type=TOKEN_TYPE_CLIENT)
    return portal.resolve_client(payload["sub"], int(payload.get("law_firm_id") or 0))


# -------------------------------
# Pagination
# -------------------------------

@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def pagination(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> Pagination:
    return Pagination(page=page, limit=limit)
