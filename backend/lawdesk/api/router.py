"""
Shared API router.

- Aggregates sub-routers from lawdesk.api.routes.* modules.
- Uses no top-level prefix; each sub-router owns its /api/v1/... prefix.

Sub-routers included:
- lawdesk.api.routes.auth                -> /api/v1/auth
- lawdesk.api.routes.law_firms           -> /api/v1/law-firms
- lawdesk.api.routes.users               -> /api/v1/users
- lawdesk.api.routes.clients             -> /api/v1/clients
- lawdesk.api.routes.cases               -> /api/v1/cases
- lawdesk.api.routes.sessions            -> /api/v1/sessions
- lawdesk.api.routes.documents           -> /api/v1/documents
- lawdesk.api.routes.lawyer_preferences  -> /api/v1/lawyer-preferences
- lawdesk.api.routes.notifications       -> /api/v1/notifications
- lawdesk.api.routes.analytics           -> /api/v1/analytics
- lawdesk.api.routes.client_portal       -> /api/v1/client-portal
"""

from __future__ import annotations

import importlib
from typing import List

from fastapi import APIRouter

from lawdesk.api.routes import __all__ as ROUTE_MODULES

__all__ = ["router", "INCLUDED_MODULES"]

router = APIRouter()


def _include_subrouter(parent: APIRouter, module_path: str) -> APIRouter:
    """
    Import a route module and include its 'router'.

    Raises TypeError when the module does not expose an APIRouter.
    """
    module = importlib.import_module(module_path)
    sub = getattr(module, "router", None)
    if not isinstance(sub, APIRouter):
        raise TypeError(f"{module_path} does not define an APIRouter named 'router'")
    parent.include_router(sub)
    return sub


def _include_all(parent: APIRouter) -> List[str]:
    included: List[str] = []
    for name in ROUTE_MODULES:
        module_path = f"lawdesk.api.routes.{name}"
        _include_subrouter(parent, module_path)
        included.append(module_path)
    return included


INCLUDED_MODULES = _include_all(router)
