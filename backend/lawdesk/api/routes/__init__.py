"""Collection of API route modules (auth, law firms, users, clients, cases, sessions, documents, etc.)."""

__all__ = [
    "auth",
    "law_firms",
    "users",
    "clients",
    "cases",
    "sessions",
    "documents",
    "lawyer_preferences",
    "notifications",
    "analytics",
    "client_portal",
]
