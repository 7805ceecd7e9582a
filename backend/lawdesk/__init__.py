"""LawDesk backend package: multi-tenant legal practice API."""

__all__ = [
    "api",
    "core",
    "db",
    "models",
    "repos",
    "schemas",
    "services",
]
