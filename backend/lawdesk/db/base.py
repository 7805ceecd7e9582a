"""
SQLAlchemy declarative base and model import hook.

- Base: Declarative base class for all ORM models.
- import_all_models(): Imports every module under lawdesk.models so their tables
  are registered on Base.metadata before create_all().
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import List

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, declared_attr

__all__ = ["Base", "import_all_models"]


# Naming conventions for constraints & indexes
_NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=_NAMING_CONVENTION)

    # Default table name is the lowercase class name
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


def import_all_models() -> List[str]:
    """
    Import all modules under lawdesk.models.

    Returns:
        Fully-qualified module names that were imported.
    """
    models_pkg = importlib.import_module("lawdesk.models")
    imported: list[str] = []
    prefix = models_pkg.__name__ + "."
    for _finder, name, _ispkg in pkgutil.walk_packages(models_pkg.__path__, prefix):
        importlib.import_module(name)
        imported.append(name)
    return imported
