"""
SQLAlchemy ORM models.

Importing the package registers every mapped class so string-based
relationships resolve regardless of which module is imported first.
"""

from lawdesk.models.law_firm import LawFirm
from lawdesk.models.user import User
from lawdesk.models.client import Client, ClientNote
from lawdesk.models.case import Case, CaseNote
from lawdesk.models.court_session import CourtSession, CourtSessionParticipant
from lawdesk.models.document import Document, DocumentReview
from lawdesk.models.lawyer_preference import LawyerPreference
from lawdesk.models.notification import Notification

__all__ = [
    "LawFirm",
    "User",
    "Client",
    "ClientNote",
    "Case",
    "CaseNote",
    "CourtSession",
    "CourtSessionParticipant",
    "Document",
    "DocumentReview",
    "LawyerPreference",
    "Notification",
]
