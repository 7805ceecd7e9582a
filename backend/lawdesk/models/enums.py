"""
Domain enumerations shared by models, schemas and services.

Values are stored as plain strings in the database; the role and status sets
hold raw string values so they match columns read back from the database.
"""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    LAWYER = "lawyer"
    PARALEGAL = "paralegal"
    CLERK = "clerk"
    CLIENT = "client"


STAFF_ROLES = frozenset(r.value for r in (UserRole.ADMIN, UserRole.LAWYER, UserRole.PARALEGAL, UserRole.CLERK))

# Role values that may own a case or be assigned to a client
ASSIGNABLE_ROLES = frozenset(r.value for r in (UserRole.ADMIN, UserRole.LAWYER))


class SubscriptionPlan(str, enum.Enum):
    BASIC = "basic"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class CaseType(str, enum.Enum):
    COMMERCIAL = "commercial"
    CIVIL = "civil"
    CRIMINAL = "criminal"
    LABOR = "labor"
    FAMILY = "family"
    REAL_ESTATE = "real_estate"
    INTELLECTUAL_PROPERTY = "intellectual_property"
    ADMINISTRATIVE = "administrative"
    CYBER_CRIME = "cyber_crime"
    INHERITANCE = "inheritance"


class CaseStatus(str, enum.Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    UNDER_REVIEW = "under_review"
    PENDING_DOCUMENTS = "pending_documents"
    COURT_HEARING = "court_hearing"
    SETTLED = "settled"
    WON = "won"
    LOST = "lost"
    CLOSED = "closed"


ACTIVE_CASE_STATUSES = frozenset(s.value for s in (CaseStatus.NEW, CaseStatus.IN_PROGRESS, CaseStatus.UNDER_REVIEW))
CLOSED_CASE_STATUSES = frozenset(s.value for s in (CaseStatus.SETTLED, CaseStatus.WON, CaseStatus.LOST, CaseStatus.CLOSED))


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ClientType(str, enum.Enum):
    INDIVIDUAL = "individual"
    COMPANY = "company"
    GOVERNMENT = "government"
    NGO = "ngo"


class ClientStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"


class DocumentType(str, enum.Enum):
    CONTRACT = "contract"
    MEMORANDUM = "memorandum"
    PETITION = "petition"
    EVIDENCE = "evidence"
    CORRESPONDENCE = "correspondence"
    COURT_DOCUMENT = "court_document"
    LEGAL_OPINION = "legal_opinion"
    OTHER = "other"


class DocumentStatus(str, enum.Enum):
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"
    SIGNED = "signed"
    EXECUTED = "executed"


class ReviewOutcome(str, enum.Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    PENDING_REVISION = "pending_revision"


# Document status a review outcome moves the document into
REVIEW_STATUS_MAP = {
    ReviewOutcome.APPROVED: DocumentStatus.APPROVED,
    ReviewOutcome.REJECTED: DocumentStatus.REJECTED,
    ReviewOutcome.PENDING_REVISION: DocumentStatus.REVIEW,
}


class NotificationType(str, enum.Enum):
    CASE_UPDATE = "case_update"
    DOCUMENT_UPLOADED = "document_uploaded"
    HEARING_REMINDER = "hearing_reminder"
    PAYMENT_DUE = "payment_due"
    SYSTEM_ALERT = "system_alert"


class NotificationPriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class SessionType(str, enum.Enum):
    COURT_HEARING = "court_hearing"
    CLIENT_MEETING = "client_meeting"
    MEDIATION = "mediation"
    ARBITRATION = "arbitration"
    DEPOSITION = "deposition"
    NEGOTIATION = "negotiation"
    CONSULTATION = "consultation"
    INTERNAL_MEETING = "internal_meeting"
    OTHER = "other"


class SessionStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"


# Sessions that still lie ahead: editable, startable and due for reminders
PENDING_SESSION_STATUSES = frozenset(s.value for s in (SessionStatus.SCHEDULED, SessionStatus.POSTPONED))
