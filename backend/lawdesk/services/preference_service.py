"""
Lawyer preference service.

Preferences are created lazily with default values on first read. The
template describes every choice field for preference forms.
"""

from __future__ import annotations

from typing import Any, Dict

from lawdesk.core.contracts import PreferenceRepo
from lawdesk.core.logging import get_logger
from lawdesk.models.lawyer_preference import LawyerPreference, default_working_hours
from lawdesk.models.user import User
from lawdesk.schemas.preference import PreferenceUpdate, WorkingHours

__all__ = ["PreferenceService", "DEFAULT_PREFERENCES", "PREFERENCE_TEMPLATE"]

log = get_logger(__name__)

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "preferred_language": "both",
    "response_style": "formal",
    "detail_level": "standard",
    "include_arabic_terms": True,
    "include_citations": True,
    "include_examples": True,
    "specializations": [],
    "preferred_sources": [],
    "practice_areas": [],
    "urgency_handling": "balanced",
    "client_communication_style": "formal",
    "risk_tolerance": "medium",
    "preferred_case_types": [],
    "working_hours": default_working_hours(),
    "feedback_frequency": "weekly",
    "improvement_areas": [],
    "success_metrics": [],
    "ai_suggestion_notifications": True,
    "learning_updates": True,
    "personalized_tips": True,
}

PREFERENCE_TEMPLATE: Dict[str, Any] = {
    "fields": {
        "preferred_language": {
            "options": ["en", "ar", "both"],
            "default": "both",
            "description": "Preferred language for AI responses",
        },
        "response_style": {
            "options": ["formal", "conversational", "technical", "simplified"],
            "default": "formal",
            "description": "Style of AI responses",
        },
        "detail_level": {
            "options": ["brief", "standard", "comprehensive"],
            "default": "standard",
            "description": "Level of detail in responses",
        },
        "urgency_handling": {
            "options": ["conservative", "balanced", "aggressive"],
            "default": "balanced",
            "description": "How to handle urgent matters",
        },
        "client_communication_style": {
            "options": ["formal", "friendly", "educational"],
            "default": "formal",
            "description": "Style for client communications",
        },
        "risk_tolerance": {
            "options": ["low", "medium", "high"],
            "default": "medium",
            "description": "Risk tolerance level",
        },
        "feedback_frequency": {
            "options": ["always", "weekly", "monthly", "never"],
            "default": "weekly",
            "description": "How often to provide feedback prompts",
        },
    },
    "common_specializations": [
        "Commercial Law",
        "Family Law",
        "Criminal Law",
        "Labor Law",
        "Real Estate Law",
        "Intellectual Property",
        "Administrative Law",
        "Cyber Crime",
        "Inheritance Law",
        "Contract Law",
        "Corporate Law",
        "Banking Law",
        "Insurance Law",
        "Tax Law",
        "Immigration Law",
    ],
    "common_practice_areas": [
        "Litigation",
        "Arbitration",
        "Mediation",
        "Contract Drafting",
        "Legal Consultation",
        "Compliance",
        "Due Diligence",
        "Mergers & Acquisitions",
        "Employment Issues",
        "Regulatory Affairs",
    ],
}


class PreferenceService:
    def __init__(self, preference_repo: PreferenceRepo) -> None:
        self.preference_repo = preference_repo

    def get_or_create(self, user: User) -> LawyerPreference:
        preference = self.preference_repo.get_by_user(user.id)
        if preference is not None:
            return preference
        try:
            return self.preference_repo.create(user_id=user.id, law_firm_id=user.law_firm_id)
        except ValueError:
            # Concurrent first read created the row
            preference = self.preference_repo.get_by_user(user.id)
            if preference is None:
                raise
            return preference

    def update(self, user: User, payload: PreferenceUpdate) -> LawyerPreference:
        preference = self.get_or_create(user)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return preference
        if "working_hours" in changes:
            merged = dict(preference.working_hours or {})
            merged.update(changes["working_hours"])
            changes["working_hours"] = WorkingHours(**merged).model_dump()
        log.info(
            "preferences updated",
            extra={"user_id": user.id, "fields": sorted(changes)},
        )
        return self.preference_repo.update(preference, changes)

    def reset(self, user: User) -> LawyerPreference:
        preference = self.get_or_create(user)
        defaults = {
            key: (list(value) if isinstance(value, list) else dict(value) if isinstance(value, dict) else value)
            for key, value in DEFAULT_PREFERENCES.items()
        }
        log.info("preferences reset", extra={"user_id": user.id})
        return self.preference_repo.update(preference, defaults)

    @staticmethod
    def template() -> Dict[str, Any]:
        return {**PREFERENCE_TEMPLATE, "defaults": dict(DEFAULT_PREFERENCES)}
