import os
import sys
from types import SimpleNamespace

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.schemas.preference import PreferenceUpdate  # noqa: E402
from lawdesk.services.preference_service import DEFAULT_PREFERENCES, PreferenceService  # noqa: E402
from tests.fakes import FakePreferenceRepo  # noqa: E402

USER = SimpleNamespace(id=7, law_firm_id=3)


def test_get_or_create_is_lazy_and_idempotent():
    repo = FakePreferenceRepo()
    service = PreferenceService(repo)

    first = service.get_or_create(USER)
    second = service.get_or_create(USER)
    assert first is second
    assert repo.create_calls == 1
    assert first.law_firm_id == 3
    assert first.response_style == "formal"


def test_update_ignores_unset_fields():
    service = PreferenceService(FakePreferenceRepo())
    pref = service.update(USER, PreferenceUpdate(detail_level="brief", practice_areas=["Arbitration"]))
    assert pref.detail_level == "brief"
    assert pref.practice_areas == ["Arbitration"]
    assert pref.risk_tolerance == "medium"


def test_reset_does_not_share_default_containers():
    service = PreferenceService(FakePreferenceRepo())
    service.update(USER, PreferenceUpdate(specializations=["Tax Law"]))

    pref = service.reset(USER)
    assert pref.specializations == []
    pref.specializations.append("Mutated")
    assert DEFAULT_PREFERENCES["specializations"] == []


def test_template_lists_choice_fields():
    template = PreferenceService.template()
    assert set(template["fields"]) == {
        "preferred_language",
        "response_style",
        "detail_level",
        "urgency_handling",
        "client_communication_style",
        "risk_tolerance",
        "feedback_frequency",
    }
    for name, choice in template["fields"].items():
        assert choice["default"] == DEFAULT_PREFERENCES[name]
        assert choice["default"] in choice["options"]


def test_partial_working_hours_keep_stored_fields():
    service = PreferenceService(FakePreferenceRepo())
    service.update(USER, PreferenceUpdate(working_hours={"timezone": "Asia/Dubai"}))

    pref = service.update(USER, PreferenceUpdate(working_hours={"start": "08:00"}))
    assert pref.working_hours == {"start": "08:00", "end": "17:00", "timezone": "Asia/Dubai"}
    assert DEFAULT_PREFERENCES["working_hours"]["start"] == "09:00"
