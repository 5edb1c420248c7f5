from __future__ import annotations

import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.enums import Budget, LeadStatus, ProjectType
from app.services.lead_service import LeadService


def test_submit_survey_creates_new_lead(db_session):
    service = LeadService(db=db_session)

    lead = service.submit_survey(
        name="  Jordan Lee ",
        email="Jordan@Example.com",
        question_answers={"goal": "launch"},
        details="Need a marketing site",
        project_type=ProjectType.WEB_MOBILE,
        budget=Budget.RANGE_10K_25K,
    )

    assert lead.status is LeadStatus.NEW
    assert lead.email == "jordan@example.com"
    assert lead.name == "Jordan Lee"
    assert lead.survey_data["question_answers"] == {"goal": "launch"}
    assert lead.survey_data["budget"] == "RANGE_10K_25K"
    assert service.exists_by_email("JORDAN@example.com") is True


def test_submit_survey_rejects_duplicates_and_bad_input(db_session):
    service = LeadService(db=db_session)
    service.submit_survey(name="Jordan", email="jordan@example.com")

    with pytest.raises(ConflictError):
        service.submit_survey(name="Jordan again", email="jordan@example.com")
    with pytest.raises(ValidationError) as excinfo:
        service.submit_survey(name="Nope", email="not-an-email")
    assert excinfo.value.field == "email"
    with pytest.raises(ValidationError) as excinfo:
        service.submit_survey(name="   ", email="blank@example.com")
    assert excinfo.value.field == "name"


def test_exists_by_email_handles_blank(db_session):
    assert LeadService(db=db_session).exists_by_email("") is False


def test_update_status_and_progress(db_session):
    service = LeadService(db=db_session)
    lead = service.submit_survey(name="Sam", email="sam@example.com")

    updated = service.update_status(lead.id, LeadStatus.CONTACTED)
    assert updated.status is LeadStatus.CONTACTED

    progressed = service.update_progress(lead.id, 3, {"step_three": "done"})
    assert progressed.current_step == 3
    assert progressed.survey_data["step_three"] == "done"
    assert "question_answers" in progressed.survey_data

    with pytest.raises(ValidationError):
        service.update_progress(lead.id, -1)
    with pytest.raises(NotFoundError):
        service.update_status("missing", LeadStatus.CLOSED)


def test_list_leads_filters(db_session):
    service = LeadService(db=db_session)
    service.submit_survey(name="Ada Byron", email="ada@example.com")
    other = service.submit_survey(name="Grace Hopper", email="grace@example.com")
    service.update_status(other.id, LeadStatus.CONVERTED)

    assert [lead.name for lead in service.list_leads(search="ada")] == ["Ada Byron"]
    assert [lead.name for lead in service.list_leads(status=LeadStatus.CONVERTED)] == ["Grace Hopper"]
    assert service.list_leads(search="%") == []
    assert service.count() == 2
