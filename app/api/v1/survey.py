"""Public survey funnel endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_db_session
from app.schemas.leads import EmailCheckResponse, LeadResponse, SurveyProgressRequest, SurveySubmitRequest
from app.services.lead_service import LeadService

router = APIRouter(prefix="/survey", tags=["survey"])


@router.post("/submit", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
def submit_survey(payload: SurveySubmitRequest, db: Session = Depends(get_db_session)) -> LeadResponse:
    lead = LeadService(db=db).submit_survey(
        name=payload.name,
        email=payload.email,
        question_answers=payload.question_answers,
        details=payload.details,
        project_type=payload.project_type,
        budget=payload.budget,
    )
    return LeadResponse.model_validate(lead)


@router.get("/check-email", response_model=EmailCheckResponse)
def check_email(
    email: str = Query(min_length=1, max_length=320),
    db: Session = Depends(get_db_session),
) -> EmailCheckResponse:
    return EmailCheckResponse(exists=LeadService(db=db).exists_by_email(email))


@router.post("/progress", response_model=LeadResponse)
def save_progress(payload: SurveyProgressRequest, db: Session = Depends(get_db_session)) -> LeadResponse:
    lead = LeadService(db=db).update_progress(
        lead_id=payload.lead_id,
        current_step=payload.current_step,
        survey_data=payload.survey_data,
    )
    return LeadResponse.model_validate(lead)
