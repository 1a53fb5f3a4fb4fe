"""
Employer Routes

GET /employer/applicants - Applicants across the employer's jobs, grouped by job
"""

from fastapi import APIRouter, Depends

from jobportal.core.auth import get_current_employer
from jobportal.services.employer_service import EmployerOperations
from jobportal.schemas.schemas import ApplicantRosterResponse

router = APIRouter(prefix="/employer", tags=["Employer"])


@router.get("/applicants", response_model=ApplicantRosterResponse)
async def list_applicants(employer: dict = Depends(get_current_employer)):
    """
    Applicant roster for the caller's jobs.

    Jobs without applications are listed with an empty applicant list;
    `has_jobs` / `has_applicants` tell the two empty states apart.
    """
    return EmployerOperations(employer).applicant_roster()
