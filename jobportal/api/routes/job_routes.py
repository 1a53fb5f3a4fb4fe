"""
Job Routes

POST /jobs - Create job posting (employer only)
GET /jobs - List all jobs, newest first
GET /jobs/{job_id} - Get job details
POST /jobs/{job_id}/apply - Apply with a PDF resume (seeker only)
"""

from fastapi import APIRouter, Depends, File, UploadFile
from typing import List

from jobportal.core.auth import get_current_employer, get_current_seeker
from jobportal.core.errors import NotFound
from jobportal.services.employer_service import EmployerOperations
from jobportal.services.mongo_service import JobService, job_to_response
from jobportal.services.seeker_service import SeekerOperations
from jobportal.schemas.schemas import ApplicationResponse, JobCreate, JobResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, employer: dict = Depends(get_current_employer)):
    """Create a new job posting. Only employers can create jobs."""
    doc = EmployerOperations(employer).post_job(job)
    return job_to_response(doc)


@router.get("", response_model=List[JobResponse])
async def list_jobs():
    """List all job postings, newest first."""
    return [job_to_response(doc) for doc in JobService().list_all()]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str):
    """Get details of a specific job."""
    doc = JobService().get_by_id(job_id)
    if doc is None:
        raise NotFound("Job not found")
    return job_to_response(doc)


@router.post("/{job_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    job_id: str,
    resume: UploadFile = File(..., description="Resume (PDF only, max 5MB)"),
    seeker: dict = Depends(get_current_seeker)
):
    """Apply to a job. Seekers only. Cannot apply twice to same job."""
    application = await SeekerOperations(seeker).apply(job_id, resume)
    return ApplicationResponse(
        id=str(application["_id"]),
        job_id=str(application["job_id"]),
        resume_url=application["resume_url"],
        status=application["status"],
        created_at=application["created_at"]
    )
