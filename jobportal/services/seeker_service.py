"""
Seeker Operations - everything a job seeker account can do.

Built once per request from the seeker identity returned by
`get_current_seeker`, so no method re-checks the caller's role.
"""

from typing import List
from fastapi import UploadFile

from jobportal.core.errors import NotFound
from jobportal.core.logging_config import get_logger
from jobportal.schemas.schemas import MyApplicationResponse, UploadPurpose
from jobportal.services.mongo_service import ApplicationService, JobService, job_to_response
from jobportal.utils.file_upload import discard_upload, save_upload

logger = get_logger(__name__)


class SeekerOperations:

    def __init__(self, identity: dict):
        self.account_id = identity["account_id"]
        self.jobs = JobService()
        self.applications = ApplicationService()

    async def apply(self, job_id: str, resume: UploadFile) -> dict:
        """
        Store the resume and file an application for `job_id`.

        The resume is written first; if the application insert fails
        (duplicate pair or database error) the stored file is discarded so no
        orphaned upload remains.
        """
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFound("Job not found")

        resume_url = await save_upload(resume, UploadPurpose.resume)
        try:
            application = self.applications.create(self.account_id, job["_id"], resume_url)
        except Exception:
            discard_upload(resume_url)
            raise

        logger.info("Seeker %s applied to job %s", self.account_id, job["_id"])
        return application

    def my_applications(self) -> List[MyApplicationResponse]:
        """Own applications, newest first, each with its job. Missing jobs are skipped."""
        applications = self.applications.list_for_applicant(self.account_id)
        jobs = self.jobs.get_many({app["job_id"] for app in applications})

        results = []
        for app in applications:
            job = jobs.get(app["job_id"])
            if job is None:
                continue
            results.append(MyApplicationResponse(
                id=str(app["_id"]),
                status=app["status"],
                resume_url=app["resume_url"],
                applied_at=app["created_at"],
                job=job_to_response(job)
            ))
        return results
