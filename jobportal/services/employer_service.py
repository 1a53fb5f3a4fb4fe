"""
Employer Operations - job posting and the applicant roster.

The roster is built by a single aggregation over the employer's jobs:

    jobs --$lookup--> applications --$lookup--> accounts

Both joins are left joins (`preserveNullAndEmptyArrays`), so a job without
applications still yields one placeholder row. `group_roster` drops those rows
from the applicant lists but keeps the job, which separates "no jobs posted"
from "jobs with no applicants" without one query per job.
"""

from typing import Iterable, List

from bson import ObjectId

from jobportal.core.logging_config import get_logger
from jobportal.db.mongodb import COLLECTIONS
from jobportal.schemas.schemas import (
    ApplicantEntry, ApplicantRosterResponse, JobApplicants, JobCreate
)
from jobportal.services.mongo_service import JobService, to_object_id

logger = get_logger(__name__)


def build_applicant_pipeline(employer_id: ObjectId) -> List[dict]:
    return [
        {"$match": {"posted_by": employer_id}},
        {
            "$lookup": {
                "from": COLLECTIONS["applications"],
                "localField": "_id",
                "foreignField": "job_id",
                "as": "applications"
            }
        },
        {"$unwind": {"path": "$applications", "preserveNullAndEmptyArrays": True}},
        {
            "$lookup": {
                "from": COLLECTIONS["accounts"],
                "localField": "applications.applicant_id",
                "foreignField": "_id",
                "as": "applicant"
            }
        },
        {"$unwind": {"path": "$applicant", "preserveNullAndEmptyArrays": True}},
        {
            "$project": {
                "_id": 0,
                "job_title": "$title",
                "job_id": "$_id",
                "applicant_name": "$applicant.name",
                "applicant_email": "$applicant.email",
                "resume_url": "$applications.resume_url",
                "job_created_at": "$created_at",
                "application_created_at": "$applications.created_at"
            }
        },
        {"$sort": {"job_created_at": -1, "application_created_at": -1}}
    ]


def group_roster(rows: Iterable[dict]) -> ApplicantRosterResponse:
    """
    Fold sorted pipeline rows back into one entry per job.

    Rows without an application are placeholders: they register the job but
    add no applicant.
    """
    groups = {}
    for row in rows:
        job_id = str(row["job_id"])
        group = groups.get(job_id)
        if group is None:
            group = JobApplicants(
                job_id=job_id,
                job_title=row.get("job_title", ""),
                job_created_at=row.get("job_created_at"),
                applicants=[]
            )
            groups[job_id] = group

        if row.get("application_created_at") is None:
            continue
        group.applicants.append(ApplicantEntry(
            name=row.get("applicant_name"),
            email=row.get("applicant_email"),
            resume_url=row.get("resume_url"),
            applied_at=row.get("application_created_at")
        ))

    jobs = list(groups.values())
    return ApplicantRosterResponse(
        jobs=jobs,
        has_jobs=bool(jobs),
        has_applicants=any(group.applicants for group in jobs)
    )


class EmployerOperations:

    def __init__(self, identity: dict):
        self.account_id = identity["account_id"]
        self.jobs = JobService()

    def post_job(self, job: JobCreate) -> dict:
        doc = self.jobs.create(self.account_id, job)
        logger.info("Employer %s posted job %s", self.account_id, doc["_id"])
        return doc

    def applicant_roster(self) -> ApplicantRosterResponse:
        """Applicants across this employer's jobs, newest job and application first."""
        pipeline = build_applicant_pipeline(to_object_id(self.account_id))
        rows = self.jobs.collection.aggregate(pipeline)
        return group_roster(rows)
