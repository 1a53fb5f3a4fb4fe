"""
MongoDB Service - CRUD operations for the portal collections.

Collections in this database:
1. accounts      - Job seekers and employers (unique email)
2. jobs          - Job postings, owned by an employer account
3. applications  - One seeker's resume against one job (unique pair)

Uniqueness is never checked with a read before the write: the insert is
attempted and a DuplicateKeyError from the unique index becomes a Conflict.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Iterable
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from jobportal.core.auth import hash_password, verify_password
from jobportal.core.errors import Conflict, InvalidCredentials, NotFound
from jobportal.core.logging_config import get_logger
from jobportal.db.mongodb import get_collection, COLLECTIONS
from jobportal.schemas.schemas import (
    DEFAULT_APPLICATION_STATUS, AccountResponse, JobCreate, JobResponse, RegisterRequest
)

logger = get_logger(__name__)


# ============================================================
# HELPERS: ObjectId handling and document -> schema conversion
# ============================================================

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value) -> Optional[ObjectId]:
    """Parse an id from a path or session; None if it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def account_to_response(doc: dict) -> AccountResponse:
    """Public view of an account document (never includes the password hash)."""
    fields = {key: value for key, value in doc.items() if key in AccountResponse.model_fields}
    fields["id"] = str(doc["_id"])
    return AccountResponse(**fields)


def job_to_response(doc: dict) -> JobResponse:
    return JobResponse(
        id=str(doc["_id"]),
        title=doc["title"],
        company=doc["company"],
        description=doc["description"],
        location=doc.get("location"),
        posted_by=str(doc["posted_by"]),
        created_at=doc["created_at"]
    )


# ============================================================
# ACCOUNTS COLLECTION
# ============================================================

class AccountService:
    """
    Handles account registration, login and self-service profile edits.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["accounts"])

    def register(self, request: RegisterRequest) -> str:
        """
        Create an account with a bcrypt-hashed password.

        Returns:
            New account id as string

        Raises:
            Conflict if the email is already registered
        """
        now = utcnow()
        doc = {
            "name": request.name,
            "email": request.email,
            "password_hash": hash_password(request.password),
            "role": request.role.value,
            "created_at": now,
            "updated_at": now
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("Registration rejected: email already registered")
            raise Conflict("This email address is already registered")
        logger.info("Registered %s account %s", request.role.value, result.inserted_id)
        return str(result.inserted_id)

    def authenticate(self, email: str, password: str) -> dict:
        """
        Return the account document for valid credentials.

        Unknown email and wrong password raise the same InvalidCredentials;
        only the log records tell them apart.
        """
        doc = self.collection.find_one({"email": email})
        if doc is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentials()
        if not verify_password(password, doc["password_hash"]):
            logger.info("Login failed: wrong password for account %s", doc["_id"])
            raise InvalidCredentials()
        return doc

    def get_by_id(self, account_id) -> Optional[dict]:
        oid = to_object_id(account_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def update_profile(self, account_id, changes: dict) -> dict:
        """
        Apply profile changes and return the updated document.

        `changes` must already be limited to the caller's editable fields;
        role and email are never part of it.
        """
        oid = to_object_id(account_id)
        if oid is None:
            raise NotFound("Account not found")
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**changes, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFound("Account not found")
        return doc


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job posting storage.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])

    def create(self, posted_by, job: JobCreate) -> dict:
        now = utcnow()
        doc = {
            "title": job.title,
            "company": job.company,
            "description": job.description,
            "location": job.location,
            "posted_by": to_object_id(posted_by),
            "created_at": now,
            "updated_at": now
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def list_all(self) -> List[dict]:
        """All jobs, newest first."""
        return list(self.collection.find().sort("created_at", DESCENDING))

    def get_by_id(self, job_id) -> Optional[dict]:
        oid = to_object_id(job_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def get_many(self, job_ids: Iterable[ObjectId]) -> Dict[ObjectId, dict]:
        """Fetch several jobs in one query, keyed by id."""
        cursor = self.collection.find({"_id": {"$in": list(job_ids)}})
        return {doc["_id"]: doc for doc in cursor}


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Handles application storage. The (applicant_id, job_id) pair is unique.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])

    def create(self, applicant_id, job_id, resume_url: str) -> dict:
        """
        Insert an application with the default status.

        Raises:
            Conflict if this seeker already applied to this job
        """
        now = utcnow()
        doc = {
            "applicant_id": to_object_id(applicant_id),
            "job_id": to_object_id(job_id),
            "resume_url": resume_url,
            "status": DEFAULT_APPLICATION_STATUS,
            "created_at": now,
            "updated_at": now
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("Duplicate application by %s for job %s", applicant_id, job_id)
            raise Conflict("You have already applied to this job")
        doc["_id"] = result.inserted_id
        return doc

    def list_for_applicant(self, applicant_id) -> List[dict]:
        """All applications filed by a seeker, newest first."""
        cursor = self.collection.find(
            {"applicant_id": to_object_id(applicant_id)}
        ).sort("created_at", DESCENDING)
        return list(cursor)
