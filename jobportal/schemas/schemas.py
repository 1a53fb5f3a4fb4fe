"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


# ============================================================
# ENUMS
# ============================================================

class Role(str, Enum):
    seeker = "seeker"
    employer = "employer"


class UploadPurpose(str, Enum):
    avatar = "avatar"
    resume = "resume"


DEFAULT_APPLICATION_STATUS = "Pending"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    password: str = Field(..., min_length=8, max_length=72)
    role: Role

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Check the email shape. Case is kept: email equality is case-sensitive."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v

class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        """Same trimming as registration, so the stored key matches."""
        return v.strip()

class SessionUser(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    avatar_url: Optional[str] = None

class AuthStatusResponse(BaseModel):
    authenticated: bool
    user: Optional[SessionUser] = None


# ============================================================
# ACCOUNT / PROFILE SCHEMAS
# ============================================================

COMMON_PROFILE_FIELDS = ("name", "phone", "location", "bio")
SEEKER_PROFILE_FIELDS = ("skills", "experience")
EMPLOYER_PROFILE_FIELDS = ("company_name", "company_description", "website")

# Editable field groups, selected once by the caller's role
PROFILE_FIELDS = {
    Role.seeker: COMMON_PROFILE_FIELDS + SEEKER_PROFILE_FIELDS,
    Role.employer: COMMON_PROFILE_FIELDS + EMPLOYER_PROFILE_FIELDS,
}

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[str] = None
    experience: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    website: Optional[str] = None

    def changes_for(self, role: Role) -> dict:
        """Provided values restricted to the field group of `role`."""
        return {
            field: getattr(self, field)
            for field in PROFILE_FIELDS[role]
            if getattr(self, field) is not None
        }

class AccountResponse(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[str] = None
    experience: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: Optional[str] = None

class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    description: str
    location: Optional[str] = None
    posted_by: str
    created_at: datetime


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    resume_url: str
    status: str
    created_at: datetime

class MyApplicationResponse(BaseModel):
    id: str
    status: str
    resume_url: str
    applied_at: datetime
    job: JobResponse


# ============================================================
# APPLICANT ROSTER SCHEMAS
# ============================================================

class ApplicantEntry(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    resume_url: Optional[str] = None
    applied_at: Optional[datetime] = None

class JobApplicants(BaseModel):
    job_id: str
    job_title: str
    job_created_at: Optional[datetime] = None
    applicants: List[ApplicantEntry] = []

class ApplicantRosterResponse(BaseModel):
    jobs: List[JobApplicants]
    has_jobs: bool
    has_applicants: bool


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
