"""
Profile Routes

GET /profile - Get own profile
PUT /profile - Update own profile (multipart, optional avatar image)
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from jobportal.core.auth import get_current_account
from jobportal.core.errors import NotFound
from jobportal.services.mongo_service import AccountService, account_to_response
from jobportal.utils.file_upload import discard_upload, save_upload
from jobportal.schemas.schemas import AccountResponse, ProfileUpdate, UploadPurpose

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=AccountResponse)
async def get_profile(account: dict = Depends(get_current_account)):
    """Get the caller's own profile."""
    doc = AccountService().get_by_id(account["account_id"])
    if doc is None:
        raise NotFound("Account not found")
    return account_to_response(doc)


@router.put("", response_model=AccountResponse)
async def update_profile(
    name: Optional[str] = Form(None, min_length=1, max_length=100),
    phone: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    skills: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    company_name: Optional[str] = Form(None),
    company_description: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None, description="Profile picture (any image type, max 5MB)"),
    account: dict = Depends(get_current_account)
):
    """
    Update the caller's profile. Only provided fields are updated.

    Seekers may edit skills/experience, employers company details; fields from
    the other role's group are ignored. A new avatar replaces the stored
    reference; without one the current avatar is kept.
    """
    update = ProfileUpdate(
        name=name, phone=phone, location=location, bio=bio,
        skills=skills, experience=experience,
        company_name=company_name, company_description=company_description, website=website
    )
    changes = update.changes_for(account["role"])

    avatar_url = None
    if avatar is not None and avatar.filename:
        avatar_url = await save_upload(avatar, UploadPurpose.avatar)
        changes["avatar_url"] = avatar_url

    try:
        doc = AccountService().update_profile(account["account_id"], changes)
    except Exception:
        if avatar_url:
            discard_upload(avatar_url)
        raise

    return account_to_response(doc)
