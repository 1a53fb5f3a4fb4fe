"""
Application Routes

GET /applications/mine - Get my applications with their jobs (seeker only)
"""

from fastapi import APIRouter, Depends
from typing import List

from jobportal.core.auth import get_current_seeker
from jobportal.services.seeker_service import SeekerOperations
from jobportal.schemas.schemas import MyApplicationResponse

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/mine", response_model=List[MyApplicationResponse])
async def get_my_applications(seeker: dict = Depends(get_current_seeker)):
    """Get all job applications for current seeker, newest first."""
    return SeekerOperations(seeker).my_applications()
