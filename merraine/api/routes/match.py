"""Profile-to-job matching endpoint."""

from fastapi import APIRouter, Body, Depends, HTTPException

from merraine.api.deps import get_pearch_client
from merraine.clients.pearch import PearchClient

router = APIRouter()


@router.post("")
def match_jobs(profile: dict = Body(...), client: PearchClient = Depends(get_pearch_client)):
    """Find uploaded jobs matching a candidate profile."""
    if not profile:
        raise HTTPException(status_code=400, detail="Profile data is required")
    return client.find_matching_jobs(profile)
