"""Job posting endpoints (stored on the vendor side)."""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from merraine.api.deps import get_pearch_client
from merraine.api.schemas import JobPosting
from merraine.clients.pearch import PearchClient

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
def list_jobs(limit: int | None = None, client: PearchClient = Depends(get_pearch_client)):
    """List jobs uploaded to Pearch."""
    return client.list_jobs(limit)


@router.post("")
def upsert_jobs(jobs: list[JobPosting], client: PearchClient = Depends(get_pearch_client)):
    """Create or update jobs. Costs one credit per job."""
    if not jobs:
        raise HTTPException(status_code=400, detail="Jobs array is required")
    for job in jobs:
        if not job.job_id or not job.job_description:
            raise HTTPException(status_code=400, detail="Each job must have job_id and job_description")

    result = client.upsert_jobs([job.model_dump() for job in jobs])
    logger.info(f"Upserted {len(jobs)} jobs")
    return {**result, "credits_used": len(jobs)}


@router.delete("")
def delete_jobs(job_ids: list[str] = Body(...), client: PearchClient = Depends(get_pearch_client)):
    """Delete jobs by id."""
    if not job_ids:
        raise HTTPException(status_code=400, detail="Job IDs array is required")

    result = client.delete_jobs(job_ids)
    logger.info(f"Deleted {len(job_ids)} jobs")
    return result
