"""Saved search endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from merraine.api.schemas import (
    RenameSearchRequest,
    SaveSearchRequest,
    SearchDetailResponse,
    SearchListResponse,
    SearchSummaryResponse,
)
from merraine.db import get_db
from merraine.db import queries

router = APIRouter()
logger = logging.getLogger(__name__)


def _detail(db: Session, search) -> SearchDetailResponse:
    return SearchDetailResponse(
        id=search.id,
        name=search.name,
        query=search.query,
        location=search.location,
        total_results=search.total_results,
        credits_used=search.credits_used,
        created_at=search.created_at,
        updated_at=search.updated_at,
        options=search.options or {},
        thread_id=search.thread_id,
        candidates=queries.get_search_candidates(db, search.id),
    )


@router.get("", response_model=SearchListResponse)
def list_searches(db: Session = Depends(get_db)):
    """List saved searches, newest first."""
    searches = queries.list_searches(db)
    return SearchListResponse(searches=[SearchSummaryResponse.model_validate(s) for s in searches])


@router.post("", response_model=SearchSummaryResponse)
def save_search(data: SaveSearchRequest, db: Session = Depends(get_db)):
    """Save a search together with its result profiles."""
    if not data.name or not data.query:
        raise HTTPException(status_code=400, detail="Name and query are required")

    search = queries.create_search(
        db,
        name=data.name,
        query=data.query,
        options=data.options,
        location=data.location,
        thread_id=data.thread_id,
        credits_used=data.credits_used,
    )

    if data.profiles:
        queries.add_candidates_to_search(db, search, data.profiles)

    if data.credits_used and data.credits_used > 0:
        queries.log_credit_transaction(
            db,
            operation="search_saved",
            credits=data.credits_used,
            details=f'Saved search "{data.name}" with {len(data.profiles)} candidates',
            search_id=search.id,
        )

    logger.info(f"[{search.id}] Saved search '{data.name}' with {search.total_results} candidates")
    return SearchSummaryResponse.model_validate(search)


@router.get("/{search_id}", response_model=SearchDetailResponse)
def get_search(search_id: int, db: Session = Depends(get_db)):
    """Get a saved search with its candidates in result order."""
    search = queries.get_search(db, search_id)
    if not search:
        raise HTTPException(status_code=404, detail="Search not found")
    return _detail(db, search)


@router.patch("/{search_id}", response_model=SearchSummaryResponse)
def rename_search(search_id: int, data: RenameSearchRequest, db: Session = Depends(get_db)):
    """Rename a saved search."""
    if not data.name:
        raise HTTPException(status_code=400, detail="Name is required")

    search = queries.rename_search(db, search_id, data.name)
    if not search:
        raise HTTPException(status_code=404, detail="Search not found")
    return SearchSummaryResponse.model_validate(search)


@router.delete("/{search_id}")
def delete_search(search_id: int, db: Session = Depends(get_db)):
    """Delete a saved search."""
    if not queries.delete_search(db, search_id):
        raise HTTPException(status_code=404, detail="Search not found")
    return {"success": True}
