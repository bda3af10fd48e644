"""Saved candidate endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from merraine.api.schemas import (
    SaveCandidateRequest,
    SavedCandidateListResponse,
    SavedCandidateResponse,
    UpdateNotesRequest,
)
from merraine.db import SavedCandidate, get_db
from merraine.db import queries

router = APIRouter()


def _to_response(saved: SavedCandidate) -> SavedCandidateResponse:
    profile = queries.candidate_to_profile(saved.candidate)
    return SavedCandidateResponse(
        **profile.model_dump(),
        saved_id=saved.id,
        saved_at=saved.saved_at,
        notes=saved.notes or "",
    )


@router.get("", response_model=SavedCandidateListResponse)
def list_saved(db: Session = Depends(get_db)):
    """List saved candidates, most recently saved first."""
    return SavedCandidateListResponse(candidates=[_to_response(s) for s in queries.list_saved_candidates(db)])


@router.post("", response_model=SavedCandidateResponse)
def save_candidate(data: SaveCandidateRequest, db: Session = Depends(get_db)):
    """Save a candidate. Saving an already saved candidate returns the existing entry."""
    if not data.profile.id:
        raise HTTPException(status_code=400, detail="Profile id is required")
    saved = queries.save_candidate(db, data.profile, data.notes)
    return _to_response(saved)


@router.patch("/{pearch_id}", response_model=SavedCandidateResponse)
def update_notes(pearch_id: str, data: UpdateNotesRequest, db: Session = Depends(get_db)):
    """Replace the notes on a saved candidate."""
    saved = queries.update_saved_notes(db, pearch_id, data.notes)
    if not saved:
        raise HTTPException(status_code=404, detail="Saved candidate not found")
    return _to_response(saved)


@router.delete("/{pearch_id}")
def remove_saved(pearch_id: str, db: Session = Depends(get_db)):
    """Remove a candidate from the saved list."""
    if not queries.remove_saved_candidate(db, pearch_id):
        raise HTTPException(status_code=404, detail="Saved candidate not found")
    return {"message": "Saved candidate removed"}
