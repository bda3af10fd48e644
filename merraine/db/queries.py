"""Queries for saved searches, candidates, credits and settings."""

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from merraine.db.tables import (
    AppSetting,
    Candidate,
    CreditTransaction,
    SavedCandidate,
    Search,
    SearchCandidate,
    utcnow,
)
from merraine.models import Profile

BALANCE_SYNC = "balance_sync"


# ─── Candidates ─────────────────────────────────────────────


def _candidate_fields(profile: Profile) -> dict:
    data = profile.model_dump()
    return {
        "name": data["name"] or None,
        "headline": data["headline"] or None,
        "location": data["location"] or None,
        "summary": data["summary"] or None,
        "experience": data["experience"] or None,
        "education": data["education"] or None,
        "skills": data["skills"] or None,
        "email": data["email"] or None,
        "phone": data["phone"] or None,
        "linkedin_url": data["linkedin_url"] or None,
        "picture_url": data["picture_url"] or None,
        "score": data["score"],
        "insights": data["insights"] or None,
    }


def candidate_to_profile(candidate: Candidate, score: float | None = None) -> Profile:
    """Rebuild a Profile; score defaults to the candidate's own score."""
    return Profile(
        id=candidate.pearch_id,
        name=candidate.name or "",
        headline=candidate.headline or "",
        location=candidate.location or "",
        summary=candidate.summary or "",
        experience=candidate.experience or [],
        education=candidate.education or [],
        skills=candidate.skills or [],
        email=candidate.email or "",
        phone=candidate.phone or "",
        linkedin_url=candidate.linkedin_url or "",
        picture_url=candidate.picture_url or "",
        score=score if score is not None else candidate.score,
        insights=candidate.insights or "",
    )


def get_candidate_by_pearch_id(db: Session, pearch_id: str) -> Candidate | None:
    return db.query(Candidate).filter(Candidate.pearch_id == pearch_id).first()


def upsert_candidate(db: Session, profile: Profile) -> Candidate:
    """Insert or refresh a candidate keyed by Pearch id. Flushes, does not commit."""
    if not profile.id:
        raise ValueError("Profile must have an id (pearch_id)")

    fields = _candidate_fields(profile)
    candidate = get_candidate_by_pearch_id(db, profile.id)
    if candidate is None:
        candidate = Candidate(pearch_id=profile.id, **fields)
        db.add(candidate)
    else:
        for key, value in fields.items():
            setattr(candidate, key, value)
        candidate.updated_at = utcnow()
    db.flush()
    return candidate


def enrich_candidate(
    db: Session,
    pearch_id: str,
    email: str | None,
    phone: str | None,
    enrichment_options: dict,
) -> Candidate | None:
    """Store revealed contact details on an already cached candidate."""
    candidate = get_candidate_by_pearch_id(db, pearch_id)
    if candidate is None:
        return None

    if email:
        candidate.email = email
    if phone:
        candidate.phone = phone
    candidate.is_enriched = True
    candidate.enriched_at = utcnow()
    candidate.enrichment_options = enrichment_options
    candidate.updated_at = utcnow()
    db.commit()
    db.refresh(candidate)
    return candidate


# ─── Searches ───────────────────────────────────────────────


def create_search(
    db: Session,
    name: str,
    query: str,
    options: dict,
    location: str | None = None,
    thread_id: str | None = None,
    credits_used: int | None = None,
) -> Search:
    search = Search(
        name=name,
        query=query,
        location=location or None,
        options=options,
        thread_id=thread_id or None,
        credits_used=credits_used or 0,
        total_results=0,
    )
    db.add(search)
    db.commit()
    db.refresh(search)
    return search


def list_searches(db: Session) -> list[Search]:
    return db.query(Search).order_by(Search.created_at.desc(), Search.id.desc()).all()


def get_search(db: Session, search_id: int) -> Search | None:
    return db.query(Search).filter(Search.id == search_id).first()


def get_search_candidates(db: Session, search_id: int) -> list[Profile]:
    """Candidates of a search in result order, scored as in that search."""
    rows = (
        db.query(SearchCandidate, Candidate)
        .join(Candidate, SearchCandidate.candidate_id == Candidate.id)
        .filter(SearchCandidate.search_id == search_id)
        .order_by(SearchCandidate.position)
        .all()
    )
    return [candidate_to_profile(candidate, score=link.score) for link, candidate in rows]


def rename_search(db: Session, search_id: int, name: str) -> Search | None:
    search = get_search(db, search_id)
    if search is None:
        return None
    search.name = name
    search.updated_at = utcnow()
    db.commit()
    db.refresh(search)
    return search


def delete_search(db: Session, search_id: int) -> bool:
    search = get_search(db, search_id)
    if search is None:
        return False
    db.delete(search)
    db.commit()
    return True


def add_candidates_to_search(db: Session, search: Search, profiles: list[Profile]) -> None:
    """Upsert candidates and append them to the search, skipping ones already linked."""
    max_position = (
        db.query(func.coalesce(func.max(SearchCandidate.position), 0))
        .filter(SearchCandidate.search_id == search.id)
        .scalar()
    )
    position = (max_position or 0) + 1

    for profile in profiles:
        if not profile.id:
            continue
        candidate = upsert_candidate(db, profile)
        existing = db.get(SearchCandidate, (search.id, candidate.id))
        if existing is not None:
            continue
        db.add(SearchCandidate(search_id=search.id, candidate_id=candidate.id, score=profile.score, position=position))
        position += 1
        db.flush()

    search.total_results = (
        db.query(func.count()).select_from(SearchCandidate).filter(SearchCandidate.search_id == search.id).scalar()
    )
    search.updated_at = utcnow()
    db.commit()
    db.refresh(search)


# ─── Saved Candidates ───────────────────────────────────────


def save_candidate(db: Session, profile: Profile, notes: str = "") -> SavedCandidate:
    """Save a candidate; saving twice returns the existing entry."""
    candidate = upsert_candidate(db, profile)
    saved = db.query(SavedCandidate).filter(SavedCandidate.candidate_id == candidate.id).first()
    if saved is None:
        saved = SavedCandidate(candidate_id=candidate.id, notes=notes)
        db.add(saved)
    db.commit()
    db.refresh(saved)
    return saved


def list_saved_candidates(db: Session) -> list[SavedCandidate]:
    return db.query(SavedCandidate).order_by(SavedCandidate.saved_at.desc(), SavedCandidate.id.desc()).all()


def _saved_by_pearch_id(db: Session, pearch_id: str) -> SavedCandidate | None:
    return (
        db.query(SavedCandidate)
        .join(Candidate, SavedCandidate.candidate_id == Candidate.id)
        .filter(Candidate.pearch_id == pearch_id)
        .first()
    )


def update_saved_notes(db: Session, pearch_id: str, notes: str) -> SavedCandidate | None:
    saved = _saved_by_pearch_id(db, pearch_id)
    if saved is None:
        return None
    saved.notes = notes
    db.commit()
    db.refresh(saved)
    return saved


def remove_saved_candidate(db: Session, pearch_id: str) -> bool:
    saved = _saved_by_pearch_id(db, pearch_id)
    if saved is None:
        return False
    db.delete(saved)
    db.commit()
    return True


# ─── Credit Transactions ────────────────────────────────────


def log_credit_transaction(
    db: Session,
    operation: str,
    credits: int,
    details: str | None = None,
    search_id: int | None = None,
    candidate_id: int | None = None,
) -> CreditTransaction:
    tx = CreditTransaction(
        operation=operation,
        credits=credits,
        details=details,
        search_id=search_id,
        candidate_id=candidate_id,
    )
    db.add(tx)
    db.commit()
    db.refresh(tx)
    return tx


def get_total_credits_used(db: Session) -> int:
    """Sum of spent credits; balance snapshots are not spending."""
    total = (
        db.query(func.coalesce(func.sum(CreditTransaction.credits), 0))
        .filter(CreditTransaction.operation != BALANCE_SYNC)
        .scalar()
    )
    return int(total or 0)


def get_credit_history(db: Session, limit: int = 50) -> list[CreditTransaction]:
    return (
        db.query(CreditTransaction)
        .filter(CreditTransaction.operation != BALANCE_SYNC)
        .order_by(CreditTransaction.created_at.desc(), CreditTransaction.id.desc())
        .limit(limit)
        .all()
    )


def save_balance(db: Session, balance: int) -> None:
    """Store the latest vendor balance, replacing the previous snapshot."""
    db.query(CreditTransaction).filter(CreditTransaction.operation == BALANCE_SYNC).delete()
    db.add(CreditTransaction(operation=BALANCE_SYNC, credits=balance, details=f"Pearch balance: {balance}"))
    db.commit()


def get_last_known_balance(db: Session) -> int | None:
    tx = (
        db.query(CreditTransaction)
        .filter(CreditTransaction.operation == BALANCE_SYNC)
        .order_by(CreditTransaction.created_at.desc(), CreditTransaction.id.desc())
        .first()
    )
    return tx.credits if tx else None


# ─── App Settings ───────────────────────────────────────────


def get_setting(db: Session, key: str) -> str | None:
    setting = db.get(AppSetting, key)
    return setting.value if setting else None


def set_setting(db: Session, key: str, value: str) -> None:
    setting = db.get(AppSetting, key)
    now: datetime = utcnow()
    if setting is None:
        db.add(AppSetting(key=key, value=value, updated_at=now))
    else:
        setting.value = value
        setting.updated_at = now
    db.commit()
