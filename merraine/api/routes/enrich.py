"""Profile enrichment endpoint."""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from merraine.api.deps import get_pearch_client
from merraine.api.limiter import client_identifier, limiter
from merraine.clients.pearch import PearchClient, calculate_enrich_cost
from merraine.db import get_optional_db
from merraine.db import queries
from merraine.search.normalize import FIELD_ALIASES, pick_first

router = APIRouter()
logger = logging.getLogger(__name__)


def _cache_enrichment(db: Session, pearch_id: str, result: dict, options: dict, cost: int) -> None:
    """Store revealed contacts on the cached candidate. Failures are logged, not raised."""
    record = result.get("profile") if isinstance(result.get("profile"), dict) else result
    email = pick_first(record, FIELD_ALIASES["email"]) or None
    phone = pick_first(record, FIELD_ALIASES["phone"]) or None
    try:
        candidate = queries.enrich_candidate(db, pearch_id, email, phone, options)
        queries.log_credit_transaction(
            db,
            operation="enrich",
            credits=cost,
            details=f"Enriched profile {pearch_id[:20]}",
            candidate_id=candidate.id if candidate else None,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Enrichment cache update failed for {pearch_id[:20]}: {e}")


@router.get("")
@limiter.limit("30/minute")
def enrich_profile(
    request: Request,
    response: Response,
    id: str | None = None,
    high_freshness: bool = False,
    reveal_emails: bool = False,
    reveal_phones: bool = False,
    with_profile: bool = False,
    client: PearchClient = Depends(get_pearch_client),
    db: Session | None = Depends(get_optional_db),
):
    """Fetch a single profile with optional contact reveal."""
    if not id:
        raise HTTPException(status_code=400, detail="Profile ID is required")

    params = {
        "id": id,
        "high_freshness": high_freshness,
        "reveal_emails": reveal_emails,
        "reveal_phones": reveal_phones,
        "with_profile": with_profile,
    }
    estimated_cost = calculate_enrich_cost(params)

    logger.info(
        json.dumps(
            {
                "endpoint": "/api/enrich",
                "profileId": id[:20],
                "highFreshness": high_freshness,
                "revealEmails": reveal_emails,
                "revealPhones": reveal_phones,
                "estimatedCost": estimated_cost,
                "ip": client_identifier(request),
            }
        )
    )

    result = client.enrich_profile(params)

    if db is not None and isinstance(result, dict):
        options = {k: v for k, v in params.items() if k != "id"}
        _cache_enrichment(db, id, result, options, estimated_cost)

    return {**result, "estimated_cost": estimated_cost}
