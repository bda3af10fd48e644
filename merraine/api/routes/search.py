"""Candidate search endpoints."""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from merraine.api.deps import get_pearch_client
from merraine.api.limiter import client_identifier, limiter
from merraine.api.schemas import SearchRequest, SearchResponse, SimilarSearchResponse
from merraine.clients.pearch import PearchClient, calculate_search_cost
from merraine.config import settings
from merraine.models import Profile
from merraine.search.batching import run_search
from merraine.search.cache import cache_key, get_cached, is_cacheable, store_cached
from merraine.search.similar import build_similar_search_params, build_similar_search_url
from merraine.search.tiers import (
    SortColumn,
    SortDirection,
    get_tier_counts,
    group_by_tier,
    has_varied_scores,
    sort_profiles,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SearchResponse)
@limiter.limit("15/minute")
def search_candidates(
    request: Request,
    response: Response,
    data: SearchRequest,
    sort: SortColumn | None = None,
    direction: SortDirection = "desc",
    client: PearchClient = Depends(get_pearch_client),
):
    """Search candidates, batching vendor calls when the limit exceeds the per-call cap."""
    if not data.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    params = data.model_dump(exclude_none=True)
    estimated_cost = calculate_search_cost(params, data.limit)

    logger.info(
        json.dumps(
            {
                "endpoint": "/api/search",
                "query": data.query[:100],
                "location": (data.custom_filters.locations or ["none"])[0] if data.custom_filters else "none",
                "searchType": data.type,
                "limit": data.limit,
                "estimatedCost": estimated_cost,
                "ip": client_identifier(request),
            }
        )
    )

    cacheable = is_cacheable(params)
    key = cache_key(params)
    result = get_cached(key) if cacheable else None
    if result is not None:
        logger.info(f"Serving cached search for '{data.query[:100]}'")
        result = result.model_copy(update={"cached": True})
    else:
        outcome = run_search(client, params, settings.pearch_max_per_call)
        result = SearchResponse(
            profiles=outcome.profiles,
            thread_id=outcome.thread_id,
            credits_used=outcome.credits_used,
            total_count=outcome.total_count,
            estimated_cost=estimated_cost,
            batches=outcome.calls,
            tier_counts=get_tier_counts(group_by_tier(outcome.profiles)),
            scores_varied=has_varied_scores(outcome.profiles),
        )
        if cacheable:
            store_cached(key, result)

        logger.info(
            json.dumps(
                {
                    "endpoint": "/api/search",
                    "query": data.query[:100],
                    "creditsUsed": outcome.credits_used or estimated_cost,
                    "profilesReturned": len(outcome.profiles),
                    "batches": outcome.calls,
                }
            )
        )

    if sort:
        result = result.model_copy(update={"profiles": sort_profiles(result.profiles, sort, direction)})
    return result


@router.post("/similar", response_model=SimilarSearchResponse)
def similar_search(profile: Profile):
    """Build search parameters for candidates similar to a profile."""
    params = build_similar_search_params(profile)
    return SimilarSearchResponse(
        query=params["query"],
        location=params["location"],
        url=build_similar_search_url(profile),
    )
