"""
Batched candidate search.

Pearch caps the number of profiles per call. Larger requests are split into
sequential calls that echo the previous thread_id so the vendor continues the
same logical search.
"""

import logging
import math
from dataclasses import dataclass, field

from merraine.clients.pearch import PearchClient
from merraine.models import Profile
from merraine.search.normalize import normalize_search_response
from merraine.search.tiers import deduplicate_profiles

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


@dataclass
class BatchedSearch:
    profiles: list[Profile] = field(default_factory=list)
    thread_id: str | None = None
    credits_used: int | None = None
    total_count: int | None = None
    calls: int = 0


def run_search(client: PearchClient, params: dict, max_per_call: int) -> BatchedSearch:
    """Fetch up to params["limit"] deduplicated profiles.

    Stops when the requested count is reached, the vendor returns a short page,
    no continuation token comes back, or ceil(requested / max_per_call) calls
    have been made.
    """
    requested = params.get("limit") or DEFAULT_LIMIT
    max_calls = math.ceil(requested / max_per_call)
    outcome = BatchedSearch(thread_id=params.get("thread_id"))

    while outcome.calls < max_calls:
        remaining = requested - len(outcome.profiles)
        batch_limit = min(max_per_call, remaining)
        payload = {**params, "limit": batch_limit}
        if outcome.thread_id:
            payload["thread_id"] = outcome.thread_id

        page = normalize_search_response(client.search(payload))
        outcome.calls += 1

        outcome.profiles = deduplicate_profiles(outcome.profiles + page.profiles)
        if page.credits_used is not None:
            outcome.credits_used = (outcome.credits_used or 0) + page.credits_used
        if page.total_count is not None:
            outcome.total_count = page.total_count
        outcome.thread_id = page.thread_id

        logger.info(
            f"Search batch {outcome.calls}/{max_calls}: asked {batch_limit}, "
            f"got {page.raw_count}, have {len(outcome.profiles)}/{requested}"
        )

        if len(outcome.profiles) >= requested:
            break
        if page.raw_count < batch_limit:
            break  # pool exhausted
        if not page.thread_id:
            break

    outcome.profiles = outcome.profiles[:requested]
    return outcome
