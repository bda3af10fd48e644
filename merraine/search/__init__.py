"""
Search pipeline.

- normalize: Flatten vendor results into Profile records
- batching: Split large requests into sequential vendor calls
- tiers: Score tiers, sorting and deduplication
- similar: "Find similar" query builder
- cache: Short-lived search response cache
"""

from merraine.search.batching import BatchedSearch, run_search
from merraine.search.normalize import normalize_profile, normalize_search_response
from merraine.search.tiers import deduplicate_profiles, group_by_tier, score_to_percentage

__all__ = [
    "BatchedSearch",
    "run_search",
    "normalize_profile",
    "normalize_search_response",
    "deduplicate_profiles",
    "group_by_tier",
    "score_to_percentage",
]
