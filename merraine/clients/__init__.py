"""
Vendor API clients.

- pearch: Candidate search, enrichment and job matching via Pearch
"""

from merraine.clients.pearch import (
    PearchAuthError,
    PearchClient,
    PearchError,
    PearchRateLimitError,
    PearchTimeoutError,
    create_pearch_client,
)

__all__ = [
    "PearchClient",
    "PearchError",
    "PearchTimeoutError",
    "PearchRateLimitError",
    "PearchAuthError",
    "create_pearch_client",
]
