"""
Pearch API client.

Wraps the vendor's search, enrich and job endpoints with a bounded timeout,
fixed-delay retries for transient failures and classified errors.
"""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from merraine.config import settings

logger = logging.getLogger(__name__)

PEARCH_API_BASE = "https://api.pearch.ai"
RETRY_DELAYS: tuple[float, ...] = (1.0, 3.0)


class PearchError(Exception):
    """Generic Pearch API failure."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PearchTimeoutError(PearchError):
    """The vendor did not answer within the timeout."""


class PearchRateLimitError(PearchError):
    """The vendor rejected the call with 429."""


class PearchAuthError(PearchError):
    """The vendor rejected our API key (401/403)."""


def calculate_search_cost(params: dict, estimated_profiles: int = 10) -> int:
    """Estimate credits for a search from its feature flags."""
    cost_per_profile = 5 if params.get("type") == "pro" else 1
    if params.get("insights"):
        cost_per_profile += 1
    if params.get("profile_scoring"):
        cost_per_profile += 1
    if params.get("high_freshness"):
        cost_per_profile += 2
    if params.get("reveal_emails"):
        cost_per_profile += 2
    if params.get("reveal_phones"):
        cost_per_profile += 14
    return cost_per_profile * estimated_profiles


def calculate_enrich_cost(params: dict) -> int:
    """Estimate credits for a single profile enrichment."""
    cost = 1
    if params.get("high_freshness"):
        cost += 2
    if params.get("reveal_emails"):
        cost += 2
    if params.get("reveal_phones"):
        cost += 14
    return cost


class PearchClient:
    """Stateless Pearch API client."""

    def __init__(
        self,
        api_key: str,
        base_url: str = PEARCH_API_BASE,
        timeout: float = 30.0,
        retry_delays: Sequence[float] = RETRY_DELAYS,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_delays = tuple(retry_delays)
        self._transport = transport
        self._sleep = sleep

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        """Call the vendor, retrying timeouts, 429 and 5xx with fixed delays."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        attempts = len(self.retry_delays) + 1
        last_error: PearchError | None = None

        with httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            for attempt in range(attempts):
                try:
                    response = client.request(method, endpoint, headers=headers, params=params, json=json)
                except httpx.TimeoutException:
                    last_error = PearchTimeoutError(
                        f"Pearch API timed out after {self.timeout}s ({endpoint})", status_code=504
                    )
                except httpx.TransportError as e:
                    raise PearchError(f"Pearch API unreachable: {e}") from e
                else:
                    status = response.status_code
                    if status in (401, 403):
                        raise PearchAuthError(
                            f"Pearch API authentication failed: {status} - {response.text}", status_code=status
                        )
                    if status == 429:
                        last_error = PearchRateLimitError(
                            f"Pearch API rate limit exceeded: {response.text}", status_code=status
                        )
                    elif status >= 500:
                        last_error = PearchError(f"Pearch API error: {status} - {response.text}", status_code=status)
                    elif response.is_error:
                        raise PearchError(f"Pearch API error: {status} - {response.text}", status_code=status)
                    else:
                        try:
                            return response.json()
                        except ValueError as e:
                            raise PearchError(f"Pearch API returned invalid JSON: {e}", status_code=status) from e

                if attempt < len(self.retry_delays):
                    delay = self.retry_delays[attempt]
                    logger.warning(f"Pearch {method} {endpoint} failed ({last_error}), retrying in {delay}s")
                    self._sleep(delay)

        raise last_error

    def search(self, params: dict) -> dict:
        return self._request("POST", "/v2/search", json=params)

    def enrich_profile(self, params: dict) -> dict:
        """Fetch a single profile; only flags that are set are sent."""
        query = {"docid": params["id"]}  # Pearch expects 'docid', not 'id'
        for flag in ("high_freshness", "reveal_emails", "reveal_phones", "with_profile"):
            if params.get(flag):
                query[flag] = "true"
        return self._request("GET", "/v1/profile", params=query)

    def upsert_jobs(self, jobs: list[dict]) -> dict:
        return self._request("POST", "/v1/upsert_jobs", json=jobs)

    def find_matching_jobs(self, profile: dict) -> dict:
        return self._request("POST", "/v1/find_matching_jobs", json=profile)

    def list_jobs(self, limit: int | None = None) -> dict:
        params = {"limit": limit} if limit else None
        return self._request("GET", "/v1/list_jobs", params=params)

    def delete_jobs(self, job_ids: list[str]) -> dict:
        return self._request("POST", "/v1/delete_jobs", json=job_ids)

    def get_user(self) -> dict:
        """Account details, including remaining credits."""
        return self._request("GET", "/v1/user")


def create_pearch_client(api_key: str | None = None) -> PearchClient:
    """Build a client from application settings."""
    key = api_key if api_key is not None else settings.pearch_api_key
    if not key:
        raise ValueError("PEARCH_API_KEY not set")
    return PearchClient(
        api_key=key,
        base_url=settings.pearch_api_base,
        timeout=settings.pearch_timeout,
        retry_delays=settings.pearch_retry_delays,
    )
