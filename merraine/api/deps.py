"""Shared route dependencies."""

from fastapi import HTTPException

from merraine.clients.pearch import PearchClient, create_pearch_client


def get_pearch_client() -> PearchClient:
    """FastAPI dependency for the vendor client."""
    try:
        return create_pearch_client()
    except ValueError:
        raise HTTPException(status_code=500, detail="API key not configured")
