"""
Merraine AI Backend.

Core components:
- clients: Pearch vendor API client
- search: Batching, normalization and tier utilities for search results
- db: Saved searches, candidates and credit ledger
- api: FastAPI application and routes
"""
