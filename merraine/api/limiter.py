"""Rate limiter shared by the API routes.

In-memory, fixed window, per client IP. Not shared across instances.
"""

from fastapi import Request
from slowapi import Limiter


def client_identifier(request: Request) -> str:
    """First X-Forwarded-For address, then X-Real-IP, else "unknown"."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return "unknown"


limiter = Limiter(key_func=client_identifier, headers_enabled=True, storage_uri="memory://")
