"""Credit balance and ledger endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from merraine.api.schemas import BalanceResponse, CreditHistoryResponse, CreditTransactionResponse
from merraine.clients.pearch import PearchClient, PearchError, create_pearch_client
from merraine.db import get_db, get_optional_db
from merraine.db import queries

router = APIRouter()
logger = logging.getLogger(__name__)

BALANCE_KEYS = ("credits_remaining", "credit_balance", "remaining_credits", "credits")


def get_balance_client() -> PearchClient | None:
    """Vendor client, or None when no key is configured (balance falls back to the DB)."""
    try:
        return create_pearch_client()
    except ValueError:
        return None


def _live_balance(client: PearchClient) -> int | None:
    try:
        data = client.get_user()
    except PearchError as e:
        logger.warning(f"Live balance unavailable: {e}")
        return None
    for key in BALANCE_KEYS:
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
    return None


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    client: PearchClient | None = Depends(get_balance_client),
    db: Session | None = Depends(get_optional_db),
):
    """Live Pearch balance, falling back to the last stored snapshot."""
    if client is not None:
        balance = _live_balance(client)
        if balance is not None:
            if db is not None:
                try:
                    queries.save_balance(db, balance)
                except SQLAlchemyError as e:
                    db.rollback()
                    logger.warning(f"Balance sync failed: {e}")
            return BalanceResponse(credits_remaining=balance, source="live")

    if db is not None:
        try:
            return BalanceResponse(credits_remaining=queries.get_last_known_balance(db), source="cached")
        except SQLAlchemyError as e:
            logger.warning(f"Stored balance unavailable: {e}")

    return BalanceResponse(credits_remaining=None)


@router.get("/history", response_model=CreditHistoryResponse)
def get_history(limit: int = 50, db: Session = Depends(get_db)):
    """Most recent credit transactions."""
    transactions = queries.get_credit_history(db, limit)
    return CreditHistoryResponse(transactions=[CreditTransactionResponse.model_validate(t) for t in transactions])


@router.get("/total")
def get_total(db: Session = Depends(get_db)):
    """Total credits recorded as spent."""
    return {"credits_used": queries.get_total_credits_used(db)}
