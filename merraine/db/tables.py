"""Database table models."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from merraine.db.base import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Search(Base):
    """A named, saved search with its results."""

    __tablename__ = "searches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text)
    query: Mapped[str] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(Text, default=None)
    options: Mapped[dict] = mapped_column(JSON, default=dict)
    thread_id: Mapped[str | None] = mapped_column(Text, default=None)
    total_results: Mapped[int] = mapped_column(Integer, default=0)
    credits_used: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    results: Mapped[list["SearchCandidate"]] = relationship(
        back_populates="search", cascade="all, delete-orphan", order_by="SearchCandidate.position"
    )


class Candidate(Base):
    """A candidate profile, deduplicated by Pearch id across searches."""

    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pearch_id: Mapped[str] = mapped_column(String(255), unique=True)
    name: Mapped[str | None] = mapped_column(Text, default=None)
    headline: Mapped[str | None] = mapped_column(Text, default=None)
    location: Mapped[str | None] = mapped_column(Text, default=None)
    summary: Mapped[str | None] = mapped_column(Text, default=None)
    experience: Mapped[list | None] = mapped_column(JSON, default=None)
    education: Mapped[list | None] = mapped_column(JSON, default=None)
    skills: Mapped[list | None] = mapped_column(JSON, default=None)
    email: Mapped[str | None] = mapped_column(Text, default=None)
    phone: Mapped[str | None] = mapped_column(Text, default=None)
    linkedin_url: Mapped[str | None] = mapped_column(Text, default=None)
    picture_url: Mapped[str | None] = mapped_column(Text, default=None)
    score: Mapped[float | None] = mapped_column(Float, default=None)
    insights: Mapped[str | None] = mapped_column(Text, default=None)
    is_enriched: Mapped[bool] = mapped_column(Boolean, default=False)
    enriched_at: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    enrichment_options: Mapped[dict | None] = mapped_column(JSON, default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    searches: Mapped[list["SearchCandidate"]] = relationship(back_populates="candidate", cascade="all, delete-orphan")
    saved: Mapped["SavedCandidate | None"] = relationship(
        back_populates="candidate", uselist=False, cascade="all, delete-orphan"
    )


class SearchCandidate(Base):
    """Which candidates belong to which search, in result order."""

    __tablename__ = "search_candidates"

    search_id: Mapped[int] = mapped_column(ForeignKey("searches.id", ondelete="CASCADE"), primary_key=True)
    candidate_id: Mapped[int] = mapped_column(ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True)
    score: Mapped[float | None] = mapped_column(Float, default=None)
    position: Mapped[int | None] = mapped_column(Integer, default=None)

    search: Mapped["Search"] = relationship(back_populates="results")
    candidate: Mapped["Candidate"] = relationship(back_populates="searches")


class SavedCandidate(Base):
    """A candidate explicitly saved by the user, with notes."""

    __tablename__ = "saved_candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[int] = mapped_column(ForeignKey("candidates.id", ondelete="CASCADE"), unique=True)
    notes: Mapped[str] = mapped_column(Text, default="")
    saved_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    candidate: Mapped["Candidate"] = relationship(back_populates="saved")


class AppSetting(Base):
    """Key-value runtime settings (e.g. password hash override)."""

    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class CreditTransaction(Base):
    """Append-only credit ledger entry."""

    __tablename__ = "credit_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    operation: Mapped[str] = mapped_column(String(50))  # search_saved, enrich, balance_sync
    credits: Mapped[int] = mapped_column(Integer)
    details: Mapped[str | None] = mapped_column(Text, default=None)
    search_id: Mapped[int | None] = mapped_column(ForeignKey("searches.id", ondelete="SET NULL"), default=None)
    candidate_id: Mapped[int | None] = mapped_column(ForeignKey("candidates.id", ondelete="SET NULL"), default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
