"""API request/response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from merraine.models import Profile


# Auth schemas
class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class ChangePasswordRequest(BaseModel):
    current_password: str = ""
    new_password: str = ""


# Search schemas
class CustomFilters(BaseModel):
    locations: list[str] | None = None
    keywords: list[str] | None = Field(default=None, description="Skills/keywords")
    titles: list[str] | None = None
    industries: list[str] | None = None
    companies: list[str] | None = None
    min_total_experience_years: int | None = None
    max_total_experience_years: int | None = None
    min_current_experience_years: int | None = None
    max_current_experience_years: int | None = None
    universities: list[str] | None = None
    degrees: list[Literal["bachelor", "master", "MBA", "doctor", "postdoc"]] | None = None
    languages: list[str] | None = None
    has_startup_experience: bool | None = None
    has_saas_experience: bool | None = None
    has_b2b_experience: bool | None = None
    has_b2c_experience: bool | None = None


class SearchRequest(BaseModel):
    query: str = ""
    type: Literal["pro", "fast"] = "fast"
    insights: bool = False
    profile_scoring: bool = False
    high_freshness: bool = False
    reveal_emails: bool = False
    reveal_phones: bool = False
    thread_id: str | None = Field(default=None, description="Continue a previous search")
    limit: int = Field(default=10, ge=1, le=500)
    custom_filters: CustomFilters | None = None
    offset: int | None = None
    docid_blacklist: list[str] | None = None
    strict_filters: bool | None = None
    filter_out_no_emails: bool | None = None
    filter_out_no_phones: bool | None = None
    filter_out_no_phones_or_emails: bool | None = None


class SearchResponse(BaseModel):
    profiles: list[Profile]
    thread_id: str | None
    credits_used: int | None
    total_count: int | None
    estimated_cost: int
    batches: int
    tier_counts: dict[str, int]
    scores_varied: bool
    cached: bool = False


class SimilarSearchResponse(BaseModel):
    query: str
    location: str
    url: str


# Job schemas
class JobPosting(BaseModel):
    job_id: str = ""
    job_description: str = ""


# Saved search schemas
class SaveSearchRequest(BaseModel):
    name: str = ""
    query: str = ""
    location: str | None = None
    options: dict = Field(default_factory=dict)
    thread_id: str | None = None
    credits_used: int | None = None
    profiles: list[Profile] = Field(default_factory=list)


class RenameSearchRequest(BaseModel):
    name: str = ""


class SearchSummaryResponse(BaseModel):
    id: int
    name: str
    query: str
    location: str | None
    total_results: int
    credits_used: int
    created_at: datetime

    class Config:
        from_attributes = True


class SearchDetailResponse(SearchSummaryResponse):
    options: dict
    thread_id: str | None
    updated_at: datetime
    candidates: list[Profile]


class SearchListResponse(BaseModel):
    searches: list[SearchSummaryResponse]


# Saved candidate schemas
class SaveCandidateRequest(BaseModel):
    profile: Profile
    notes: str = ""


class UpdateNotesRequest(BaseModel):
    notes: str = ""


class SavedCandidateResponse(Profile):
    saved_id: int
    saved_at: datetime
    notes: str


class SavedCandidateListResponse(BaseModel):
    candidates: list[SavedCandidateResponse]


# Credit schemas
class CreditTransactionResponse(BaseModel):
    id: int
    operation: str
    credits: int
    details: str | None
    search_id: int | None
    candidate_id: int | None
    created_at: datetime

    class Config:
        from_attributes = True


class CreditHistoryResponse(BaseModel):
    transactions: list[CreditTransactionResponse]


class BalanceResponse(BaseModel):
    credits_remaining: int | None
    source: Literal["live", "cached"] | None = None
