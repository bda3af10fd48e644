"""Candidate profile models shared by the search pipeline and the API."""

from pydantic import BaseModel, Field


class ExperienceEntry(BaseModel):
    title: str | None = None
    company: str | None = None
    duration: str | None = None
    description: str | None = None


class EducationEntry(BaseModel):
    school: str | None = None
    degree: str | None = None
    field: str | None = None


class Profile(BaseModel):
    """Flat candidate record produced from a vendor search result."""

    id: str | None = None
    name: str = ""
    headline: str = ""
    location: str = ""
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    email: str = ""
    phone: str = ""
    linkedin_url: str = ""
    score: float | None = None
    insights: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    picture_url: str = ""


class SearchPage(BaseModel):
    """One vendor search response after normalization."""

    profiles: list[Profile] = Field(default_factory=list)
    thread_id: str | None = None
    credits_used: int | None = None
    total_count: int | None = None
    raw_count: int = 0
