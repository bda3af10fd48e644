"""
Normalize Pearch search responses into flat Profile records.

The vendor nests a "profile" object inside each entry of "search_results" and
keeps the relevance score at the result level. Fields are resolved through
FIELD_ALIASES: the first non-empty key wins, list values contribute their
first element.
"""

from typing import Any

from merraine.models import EducationEntry, ExperienceEntry, Profile, SearchPage

LINKEDIN_BASE = "https://linkedin.com/in/"

# Flat field -> vendor keys, most specific first
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "headline": ("title", "headline"),
    "location": ("location",),
    "summary": ("summary",),
    "email": ("email", "emails"),
    "phone": ("phone", "phones"),
    "insights": ("insights",),
    "picture_url": ("picture_url",),
}

ID_ALIASES: tuple[str, ...] = ("docid", "linkedin_slug")


def pick_first(record: dict, keys: tuple[str, ...]) -> Any:
    """Return the first non-empty value among keys, or "" when none is set."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, list):
            value = next((item for item in value if item), None)
        if value:
            return value
    return ""


def _as_score(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _entries(items: Any, model: type, fields: tuple[str, ...]) -> list:
    if not isinstance(items, list):
        return []
    return [model(**{f: _as_text(item.get(f)) for f in fields}) for item in items if isinstance(item, dict)]


def _full_name(profile: dict) -> str:
    parts = [profile.get("first_name") or "", profile.get("last_name") or ""]
    name = " ".join(p for p in parts if p)
    return name or profile.get("name") or "Unknown"


def normalize_profile(result: dict) -> Profile:
    """Flatten one vendor search result."""
    p = result.get("profile")
    p = p if isinstance(p, dict) else {}

    profile_id = pick_first(p, ID_ALIASES) or result.get("docid") or None

    # Score lives on the result; fall back to the profile for older payloads
    score = _as_score(result.get("score"))
    if score is None:
        score = _as_score(p.get("score"))

    slug = p.get("linkedin_slug")
    linkedin_url = f"{LINKEDIN_BASE}{slug}" if slug else (p.get("linkedin_url") or "")

    fields = {name: str(pick_first(p, keys)) for name, keys in FIELD_ALIASES.items()}

    skills = p.get("skills") or []
    return Profile(
        id=str(profile_id) if profile_id else None,
        name=_full_name(p),
        skills=[str(s) for s in skills if s] if isinstance(skills, list) else [],
        linkedin_url=linkedin_url,
        score=score,
        experience=_entries(p.get("experience"), ExperienceEntry, ("title", "company", "duration", "description")),
        education=_entries(p.get("education"), EducationEntry, ("school", "degree", "field")),
        **fields,
    )


def normalize_search_response(payload: dict) -> SearchPage:
    """Normalize a full /v2/search response."""
    results = payload.get("search_results") or []
    credits_used = payload.get("credits_used")
    total_count = payload.get("total_count")

    return SearchPage(
        profiles=[normalize_profile(r) for r in results if isinstance(r, dict)],
        thread_id=payload.get("thread_id") or None,
        credits_used=int(credits_used) if isinstance(credits_used, (int, float)) else None,
        total_count=int(total_count) if isinstance(total_count, (int, float)) else None,
        raw_count=len(results),
    )
