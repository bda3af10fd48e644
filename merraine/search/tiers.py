"""
Tier grouping, sorting and deduplication for search results.

Pearch returns scores on several scales: 0.0-1.0 decimals, a 0-4 rating, or
an already computed percentage. Everything is converted to 0-100 first.

NOTE: Pearch currently returns score=4 for every matched candidate, so all
results land in "excellent" with no differentiation. has_varied_scores()
reports that case; it is not corrected here.
"""

import math
import re
from dataclasses import dataclass
from typing import Literal

from merraine.models import Profile

TierName = Literal["excellent", "good", "fair", "below"]
SortColumn = Literal["name", "score", "location"]
SortDirection = Literal["asc", "desc"]

NO_SCORE = -1


@dataclass(frozen=True)
class TierInfo:
    name: TierName
    label: str
    min_score: int
    max_score: int
    color: str


TIERS: tuple[TierInfo, ...] = (
    TierInfo("excellent", "Excellent Match", 90, 100, "#30D158"),
    TierInfo("good", "Good Match", 70, 89, "#0A84FF"),
    TierInfo("fair", "Fair Match", 50, 69, "#FF9500"),
    # "below" holds low scores and unscored results alike
    TierInfo("below", "Search Results", -999, 49, "#0A84FF"),
)

TIER_NAMES: tuple[TierName, ...] = tuple(t.name for t in TIERS)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_to_percentage(score: float | None) -> int:
    """Convert a vendor score to 0-100, or NO_SCORE when missing."""
    if score is None:
        return NO_SCORE
    if score > 100:
        return 100
    if score > 4:
        return _round_half_up(score)
    if score > 1:
        return _round_half_up(score / 4 * 100)
    return _round_half_up(score * 100)


def has_varied_scores(profiles: list[Profile]) -> bool:
    """True when at least two distinct scores are present."""
    scores = [p.score for p in profiles if p.score is not None]
    if len(scores) < 2:
        return False
    return len(set(scores)) > 1


def get_tier_for_score(score_percent: int) -> TierInfo:
    for tier in TIERS:
        if tier.min_score <= score_percent <= tier.max_score:
            return tier
    return TIERS[-1]


def group_by_tier(profiles: list[Profile]) -> dict[TierName, list[Profile]]:
    groups: dict[TierName, list[Profile]] = {name: [] for name in TIER_NAMES}
    for profile in profiles:
        tier = get_tier_for_score(score_to_percentage(profile.score))
        groups[tier.name].append(profile)
    return groups


def get_tier_counts(groups: dict[TierName, list[Profile]]) -> dict[TierName, int]:
    return {name: len(groups.get(name, [])) for name in TIER_NAMES}


def get_total_count(groups: dict[TierName, list[Profile]]) -> int:
    return sum(len(members) for members in groups.values())


def sort_profiles(
    profiles: list[Profile],
    column: SortColumn = "score",
    direction: SortDirection = "desc",
) -> list[Profile]:
    """Return a new list sorted by column; the sort is stable for ties."""
    if column == "name":
        key = lambda p: (p.name or "").lower()  # noqa: E731
    elif column == "location":
        key = lambda p: (p.location or "").lower()  # noqa: E731
    elif column == "score":
        key = lambda p: score_to_percentage(p.score)  # noqa: E731
    else:
        return list(profiles)
    return sorted(profiles, key=key, reverse=direction == "desc")


def generate_profile_key(profile: Profile) -> str:
    """Deterministic fallback key for profiles without an id."""
    parts = [
        profile.name or "unknown",
        profile.linkedin_url,
        profile.email,
        profile.headline,
        profile.location,
    ]
    key = "-".join(p for p in parts if p).lower()
    return re.sub(r"\s+", "-", key)


def deduplicate_profiles(profiles: list[Profile]) -> list[Profile]:
    """Keep one profile per id, preferring the highest score.

    Order follows first appearance of each id.
    """
    seen: dict[str, Profile] = {}
    for profile in profiles:
        key = profile.id or generate_profile_key(profile)
        existing = seen.get(key)
        if existing is None or (profile.score or 0) > (existing.score or 0):
            seen[key] = profile
    return list(seen.values())
