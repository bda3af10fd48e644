"""Build "find similar candidates" search parameters from a profile."""

from urllib.parse import urlencode

from merraine.models import Profile

MAX_SIMILAR_SKILLS = 5


def build_similar_search_params(profile: Profile) -> dict[str, str]:
    """Query from the headline plus top skills, location kept as-is.

    "Senior Data Scientist" with ["Python", "TensorFlow"] becomes
    "Senior Data Scientist with Python, TensorFlow experience".
    """
    headline = (profile.headline or "").strip()
    skills = profile.skills[:MAX_SIMILAR_SKILLS]

    query = headline
    if skills:
        skills_list = ", ".join(skills)
        query = f"{headline} with {skills_list} experience" if headline else f"Professional with {skills_list} skills"

    if not query.strip():
        query = "Similar professional"

    return {"query": query.strip(), "location": (profile.location or "").strip()}


def build_similar_search_url(profile: Profile) -> str:
    params = build_similar_search_params(profile)
    query = {"q": params["query"]}
    if params["location"]:
        query["location"] = params["location"]
    return f"/search?{urlencode(query)}"
