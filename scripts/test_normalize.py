"""Vendor response normalization."""

from merraine.search.normalize import normalize_profile, normalize_search_response, pick_first


def test_flattens_nested_profile_and_reads_result_score():
    result = {
        "docid": "result-doc",
        "score": 3.5,
        "profile": {
            "docid": "abc123",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "title": "Staff Engineer",
            "headline": "Ignored headline",
            "location": "London",
            "summary": "Builds engines",
            "skills": ["Python", "Math"],
            "emails": ["ada@example.com", "other@example.com"],
            "phones": ["+44 1234"],
            "linkedin_slug": "ada-lovelace",
            "insights": "Strong fit",
            "picture_url": "https://img.example/ada.png",
            "experience": [{"title": "Engineer", "company": "Analytical", "duration": 5}],
            "education": [{"school": "Home", "degree": "None"}],
        },
    }

    profile = normalize_profile(result)

    assert profile.id == "abc123"
    assert profile.name == "Ada Lovelace"
    assert profile.headline == "Staff Engineer"
    assert profile.location == "London"
    assert profile.skills == ["Python", "Math"]
    assert profile.email == "ada@example.com"
    assert profile.phone == "+44 1234"
    assert profile.linkedin_url == "https://linkedin.com/in/ada-lovelace"
    assert profile.score == 3.5
    assert profile.insights == "Strong fit"
    assert profile.experience[0].company == "Analytical"
    assert profile.experience[0].duration == "5"
    assert profile.education[0].school == "Home"


def test_single_email_field_wins_over_list():
    profile = normalize_profile({"profile": {"docid": "x", "email": "main@example.com", "emails": ["b@example.com"]}})
    assert profile.email == "main@example.com"


def test_id_falls_back_to_slug_then_result_docid():
    assert normalize_profile({"docid": "r1", "profile": {"linkedin_slug": "jane"}}).id == "jane"
    assert normalize_profile({"docid": "r1", "profile": {}}).id == "r1"
    assert normalize_profile({"profile": {}}).id is None


def test_missing_score_is_none_not_zero():
    assert normalize_profile({"docid": "a", "profile": {}}).score is None
    assert normalize_profile({"docid": "a", "score": 0, "profile": {}}).score == 0.0


def test_profile_level_score_used_when_result_has_none():
    assert normalize_profile({"docid": "a", "profile": {"score": 0.8}}).score == 0.8


def test_name_and_linkedin_fallbacks():
    profile = normalize_profile({"docid": "a", "profile": {"linkedin_url": "https://linkedin.com/in/x"}})
    assert profile.name == "Unknown"
    assert profile.linkedin_url == "https://linkedin.com/in/x"
    assert profile.headline == ""


def test_search_response_metadata():
    page = normalize_search_response(
        {
            "search_results": [{"docid": "a", "profile": {}}, {"docid": "b", "profile": {}}],
            "thread_id": "t-1",
            "credits_used": 12,
            "total_count": 340,
        }
    )
    assert [p.id for p in page.profiles] == ["a", "b"]
    assert page.thread_id == "t-1"
    assert page.credits_used == 12
    assert page.total_count == 340
    assert page.raw_count == 2


def test_empty_search_response():
    page = normalize_search_response({})
    assert page.profiles == []
    assert page.thread_id is None
    assert page.credits_used is None


def test_pick_first_skips_empty_values():
    assert pick_first({"a": "", "b": [], "c": ["", "x"]}, ("a", "b", "c")) == "x"
    assert pick_first({}, ("a",)) == ""


def test_non_dict_profile_is_treated_as_empty():
    profile = normalize_profile({"docid": "doc-1", "score": 2, "profile": "unexpected"})

    assert profile.id == "doc-1"
    assert profile.name == "Unknown"
    assert profile.score == 2.0
