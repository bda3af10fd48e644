"""
Merraine AI - CLI Entry Point.

Runs a candidate search from the terminal and prints results by match tier,
or starts the API server with --serve.
"""

import argparse
import logging

from dotenv import load_dotenv

load_dotenv()

from merraine.clients.pearch import PearchError, calculate_search_cost, create_pearch_client  # noqa: E402
from merraine.config import settings  # noqa: E402
from merraine.search.batching import run_search  # noqa: E402
from merraine.search.tiers import TIERS, group_by_tier, has_varied_scores, score_to_percentage  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merraine AI candidate search")
    parser.add_argument("query", nargs="*", help="Search query, e.g. 'senior python engineer in Berlin'")
    parser.add_argument("--limit", type=int, default=10, help="Number of profiles to fetch")
    parser.add_argument("--pro", action="store_true", help="Use the pro search tier")
    parser.add_argument("--insights", action="store_true")
    parser.add_argument("--scoring", action="store_true", help="Enable profile scoring")
    parser.add_argument("--fresh", action="store_true", help="Request high freshness data")
    parser.add_argument("--emails", action="store_true", help="Reveal emails")
    parser.add_argument("--phones", action="store_true", help="Reveal phones")
    parser.add_argument("--serve", action="store_true", help="Run the API server instead")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args()


def serve(port: int) -> None:
    import uvicorn

    uvicorn.run("merraine.api.app:app", host="0.0.0.0", port=port)


def main():
    """Run the Merraine AI CLI."""
    args = parse_args()
    logging.basicConfig(level=settings.log_level)

    if args.serve:
        serve(args.port)
        return

    query = " ".join(args.query).strip()
    if not query:
        print("Error: a search query is required (or use --serve)")
        return

    params = {
        "query": query,
        "type": "pro" if args.pro else "fast",
        "insights": args.insights,
        "profile_scoring": args.scoring,
        "high_freshness": args.fresh,
        "reveal_emails": args.emails,
        "reveal_phones": args.phones,
        "limit": args.limit,
    }

    print("Merraine AI Candidate Search")
    print("=" * 40)
    print(f"Query: {query}")
    print(f"Estimated cost: {calculate_search_cost(params, args.limit)} credits")

    try:
        client = create_pearch_client()
    except ValueError as e:
        print(f"Error: {e}")
        return

    try:
        outcome = run_search(client, params, settings.pearch_max_per_call)
    except PearchError as e:
        print(f"Search failed: {e}")
        return

    print(f"Found {len(outcome.profiles)} profiles in {outcome.calls} call(s)")
    if outcome.credits_used is not None:
        print(f"Credits used: {outcome.credits_used}")
    if outcome.profiles and not has_varied_scores(outcome.profiles):
        print("Note: all results share the same score, tiers are not meaningful")

    groups = group_by_tier(outcome.profiles)
    for tier in TIERS:
        members = groups[tier.name]
        if not members:
            continue
        print(f"\n{tier.label} ({len(members)})")
        print("-" * 40)
        for profile in members:
            pct = score_to_percentage(profile.score)
            score = f"{pct}%" if pct >= 0 else "n/a"
            print(f"  {profile.name} [{score}] {profile.headline}")
            if profile.location:
                print(f"    {profile.location}")
            if profile.linkedin_url:
                print(f"    {profile.linkedin_url}")

    if outcome.thread_id:
        print(f"\nThread: {outcome.thread_id}")


if __name__ == "__main__":
    main()
