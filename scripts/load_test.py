"""Load test: race reciprocal and duplicate likes against a running server.

Needs users created by ``scripts/seed_profiles.py``.  Each pair of seeded
users is used once, so reseed before running again.

Checks:
  * two simultaneous opposite likes give exactly one match, and exactly one
    of the two responses reports ``sideEffectsApplied``;
  * a burst of identical likes gives one 201 and 409 for the rest;
  * each matched user sees exactly one match with their partner.

Usage: python -m scripts.load_test [--users-file seeded_users.txt] [--pairs 20] [--burst 20]
"""
import argparse
import asyncio
import statistics
import sys
import time
from pathlib import Path
from typing import Any

import httpx


DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_USERS_FILE = "seeded_users.txt"
DEFAULT_PAIRS = 20
DEFAULT_BURST = 20


async def like(
    client: httpx.AsyncClient,
    base_url: str,
    from_user_id: str,
    to_user_id: str,
    timings: list[float],
) -> httpx.Response:
    t0 = time.monotonic()
    resp = await client.post(
        f"{base_url}/api/v1/dating/swipe",
        json={"targetUserId": to_user_id, "action": "LIKE"},
        headers={"X-User-Id": from_user_id},
    )
    timings.append(time.monotonic() - t0)
    return resp


async def race_pair(
    client: httpx.AsyncClient,
    base_url: str,
    u: str,
    v: str,
    results: dict[str, Any],
) -> None:
    """Fire u->v and v->u at the same time."""
    timings = results["timings"]["reciprocal"]
    first, second = await asyncio.gather(
        like(client, base_url, u, v, timings),
        like(client, base_url, v, u, timings),
    )
    if first.status_code != 201 or second.status_code != 201:
        results["errors"].append(
            f"Pair {u[:8]}x{v[:8]}: statuses {first.status_code}/{second.status_code}"
        )
        return

    data = [first.json()["data"], second.json()["data"]]
    applied = sum(d["sideEffectsApplied"] for d in data)
    match_ids = {d["match"]["id"] for d in data if d["matched"]}
    if applied != 1 or len(match_ids) != 1:
        results["errors"].append(
            f"Pair {u[:8]}x{v[:8]}: side effects applied {applied} times, "
            f"{len(match_ids)} distinct matches"
        )
        return
    results["pairs_matched"] += 1


async def duplicate_burst(
    client: httpx.AsyncClient,
    base_url: str,
    u: str,
    v: str,
    burst: int,
    results: dict[str, Any],
) -> None:
    """v likes u once, then u likes v ``burst`` times concurrently."""
    timings = results["timings"]["duplicate"]
    seed = await like(client, base_url, v, u, timings)
    if seed.status_code != 201:
        results["errors"].append(f"Burst seed like failed: {seed.status_code}")
        return

    responses = await asyncio.gather(
        *(like(client, base_url, u, v, timings) for _ in range(burst))
    )
    statuses = [r.status_code for r in responses]
    created, conflicts = statuses.count(201), statuses.count(409)
    results["burst"] = {"created": created, "conflicts": conflicts, "other": burst - created - conflicts}
    if created != 1 or conflicts != burst - 1:
        results["errors"].append(
            f"Burst {u[:8]}->{v[:8]}: {created} created, {conflicts} conflicts of {burst}"
        )


async def verify_matches(
    client: httpx.AsyncClient,
    base_url: str,
    pairs: list[tuple[str, str]],
    results: dict[str, Any],
) -> None:
    for u, v in pairs:
        for me, partner in ((u, v), (v, u)):
            resp = await client.get(
                f"{base_url}/api/v1/dating/matches",
                params={"limit": 100},
                headers={"X-User-Id": me},
            )
            if resp.status_code != 200:
                results["errors"].append(f"List matches for {me[:8]}: {resp.status_code}")
                continue
            partners = [item["matchedUser"]["id"] for item in resp.json()["data"]["data"]]
            if partners.count(partner) != 1:
                results["errors"].append(
                    f"User {me[:8]} sees {partners.count(partner)} matches with {partner[:8]}"
                )


async def run_load_test(base_url: str, user_ids: list[str], n_pairs: int, burst: int) -> dict[str, Any]:
    """Run the race scenarios and verify the stored matches."""
    print(f"\n{'='*60}")
    print(f"Matchmaker Load Test — {n_pairs} racing pairs, burst of {burst}")
    print(f"Target: {base_url}")
    print(f"{'='*60}\n")

    results: dict[str, Any] = {
        "pairs": n_pairs,
        "pairs_matched": 0,
        "burst": {},
        "errors": [],
        "timings": {"reciprocal": [], "duplicate": []},
    }

    needed = 2 * n_pairs + 2
    if len(user_ids) < needed:
        results["errors"].append(f"Need {needed} seeded users, got {len(user_ids)}")
        return results

    pairs = [(user_ids[2 * i], user_ids[2 * i + 1]) for i in range(n_pairs)]
    burst_u, burst_v = user_ids[2 * n_pairs], user_ids[2 * n_pairs + 1]

    async with httpx.AsyncClient(timeout=30.0) as client:
        print(f"[1/3] Racing reciprocal likes for {n_pairs} pairs...")
        await asyncio.gather(*(race_pair(client, base_url, u, v, results) for u, v in pairs))
        print(f"  -> {results['pairs_matched']}/{n_pairs} pairs matched exactly once\n")

        print(f"[2/3] Firing {burst} identical likes...")
        await duplicate_burst(client, base_url, burst_u, burst_v, burst, results)
        print(f"  -> {results['burst']}\n")

        print("[3/3] Verifying match lists...")
        await verify_matches(client, base_url, pairs, results)
        print("  -> done\n")

    print(f"{'='*60}")
    print("LOAD TEST RESULTS")
    print(f"{'='*60}")
    print(f"Pairs matched once: {results['pairs_matched']}/{n_pairs}")
    print(f"Burst outcome:      {results['burst']}")

    for phase, timings in results["timings"].items():
        if timings:
            print(f"\n{phase} latency:")
            print(f"  mean:   {statistics.mean(timings):.3f}s")
            print(f"  median: {statistics.median(timings):.3f}s")
            print(f"  p95:    {sorted(timings)[int(len(timings)*0.95)]:.3f}s")
            print(f"  max:    {max(timings):.3f}s")

    if results["errors"]:
        print(f"\nErrors ({len(results['errors'])}):")
        for e in results["errors"][:10]:
            print(f"  - {e}")

    print(f"\n{'='*60}\n")
    return results


def main():
    parser = argparse.ArgumentParser(description="Matchmaker Load Test")
    parser.add_argument("--base-url", type=str, default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument("--users-file", type=Path, default=Path(DEFAULT_USERS_FILE), help="Seeded user ids")
    parser.add_argument("--pairs", type=int, default=DEFAULT_PAIRS, help="Number of racing pairs")
    parser.add_argument("--burst", type=int, default=DEFAULT_BURST, help="Identical likes per burst")
    args = parser.parse_args()

    user_ids = [line.strip() for line in args.users_file.read_text().splitlines() if line.strip()]
    results = asyncio.run(run_load_test(args.base_url, user_ids, args.pairs, args.burst))

    if results["errors"]:
        print(f"FAIL: {len(results['errors'])} invariant violations")
        sys.exit(1)
    print("PASS: every race resolved to a single match")


if __name__ == "__main__":
    main()
