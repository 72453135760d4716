"""
Async load tester for the comparison API.

Each request compares one airport pair; pairs are cycled from --pairs.

Examples:
python scripts/load_test_runner.py --base-url http://localhost:8000 --concurrency 4 --requests 20
python scripts/load_test_runner.py --pairs LHR:CDG,JFK:LAX --endpoint /api/compare
"""

from __future__ import annotations

import argparse
import asyncio
import statistics
import time
from collections import Counter
from itertools import cycle
from typing import List, Tuple

import httpx


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load test the airport comparison API.")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL (without trailing slash).")
    parser.add_argument("--requests", type=int, default=20, help="Total requests to send.")
    parser.add_argument("--concurrency", type=int, default=4, help="Number of concurrent workers.")
    parser.add_argument("--endpoint", default="/api/compare", help="Comparison endpoint (relative to base).")
    parser.add_argument("--pairs", default="LHR:CDG,JFK:LAX,DXB:DOH", help="Comma-separated A:B airport pairs.")
    parser.add_argument("--timeout", type=float, default=120.0, help="Per-request timeout in seconds.")
    return parser.parse_args()


def parse_pairs(raw: str) -> List[Tuple[str, str]]:
    pairs = []
    for entry in raw.split(","):
        if ":" not in entry:
            continue
        a, b = entry.split(":", 1)
        if a.strip() and b.strip():
            pairs.append((a.strip().upper(), b.strip().upper()))
    return pairs


async def hammer(client: httpx.AsyncClient, endpoint: str, pair: Tuple[str, str], results: List[float], statuses: Counter) -> None:
    start = time.perf_counter()
    resp = await client.get(endpoint, params={"a": pair[0], "b": pair[1]})
    latency_ms = (time.perf_counter() - start) * 1000
    results.append(latency_ms)
    statuses[resp.status_code] += 1


async def run_load_test(base_url: str, endpoint: str, pairs: List[Tuple[str, str]], total: int, concurrency: int, timeout: float) -> None:
    results: List[float] = []
    statuses: Counter = Counter()
    pair_cycle = cycle(pairs)
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as client:
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded_hammer(pair):
            async with semaphore:
                await hammer(client, endpoint, pair, results, statuses)

        tasks = [asyncio.create_task(bounded_hammer(next(pair_cycle))) for _ in range(total)]
        await asyncio.gather(*tasks)

    if not results:
        print("No results collected.")
        return

    print(f"Completed {len(results)} comparisons against {base_url}{endpoint}")
    print("status codes: " + ", ".join(f"{code}={count}" for code, count in sorted(statuses.items())))
    print(f"p50: {statistics.median(results):.2f} ms")
    if len(results) >= 2:
        print(f"p90: {statistics.quantiles(results, n=10)[8]:.2f} ms")
    print(f"max: {max(results):.2f} ms")


def main() -> None:
    args = parse_args()
    pairs = parse_pairs(args.pairs)
    if not pairs:
        raise SystemExit("No valid airport pairs given. Use --pairs LHR:CDG,...")
    asyncio.run(
        run_load_test(args.base_url.rstrip("/"), args.endpoint, pairs, args.requests, args.concurrency, args.timeout)
    )


if __name__ == "__main__":
    main()
