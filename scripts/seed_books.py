#!/usr/bin/env python3
"""
Seed script: adds random novels via the HTTP API (no direct ES access).
Run: API must be running.
  python scripts/seed_books.py
  python scripts/seed_books.py --count 200 --base-url http://localhost:8000
"""

import argparse
import random
from datetime import datetime, timedelta

import httpx

API_BASE = "http://localhost:8000"

TITLES = [
    "The Silent River", "Autumn in the Capital", "A Lantern for Winter", "The Glass Orchard",
    "Letters from the Border", "Midnight Ferry", "The Cartographer's Daughter", "Salt and Iron",
    "Journey to the West", "Dream of the Red Chamber", "Fortress Besieged", "Camel Xiangzi",
]

AUTHORS = [
    "Lu Xun", "Lao She", "Qian Zhongshu", "Ba Jin", "Eileen Chang",
    "Mo Yan", "Yu Hua", "Jin Yong", "Gu Long", "Wang Xiaobo",
]


def random_book() -> dict:
    """Form fields for POST /add/book/novel."""
    published = datetime(1920, 1, 1) + timedelta(days=random.randint(0, 365 * 100))
    return {
        "title": random.choice(TITLES),
        "author": random.choice(AUTHORS),
        "word_count": str(random.randint(1000, 500000)),
        "publish_date": published.strftime("%Y-%m-%d %H:%M:%S"),
    }


def main():
    ap = argparse.ArgumentParser(description="Seed novels via API")
    ap.add_argument("--count", type=int, default=50, help="Number of books to add")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []
    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Adding {args.count} books...")
        for i in range(args.count):
            try:
                r = client.post("/add/book/novel", data=random_book())
                if r.status_code == 200:
                    created += 1
                else:
                    errors.append(f"Book {i + 1}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Book {i + 1}: {e}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i + 1} books")

    print(f"\nDone. Books created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
