#!/usr/bin/env python3
"""
Create the Elasticsearch book index with the novel mapping.
Use --reset to drop the index (and every document in it) and recreate it,
e.g. after changing the publish_date format:
  python scripts/create_book_index.py
  python scripts/create_book_index.py --reset

Reads ELASTICSEARCH_URL and BOOK_INDEX from .env (default http://localhost:9200, "book").
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import get_settings
from app.search.elasticsearch_client import close_elasticsearch, ensure_book_index, reset_book_index


async def run(reset: bool) -> None:
    index = get_settings().book_index
    try:
        if reset:
            await reset_book_index()
            print(f"Recreated index '{index}'.")
        elif await ensure_book_index():
            print(f"Created index '{index}' with number_of_replicas=0.")
        else:
            print(f"Index '{index}' already exists. Use --reset to recreate it.")
    finally:
        await close_elasticsearch()


def main():
    ap = argparse.ArgumentParser(description="Create (or reset) the book index")
    ap.add_argument("--reset", action="store_true", help="Delete the index first, then create it")
    args = ap.parse_args()
    asyncio.run(run(args.reset))


if __name__ == "__main__":
    main()
