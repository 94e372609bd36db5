#!/usr/bin/env python3
"""
Seed a local SQLite search database from a JSONL crawl dump.

Each line: {"url": ..., "title": ..., "description": ..., "text": ..., "links": [url, ...]}

Page text goes through the same lexicon as queries, so stored keywords are
canonical word forms. Links are recorded after every page is inserted.
Lines that cannot be stored (invalid JSON, missing url, duplicate url) are
logged and skipped.

Usage:
    python scripts/seed_search_db.py --input crawl.jsonl --db data/search.db
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Optional, Union

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from modules.errors import StoreError
from modules.lexicon import Lexicon
from services.search_api import settings
from services.search_api.store import SqliteDocumentStore

logger = logging.getLogger("seed_search_db")


def seed(
    input_path: Union[str, Path],
    store: SqliteDocumentStore,
    lexicon: Lexicon,
    limit: Optional[int] = None,
) -> int:
    """
    Load pages from ``input_path`` into ``store``.

    Returns:
        Number of pages inserted
    """
    pending_links = []
    pages = 0
    with open(input_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                page = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping invalid JSON on line {line_num}: {e}")
                continue
            if not isinstance(page, dict) or not page.get("url"):
                logger.warning(f"Skipping line {line_num}: missing url")
                continue

            title = page.get("title") or ""
            terms = lexicon.normalize(f"{title} {page.get('text') or ''}")
            try:
                webpage_id = store.add_webpage(
                    url=page["url"],
                    keywords=dict(Counter(terms)),
                    title=title,
                    description=page.get("description") or "",
                    word_count=len(terms),
                )
            except StoreError as e:
                logger.warning(f"Skipping line {line_num} ({page['url']}): {e}")
                continue
            pending_links.append((webpage_id, page.get("links") or []))
            pages += 1
            if limit and pages >= limit:
                break

    for webpage_id, targets in pending_links:
        if targets:
            store.add_links(webpage_id, targets)
    return pages


def main():
    ap = argparse.ArgumentParser(description="Seed the search database from a JSONL crawl dump")
    ap.add_argument("--input", required=True, help="JSONL file with crawled pages")
    ap.add_argument("--db", default=str(settings.DATABASE_PATH), help="SQLite database path")
    ap.add_argument("--lemmas", default=str(settings.LEMMA_PATH), help="Lemma word list")
    ap.add_argument("--limit", type=int, default=None, help="Stop after this many pages")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    lexicon = Lexicon.from_file(args.lemmas)
    store = SqliteDocumentStore(args.db)
    store.init_schema()

    pages = seed(args.input, store, lexicon, limit=args.limit)
    logger.info(f"SEED OK: {args.db}, pages={pages}, corpus={store.corpus_document_count()}")


if __name__ == "__main__":
    main()
