#!/usr/bin/env python3
"""
Fill missing `image` fields in a catalog file with Google Books thumbnails.

Writes a backup (<file>.bak) before touching the catalog, then searches
Google Books by intitle:/inauthor: for every book without an image and stores
the first https thumbnail found. Books that already have an image are skipped.

Requires:
  - Network access to googleapis.com
  - Optionally GOOGLE_BOOKS_API_KEY in env (or --api-key) to raise the quota

Usage:
  From repo root:
    python -m bookscout.server.scripts.fetch_covers

  Optional:
    --catalog path/to/books.json
    --pause 0.3
    --dry-run
"""

import argparse
import os
import shutil
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from ...catalog import BUNDLED_CATALOG, GoogleBooksClient, load_catalog, save_catalog
from ...recommender.models.book import Book

DEFAULT_PAUSE_SECONDS = 0.3


def fill_covers(
    books: List[Book],
    client: GoogleBooksClient,
    pause: float = DEFAULT_PAUSE_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[List[Book], int]:
    """Return (books with covers filled in, number updated)."""
    out: List[Book] = []
    updated = 0
    total = len(books)
    for i, book in enumerate(books, start=1):
        if book.image and book.image.strip():
            print(f"{i}/{total} SKIP (has image): {book.title}")
            out.append(book)
            continue
        print(f'{i}/{total} Searching cover for: "{book.title}" by {book.author or "unknown author"}')
        cover = client.find_cover(book.title, book.author)
        if cover:
            out.append(book.model_copy(update={"image": cover}))
            updated += 1
            print(f"  Found cover: {cover}")
        else:
            out.append(book)
            print("  No cover found for this book.")
        if pause > 0:
            sleep(pause)
    return out, updated


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fill missing catalog cover images from Google Books")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=BUNDLED_CATALOG,
        help="Catalog JSON file to update (default: bundled books.json)",
    )
    parser.add_argument(
        "--api-key",
        default=os.environ.get("GOOGLE_BOOKS_API_KEY", ""),
        help="Google Books API key (default: GOOGLE_BOOKS_API_KEY)",
    )
    parser.add_argument(
        "--pause",
        type=float,
        default=DEFAULT_PAUSE_SECONDS,
        help="Seconds to wait between requests",
    )
    parser.add_argument("--dry-run", action="store_true", help="Search but do not write the catalog")
    args = parser.parse_args(argv)

    catalog_path: Path = args.catalog
    if not catalog_path.exists():
        print(f"Could not find catalog at: {catalog_path}", file=sys.stderr)
        return 1
    books = load_catalog(catalog_path)
    if not books:
        print(f"No books loaded from {catalog_path}", file=sys.stderr)
        return 1

    if not args.dry_run:
        backup_path = catalog_path.with_name(catalog_path.name + ".bak")
        shutil.copyfile(catalog_path, backup_path)
        print(f"Backup written to {backup_path}")

    client = GoogleBooksClient(api_key=args.api_key or None)
    books, updated = fill_covers(books, client, pause=args.pause)

    if args.dry_run:
        print(f"Dry run: {updated} covers found, catalog not written.")
        return 0
    try:
        save_catalog(books, catalog_path)
    except (OSError, TypeError, ValueError) as e:
        print(f"Failed to write {catalog_path}: {e}", file=sys.stderr)
        return 1
    print(f"Done. Updated {updated} books. Wrote file to {catalog_path}")
    print(f"To revert, restore the backup: {backup_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
