#!/usr/bin/env python3
"""
Upload standardized PCPartPicker data to Supabase.

Transforms raw data to match the pcpartpicker_prices table schema
and upserts in batches keyed on (category, name).
"""
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from postgrest.exceptions import APIError
from postgrest.types import ReturnMethod

from ...config import (
    BATCH_SIZE,
    CATEGORIES,
    DEFAULT_TABLE,
    ON_CONFLICT,
    CategoryConfig,
    category_path,
)
from ...exceptions import InputError, PublishError
from ...standardization.deduplicator import count_duplicates, deduplicate_by_name
from ...standardization.loader import load_json_array, split_raw_items
from ...standardization.transformer import transform_items


@dataclass
class UploadSummary:
    uploaded: Dict[str, int] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.uploaded.values())

    @property
    def passed(self) -> bool:
        return not self.skipped


def chunked(items: List[Dict], size: int = BATCH_SIZE) -> Iterator[List[Dict]]:
    """Yield consecutive slices of at most `size` items, in order."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def build_rows(items: List[Dict], updated_at: str) -> List[Dict]:
    """Map canonical items to pcpartpicker_prices rows."""
    return [
        {
            'category': item['category'],
            'name': item['name'],
            'price': item['price'],
            'chipset': item['chipset'],
            'specs': item['specs'],
            'updated_at': updated_at,
        }
        for item in items
    ]


def upsert_batch(supabase, rows: List[Dict], table: str = DEFAULT_TABLE) -> None:
    """
    Upsert one batch. Existing (category, name) rows are overwritten,
    new ones inserted.

    Raises:
        PublishError: Supabase rejected the request
    """
    try:
        supabase.table(table).upsert(
            rows,
            on_conflict=ON_CONFLICT,
            ignore_duplicates=False,
            returning=ReturnMethod.minimal,
        ).execute()
    except APIError as e:
        detail = e.message or str(e)
        if e.details:
            detail = f"{detail} ({e.details})"
        raise PublishError(e.code, detail, status=http_status_from_code(e.code)) from e


def http_status_from_code(code) -> Optional[int]:
    """
    PostgREST codes look like '23505' or 'PGRST116'; the client only puts an
    HTTP status (e.g. 502) in `code` when the error body was not JSON.
    """
    try:
        value = int(code)
    except (TypeError, ValueError):
        return None
    return value if 100 <= value <= 599 else None


def upload_category(category: str, config: CategoryConfig, supabase, data_dir: str,
                    table: str = DEFAULT_TABLE, batch_size: int = BATCH_SIZE,
                    now: Optional[datetime] = None) -> int:
    """
    Load, transform, deduplicate and upsert one category.

    Args:
        category: Scraper category name (e.g. 'video-card')
        config: Its CategoryConfig
        supabase: Supabase client
        data_dir: Directory holding the scraped JSON files
        now: Transform timestamp stamped on every row (default: current UTC time)

    Returns:
        Number of deduplicated items upserted

    Raises:
        InputError: file missing or not a JSON array
        PublishError: a batch failed; remaining batches are not attempted
    """
    raw_items, rejected = split_raw_items(load_json_array(category_path(data_dir, config)))
    if rejected:
        print(f"  ⚠️  {category}: skipped {rejected} entries without a name")

    updated_at = (now or datetime.now(timezone.utc)).isoformat()
    transformed = transform_items(config.canonical_name, raw_items)

    original_count = len(transformed)
    deduped = deduplicate_by_name(transformed)
    duplicates = count_duplicates(original_count, deduped)
    print(f"  📦 {config.canonical_name.upper()}: {original_count} items ({duplicates} duplicates removed)")

    batches = list(chunked(deduped, batch_size))
    for i, batch in enumerate(batches, 1):
        upsert_batch(supabase, build_rows(batch, updated_at), table=table)
        sys.stdout.write(f"  ⬆️  Uploaded batch {i}/{len(batches)}\r")
        sys.stdout.flush()
    print('')

    return len(deduped)


def upload_all(supabase, data_dir: str, categories: Optional[Dict[str, CategoryConfig]] = None,
               table: str = DEFAULT_TABLE, batch_size: int = BATCH_SIZE) -> UploadSummary:
    """
    Upload every category sequentially.

    Categories with a missing or unreadable file are skipped and reported;
    the first failed batch stops the whole run by raising PublishError.
    """
    categories = CATEGORIES if categories is None else categories
    summary = UploadSummary()

    for category, config in categories.items():
        try:
            count = upload_category(category, config, supabase, data_dir,
                                    table=table, batch_size=batch_size)
        except InputError as e:
            print(f"  ✗ {category}: {e}")
            summary.skipped.append(category)
            continue
        summary.uploaded[config.canonical_name] = count

    return summary


def print_upload_summary(summary: UploadSummary):
    """Print final upload summary."""
    print("\n" + "=" * 36)
    if summary.skipped:
        print(f"✗ Skipped categories: {', '.join(summary.skipped)}")
        print(f"✗ Upload incomplete: {summary.total} items upserted to Supabase.")
    else:
        print(f"✓ Upload complete! {summary.total} items upserted to Supabase.")
