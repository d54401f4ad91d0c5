"""
partsync: validate scraped PCPartPicker listings and publish them to Supabase.

Usage:
    # CLI
    partsync run --data-dir data/json

    # Or programmatically
    from partsync import validate_all, transform_items, deduplicate_by_name

    result = validate_all("data/json")
    items = deduplicate_by_name(transform_items('ram', raw_items))
"""

from .config import CATEGORIES, CategoryConfig, Settings, get_settings
from .standardization import (
    deduplicate_by_name,
    transform_item,
    transform_items,
    validate_all,
    validate_category,
)
from .database import upload_all, upload_category

__all__ = [
    'CATEGORIES',
    'CategoryConfig',
    'Settings',
    'get_settings',
    'deduplicate_by_name',
    'transform_item',
    'transform_items',
    'validate_all',
    'validate_category',
    'upload_all',
    'upload_category',
]
