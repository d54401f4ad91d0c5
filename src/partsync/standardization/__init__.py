"""
Standardization of scraped PCPartPicker category files.

Main Functions:
    validate_all: Pre-flight checks over every category file
    transform_items: Map raw items of one category to canonical items
    deduplicate_by_name: Keep one item per name, cheapest first
"""

from .deduplicator import deduplicate_by_name
from .loader import load_json_array
from .transformer import TRANSFORMERS, transform_item, transform_items
from .validator import ValidationResult, validate_all, validate_category

__all__ = [
    'deduplicate_by_name',
    'load_json_array',
    'TRANSFORMERS',
    'transform_item',
    'transform_items',
    'ValidationResult',
    'validate_all',
    'validate_category',
]
