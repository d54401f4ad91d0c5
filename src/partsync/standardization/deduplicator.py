"""
Collapse canonical items that share a name.
"""

from typing import Dict, Iterable, List

from .transformer import as_number


def should_replace(existing: Dict, candidate: Dict) -> bool:
    """
    Keep the one with the lower price (prefer non-null prices).
    Equal prices keep the entry seen first.
    Non-numeric prices cannot be compared and rank like a null price.
    """
    candidate_price = as_number(candidate.get('price'), default=None)
    if candidate_price is None:
        return False
    existing_price = as_number(existing.get('price'), default=None)
    return existing_price is None or candidate_price < existing_price


def deduplicate_by_name(items: Iterable[Dict]) -> List[Dict]:
    """
    Deduplicate items by name, keeping the one with the lowest price.

    Names are compared exactly (case-sensitive). The result keeps the
    position where each name was first encountered.
    """
    seen: Dict[str, Dict] = {}

    for item in items:
        name = item['name']
        existing = seen.get(name)
        if existing is None or should_replace(existing, item):
            seen[name] = item

    return list(seen.values())


def count_duplicates(before: int, after: List[Dict]) -> int:
    """Number of entries removed by deduplication."""
    return before - len(after)
