"""
Read scraped category files.
"""

import json
from pathlib import Path
from typing import Dict, List, Tuple

from ..exceptions import MalformedFileError, MissingFileError


def load_json_array(path: str) -> List:
    """
    Load a category file and check it holds a top-level JSON array.

    Raises:
        MissingFileError: file does not exist
        MalformedFileError: file cannot be read, is not valid JSON, or not an array
    """
    p = Path(path)
    if not p.exists():
        raise MissingFileError(f"Missing file {p.name}", path=str(p))

    try:
        with p.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedFileError(f"Failed to parse {p.name} - {e}", path=str(p)) from e
    except OSError as e:
        raise MalformedFileError(f"Failed to read {p.name} - {e}", path=str(p)) from e

    if not isinstance(data, list):
        raise MalformedFileError(
            f"Failed to parse {p.name} - expected a JSON array, got {type(data).__name__}",
            path=str(p),
        )

    return data


def split_raw_items(data: List) -> Tuple[List[Dict], int]:
    """
    Keep only entries that can be transformed (objects carrying a name).

    Returns:
        (usable_items, rejected_count)
    """
    usable = [entry for entry in data if isinstance(entry, dict) and entry.get('name')]
    return usable, len(data) - len(usable)
