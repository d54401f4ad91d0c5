"""
Configuration constants and environment settings for partsync.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class CategoryConfig:
    """Where a scraped category lives and how it is named in the database."""
    source_file: str
    canonical_name: str
    min_items: int


# Map scraper category names to database category names and source files
CATEGORIES: Dict[str, CategoryConfig] = {
    'cpu': CategoryConfig('cpu.json', 'cpu', 100),
    'video-card': CategoryConfig('video-card.json', 'gpu', 100),
    'memory': CategoryConfig('memory.json', 'ram', 200),
    'internal-hard-drive': CategoryConfig('internal-hard-drive.json', 'storage', 200),
    'power-supply': CategoryConfig('power-supply.json', 'psu', 100),
}

# Price sanity bounds (currency-agnostic)
MIN_PRICE = 5
MAX_PRICE = 10000
# Outliers tolerated per category before a warning is raised
SUSPICIOUS_PRICE_LIMIT = 10

BATCH_SIZE = 500

DEFAULT_DATA_DIR = "data/json"
DEFAULT_TABLE = "pcpartpicker_prices"
ON_CONFLICT = "category,name"


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    data_dir: str = DEFAULT_DATA_DIR
    table: str = DEFAULT_TABLE

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless both Supabase credentials are set."""
        if not self.supabase_url or not self.supabase_key:
            raise ConfigurationError(
                "Missing SUPABASE_URL or SUPABASE_SERVICE_KEY environment variables"
            )


def get_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env: Mapping to read instead of os.environ (.env is only loaded
            when reading the real environment)

    Returns:
        Settings instance; credentials may be None, call
        Settings.require_credentials() before talking to Supabase
    """
    if env is None:
        load_dotenv()
        env = os.environ

    return Settings(
        supabase_url=env.get('SUPABASE_URL'),
        supabase_key=(
            env.get('SUPABASE_SERVICE_KEY')
            or env.get('SUPABASE_KEY')
            or env.get('SUPABASE_SERVICE_ROLE_KEY')
        ),
        data_dir=env.get('PARTSYNC_DATA_DIR') or DEFAULT_DATA_DIR,
        table=env.get('SUPABASE_TABLE') or DEFAULT_TABLE,
    )


def category_path(data_dir: str, config: CategoryConfig) -> str:
    """
    Derive the source file path of a category.

    Example:
        >>> category_path("data/json", CATEGORIES['memory'])
        'data/json/memory.json'
    """
    return str(Path(data_dir) / config.source_file)


def create_supabase_client(settings: Settings):
    """Create a Supabase client from validated settings."""
    from supabase import create_client

    settings.require_credentials()
    return create_client(settings.supabase_url, settings.supabase_key)
