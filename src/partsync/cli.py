#!/usr/bin/env python3
"""
Command-line interface for validating and uploading PCPartPicker data.
"""

import argparse
import sys
from typing import List, Optional

from .config import CATEGORIES, Settings, create_supabase_client, get_settings
from .database.inserters.prices import print_upload_summary, upload_all
from .exceptions import PartsyncError
from .standardization.validator import print_validation_report, validate_all


def select_categories(names: Optional[List[str]]):
    """Restrict the registry to the requested scraper categories."""
    if not names:
        return CATEGORIES
    unknown = [name for name in names if name not in CATEGORIES]
    if unknown:
        raise PartsyncError(
            f"Unknown category: {', '.join(unknown)} (choose from {', '.join(CATEGORIES)})"
        )
    return {name: CATEGORIES[name] for name in CATEGORIES if name in names}


def run_validate(settings: Settings, categories) -> bool:
    result = validate_all(settings.data_dir, categories)
    print_validation_report(result)
    return result.passed


def run_upload(settings: Settings, categories, supabase=None) -> bool:
    # Fail on credentials before touching any file
    settings.require_credentials()
    supabase = supabase or create_supabase_client(settings)

    print("PCPartPicker Data Upload to Supabase")
    print("=" * 36 + "\n")

    summary = upload_all(supabase, settings.data_dir, categories, table=settings.table)
    print_upload_summary(summary)
    return summary.passed


def run_command(command: str, settings: Settings, categories, supabase=None) -> bool:
    """
    Run a CLI command.

    'run' validates first and only uploads when validation passed.
    """
    if command == 'validate':
        return run_validate(settings, categories)
    if command == 'upload':
        return run_upload(settings, categories, supabase)

    settings.require_credentials()
    if not run_validate(settings, categories):
        return False
    print()
    return run_upload(settings, categories, supabase)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='partsync',
        description="Validate scraped PCPartPicker data and upsert it into Supabase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the scraped files
  partsync validate --data-dir data/json

  # Upload everything (needs SUPABASE_URL and SUPABASE_SERVICE_KEY)
  partsync upload

  # Validate, then upload only if validation passed
  partsync run

  # Only the GPU and RAM files
  partsync upload --category video-card --category memory
        """
    )

    parser.add_argument(
        'command',
        choices=['validate', 'upload', 'run'],
        help='validate the files, upload them, or both'
    )

    parser.add_argument(
        '--data-dir', '-d',
        type=str,
        default=None,
        help='Directory holding the scraped category JSON files (default: data/json)'
    )

    parser.add_argument(
        '--category', '-c',
        action='append',
        default=None,
        help=f"Scraper category to process, repeatable (default: all of {', '.join(CATEGORIES)})"
    )

    parser.add_argument(
        '--table',
        type=str,
        default=None,
        help='Supabase table to upsert into (default: pcpartpicker_prices)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print tracebacks on errors'
    )

    return parser


def main(argv: Optional[List[str]] = None, supabase=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        overrides = {
            'data_dir': args.data_dir or settings.data_dir,
            'table': args.table or settings.table,
        }
        settings = Settings(settings.supabase_url, settings.supabase_key, **overrides)
        categories = select_categories(args.category)

        passed = run_command(args.command, settings, categories, supabase)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 1
    except PartsyncError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except Exception as e:
        print(f"\n\nError during {args.command}: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
