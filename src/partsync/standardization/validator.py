#!/usr/bin/env python3
"""
Validate scraped category files before uploading to Supabase.

Checks:
1. All required category files exist and hold a JSON array
2. Each category has its minimum number of items
3. Prices are within reasonable bounds (warning only)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import (
    CATEGORIES,
    DEFAULT_DATA_DIR,
    MAX_PRICE,
    MIN_PRICE,
    SUSPICIOUS_PRICE_LIMIT,
    CategoryConfig,
    category_path,
)
from ..exceptions import MalformedFileError, MissingFileError
from .loader import load_json_array
from .transformer import as_number

STATUS_OK = 'ok'
STATUS_MISSING = 'missing'
STATUS_PARSE_ERROR = 'parse_error'


@dataclass
class CategoryReport:
    category: str
    source_file: str
    status: str
    min_items: int
    item_count: int = 0
    priced_count: int = 0
    price_coverage: float = 0.0
    suspicious_count: int = 0
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def below_minimum(self) -> bool:
        return self.status == STATUS_OK and self.item_count < self.min_items

    @property
    def failed(self) -> bool:
        return self.status != STATUS_OK or self.below_minimum


@dataclass
class ValidationResult:
    reports: List[CategoryReport] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(report.failed for report in self.reports)

    @property
    def total_items(self) -> int:
        return sum(report.item_count for report in self.reports)

    @property
    def errors(self) -> List[str]:
        return [report_error(report) for report in self.reports if report.failed]

    @property
    def warnings(self) -> List[str]:
        return [w for report in self.reports for w in report.warnings]


def has_price(item) -> bool:
    """An item has a price iff its price field is present and not null."""
    return isinstance(item, dict) and item.get('price') is not None


def is_suspicious_price(price) -> bool:
    """
    Check a price against the global sanity bounds.
    Bounds are inclusive: MIN_PRICE and MAX_PRICE themselves are fine.
    Non-numeric prices cannot be range-checked and are never suspicious.
    """
    price = as_number(price, default=None)
    if price is None:
        return False
    return price < MIN_PRICE or price > MAX_PRICE


def price_coverage(priced: int, total: int) -> float:
    """Percentage of items carrying a price, rounded to one decimal."""
    if total == 0:
        return 0.0
    return round(priced / total * 100, 1)


def report_error(report: CategoryReport) -> str:
    """Human-readable reason a category failed validation."""
    if report.status == STATUS_MISSING:
        return f"{report.category}: Missing file {report.source_file}"
    if report.status == STATUS_PARSE_ERROR:
        return f"{report.category}: {report.error}"
    return f"{report.category}: Only {report.item_count} items (expected {report.min_items}+)"


def validate_category(category: str, config: CategoryConfig, data_dir: str) -> CategoryReport:
    """Validate a single category file, return its report."""
    path = category_path(data_dir, config)
    report = CategoryReport(
        category=category,
        source_file=config.source_file,
        status=STATUS_OK,
        min_items=config.min_items,
    )

    try:
        data = load_json_array(path)
    except MissingFileError:
        report.status = STATUS_MISSING
        return report
    except MalformedFileError as e:
        report.status = STATUS_PARSE_ERROR
        report.error = str(e)
        return report

    priced = [item for item in data if has_price(item)]
    suspicious = [item for item in priced if is_suspicious_price(item['price'])]

    report.item_count = len(data)
    report.priced_count = len(priced)
    report.price_coverage = price_coverage(len(priced), len(data))
    report.suspicious_count = len(suspicious)

    # Allow some outliers but flag if too many
    if len(suspicious) > SUSPICIOUS_PRICE_LIMIT:
        report.warnings.append(
            f"{category}: {len(suspicious)} items with suspicious prices "
            f"(outside ${MIN_PRICE}-${MAX_PRICE})"
        )

    return report


def validate_all(data_dir: str, categories: Optional[Dict[str, CategoryConfig]] = None) -> ValidationResult:
    """
    Validate every configured category.
    A failing category never stops the remaining ones from being checked.
    """
    categories = CATEGORIES if categories is None else categories
    result = ValidationResult()

    for category, config in categories.items():
        result.reports.append(validate_category(category, config, data_dir))

    return result


def print_validation_report(result: ValidationResult):
    """Print formatted validation report."""
    print("PCPartPicker Data Validation")
    print("=" * 28 + "\n")

    for report in result.reports:
        if report.status != STATUS_OK:
            print(f"✗ {report_error(report)}")
            continue

        if report.below_minimum:
            print(f"✗ {report_error(report)}")
        for warning in report.warnings:
            print(f"⚠️  {warning}")
        print(
            f"✓ {report.category}: {report.item_count} items "
            f"({report.priced_count} with prices, {report.price_coverage:.1f}%)"
        )

    print("\n" + "=" * 28)
    print(f"Total items: {result.total_items}")

    if not result.passed:
        print("\n✗ Validation FAILED! Not uploading to Supabase.")
    else:
        print("\n✓ All data validated successfully!")


def main(data_dir: str = None) -> int:
    """Main entry point for validation."""
    result = validate_all(data_dir or DEFAULT_DATA_DIR)
    print_validation_report(result)
    return 0 if result.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
