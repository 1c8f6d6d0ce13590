"""
Catalog Loader - Validates and loads a pricing catalog from CSV.

Reads a price list with columns item, unit_price, special_quantity,
special_price and returns the PricingRules that validated plus
every row error found.
"""
from pathlib import Path
from typing import Mapping, Optional

import pandas as pd

from ..engine.models import PricingRule


REQUIRED_COLUMNS = ('item', 'unit_price')
OPTIONAL_COLUMNS = ('special_quantity', 'special_price')


def parse_optional_int(value) -> Optional[int]:
    """Parse an optional non-negative integer cell (blank = None)."""
    if pd.isna(value) or str(value).strip() == '':
        return None
    text = str(value).strip()
    number = float(text)
    if not number.is_integer():
        raise ValueError(f"'{text}' is not a whole number")
    return int(number)


def validate_row(row: dict, line_num: int) -> tuple[Optional[str], Optional[PricingRule], list[str]]:
    """
    Validate and parse one catalog row.

    Returns (item, rule, errors) - item and rule are None if validation failed.
    """
    errors = []

    raw_item = row.get('item')
    item = '' if pd.isna(raw_item) else str(raw_item).strip().upper()
    if not item:
        errors.append(f"Line {line_num}: item is required")
        return None, None, errors
    if len(item) != 1:
        errors.append(f"Line {line_num}: item '{item}' must be a single character")
        return None, None, errors

    values = {}
    for column in REQUIRED_COLUMNS[1:] + OPTIONAL_COLUMNS:
        try:
            values[column] = parse_optional_int(row.get(column))
        except ValueError as e:
            errors.append(f"Line {line_num}: {column} must be an integer ({e})")

    if errors:
        return None, None, errors

    if values['unit_price'] is None:
        errors.append(f"Line {line_num}: unit_price is required")
        return None, None, errors

    try:
        rule = PricingRule(
            unit_price=values['unit_price'],
            special_quantity=values['special_quantity'],
            special_price=values['special_price'],
        )
    except ValueError as e:
        errors.append(f"Line {line_num}: {e}")
        return None, None, errors

    return item, rule, []


def load_catalog(csv_path: Path, verbose: bool = False) -> tuple[dict[str, PricingRule], list[str]]:
    """
    Load a pricing catalog from CSV.

    Returns (catalog, errors).
    """
    all_errors = []
    catalog = {}

    if not csv_path.exists():
        all_errors.append(f"Catalog file not found: {csv_path}")
        return {}, all_errors

    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        all_errors.append(f"Could not read catalog {csv_path}: {e}")
        return {}, all_errors

    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        all_errors.append(f"Missing required column(s): {', '.join(missing)}")
        return {}, all_errors

    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = ''

    for line_num, row in enumerate(df.to_dict(orient='records'), start=2):  # +2 for 1-indexed header row
        item, rule, errors = validate_row(row, line_num)

        if errors:
            all_errors.extend(errors)
        elif item in catalog:
            all_errors.append(f"Line {line_num}: duplicate item '{item}'")
        else:
            catalog[item] = rule

    if not catalog and not all_errors:
        all_errors.append("Catalog contains no pricing rules")

    if verbose:
        if all_errors:
            print("Validation errors:")
            for err in all_errors:
                print(f"  ❌ {err}")
        else:
            print(f"✅ Loaded {len(catalog)} pricing rules from {csv_path}")

    return catalog, all_errors


def catalog_from_csv(csv_path: Path) -> dict[str, PricingRule]:
    """Load a catalog, raising ValueError if any row is invalid."""
    catalog, errors = load_catalog(csv_path)
    if errors:
        raise ValueError(f"Invalid pricing catalog {csv_path}: " + "; ".join(errors))
    return catalog


def catalog_to_frame(catalog: Mapping[str, PricingRule]) -> pd.DataFrame:
    """Render a catalog as a table for display and export."""
    return pd.DataFrame([
        {
            'Item': item,
            'Unit Price': rule.unit_price,
            'Special Offer': rule.offer_text(),
        }
        for item, rule in sorted(catalog.items())
    ])
