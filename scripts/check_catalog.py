#!/usr/bin/env python
"""
Check pipeline - validates the pricing catalog and runs golden tests.

Usage:
    python scripts/check_catalog.py [path/to/pricing_rules.csv]
"""
import subprocess
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from checkout_kata.config.settings import get_settings
from checkout_kata.data.catalog_loader import load_catalog, catalog_to_frame
from checkout_kata.engine import DEFAULT_CATALOG


def main():
    print("=" * 60)
    print("CHECKOUT CATALOG CHECK")
    print("=" * 60)
    print()
    
    settings = get_settings()
    csv_path = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.catalog_csv
    
    print("[1/2] Validating pricing catalog...")
    if csv_path is None:
        print("  No catalog CSV configured - using built-in catalog")
        catalog = DEFAULT_CATALOG
    else:
        catalog, errors = load_catalog(csv_path, verbose=True)
        if errors:
            print("\n❌ CATALOG INVALID")
            sys.exit(1)
    
    print()
    print(catalog_to_frame(catalog).to_string(index=False))
    print()
    print("[2/2] Running golden tests...")
    
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/test_golden_cases.py', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )
    
    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)
    
    print()
    print("=" * 60)
    print("✅ CHECK COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
