"""
Golden test cases for pricing engine regression testing.
These tests capture the expected behavior of the pricing engine and
should fail if pricing logic changes unexpectedly.
"""
import csv
import os

import pytest

from checkout_kata.engine import PricingEngine, DEFAULT_CATALOG, build_receipt


@pytest.fixture(scope="module")
def engine():
    """Create a single engine instance for all tests."""
    return PricingEngine(catalog=DEFAULT_CATALOG)


def load_golden_cases():
    """Load golden test cases from CSV."""
    cases_path = os.path.join(os.path.dirname(__file__), 'golden_cases.csv')
    
    cases = []
    with open(cases_path, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            cases.append(row)
    
    return cases


@pytest.mark.parametrize("case", load_golden_cases(), ids=lambda c: c['items'] or 'empty')
def test_golden_case(engine, case):
    """Test that totals match the expected golden case."""
    items = case['items']
    expected_total = int(case['expected_total'])
    
    assert engine.compute_total(items) == expected_total, \
        f"Total mismatch for '{items}': expected {expected_total}"
    
    # Traced calculation must agree with the plain total
    result = engine.calculate(items)
    assert result.total == expected_total
    assert sum(line.contribution for line in result.lines) == expected_total


@pytest.mark.parametrize("case", [c for c in load_golden_cases() if c['items']], ids=lambda c: c['items'])
def test_golden_receipt_total(engine, case):
    """Test that the receipt total matches the golden total."""
    receipt = build_receipt(engine.calculate(case['items']))
    assert f"TOTAL: {case['expected_total']}\n" in receipt


def test_generator_reproduces_fixture(engine):
    """The committed CSV is exactly what generate_golden_cases.py writes."""
    from generate_golden_cases import GOLDEN_INPUTS
    
    rows = [(c['items'], int(c['expected_total']), c['description']) for c in load_golden_cases()]
    expected = [(items, engine.compute_total(items), desc) for items, desc in GOLDEN_INPUTS]
    assert rows == expected
