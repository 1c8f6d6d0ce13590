"""
Tests for loading pricing catalogs from CSV.
"""
import pytest

from checkout_kata.config.settings import Settings
from checkout_kata.data.catalog_loader import (
    load_catalog, catalog_from_csv, catalog_to_frame
)
from checkout_kata.engine import PricingEngine, PricingRule, DEFAULT_CATALOG


def write_csv(tmp_path, text, name="pricing_rules.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_valid_catalog(tmp_path):
    path = write_csv(tmp_path, (
        "item,unit_price,special_quantity,special_price\n"
        "A,50,3,130\n"
        "B,30,2,45\n"
        "C,20,,\n"
        "d,15,,\n"
    ))
    catalog, errors = load_catalog(path)

    assert errors == []
    assert catalog == dict(DEFAULT_CATALOG)


def test_load_without_special_columns(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\nE,7\n")
    catalog, errors = load_catalog(path)

    assert errors == []
    assert catalog == {'E': PricingRule(unit_price=7)}


def test_missing_file(tmp_path):
    catalog, errors = load_catalog(tmp_path / "missing.csv")
    assert catalog == {}
    assert len(errors) == 1
    assert "not found" in errors[0]


def test_missing_required_column(tmp_path):
    path = write_csv(tmp_path, "item,price\nA,50\n")
    catalog, errors = load_catalog(path)
    assert catalog == {}
    assert errors == ["Missing required column(s): unit_price"]


@pytest.mark.parametrize("row,message", [
    (",10,,", "item is required"),
    ("AB,10,,", "must be a single character"),
    ("A,,,", "unit_price is required"),
    ("A,ten,,", "unit_price must be an integer"),
    ("A,10.5,,", "unit_price must be an integer"),
    ("A,-10,,", "unit_price must be non-negative"),
    ("A,10,3,", "must be set together"),
    ("A,10,,25", "must be set together"),
    ("A,10,0,5", "special_quantity must be positive"),
])
def test_invalid_rows(tmp_path, row, message):
    path = write_csv(tmp_path, f"item,unit_price,special_quantity,special_price\n{row}\n")
    catalog, errors = load_catalog(path)

    assert catalog == {}
    assert len(errors) == 1
    assert errors[0].startswith("Line 2: ")
    assert message in errors[0]


def test_duplicate_item(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\nA,50\na,60\n")
    catalog, errors = load_catalog(path)

    assert catalog == {'A': PricingRule(unit_price=50)}
    assert errors == ["Line 3: duplicate item 'A'"]


def test_errors_collected_across_rows(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\nA,x\nB,30\nCC,1\n")
    catalog, errors = load_catalog(path)

    assert list(catalog) == ['B']
    assert [e.split(':')[0] for e in errors] == ["Line 2", "Line 4"]


def test_catalog_from_csv_raises(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\nA,-1\n")
    with pytest.raises(ValueError, match="Invalid pricing catalog"):
        catalog_from_csv(path)


def test_verbose_prints_summary(tmp_path, capsys):
    path = write_csv(tmp_path, "item,unit_price\nA,50\n")
    load_catalog(path, verbose=True)
    assert "Loaded 1 pricing rules" in capsys.readouterr().out


def test_catalog_to_frame():
    df = catalog_to_frame(DEFAULT_CATALOG)
    assert list(df.columns) == ['Item', 'Unit Price', 'Special Offer']
    assert df['Item'].tolist() == ['A', 'B', 'C', 'D']
    assert df['Special Offer'].tolist() == ['3 for 130', '2 for 45', '-', '-']


def test_engine_loads_configured_catalog(tmp_path):
    path = write_csv(tmp_path, "item,unit_price,special_quantity,special_price\nZ,10,2,15\n")
    settings = Settings(project_root=tmp_path, golden_cases=tmp_path / "g.csv", catalog_csv=path)
    engine = PricingEngine(settings=settings)

    assert engine.catalog_source == str(path)
    assert engine.compute_total("ZZZ") == 25
    assert engine.compute_total("A") == 0


def test_engine_missing_configured_catalog(tmp_path):
    settings = Settings(project_root=tmp_path, golden_cases=tmp_path / "g.csv", catalog_csv=tmp_path / "nope.csv")
    with pytest.raises(FileNotFoundError):
        PricingEngine(settings=settings)


def test_empty_file_reported_as_error(tmp_path):
    path = write_csv(tmp_path, "")
    catalog, errors = load_catalog(path)

    assert catalog == {}
    assert len(errors) == 1
    assert errors[0].startswith("Could not read catalog")


def test_undecodable_file_reported_as_error(tmp_path):
    path = tmp_path / "pricing_rules.csv"
    path.write_bytes(b"item,unit_price\n\xff\xfe,50\n")
    catalog, errors = load_catalog(path)

    assert catalog == {}
    assert errors[0].startswith("Could not read catalog")


def test_header_only_catalog_is_invalid(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\n")
    catalog, errors = load_catalog(path)

    assert catalog == {}
    assert errors == ["Catalog contains no pricing rules"]


def test_engine_rejects_header_only_catalog(tmp_path):
    path = write_csv(tmp_path, "item,unit_price\n")
    settings = Settings(project_root=tmp_path, golden_cases=tmp_path / "g.csv", catalog_csv=path)
    with pytest.raises(ValueError, match="no pricing rules"):
        PricingEngine(settings=settings)
