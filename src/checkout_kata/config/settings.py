"""
Centralized settings and path configuration for the checkout tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


CATALOG_ENV_VAR = 'CHECKOUT_CATALOG_CSV'

EXAMPLE_INPUTS = (
    "",
    "A",
    "AB",
    "CDBA",
    "AA",
    "AAA",
    "AAAA",
    "AAAAA",
    "AAAAAA",
    "AAAB",
    "AAABB",
    "AAABBD",
    "DABABA",
)


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Regression fixtures
    golden_cases: Path

    # Optional CSV price list replacing the built-in catalog
    catalog_csv: Optional[Path] = None

    # Callers fold input to uppercase before pricing
    uppercase_input: bool = True

    # Receipt text
    receipt_title: str = "SUPERMARKET RECEIPT"
    receipt_footer: str = "Thank you for shopping with us!"

    # UI
    history_limit: int = 50
    example_inputs: tuple = EXAMPLE_INPUTS

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment and project structure."""
        root = project_root or get_project_root()

        catalog_csv = None
        env_catalog = os.environ.get(CATALOG_ENV_VAR, '').strip()
        if env_catalog:
            catalog_csv = Path(env_catalog)
        elif (root / 'pricing_rules.csv').exists():
            catalog_csv = root / 'pricing_rules.csv'

        return cls(
            project_root=root,
            golden_cases=root / 'tests' / 'golden_cases.csv',
            catalog_csv=catalog_csv,
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def normalize_items(items: str, settings: Optional[Settings] = None) -> str:
    """Apply the caller-side input folding configured in settings."""
    settings = settings or get_settings()
    items = items.strip()
    return items.upper() if settings.uppercase_input else items
