"""
Pricing Engine - Core checkout pricing with traceability.

Resolves a sequence of item letters into a total:
- Tally recognized items (unknown letters are ignored, never an error)
- Price each tally through its rule's bulk deal and unit price
- Structured Result/LineItem output with an execution trace
"""
from collections import Counter
from types import MappingProxyType
from typing import Mapping, Optional

from ..config.settings import get_settings, Settings
from .models import PricingRule, LineItem, Result


DEFAULT_CATALOG: Mapping[str, PricingRule] = MappingProxyType({
    'A': PricingRule(unit_price=50, special_quantity=3, special_price=130),
    'B': PricingRule(unit_price=30, special_quantity=2, special_price=45),
    'C': PricingRule(unit_price=20),
    'D': PricingRule(unit_price=15),
})


def tally_items(items: str, catalog: Mapping[str, PricingRule]) -> dict[str, int]:
    """Count the items present in the catalog, keyed in ascending identifier order."""
    counts = Counter(item for item in items if item in catalog)
    return {item: counts[item] for item in sorted(counts)}


def compute_total(items: str, catalog: Mapping[str, PricingRule] = DEFAULT_CATALOG) -> int:
    """
    Compute the total price of a sequence of items.

    Args:
        items: Item letters in any order (e.g. "AABCD")
        catalog: Item identifier → PricingRule

    Returns:
        Total price in the catalog's currency unit
    """
    if not items:
        return 0

    return sum(
        catalog[item].price(count)
        for item, count in tally_items(items, catalog).items()
    )


class PricingEngine:
    """
    Checkout pricing engine bound to a fixed pricing catalog.

    Resolution order:
    1. Tally items that have a rule in the catalog
    2. For each item: whole bundles at the special price (if the rule has one)
    3. Remaining units at the unit price
    4. Sum the per-item contributions
    """

    def __init__(
        self,
        catalog: Optional[Mapping[str, PricingRule]] = None,
        settings: Optional[Settings] = None
    ):
        """Initialize engine with the given catalog, the configured CSV, or the default catalog."""
        self.settings = settings or get_settings()
        self.catalog_source = "built-in"

        if catalog is None:
            catalog_path = self.settings.catalog_csv
            if catalog_path is not None:
                if not catalog_path.exists():
                    raise FileNotFoundError(
                        f"Pricing catalog not found at {catalog_path}. "
                        "Unset CHECKOUT_CATALOG_CSV to use the built-in catalog."
                    )
                # pandas is only needed for CSV catalogs
                from ..data.catalog_loader import catalog_from_csv
                catalog = catalog_from_csv(catalog_path)
                self.catalog_source = str(catalog_path)
            else:
                catalog = DEFAULT_CATALOG
        else:
            self.catalog_source = "custom"

        self.catalog: Mapping[str, PricingRule] = MappingProxyType(dict(catalog))

    def get_rule(self, item: str) -> Optional[PricingRule]:
        """Return the rule for an item, or None if the item is not in the catalog."""
        return self.catalog.get(item)

    def tally(self, items: str) -> dict[str, int]:
        return tally_items(items, self.catalog)

    def compute_total(self, items: str) -> int:
        return compute_total(items, self.catalog)

    def calculate(self, items: str) -> Result:
        """
        Calculate a total with full traceability.

        Args:
            items: Item letters in any order

        Returns:
            Result dataclass with per-item lines, ignored letters, and trace
        """
        result = Result(items=items, total=0, lines=[])

        if not items:
            result.add_trace("Input", "Empty item sequence", "0")
            return result

        result.add_trace("Input", f"Received {len(items)} item(s)", items)

        for item in items:
            if self.get_rule(item) is None and item not in result.ignored:
                result.ignored.append(item)
                result.add_warning(f"Unknown item '{item}' ignored")

        counts = self.tally(items)
        if counts:
            result.add_trace(
                "Tally",
                "Counted recognized items",
                ", ".join(f"{item}×{count}" for item, count in counts.items())
            )
        else:
            result.add_trace("Tally", "No recognized items")

        for item, count in counts.items():
            line = self._calculate_line(item, count)
            result.lines.append(line)
            result.total += line.contribution

        result.add_trace("Total", f"Summed {len(result.lines)} line(s)", str(result.total))
        return result

    def _calculate_line(self, item: str, count: int) -> LineItem:
        """Calculate a single line item with trace."""
        rule = self.catalog[item]
        bundles, remainder = rule.split(count)

        line = LineItem(
            item=item,
            quantity=count,
            unit_price=rule.unit_price,
            bundles=bundles,
            remainder=remainder,
            special_quantity=rule.special_quantity,
            special_price=rule.special_price,
            contribution=rule.price(count),
        )

        line.add_trace("Rule Lookup", f"Unit price {rule.unit_price}, offer {rule.offer_text()}", item)
        if rule.has_special:
            line.add_trace(
                "Special Offer",
                f"{bundles} bundle(s) of {rule.special_quantity} × {rule.special_price}",
                str(bundles * rule.special_price)
            )
        line.add_trace("Extension", f"Quantity {remainder} × {rule.unit_price}", str(remainder * rule.unit_price))
        line.add_trace("Line Total", f"{item} × {count}", str(line.contribution))

        return line
