"""Engine subpackage - core pricing logic and receipts."""
from .pricing_engine import PricingEngine, DEFAULT_CATALOG, compute_total, tally_items
from .models import PricingRule, LineItem, Result
from .receipt import build_receipt, receipt_filename

__all__ = [
    'PricingEngine', 'DEFAULT_CATALOG', 'compute_total', 'tally_items',
    'PricingRule', 'LineItem', 'Result',
    'build_receipt', 'receipt_filename',
]
