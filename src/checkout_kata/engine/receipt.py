"""
Receipt generation from a priced Result.

Receipt lines are rendered from the engine's LineItems, so the receipt
total is always the calculated total.
"""
from datetime import datetime
from typing import Optional

from ..config.settings import get_settings, Settings
from .models import Result

RULE = "==================="


def build_receipt(
    result: Result,
    timestamp: Optional[datetime] = None,
    settings: Optional[Settings] = None
) -> str:
    """
    Render a plain-text receipt.

    Args:
        result: Calculated Result from PricingEngine.calculate
        timestamp: Receipt date (defaults to now)
        settings: Optional settings override for title/footer

    Returns:
        Receipt text
    """
    if not result.items:
        raise ValueError("Cannot build a receipt for an empty item sequence")

    settings = settings or get_settings()
    timestamp = timestamp or datetime.now()

    lines = [
        settings.receipt_title,
        RULE,
        "",
        f"Date: {timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "Items:",
    ]

    for line in result.lines:
        if line.bundles > 0:
            lines.append(
                f"{line.item} x {line.special_quantity} (Special): "
                f"{line.special_price} x {line.bundles}"
            )
        if line.remainder > 0:
            lines.append(f"{line.item} x {line.remainder}: {line.remainder * line.unit_price}")

    lines += [
        "",
        RULE,
        f"TOTAL: {result.total}",
        RULE,
        "",
        settings.receipt_footer,
    ]
    return "\n".join(lines)


def receipt_filename(timestamp: Optional[datetime] = None) -> str:
    """Download file name, stamped with epoch milliseconds."""
    timestamp = timestamp or datetime.now()
    return f"receipt-{round(timestamp.timestamp() * 1000)}.txt"
