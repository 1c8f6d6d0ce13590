"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class PricingRule:
    """
    Price behavior for one item identifier.

    A rule either carries a bulk deal (special_quantity units for special_price)
    or it does not; setting only one of the two special fields is rejected.
    """
    unit_price: int
    special_quantity: Optional[int] = None
    special_price: Optional[int] = None

    def __post_init__(self):
        for name in ('unit_price', 'special_quantity', 'special_price'):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"{name} must be an integer, got {value!r}")

        if self.unit_price < 0:
            raise ValueError(f"unit_price must be non-negative, got {self.unit_price}")

        if (self.special_quantity is None) != (self.special_price is None):
            raise ValueError("special_quantity and special_price must be set together")

        if self.special_quantity is not None and self.special_quantity <= 0:
            raise ValueError(f"special_quantity must be positive, got {self.special_quantity}")

        if self.special_price is not None and self.special_price < 0:
            raise ValueError(f"special_price must be non-negative, got {self.special_price}")

    @property
    def has_special(self) -> bool:
        return self.special_quantity is not None

    def split(self, count: int) -> tuple[int, int]:
        """Split a count into (bundles, remainder) under this rule's bulk deal."""
        if not self.has_special:
            return 0, count
        return divmod(count, self.special_quantity)

    def price(self, count: int) -> int:
        """Price `count` units: whole bundles at the special price, the rest at unit price."""
        bundles, remainder = self.split(count)
        total = remainder * self.unit_price
        if bundles:
            total += bundles * self.special_price
        return total

    def offer_text(self) -> str:
        if not self.has_special:
            return "-"
        return f"{self.special_quantity} for {self.special_price}"


@dataclass
class LineItem:
    """Pricing breakdown for one item identifier in a calculation."""
    item: str
    quantity: int
    unit_price: int
    bundles: int = 0
    remainder: int = 0
    special_quantity: Optional[int] = None
    special_price: Optional[int] = None
    contribution: int = 0
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line item."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass
class Result:
    """Complete result of a pricing calculation."""
    items: str
    total: int
    lines: list[LineItem]
    ignored: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a result-level warning."""
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable result trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_history_entry(self) -> dict:
        """Convert to the input/output pair shown in the calculation history."""
        return {"Input": self.items, "Output": self.total}
