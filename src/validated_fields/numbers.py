"""Number formatting and parsing with currency symbols and digit grouping."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class NumberStyle:
    """Display style for a number, e.g. ``$1,234.50`` or ``1.234,50 €``.

    ``symbol_side`` is ``"L"`` for a leading symbol and ``"R"`` for a
    trailing one.
    """

    symbol: str = ""
    symbol_side: str = "L"
    symbol_spaced: bool = False
    decimal_mark: str = "."
    group_separator: str | None = None
    precision: int = 2

    def format(self, quantity: Decimal) -> str:
        """Format *quantity* for display."""
        grouping = "," if self.group_separator else ""
        qty_str = f"{abs(quantity):{grouping}.{self.precision}f}"
        # Swap in the configured marks through a placeholder.
        qty_str = qty_str.replace(",", "\0").replace(".", self.decimal_mark)
        qty_str = qty_str.replace("\0", self.group_separator or "")
        sign = "-" if quantity < 0 else ""

        if not self.symbol:
            return f"{sign}{qty_str}"
        space = " " if self.symbol_spaced else ""
        if self.symbol_side == "L":
            return f"{sign}{self.symbol}{space}{qty_str}"
        return f"{sign}{qty_str}{space}{self.symbol}"

    def parse(self, text: str) -> Decimal | None:
        """Parse displayed *text* back into a Decimal.

        Returns:
            The number, or None if *text* is not a number in this style.
        """
        cleaned = text.strip()
        if self.symbol:
            cleaned = cleaned.replace(self.symbol, "")
        if self.group_separator:
            cleaned = cleaned.replace(self.group_separator, "")
        cleaned = "".join(cleaned.split())
        if self.decimal_mark != ".":
            if "." in cleaned:
                return None
            cleaned = cleaned.replace(self.decimal_mark, ".")
        if not cleaned:
            return None
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            return None
        if not value.is_finite():
            return None
        return value
