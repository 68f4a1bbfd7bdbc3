"""Tests for NumberStyle formatting and parsing."""

from decimal import Decimal

from validated_fields.numbers import NumberStyle


class TestNumberStyleFormat:
    """Tests for NumberStyle.format."""

    def test_plain(self):
        assert NumberStyle().format(Decimal("3.5")) == "3.50"

    def test_leading_symbol(self):
        assert NumberStyle(symbol="$").format(Decimal("1234.5")) == "$1234.50"

    def test_negative_sign_before_symbol(self):
        assert NumberStyle(symbol="$").format(Decimal("-3.5")) == "-$3.50"

    def test_grouping(self):
        style = NumberStyle(group_separator=",", precision=0)
        assert style.format(Decimal("1234567")) == "1,234,567"

    def test_european(self):
        style = NumberStyle(
            symbol="€",
            symbol_side="R",
            symbol_spaced=True,
            decimal_mark=",",
            group_separator=".",
        )
        assert style.format(Decimal("1234.5")) == "1.234,50 €"


class TestNumberStyleParse:
    """Tests for NumberStyle.parse."""

    def test_plain(self):
        assert NumberStyle().parse("12.5") == Decimal("12.5")

    def test_strips_symbol_and_groups(self):
        style = NumberStyle(symbol="$", group_separator=",")
        assert style.parse("$1,234.50") == Decimal("1234.50")

    def test_european(self):
        style = NumberStyle(symbol="€", symbol_side="R", decimal_mark=",", group_separator=".")
        assert style.parse("1.234,50 €") == Decimal("1234.50")

    def test_rejects_foreign_decimal_mark(self):
        assert NumberStyle(decimal_mark=",").parse("1.5") is None

    def test_empty(self):
        assert NumberStyle().parse("  ") is None

    def test_garbage(self):
        assert NumberStyle().parse("abc") is None

    def test_infinity(self):
        assert NumberStyle().parse("inf") is None
