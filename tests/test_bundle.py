"""Tests for validation bundles, presets and typed-character capitalization."""

from __future__ import annotations

from validated_fields.bundle import (
    PRESETS,
    Alignment,
    Capitalization,
    KeyboardKind,
    ValidationBundle,
    capitalize_typed,
    currency,
    date,
    grouped_number,
    hex_color,
    integer_percent,
    integer_within,
    percent,
    phone,
)
from validated_fields.field_validator import FieldValidator
from validated_fields.numbers import NumberStyle
from validated_fields.template import StructuredTemplate
from validated_fields.validators import CharsetOnly, Length, ScaledDecimal


class TestValidationBundle:
    """Tests for the ValidationBundle record."""

    def test_defaults_leave_host_alone(self):
        bundle = ValidationBundle()
        assert bundle.validators == ()
        assert bundle.keyboard is None
        assert bundle.preselect is None

    def test_with_validators_appends(self):
        bundle = ValidationBundle(validators=(Length(max=3),))
        extended = bundle.with_validators(CharsetOnly.digits())
        assert extended.validators == (Length(max=3), CharsetOnly.digits())
        assert bundle.validators == (Length(max=3),)


class TestPresets:
    """Tests for the named preset bundles."""

    def test_every_preset_builds(self):
        for name, factory in PRESETS.items():
            assert isinstance(factory(), ValidationBundle), name

    def test_percent(self):
        bundle = percent()
        assert bundle.validators[0] == ScaledDecimal(3)
        assert bundle.suffix == "%"
        assert bundle.alignment is Alignment.RIGHT
        assert bundle.preselect is True

    def test_hex_color(self):
        bundle = hex_color()
        assert bundle.validators == (CharsetOnly("0123456789ABCDEF"), Length.exact(8))
        assert bundle.capitalization is Capitalization.ALL_CHARACTERS

    def test_integer_percent_accepts_hundred(self):
        field = FieldValidator.ensuring(integer_percent())
        assert field.problem_for("100") is None
        assert field.problem_for("101") == "too big"

    def test_integer_percent_rejects_letters(self):
        field = FieldValidator.ensuring(integer_percent())
        assert field.problem_for("5a") is not None

    def test_integer_within_unbounded(self):
        field = FieldValidator.ensuring(integer_within())
        assert field.problem_for("123456") is None

    def test_integer_within_bounds(self):
        field = FieldValidator.ensuring(integer_within(minimum=1, maximum=10))
        assert field.problem_for("0") == "too small"
        assert field.problem_for("10") is None

    def test_phone(self):
        bundle = phone()
        assert bundle.validators == (StructuredTemplate("ddd-ddd-dddd"),)
        assert bundle.keyboard is KeyboardKind.NUMBER_PAD
        assert bundle.placeholder == "ddd-ddd-dddd"

    def test_date(self):
        assert date().validators == (StructuredTemplate("dd/dd/dd"),)

    def test_currency(self):
        bundle = currency("€", places=2)
        assert bundle.prefix == "€"
        assert bundle.validators[0] == ScaledDecimal(2)

    def test_grouped_number_custom_style(self):
        style = NumberStyle(group_separator=".", decimal_mark=",", precision=0)
        bundle = grouped_number(style)
        assert bundle.validators[1].style is style
        assert bundle.validators[0] == CharsetOnly("1234567890-.")

    def test_grouped_number_charset_follows_style(self):
        style = NumberStyle(symbol="€", symbol_side="R", symbol_spaced=True, precision=2)
        charset = grouped_number(style).validators[0].chars
        assert "€" in charset
        assert " " in charset
        assert "." in charset
        assert "," not in charset


class TestCapitalizeTyped:
    """Tests for capitalize_typed."""

    def test_none(self):
        assert capitalize_typed("", 0, "abc", Capitalization.NONE) == "abc"

    def test_all_characters(self):
        assert capitalize_typed("AB", 2, "cd", Capitalization.ALL_CHARACTERS) == "CD"

    def test_words_at_start(self):
        assert capitalize_typed("", 0, "hello", Capitalization.WORDS) == "Hello"

    def test_words_after_space(self):
        assert capitalize_typed("hello ", 6, "w", Capitalization.WORDS) == "W"

    def test_words_mid_word(self):
        assert capitalize_typed("hel", 3, "l", Capitalization.WORDS) == "l"

    def test_words_in_pasted_text(self):
        assert capitalize_typed("", 0, "a b", Capitalization.WORDS) == "A B"

    def test_sentences_at_start(self):
        assert capitalize_typed("", 0, "t", Capitalization.SENTENCES) == "T"

    def test_sentences_after_full_stop(self):
        assert capitalize_typed("Hi. ", 4, "t", Capitalization.SENTENCES) == "T"

    def test_sentences_directly_after_full_stop(self):
        assert capitalize_typed("Hi.", 3, "t", Capitalization.SENTENCES) == "t"

    def test_sentences_mid_sentence(self):
        assert capitalize_typed("Mr ", 3, "x", Capitalization.SENTENCES) == "x"
