"""Validation bundles: validators plus presentation hints for a field.

A bundle is pure configuration.  The named presets below cover the common
field types; user-defined bundles can be loaded from config.toml (see
``validated_fields.config``).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from validated_fields.capabilities import Validating
from validated_fields.numbers import NumberStyle
from validated_fields.template import StructuredTemplate
from validated_fields.validators import (
    DIGITS,
    HEX_UPPER,
    CharsetOnly,
    ComparableRange,
    Email,
    FormattedNumber,
    Length,
    ScaledDecimal,
    ValidURL,
)


class KeyboardKind(Enum):
    """The kind of keyboard a host should offer for the field."""

    DEFAULT = "default"
    ASCII = "ascii"
    NUMBER_PAD = "number-pad"
    DECIMAL_PAD = "decimal-pad"
    EMAIL = "email"
    URL = "url"


class Alignment(Enum):
    """Horizontal text alignment, named after Textual's ``text-align`` values."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Capitalization(Enum):
    """Automatic capitalization applied to typed characters."""

    NONE = "none"
    WORDS = "words"
    SENTENCES = "sentences"
    ALL_CHARACTERS = "all-characters"


_SENTENCE_ENDS = frozenset(".!?")


def _starts_word(preceding: str) -> bool:
    return not preceding or preceding[-1].isspace()


def _starts_sentence(preceding: str) -> bool:
    stripped = preceding.rstrip()
    if not stripped:
        return True
    return stripped[-1] in _SENTENCE_ENDS and stripped != preceding


def capitalize_typed(existing: str, position: int, typed: str, mode: Capitalization) -> str:
    """Capitalize *typed* as a software keyboard would before inserting it.

    Args:
        existing: The field text before the edit.
        position: Index in *existing* where *typed* is inserted.
        typed: The characters being added.
        mode: The capitalization mode of the field.

    Returns:
        The characters to insert.
    """
    if mode is Capitalization.NONE or not typed:
        return typed
    if mode is Capitalization.ALL_CHARACTERS:
        return typed.upper()

    starts = _starts_word if mode is Capitalization.WORDS else _starts_sentence
    preceding = existing[:position]
    result: list[str] = []
    for ch in typed:
        result.append(ch.upper() if starts(preceding) else ch)
        preceding += result[-1]
    return "".join(result)


@dataclass(frozen=True)
class ValidationBundle:
    """A collection of validators and presentation settings for a text field.

    Every hint is optional; ``None`` leaves the host's own setting alone.
    """

    validators: tuple[Validating, ...] = ()
    keyboard: KeyboardKind | None = None
    prefix: str | None = None
    suffix: str | None = None
    alignment: Alignment | None = None
    placeholder: str | None = None
    preselect: bool | None = None
    capitalization: Capitalization | None = None

    def with_validators(self, *validators: Validating) -> ValidationBundle:
        """Return a copy with *validators* appended."""
        return replace(self, validators=self.validators + validators)


def percent() -> ValidationBundle:
    """A percentage with three implied decimal places."""
    return ValidationBundle(
        validators=(ScaledDecimal(3), CharsetOnly(DIGITS + ".")),
        keyboard=KeyboardKind.NUMBER_PAD,
        suffix="%",
        alignment=Alignment.RIGHT,
        preselect=True,
    )


def hex_color() -> ValidationBundle:
    """An 8-digit RGBA hex color such as ``FF8800FF``."""
    return ValidationBundle(
        validators=(CharsetOnly(HEX_UPPER), Length.exact(8)),
        keyboard=KeyboardKind.ASCII,
        preselect=True,
        capitalization=Capitalization.ALL_CHARACTERS,
    )


def integer_percent() -> ValidationBundle:
    """A whole percentage from 0 to 100."""
    return ValidationBundle(
        validators=(
            ComparableRange(minimum=0, maximum=100),
            CharsetOnly.digits(),
            Length(min=1, max=3),
        ),
        keyboard=KeyboardKind.NUMBER_PAD,
        suffix="%",
        alignment=Alignment.RIGHT,
    )


def integer_within(minimum: int | None = None, maximum: int | None = None) -> ValidationBundle:
    """A non-negative whole number, optionally bounded (inclusive)."""
    validators: tuple[Validating, ...] = (CharsetOnly.digits(),)
    if minimum is not None or maximum is not None:
        validators += (ComparableRange(minimum=minimum, maximum=maximum),)
    return ValidationBundle(
        validators=validators,
        keyboard=KeyboardKind.NUMBER_PAD,
        alignment=Alignment.RIGHT,
        preselect=True,
    )


def email() -> ValidationBundle:
    """An e-mail address."""
    return ValidationBundle(validators=(Email(),), keyboard=KeyboardKind.EMAIL)


def title() -> ValidationBundle:
    """Free text with every word capitalized."""
    return ValidationBundle(
        keyboard=KeyboardKind.DEFAULT,
        capitalization=Capitalization.WORDS,
    )


def date() -> ValidationBundle:
    """A short date typed as six digits, shown as ``dd/dd/dd``."""
    return ValidationBundle(
        validators=(StructuredTemplate("dd/dd/dd"),),
        keyboard=KeyboardKind.NUMBER_PAD,
        placeholder="dd/dd/dd",
    )


def url() -> ValidationBundle:
    """A URL."""
    return ValidationBundle(validators=(ValidURL(),), keyboard=KeyboardKind.URL)


def phone() -> ValidationBundle:
    """A ten-digit phone number shown as ``ddd-ddd-dddd``."""
    return ValidationBundle(
        validators=(StructuredTemplate("ddd-ddd-dddd"),),
        keyboard=KeyboardKind.NUMBER_PAD,
        placeholder="ddd-ddd-dddd",
    )


def currency(symbol: str = "$", places: int = 2) -> ValidationBundle:
    """A money amount typed as digits, with *places* implied decimals."""
    return ValidationBundle(
        validators=(ScaledDecimal(places), CharsetOnly(DIGITS + ".")),
        keyboard=KeyboardKind.DECIMAL_PAD,
        prefix=symbol,
        alignment=Alignment.RIGHT,
        preselect=True,
    )


def grouped_number(style: NumberStyle | None = None) -> ValidationBundle:
    """A number regrouped after every keystroke (``12,345`` by default).

    Keystrokes are limited to what the style itself displays, so a stray
    letter is refused instead of being reformatted away.
    """
    style = style or NumberStyle(group_separator=",", precision=0)
    charset = DIGITS + "-" + (style.group_separator or "") + style.symbol
    if style.symbol_spaced:
        charset += " "
    if style.precision:
        charset += style.decimal_mark
    return ValidationBundle(
        validators=(CharsetOnly(charset), FormattedNumber(style)),
        keyboard=KeyboardKind.NUMBER_PAD,
        alignment=Alignment.RIGHT,
    )


PRESETS: dict[str, Callable[[], ValidationBundle]] = {
    "percent": percent,
    "hex-color": hex_color,
    "integer-percent": integer_percent,
    "integer": integer_within,
    "email": email,
    "title": title,
    "date": date,
    "url": url,
    "phone": phone,
    "currency": currency,
    "grouped-number": grouped_number,
}
