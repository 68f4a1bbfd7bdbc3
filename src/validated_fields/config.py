"""Configuration for validated-fields.

User-defined bundles live in ``~/.config/validated-fields/config.toml``
(or the file given with ``--config``), one table per bundle::

    [bundles.zip]
    template = "ddddd"
    placeholder = "ZIP code"

    [bundles.quantity]
    charset = "0123456789"
    minimum = 1
    maximum = 99
    alignment = "right"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from textual.logging import TextualHandler

from validated_fields.bundle import (
    PRESETS,
    Alignment,
    Capitalization,
    KeyboardKind,
    ValidationBundle,
)
from validated_fields.capabilities import Validating
from validated_fields.errors import ConfigError
from validated_fields.template import StructuredTemplate
from validated_fields.validators import (
    CharsetOnly,
    ComparableRange,
    Email,
    Length,
    Pattern,
    ScaledDecimal,
    Trim,
    ValidURL,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path.home() / ".config" / "validated-fields" / "config.toml"

_VALIDATOR_KEYS = frozenset(
    {
        "trim",
        "template",
        "charset",
        "min_length",
        "max_length",
        "minimum",
        "maximum",
        "decimal_places",
        "pattern",
        "email",
        "url",
    }
)
_PRESENTATION_KEYS = frozenset(
    {
        "keyboard",
        "prefix",
        "suffix",
        "alignment",
        "placeholder",
        "preselect",
        "capitalization",
    }
)


def _load_config_dict(path: Path | None = None) -> dict:
    """Load the full config.toml as a dict, or return an empty dict when unreadable."""
    path = path or _CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _enum_value(enum_cls: type, name: str, raw: Any) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Bundle {name!r}: {raw!r} is not one of {choices}") from None


def _validators_from(data: dict[str, Any]) -> tuple[Validating, ...]:
    """Build validators in a fixed order: trimming first, responders after."""
    validators: list[Validating] = []
    if data.get("trim"):
        validators.append(Trim())
    if "template" in data:
        validators.append(StructuredTemplate(str(data["template"])))
    if "decimal_places" in data:
        validators.append(ScaledDecimal(int(data["decimal_places"])))
    if "charset" in data:
        validators.append(CharsetOnly(str(data["charset"])))
    if "min_length" in data or "max_length" in data:
        validators.append(Length(min=data.get("min_length"), max=data.get("max_length")))
    if "minimum" in data or "maximum" in data:
        validators.append(ComparableRange(minimum=data.get("minimum"), maximum=data.get("maximum")))
    if "pattern" in data:
        validators.append(Pattern(str(data["pattern"])))
    if data.get("email"):
        validators.append(Email())
    if data.get("url"):
        validators.append(ValidURL())
    return tuple(validators)


def bundle_from_mapping(name: str, data: dict[str, Any]) -> ValidationBundle:
    """Build a ``ValidationBundle`` from one ``[bundles.<name>]`` table.

    Args:
        name: The bundle name, used in error messages.
        data: The table's keys and values.

    Returns:
        The bundle.

    Raises:
        ConfigError: If the table has unknown keys or invalid values.
    """
    unknown = set(data) - _VALIDATOR_KEYS - _PRESENTATION_KEYS
    if unknown:
        raise ConfigError(f"Bundle {name!r}: unknown keys {', '.join(sorted(unknown))}")

    try:
        validators = _validators_from(data)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Bundle {name!r}: {exc}") from exc

    return ValidationBundle(
        validators=validators,
        keyboard=_enum_value(KeyboardKind, name, data["keyboard"]) if "keyboard" in data else None,
        prefix=data.get("prefix"),
        suffix=data.get("suffix"),
        alignment=_enum_value(Alignment, name, data["alignment"]) if "alignment" in data else None,
        placeholder=data.get("placeholder"),
        preselect=data.get("preselect"),
        capitalization=(
            _enum_value(Capitalization, name, data["capitalization"])
            if "capitalization" in data
            else None
        ),
    )


def load_bundles(path: Path | None = None) -> dict[str, ValidationBundle]:
    """Load user-defined bundles from the ``[bundles]`` section of config.toml.

    Returns:
        A dict mapping bundle names to bundles; empty when none are defined.

    Raises:
        ConfigError: If a bundle definition is malformed.
    """
    tables = _load_config_dict(path).get("bundles", {})
    if not isinstance(tables, dict):
        raise ConfigError("[bundles] must be a table of tables")
    bundles: dict[str, ValidationBundle] = {}
    for name, data in tables.items():
        if not isinstance(data, dict):
            raise ConfigError(f"Bundle {name!r} must be a table")
        bundles[str(name)] = bundle_from_mapping(str(name), data)
    return bundles


def resolve_bundles(
    preset_names: list[str] | None = None, config_path: Path | None = None
) -> dict[str, ValidationBundle]:
    """Return the bundles to show, user bundles overriding built-in presets.

    Args:
        preset_names: Names to select; all available bundles when empty.
        config_path: Alternative config.toml location.

    Raises:
        ConfigError: If a requested name is neither a preset nor a user bundle.
    """
    available = {name: factory() for name, factory in PRESETS.items()}
    available.update(load_bundles(config_path))
    if not preset_names:
        return available
    missing = [n for n in preset_names if n not in available]
    if missing:
        raise ConfigError(f"Unknown bundle(s): {', '.join(missing)}")
    return {name: available[name] for name in preset_names}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace with 'preset', 'config' and 'verbose' attributes.
    """
    parser = argparse.ArgumentParser(
        prog="validated-fields",
        description="A demo form of validated, auto-formatting input fields.",
    )
    parser.add_argument(
        "-p",
        "--preset",
        action="append",
        help="Bundle to show (repeatable). Defaults to all presets and user bundles.",
        default=None,
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to a config.toml with [bundles] tables.",
        default=None,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log session decisions at DEBUG level to the Textual console.",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to the Textual devtools console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[TextualHandler()],
        force=True,
    )
