"""Keystroke-level validation, templating and edit sessions for text fields."""

from validated_fields.bundle import ValidationBundle
from validated_fields.field_validator import READ_ONLY, FieldValidator
from validated_fields.problems import Problem, ProblemKind
from validated_fields.session import EditSession, EndReason, FieldDelegate, Stage
from validated_fields.template import StructuredTemplate, fill_in_template
from validated_fields.validators import (
    And,
    CharsetOnly,
    ComparableRange,
    Email,
    FormattedNumber,
    Length,
    Pattern,
    ScaledDecimal,
    Trim,
    ValidURL,
)

__all__ = [
    "READ_ONLY",
    "And",
    "CharsetOnly",
    "ComparableRange",
    "EditSession",
    "Email",
    "EndReason",
    "FieldDelegate",
    "FieldValidator",
    "FormattedNumber",
    "Length",
    "Pattern",
    "Problem",
    "ProblemKind",
    "ScaledDecimal",
    "Stage",
    "StructuredTemplate",
    "Trim",
    "ValidURL",
    "ValidationBundle",
    "fill_in_template",
]
