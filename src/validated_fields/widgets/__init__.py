"""Textual widgets hosting edit sessions."""

from validated_fields.widgets.choice_field import ChoiceField, make_field
from validated_fields.widgets.validated_input import ValidatedInput

__all__ = ["ChoiceField", "ValidatedInput", "make_field"]
