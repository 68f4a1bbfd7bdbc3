"""Custom exceptions for validated-fields.

Validation failures are never raised: validators report them as reason
strings.  These exceptions signal misuse of the API or bad configuration.
"""


class ValidatedFieldsError(Exception):
    """Base class for all validated-fields exceptions."""


class SessionStateError(ValidatedFieldsError):
    """Raised when an edit session lifecycle point is invoked in the wrong stage."""


class ConfigError(ValidatedFieldsError):
    """Raised when a bundle definition in config.toml is malformed."""
