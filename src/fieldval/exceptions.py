"""Exceptions raised by fieldval.

Failed checks are never exceptions; they are reported as
``ValidationError`` records. The classes here cover misuse of the
library and failures inside caller-supplied predicates.
"""


class FieldvalError(Exception):
    """Base class for all fieldval exceptions."""


class ConfigurationError(FieldvalError):
    """Raised when a rules document or configuration file is invalid."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ValidatorFrozenError(FieldvalError):
    """Raised when a frozen validator or one of its chains is modified."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Validator is frozen; cannot add rules for field '{field_name}'")


class RuleExecutionError(FieldvalError):
    """Raised when a rule predicate raises instead of returning a result."""

    def __init__(self, field_name: str, kind: str, error: Exception):
        self.field_name = field_name
        self.kind = kind
        self.error = error
        super().__init__(
            f"Rule '{kind}' on field '{field_name}' raised {type(error).__name__}: {error}"
        )
