"""fieldval - Declarative field validation for records.

Declare an ordered chain of rules per field, then validate records to get
human-readable error messages for each invalid field.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Declarative field validation for records"

from fieldval.chain import RuleChain
from fieldval.config import FieldvalConfig, ValidatorSettings, load_config
from fieldval.exceptions import (
    ConfigurationError,
    FieldvalError,
    RuleExecutionError,
    ValidatorFrozenError,
)
from fieldval.loader import build_validator, load_rules
from fieldval.rules import Rule
from fieldval.validator import ValidationError, Validator, create_validator

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "ConfigurationError",
    "FieldvalConfig",
    "FieldvalError",
    "Rule",
    "RuleChain",
    "RuleExecutionError",
    "ValidationError",
    "Validator",
    "ValidatorFrozenError",
    "ValidatorSettings",
    "build_validator",
    "create_validator",
    "load_config",
    "load_rules",
]
