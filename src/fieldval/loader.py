"""Build validators from declarative rules documents (JSON or YAML).

A rules document maps field names to lists of rule entries. An entry is
either a bare rule kind or a mapping with a ``rule`` key and the rule's
parameters::

    username:
      - required
      - rule: length
        min: 5
        max: 15
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .chain import RuleChain
from .config import ValidatorSettings
from .exceptions import ConfigurationError
from .rules import CATALOG
from .validator import Validator

logger = logging.getLogger(__name__)

# camelCase spellings accepted in documents
KIND_ALIASES = {
    "noWhitespace": "no_whitespace",
}

PARAMETERS = ("limit", "min", "max", "regex", "ignore_case", "values")

REQUIRED_PARAMETERS = {
    "min": ("limit",),
    "max": ("limit",),
    "length": ("min",),
    "pattern": ("regex",),
    "enum": ("values",),
}


class RuleSpec(BaseModel):
    """One rule entry of a rules document."""
    rule: str
    message: str | None = None
    limit: int | float | None = None
    min: int | None = None
    max: int | None = None
    regex: str | None = Field(alias="pattern", default=None)
    ignore_case: bool = Field(alias="ignoreCase", default=False)
    values: list[Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("rule")
    @classmethod
    def validate_rule(cls, v):
        v = KIND_ALIASES.get(v, v)
        if v == "custom":
            raise ValueError("custom rules need a Python predicate and cannot be declared in a document")
        if v not in CATALOG:
            raise ValueError(f"unknown rule '{v}'")
        return v

    @model_validator(mode="after")
    def check_parameters(self):
        accepted = set(CATALOG[self.rule][0])
        if self.rule == "pattern":
            accepted.add("ignore_case")
        unexpected = [name for name in PARAMETERS if name in self.model_fields_set and name not in accepted]
        if unexpected:
            raise ValueError(f"rule '{self.rule}' does not take parameter(s): {', '.join(unexpected)}")

        for name in REQUIRED_PARAMETERS.get(self.rule, ()):
            if getattr(self, name) is None:
                raise ValueError(f"rule '{self.rule}' requires parameter '{name}'")
        if self.regex is not None:
            try:
                re.compile(self.regex)
            except re.error as e:
                raise ValueError(f"invalid pattern {self.regex!r}: {e}") from e
        return self

    def apply(self, chain: RuleChain) -> RuleChain:
        """Append this rule to ``chain``."""
        kind = self.rule
        if kind in ("min", "max"):
            return getattr(chain, kind)(self.limit, self.message)
        if kind == "length":
            return chain.length(self.min, self.max, self.message)
        if kind == "pattern":
            flags = re.IGNORECASE if self.ignore_case else 0
            return chain.pattern(re.compile(self.regex, flags), self.message)
        if kind == "enum":
            return chain.enum(self.values, self.message)
        return getattr(chain, kind)(self.message)


def _parse_entry(field_name: str, entry: Any) -> RuleSpec:
    if isinstance(entry, str):
        entry = {"rule": entry}
    if not isinstance(entry, dict):
        raise ConfigurationError(
            f"Rule entries for field '{field_name}' must be strings or mappings, got {type(entry).__name__}"
        )
    try:
        return RuleSpec(**entry)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid rule for field '{field_name}': {e}") from e


def build_validator(document: dict[str, Any], validator: Validator | None = None,
                    settings: ValidatorSettings | None = None) -> Validator:
    """Declare the chains described by ``document`` on a validator.

    Args:
        document: Mapping of field name to a list of rule entries
        validator: Existing validator to extend (default: a new one)
        settings: Settings for the new validator when none is given

    Returns:
        The configured validator

    Raises:
        ConfigurationError: If the document is malformed
    """
    if not isinstance(document, dict):
        raise ConfigurationError(f"Rules document must be a mapping, got {type(document).__name__}")

    # Parse everything before touching the validator so a bad entry leaves it unchanged
    parsed: dict[str, list[RuleSpec]] = {}
    for field_name, entries in document.items():
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ConfigurationError(f"Rules for field '{field_name}' must be a list")
        parsed[str(field_name)] = [_parse_entry(field_name, entry) for entry in entries]

    if validator is None:
        validator = Validator(settings)
    for field_name, specs in parsed.items():
        chain = validator.field(field_name)
        for spec in specs:
            spec.apply(chain)
        logger.debug(f"Loaded {len(specs)} rules for field '{field_name}'")

    return validator


def read_document(path: str | Path) -> Any:
    """Read a JSON or YAML file; the suffix decides the parser.

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError("File not found", source=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON: {e}", source=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", source=str(path)) from e


def load_rules(path: str | Path, settings: ValidatorSettings | None = None) -> Validator:
    """Load a rules document from disk and build a validator from it."""
    logger.info(f"Loading rules from {path}")
    try:
        return build_validator(read_document(path), settings=settings)
    except ConfigurationError as e:
        if e.source is None:
            raise ConfigurationError(str(e), source=str(path)) from e
        raise
