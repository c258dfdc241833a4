"""Fluent rule chains.

A ``RuleChain`` collects the rules declared for one field. Every
rule-adding method appends a single rule and returns the chain itself,
so declarations read as one expression::

    chain.required().string().length(5, 15)

``validate_value`` runs the rules in declaration order and returns the
messages of the rules that failed. All rules run; a failed ``required``
does not stop the ones after it.
"""

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from . import rules as checks
from .exceptions import RuleExecutionError, ValidatorFrozenError
from .rules import Predicate, Rule, default_message

logger = logging.getLogger(__name__)


def _resolve(message: str | None, kind: str, **params: Any) -> str:
    return default_message(kind, **params) if message is None else message


class RuleChain:
    """Ordered, append-only list of rules for one field."""

    def __init__(self, name: str):
        self.name = name
        self._rules: list[Rule] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        kinds = ", ".join(rule.kind for rule in self._rules)
        return f"RuleChain({self.name!r}, [{kinds}])"

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Declared rules, in execution order."""
        return tuple(self._rules)

    def freeze(self) -> None:
        self._frozen = True

    def add_rule(self, kind: str, message: str, predicate: Predicate) -> "RuleChain":
        """Append a rule and return the chain."""
        if self._frozen:
            raise ValidatorFrozenError(self.name)
        self._rules.append(Rule(kind, message, predicate))
        return self

    def required(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("required", _resolve(message, "required"), checks.is_present)

    def string(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("string", _resolve(message, "string"), checks.is_string)

    def number(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("number", _resolve(message, "number"), checks.is_number)

    def boolean(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("boolean", _resolve(message, "boolean"), checks.is_boolean)

    def min(self, limit: float, message: str | None = None) -> "RuleChain":
        """Numbers must be >= limit; strings must be at least ``limit`` long."""
        return self.add_rule(
            "min", _resolve(message, "min", limit=limit), checks.at_least(limit)
        )

    def max(self, limit: float, message: str | None = None) -> "RuleChain":
        """Numbers must be <= limit; strings must be at most ``limit`` long."""
        return self.add_rule(
            "max", _resolve(message, "max", limit=limit), checks.at_most(limit)
        )

    def length(self, min: int, max: int | None = None, message: str | None = None) -> "RuleChain":
        """String length must lie in ``[min, max]``; no upper bound when ``max`` is None."""
        if message is None:
            message = default_message("length", min=min, max="∞" if max is None else max)
        return self.add_rule("length", message, checks.length_between(min, max))

    def email(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("email", _resolve(message, "email"), checks.is_email)

    def url(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("url", _resolve(message, "url"), checks.is_url)

    def pattern(self, regex: "str | re.Pattern[str]", message: str | None = None) -> "RuleChain":
        return self.add_rule("pattern", _resolve(message, "pattern"), checks.matches(regex))

    def enum(self, values: Iterable[Any], message: str | None = None) -> "RuleChain":
        return self.add_rule("enum", _resolve(message, "enum"), checks.one_of(values))

    def lowercase(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("lowercase", _resolve(message, "lowercase"), checks.is_lowercase)

    def uppercase(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("uppercase", _resolve(message, "uppercase"), checks.is_uppercase)

    def alphanumeric(self, message: str | None = None) -> "RuleChain":
        return self.add_rule(
            "alphanumeric", _resolve(message, "alphanumeric"), checks.is_alphanumeric
        )

    def date(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("date", _resolve(message, "date"), checks.is_date)

    def trim(self, message: str | None = None) -> "RuleChain":
        return self.add_rule("trim", _resolve(message, "trim"), checks.is_trimmed)

    def no_whitespace(self, message: str | None = None) -> "RuleChain":
        return self.add_rule(
            "no_whitespace", _resolve(message, "no_whitespace"), checks.has_no_whitespace
        )

    def custom(self, predicate: Callable[[Any], "bool | str"], message: str | None = None) -> "RuleChain":
        """Add a caller-supplied predicate.

        The predicate passes by returning ``True``. Returning a string fails
        the rule with that string as the message.
        """
        return self.add_rule("custom", _resolve(message, "custom"), predicate)

    def validate_value(self, value: Any) -> list[str]:
        """Run every rule against ``value`` and return the failure messages.

        Raises:
            RuleExecutionError: If a predicate raises.
        """
        errors: list[str] = []
        for rule in self._rules:
            try:
                failure = rule.check(value)
            except Exception as e:
                logger.error(f"Rule '{rule.kind}' on field '{self.name}' raised: {e}")
                raise RuleExecutionError(self.name, rule.kind, e) from e
            if failure is not None:
                errors.append(failure)
        return errors
