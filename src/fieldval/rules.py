"""Built-in rule predicates and default messages.

Each factory returns a predicate: a function of one value that returns
``True`` when the value passes. Predicates inspect the value's runtime
type and return ``False`` for shapes they do not understand instead of
raising.
"""

import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from email.utils import parsedate_to_datetime
from numbers import Real
from typing import Any

Predicate = Callable[[Any], "bool | str"]

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
URL_PATTERN = re.compile(r"(https?|ftp)://[^\s/$.?#].[^\s]*", re.IGNORECASE)
ALPHANUMERIC_PATTERN = re.compile(r"[a-z0-9]+", re.IGNORECASE | re.ASCII)
WHITESPACE_PATTERN = re.compile(r"\s")

# Tried in order after ISO 8601
DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "This field is required",
    "string": "This field must be a string",
    "number": "This field must be a number",
    "boolean": "This field must be a boolean",
    "min": "Value must be greater than or equal to {limit}",
    "max": "Value must be less than or equal to {limit}",
    "length": "This field must be between {min} and {max} characters long",
    "email": "This field must be a valid email address",
    "url": "This field must be a valid URL",
    "pattern": "This field does not match the required pattern",
    "enum": "Invalid value",
    "lowercase": "This field must be lowercase",
    "uppercase": "This field must be uppercase",
    "alphanumeric": "This field must contain only letters and numbers",
    "date": "This field must be a valid date",
    "trim": "This field must not have leading or trailing whitespace",
    "no_whitespace": "This field must not contain any whitespace",
    "custom": "Invalid value",
}


@dataclass(frozen=True)
class Rule:
    """A single check bound to a field."""
    kind: str
    message: str
    predicate: Predicate

    def check(self, value: Any) -> str | None:
        """Run the predicate and return the failure message, if any."""
        outcome = self.predicate(value)
        if outcome is True:
            return None
        if isinstance(outcome, str):
            return outcome
        return self.message


def default_message(kind: str, **params: Any) -> str:
    """Return the default message for ``kind`` with parameters filled in."""
    return DEFAULT_MESSAGES[kind].format(**params)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a number here
    return isinstance(value, Real) and not isinstance(value, bool)


def is_present(value: Any) -> bool:
    return value is not None and value != ""


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    return _is_number(value) and not (isinstance(value, float) and math.isnan(value))


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def at_least(limit: float) -> Predicate:
    """Numbers compare by value, strings by length."""
    def predicate(value: Any) -> bool:
        if _is_number(value):
            return value >= limit
        if isinstance(value, str):
            return len(value) >= limit
        return False
    return predicate


def at_most(limit: float) -> Predicate:
    """Numbers compare by value, strings by length."""
    def predicate(value: Any) -> bool:
        if _is_number(value):
            return value <= limit
        if isinstance(value, str):
            return len(value) <= limit
        return False
    return predicate


def length_between(minimum: int, maximum: int | None = None) -> Predicate:
    def predicate(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if len(value) < minimum:
            return False
        return maximum is None or len(value) <= maximum
    return predicate


def matches(regex: "str | re.Pattern[str]", flags: int = 0) -> Predicate:
    """Search semantics: the pattern may match anywhere unless anchored."""
    compiled = re.compile(regex, flags) if isinstance(regex, str) else regex

    def predicate(value: Any) -> bool:
        return isinstance(value, str) and compiled.search(value) is not None
    return predicate


def fully_matches(compiled: "re.Pattern[str]") -> Predicate:
    def predicate(value: Any) -> bool:
        return isinstance(value, str) and compiled.fullmatch(value) is not None
    return predicate


def one_of(values: Iterable[Any]) -> Predicate:
    """Membership by type and value, so ``True`` never matches ``1``."""
    allowed = tuple(values)

    def predicate(value: Any) -> bool:
        return any(type(candidate) is type(value) and candidate == value for candidate in allowed)
    return predicate


def is_lowercase(value: Any) -> bool:
    return isinstance(value, str) and value == value.lower()


def is_uppercase(value: Any) -> bool:
    return isinstance(value, str) and value == value.upper()


def parse_date(value: Any) -> datetime | None:
    """Interpret ``value`` as a point in time, or return None.

    Accepts ``date``/``datetime`` instances and strings in ISO 8601, the
    common slash and month-name layouts in ``DATE_FORMATS``, or RFC 2822
    (``Fri, 15 Sep 2023 10:00:00 GMT``).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if not isinstance(value, str):
        return None

    value = value.strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def is_date(value: Any) -> bool:
    return parse_date(value) is not None


def is_trimmed(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == value


def has_no_whitespace(value: Any) -> bool:
    return isinstance(value, str) and WHITESPACE_PATTERN.search(value) is None


is_email = fully_matches(EMAIL_PATTERN)
is_url = fully_matches(URL_PATTERN)
is_alphanumeric = fully_matches(ALPHANUMERIC_PATTERN)


# kind -> (parameters, short description); used by the loader and the CLI
CATALOG: dict[str, tuple[tuple[str, ...], str]] = {
    "required": ((), "value is not missing and not an empty string"),
    "string": ((), "value is a string"),
    "number": ((), "value is a real number (not bool, not NaN)"),
    "boolean": ((), "value is a bool"),
    "min": (("limit",), "number >= limit, or string length >= limit"),
    "max": (("limit",), "number <= limit, or string length <= limit"),
    "length": (("min", "max"), "string length within inclusive bounds (max optional)"),
    "email": ((), "string looks like an email address"),
    "url": ((), "string is an http, https or ftp URL"),
    "pattern": (("regex",), "string matches the regular expression"),
    "enum": (("values",), "value is one of the allowed values"),
    "lowercase": ((), "string is all lowercase"),
    "uppercase": ((), "string is all uppercase"),
    "alphanumeric": ((), "string contains only ASCII letters and digits"),
    "date": ((), "date/datetime, or an ISO 8601, common or RFC 2822 date string"),
    "trim": ((), "string has no leading or trailing whitespace"),
    "no_whitespace": ((), "string contains no whitespace"),
    "custom": (("predicate",), "caller-supplied predicate returns True"),
}
