"""Field validator: owns one rule chain per field and runs them over a record."""

import logging
from collections.abc import Callable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from .chain import RuleChain
from .config import ValidatorSettings
from .exceptions import ValidatorFrozenError

logger = logging.getLogger(__name__)

Configurator = Callable[[RuleChain], object]


@dataclass
class ValidationError:
    """Failure messages collected for one field.

    This is a result record, not an exception.
    """
    field: str
    errors: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.field}: {'; '.join(self.errors)}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {"field": self.field, "errors": list(self.errors)}


class Validator:
    """Maps field names to rule chains and validates records against them.

    Chains are created on first reference and shared afterwards, so
    ``field("x")`` always returns the same chain::

        validator = Validator()
        validator.field("age").number().min(18)
        validator.field("age").max(65)   # same chain, three rules
        errors = validator.validate({"age": 70})
    """

    def __init__(self, settings: ValidatorSettings | None = None):
        self.settings = settings if settings is not None else ValidatorSettings()
        self._chains: dict[str, RuleChain] = {}
        self._frozen = False

    def __contains__(self, name: object) -> bool:
        return name in self._chains

    def __len__(self) -> int:
        return len(self._chains)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chains)

    @property
    def fields(self) -> tuple[str, ...]:
        """Configured field names, in declaration order."""
        return tuple(self._chains)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def field(self, name: str) -> RuleChain:
        """Return the chain for ``name``, creating it on first use."""
        chain = self._chains.get(name)
        if chain is None:
            if self._frozen:
                raise ValidatorFrozenError(name)
            chain = RuleChain(name)
            self._chains[name] = chain
            logger.debug(f"Created rule chain for field '{name}'")
        return chain

    def configure(self, spec: Mapping[str, Configurator]) -> None:
        """Declare chains for several fields at once.

        Each configurator is called once with the field's chain; its
        return value is ignored.
        """
        for name, configure_field in spec.items():
            configure_field(self.field(name))

    def freeze(self) -> "Validator":
        """Reject any further fields or rules.

        Freeze once configuration is complete and before sharing the
        validator between threads.
        """
        self._frozen = True
        for chain in self._chains.values():
            chain.freeze()
        logger.debug(f"Validator frozen with {len(self._chains)} fields")
        return self

    def validate(self, data: Mapping[str, Any]) -> list[ValidationError]:
        """Validate ``data`` against every configured chain.

        Missing keys are validated as ``None``. Keys without a chain are
        ignored. Only fields with at least one failing rule are returned,
        in field declaration order.

        Raises:
            RuleExecutionError: If a rule predicate raises.
        """
        chains = list(self._chains.values())

        if self._use_parallel(len(chains)):
            logger.debug(f"Validating {len(chains)} fields in parallel")
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                futures = [executor.submit(chain.validate_value, data.get(chain.name)) for chain in chains]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [chain.validate_value(data.get(chain.name)) for chain in chains]

        results = [
            ValidationError(chain.name, errors)
            for chain, errors in zip(chains, outcomes)
            if errors
        ]

        logger.debug(f"Validated {len(chains)} fields: {len(results)} failed")
        return results

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return not self.validate(data)

    def _use_parallel(self, field_count: int) -> bool:
        return self.settings.parallel and field_count >= self.settings.parallel_threshold


def create_validator(settings: ValidatorSettings | None = None) -> Validator:
    """Create a new, empty validator."""
    return Validator(settings)
