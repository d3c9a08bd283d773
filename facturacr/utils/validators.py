"""
Declarative validation engine shared by documents and their sub-entities.

Every model declares an ordered ``RULES`` table mapping a field name to a
tuple of rule descriptors. A single interpreter evaluates the descriptors, so
models never carry hand written validation code. Models that own other models
expose them through ``children()`` and their violations are aggregated under
the owning path (``issuer.identification_document.document_type``).
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from facturacr.core.exceptions import ValidationError

BLANK_MESSAGE = "can't be blank"
INCLUSION_MESSAGE = "is not included in the list"
LENGTH_MESSAGE = "is the wrong length (should be {length} characters)"


@dataclass(frozen=True)
class Presence:
    """Fails when the value is absent or empty."""


@dataclass(frozen=True)
class Membership:
    """Fails when a present value is not a key of ``table``."""
    table: Mapping[str, str]


@dataclass(frozen=True)
class Length:
    """Fails when a present value does not have exactly ``length`` characters."""
    length: int


@dataclass(frozen=True)
class ConditionalPresence:
    """Presence applied only when ``predicate(entity)`` holds."""
    predicate: Callable[[Any], bool]


Rule = Any  # Presence | Membership | Length | ConditionalPresence
RuleTable = Dict[str, Tuple[Rule, ...]]


@dataclass
class ValidationResult:
    """Outcome of a validation run; truthy when there are no violations."""
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": {k: list(v) for k, v in self.errors.items()}}


def is_blank(value: Any) -> bool:
    """Blank means None, a whitespace-only string or an empty collection."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def evaluate_rule(rule: Rule, entity: Any, value: Any) -> Optional[str]:
    """
    Evaluate one rule descriptor.

    Returns:
        The violation message, or None when the rule holds
    """
    if isinstance(rule, Presence):
        return BLANK_MESSAGE if is_blank(value) else None

    if isinstance(rule, ConditionalPresence):
        if rule.predicate(entity) and is_blank(value):
            return BLANK_MESSAGE
        return None

    # Membership and length only judge values that are present
    if is_blank(value):
        return None

    if isinstance(rule, Membership):
        return None if value in rule.table else INCLUSION_MESSAGE

    if isinstance(rule, Length):
        return None if len(str(value)) == rule.length else LENGTH_MESSAGE.format(length=rule.length)

    raise TypeError(f"Unknown validation rule: {rule!r}")


def validate(entity: Any) -> ValidationResult:
    """
    Validate an entity against its declared rules and those of everything it owns.

    Args:
        entity: Object exposing a ``RULES`` table and optionally ``children()``

    Returns:
        ValidationResult with violations keyed by field path, in declaration order
    """
    errors: Dict[str, List[str]] = {}

    rules: RuleTable = getattr(entity, "RULES", {})
    for field_name, field_rules in rules.items():
        value = getattr(entity, field_name, None)
        for rule in field_rules:
            message = evaluate_rule(rule, entity, value)
            if message:
                errors.setdefault(field_name, []).append(message)

    children: Optional[Callable[[], Iterable[Tuple[str, Any]]]] = getattr(entity, "children", None)
    if children is not None:
        for path, child in children():
            for child_field, messages in validate(child).errors.items():
                errors.setdefault(f"{path}.{child_field}", []).extend(messages)

    return ValidationResult(errors)


def ensure_valid(
    entity: Any,
    message: str = "Invalid record",
    error_class: Type[ValidationError] = ValidationError
) -> ValidationResult:
    """
    Validate and raise ``error_class`` carrying every violation when invalid.
    """
    result = validate(entity)
    if not result.valid:
        raise error_class(message, field_errors=result.errors)
    return result
