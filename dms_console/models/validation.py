from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from dms_console.errors import NotFoundError, ValidationRuleError


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    BOOLEAN = "boolean"
    SELECT = "select"


class RuleKind(str, Enum):
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    MIN_DATE = "minDate"
    MAX_DATE = "maxDate"


ALLOWED_RULES: Dict[FieldType, Tuple[RuleKind, ...]] = {
    FieldType.TEXT: (RuleKind.REQUIRED, RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH, RuleKind.PATTERN),
    FieldType.NUMBER: (RuleKind.REQUIRED, RuleKind.MIN, RuleKind.MAX),
    FieldType.EMAIL: (RuleKind.REQUIRED, RuleKind.EMAIL),
    FieldType.DATE: (RuleKind.REQUIRED, RuleKind.MIN_DATE, RuleKind.MAX_DATE),
    FieldType.BOOLEAN: (RuleKind.REQUIRED,),
    FieldType.SELECT: (RuleKind.REQUIRED,),
}

# Kinds that carry a parameter in ``ValidationRule.value``
VALUE_KINDS: FrozenSet[RuleKind] = frozenset({
    RuleKind.MIN_LENGTH,
    RuleKind.MAX_LENGTH,
    RuleKind.PATTERN,
    RuleKind.MIN,
    RuleKind.MAX,
    RuleKind.MIN_DATE,
    RuleKind.MAX_DATE,
})

RULE_LABELS: Dict[RuleKind, str] = {
    RuleKind.REQUIRED: "Required",
    RuleKind.MIN_LENGTH: "Minimum Length",
    RuleKind.MAX_LENGTH: "Maximum Length",
    RuleKind.PATTERN: "Pattern (Regex)",
    RuleKind.MIN: "Minimum Value",
    RuleKind.MAX: "Maximum Value",
    RuleKind.EMAIL: "Valid Email Format",
    RuleKind.MIN_DATE: "Minimum Date",
    RuleKind.MAX_DATE: "Maximum Date",
}


class ValidationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    value: Optional[str] = None
    message: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.kind in VALUE_KINDS


class RuleOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    label: str
    has_value: bool


def allowed_rule_kinds(field_type: FieldType) -> Tuple[RuleKind, ...]:
    return ALLOWED_RULES[FieldType(field_type)]


def rule_options(field_type: FieldType) -> List[RuleOption]:
    """Rule choices offered to the validation builder for a field type."""
    return [
        RuleOption(kind=kind, label=RULE_LABELS[kind], has_value=kind in VALUE_KINDS)
        for kind in allowed_rule_kinds(field_type)
    ]


def _check_parameter(rule: ValidationRule) -> None:
    if rule.kind not in VALUE_KINDS:
        return
    raw = (rule.value or "").strip()
    if not raw:
        raise ValidationRuleError(f"Rule '{rule.kind.value}' requires a value")
    if rule.kind in (RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH):
        if not raw.isdigit():
            raise ValidationRuleError(f"Rule '{rule.kind.value}' needs a non-negative integer, got '{raw}'")
    elif rule.kind in (RuleKind.MIN, RuleKind.MAX):
        try:
            float(raw)
        except ValueError:
            raise ValidationRuleError(f"Rule '{rule.kind.value}' needs a number, got '{raw}'") from None
    elif rule.kind == RuleKind.PATTERN:
        try:
            re.compile(raw)
        except re.error as exc:
            raise ValidationRuleError(f"Invalid pattern '{raw}': {exc}") from exc
    elif rule.kind in (RuleKind.MIN_DATE, RuleKind.MAX_DATE):
        try:
            date.fromisoformat(raw)
        except ValueError:
            raise ValidationRuleError(f"Rule '{rule.kind.value}' needs an ISO date, got '{raw}'") from None


def check_rule(field_type: FieldType, existing: Sequence[ValidationRule], rule: ValidationRule) -> None:
    field_type = FieldType(field_type)
    if rule.kind not in ALLOWED_RULES[field_type]:
        raise ValidationRuleError(
            f"Rule '{rule.kind.value}' is not allowed for {field_type.value} fields"
        )
    if any(r.kind == rule.kind for r in existing):
        raise ValidationRuleError(f"Rule '{rule.kind.value}' is already defined for this field")
    _check_parameter(rule)


def add_rule(field_type: FieldType, rules: Sequence[ValidationRule], rule: ValidationRule) -> List[ValidationRule]:
    """Return ``rules`` with ``rule`` appended, or raise ValidationRuleError."""
    check_rule(field_type, rules, rule)
    return [*rules, rule]


def remove_rule(
    rules: Sequence[ValidationRule], position: int, kind: Optional[RuleKind] = None
) -> List[ValidationRule]:
    if not 0 <= position < len(rules):
        raise NotFoundError("Validation rule", position)
    if kind is not None and rules[position].kind != RuleKind(kind):
        raise ValidationRuleError(
            f"Rule at position {position} is '{rules[position].kind.value}', not '{RuleKind(kind).value}'"
        )
    return [r for i, r in enumerate(rules) if i != position]


def validate_rules(field_type: FieldType, rules: Sequence[ValidationRule]) -> List[ValidationRule]:
    """Check a whole rule sequence against ``field_type``, in declared order."""
    accepted: List[ValidationRule] = []
    for rule in rules:
        accepted = add_rule(field_type, accepted, rule)
    return accepted
