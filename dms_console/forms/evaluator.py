"""Validation of entered document values against a schema.

Evaluation walks the schema's sub-fields in order and each field's rules
in declared order, and stops at the first failure.  Callers get at most
one failure per call; fix it and evaluate again to see the next one.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Union

from dms_console.errors import DocumentValidationError
from dms_console.models.subfield import SubField
from dms_console.models.validation import RuleKind, ValidationRule
from dms_console.models.values import FieldValue, as_date, as_number, coerce_value

from .deriver import Schema, iter_schema_fields

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_MESSAGES: Dict[RuleKind, str] = {
    RuleKind.REQUIRED: "{name} is required",
    RuleKind.MIN_LENGTH: "{name} is too short",
    RuleKind.MAX_LENGTH: "{name} is too long",
    RuleKind.MIN: "{name} is below minimum value",
    RuleKind.MAX: "{name} exceeds maximum value",
    RuleKind.PATTERN: "{name} does not match the required format",
    RuleKind.EMAIL: "{name} must be a valid email address",
    RuleKind.MIN_DATE: "{name} is before the earliest allowed date",
    RuleKind.MAX_DATE: "{name} is after the latest allowed date",
}


@dataclass(frozen=True)
class RequiredFieldMissing:
    field_name: str
    message: str
    index_name: Optional[str] = None


@dataclass(frozen=True)
class RuleViolation:
    field_name: str
    kind: RuleKind
    message: str
    index_name: Optional[str] = None


ValidationFailure = Union[RequiredFieldMissing, RuleViolation]


@dataclass(frozen=True)
class EvaluationResult:
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise DocumentValidationError(self.failure)


def _message(rule: ValidationRule, field_name: str) -> str:
    if rule.message:
        return rule.message
    template = DEFAULT_MESSAGES.get(rule.kind)
    if template is None:
        return f"{rule.kind.value} validation failed"
    return template.format(name=field_name)


def _min_length(value: FieldValue, param: str, date_format: str) -> bool:
    return len(value.as_text()) >= int(param)


def _max_length(value: FieldValue, param: str, date_format: str) -> bool:
    return len(value.as_text()) <= int(param)


def _min(value: FieldValue, param: str, date_format: str) -> bool:
    number = as_number(value)
    return number is not None and number >= float(param)


def _max(value: FieldValue, param: str, date_format: str) -> bool:
    number = as_number(value)
    return number is not None and number <= float(param)


def _pattern(value: FieldValue, param: str, date_format: str) -> bool:
    return re.search(param, value.as_text()) is not None


def _email(value: FieldValue, param: str, date_format: str) -> bool:
    return EMAIL_PATTERN.match(value.as_text().strip()) is not None


def _min_date(value: FieldValue, param: str, date_format: str) -> bool:
    entered = as_date(value, date_format)
    return entered is not None and entered >= date.fromisoformat(param)


def _max_date(value: FieldValue, param: str, date_format: str) -> bool:
    entered = as_date(value, date_format)
    return entered is not None and entered <= date.fromisoformat(param)


CHECKS: Dict[RuleKind, Callable[[FieldValue, str, str], bool]] = {
    RuleKind.MIN_LENGTH: _min_length,
    RuleKind.MAX_LENGTH: _max_length,
    RuleKind.MIN: _min,
    RuleKind.MAX: _max,
    RuleKind.PATTERN: _pattern,
    RuleKind.EMAIL: _email,
    RuleKind.MIN_DATE: _min_date,
    RuleKind.MAX_DATE: _max_date,
}


def _check_field(
    sub_field: SubField, value: Optional[FieldValue], index_name: Optional[str], date_format: str
) -> Optional[ValidationFailure]:
    if value is None and sub_field.is_required:
        return RequiredFieldMissing(sub_field.name, f"{sub_field.name} is required", index_name)

    for rule in sub_field.validations:
        if rule.kind == RuleKind.REQUIRED:
            if value is None:
                return RequiredFieldMissing(sub_field.name, _message(rule, sub_field.name), index_name)
            continue
        if value is None:
            continue
        check = CHECKS.get(rule.kind)
        if check is not None and not check(value, (rule.value or "").strip(), date_format):
            return RuleViolation(sub_field.name, rule.kind, _message(rule, sub_field.name), index_name)
    return None


def evaluate(schema: Schema, values: Mapping[str, Any], date_format: str = "%Y-%m-%d") -> EvaluationResult:
    for sub_field, index_name, _index_id in iter_schema_fields(schema):
        value = coerce_value(values.get(sub_field.name), sub_field.field_type)
        failure = _check_field(sub_field, value, index_name, date_format)
        if failure is not None:
            return EvaluationResult(failure)
    return EvaluationResult()
