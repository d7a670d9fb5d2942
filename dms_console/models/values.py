"""Entered document values.

Upload forms hand over loosely typed data (strings from text inputs,
numbers, dates, checkbox states).  :func:`coerce_value` turns each raw
entry into one of the tagged value types below so the evaluator can
compare lengths, numbers and dates without ad hoc conversions.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

from .validation import FieldType

_BOOL_WORDS = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}


@dataclass(frozen=True)
class TextValue:
    value: str

    def as_text(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: float

    def as_text(self) -> str:
        if math.isfinite(self.value) and self.value == int(self.value):
            return str(int(self.value))
        return str(self.value)


@dataclass(frozen=True)
class DateValue:
    value: date

    def as_text(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def as_text(self) -> str:
        return "true" if self.value else "false"


FieldValue = Union[TextValue, NumberValue, DateValue, BoolValue]


def _parse_number(text: str) -> Optional[float]:
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def coerce_value(raw: Any, field_type: Optional[FieldType] = None) -> Optional[FieldValue]:
    """Wrap a raw entry in its tagged type; ``None`` means absent.

    Strings entered for number fields (or for an unknown field type) become
    numbers when they parse as one; text, email and select fields keep the
    string as typed so leading zeros survive.  Blank strings count as absent.
    """
    if raw is None:
        return None
    if isinstance(raw, (TextValue, NumberValue, DateValue, BoolValue)):
        return raw
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, (int, float)):
        return NumberValue(float(raw))
    if isinstance(raw, datetime):
        return DateValue(raw.date())
    if isinstance(raw, date):
        return DateValue(raw)
    text = str(raw)
    if not text.strip():
        return None
    if field_type is not None:
        field_type = FieldType(field_type)
    if field_type == FieldType.BOOLEAN and text.strip().lower() in _BOOL_WORDS:
        return BoolValue(_BOOL_WORDS[text.strip().lower()])
    if field_type in (None, FieldType.NUMBER):
        number = _parse_number(text.strip())
        if number is not None:
            return NumberValue(number)
    return TextValue(text)


def as_number(value: FieldValue) -> Optional[float]:
    if isinstance(value, NumberValue):
        return value.value
    if isinstance(value, TextValue):
        return _parse_number(value.value.strip())
    return None


def as_date(value: FieldValue, date_format: str = "%Y-%m-%d") -> Optional[date]:
    if isinstance(value, DateValue):
        return value.value
    if isinstance(value, (TextValue, NumberValue)):
        try:
            return datetime.strptime(value.as_text().strip(), date_format).date()
        except ValueError:
            return None
    return None
