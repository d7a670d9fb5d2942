from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from dms_console.forms.evaluator import ValidationFailure


class ConsoleError(Exception):
    pass


class ValidationRuleError(ConsoleError):
    """A rule kind is illegal for the field type, duplicated, or badly parameterised."""


class ValidationError(ConsoleError):
    """A required top-level value (e.g. a name) is empty or inconsistent."""


class NotFoundError(ConsoleError):
    def __init__(self, what: str, key: object) -> None:
        super().__init__(f"{what} '{key}' not found")
        self.what = what
        self.key = key


class InUseError(ConsoleError):
    def __init__(self, sub_field_id: str, usage_count: int) -> None:
        super().__init__(f"Sub-field '{sub_field_id}' is used {usage_count} time(s) and cannot be deleted")
        self.sub_field_id = sub_field_id
        self.usage_count = usage_count


class DocumentValidationError(ConsoleError):
    """Raised when entered document values fail their schema."""

    def __init__(self, failure: "ValidationFailure") -> None:
        super().__init__(failure.message)
        self.failure = failure


class TransportError(ConsoleError):
    """Reserved for stores backed by a remote service; re-issuing the same call is safe."""
