from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, Iterator, List, Optional

from PySide6.QtCore import QObject, Signal

from dms_console.errors import InUseError, NotFoundError, ValidationError, ValidationRuleError
from dms_console.logger import logger
from dms_console.models.subfield import SubField
from dms_console.models.validation import FieldType, ValidationRule, validate_rules

_UPDATABLE = {"name", "field_type", "description", "is_required", "validations"}


class SubFieldLibrary(QObject):
    """Catalog of reusable sub-fields.

    The library owns the canonical records and their usage counters.
    Every read hands out a deep copy, so callers (index drafts in
    particular) can edit what they receive without touching the library.
    """

    changed = Signal()
    notified = Signal(str, str)  # message, severity

    def __init__(self, sub_fields: Iterable[SubField] = (), parent: QObject | None = None):
        super().__init__(parent)
        self._records: Dict[str, SubField] = {}
        for sub_field in sub_fields:
            validate_rules(sub_field.field_type, sub_field.validations)
            record = sub_field.model_copy(deep=True, update={"is_existing": True})
            if record.usage_count is None:
                record.usage_count = 0
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, sub_field_id: object) -> bool:
        return sub_field_id in self._records

    def _fail(self, exc: Exception) -> Exception:
        logger.warning(f"Sub-field library: {exc}")
        self.notified.emit(str(exc), "error")
        return exc

    def _require(self, sub_field_id: str) -> SubField:
        record = self._records.get(sub_field_id)
        if record is None:
            raise self._fail(NotFoundError("Sub-field", sub_field_id))
        return record

    def list(self) -> List[SubField]:
        return [r.model_copy(deep=True) for r in self._records.values()]

    def get(self, sub_field_id: str) -> SubField:
        return self._require(sub_field_id).model_copy(deep=True)

    def create(
        self,
        name: str,
        field_type: FieldType = FieldType.TEXT,
        description: str = "",
        is_required: bool = False,
        validations: Iterable[ValidationRule] = (),
    ) -> SubField:
        if not name or not name.strip():
            raise self._fail(ValidationError("Field name is required"))
        try:
            rules = validate_rules(FieldType(field_type), list(validations))
        except ValidationRuleError as exc:
            raise self._fail(exc)

        record = SubField(
            id=f"sf_{uuid.uuid4().hex[:12]}",
            name=name.strip(),
            field_type=field_type,
            description=description,
            is_required=is_required,
            validations=rules,
            is_existing=True,
            usage_count=0,
        )
        self._records[record.id] = record
        logger.info(f"Created sub-field {record.id} ({record.name})")
        self.notified.emit(f"{record.name} has been added to the library.", "success")
        self.changed.emit()
        return record.model_copy(deep=True)

    def update(self, sub_field_id: str, changes: Dict[str, Any]) -> None:
        record = self._require(sub_field_id)
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise self._fail(ValidationError(f"Cannot update sub-field attribute(s): {', '.join(sorted(unknown))}"))

        if "name" in changes and (not changes["name"] or not str(changes["name"]).strip()):
            raise self._fail(ValidationError("Field name is required"))

        field_type = FieldType(changes.get("field_type", record.field_type))
        rules = changes.get("validations", record.validations)
        try:
            rules = validate_rules(field_type, [ValidationRule.model_validate(r) for r in rules])
        except ValidationRuleError as exc:
            raise self._fail(exc)

        merged = record.model_dump()
        merged.update(changes)
        merged["field_type"] = field_type
        merged["validations"] = rules
        if "name" in changes:
            merged["name"] = str(changes["name"]).strip()
        self._records[sub_field_id] = SubField.model_validate(merged)

        logger.info(f"Updated sub-field {sub_field_id}: {sorted(changes)}")
        self.notified.emit(f"{self._records[sub_field_id].name} has been updated.", "success")
        self.changed.emit()

    def delete(self, sub_field_id: str) -> None:
        record = self._require(sub_field_id)
        if record.usage_count:
            raise self._fail(InUseError(sub_field_id, record.usage_count))
        del self._records[sub_field_id]
        logger.info(f"Deleted sub-field {sub_field_id} ({record.name})")
        self.notified.emit(f"{record.name} has been deleted.", "success")
        self.changed.emit()

    def search(self, query: Optional[str] = "") -> Iterator[SubField]:
        """Yield records whose name, field type or description contains ``query``.

        The result is a one-shot iterator; call again for a fresh view of
        the library.
        """
        needle = (query or "").strip().lower()
        logger.debug(f"Searching sub-field library for '{needle}'")
        snapshot = [r.model_copy(deep=True) for r in self._records.values()]
        return (
            record
            for record in snapshot
            if any(needle in h.lower() for h in (record.name, record.field_type.value, record.description or ""))
        )

    def increment_usage(self, sub_field_id: str) -> None:
        record = self._records.get(sub_field_id)
        if record is None:
            logger.debug(f"increment_usage ignored for unknown sub-field {sub_field_id}")
            return
        record.usage_count = (record.usage_count or 0) + 1
        self.changed.emit()
