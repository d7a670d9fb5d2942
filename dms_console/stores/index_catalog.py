from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal

from dms_console.errors import NotFoundError, ValidationError, ValidationRuleError
from dms_console.logger import logger
from dms_console.models.index import Index
from dms_console.models.subfield import SubField
from dms_console.models.validation import FieldType, ValidationRule, validate_rules

from .subfield_library import SubFieldLibrary

_UPDATABLE = {"name", "description", "sub_fields", "is_active"}


def _check_sub_fields(sub_fields: Sequence[SubField]) -> List[SubField]:
    """Copy ``sub_fields`` by value, rejecting empty or repeated names."""
    seen = set()
    copies: List[SubField] = []
    for sub_field in sub_fields:
        sub_field = SubField.model_validate(sub_field)
        name = sub_field.name.strip()
        if not name:
            raise ValidationError("Every sub-field needs a name")
        if name in seen:
            raise ValidationError(f"Sub-field name '{name}' is used more than once in this index")
        seen.add(name)
        validate_rules(sub_field.field_type, sub_field.validations)
        copies.append(sub_field.model_copy(deep=True, update={"name": name}))
    return copies


class IndexCatalog(QObject):
    changed = Signal()
    notified = Signal(str, str)  # message, severity

    def __init__(self, library: SubFieldLibrary, indexes: Iterable[Index] = (), parent: QObject | None = None):
        super().__init__(parent)
        self.library = library
        self._indexes: Dict[str, Index] = {}
        for index in indexes:
            if not index.name.strip():
                raise ValidationError(f"Index '{index.id}' has no name")
            self._indexes[index.id] = index.model_copy(
                deep=True, update={"sub_fields": _check_sub_fields(index.sub_fields)}
            )

    def __len__(self) -> int:
        return len(self._indexes)

    def __contains__(self, index_id: object) -> bool:
        return index_id in self._indexes

    def _fail(self, exc: Exception) -> Exception:
        logger.warning(f"Index catalog: {exc}")
        self.notified.emit(str(exc), "error")
        return exc

    def _require(self, index_id: str) -> Index:
        index = self._indexes.get(index_id)
        if index is None:
            raise self._fail(NotFoundError("Index", index_id))
        return index

    def list(self) -> List[Index]:
        return [i.model_copy(deep=True) for i in self._indexes.values()]

    def get(self, index_id: str) -> Index:
        return self._require(index_id).model_copy(deep=True)

    def find(self, index_id: str) -> Optional[Index]:
        """Like :meth:`get` but returns ``None`` for unknown ids."""
        index = self._indexes.get(index_id)
        return index.model_copy(deep=True) if index is not None else None

    def create(
        self,
        name: str,
        description: str = "",
        sub_fields: Sequence[SubField] = (),
        is_active: bool = True,
    ) -> Index:
        if not name or not name.strip():
            raise self._fail(ValidationError("Index name is required"))
        try:
            copies = _check_sub_fields(sub_fields)
        except (ValidationError, ValidationRuleError) as exc:
            raise self._fail(exc)

        index = Index(
            id=f"idx_{uuid.uuid4().hex[:12]}",
            name=name.strip(),
            description=description,
            sub_fields=copies,
            is_active=is_active,
            created_at=date.today(),
        )
        self._indexes[index.id] = index
        logger.info(f"Created index {index.id} ({index.name}) with {index.field_count} fields")
        self.notified.emit(f"{index.name} has been created with {index.field_count} fields.", "success")
        self.changed.emit()
        return index.model_copy(deep=True)

    def update(self, index_id: str, changes: Dict[str, Any]) -> None:
        index = self._require(index_id)
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise self._fail(ValidationError(f"Cannot update index attribute(s): {', '.join(sorted(unknown))}"))
        if "name" in changes and (not changes["name"] or not str(changes["name"]).strip()):
            raise self._fail(ValidationError("Index name is required"))

        updated = index.model_copy(deep=True)
        if "name" in changes:
            updated.name = str(changes["name"]).strip()
        if "description" in changes:
            updated.description = changes["description"] or ""
        if "is_active" in changes:
            updated.is_active = bool(changes["is_active"])
        if "sub_fields" in changes:
            try:
                updated.sub_fields = _check_sub_fields(changes["sub_fields"])
            except (ValidationError, ValidationRuleError) as exc:
                raise self._fail(exc)

        self._indexes[index_id] = updated
        logger.info(f"Updated index {index_id}: {sorted(changes)}")
        self.notified.emit(f"{updated.name} has been updated.", "success")
        self.changed.emit()

    def delete(self, index_id: str) -> None:
        # Document types keep their ids; they are dropped when resolved.
        index = self._require(index_id)
        del self._indexes[index_id]
        logger.info(f"Deleted index {index_id} ({index.name})")
        self.notified.emit(f"{index.name} has been deleted.", "success")
        self.changed.emit()

    def toggle_active(self, index_id: str) -> None:
        index = self._require(index_id)
        self.update(index_id, {"is_active": not index.is_active})

    def new_draft(self) -> "IndexDraft":
        return IndexDraft(self)

    def edit_draft(self, index_id: str) -> "IndexDraft":
        index = self.get(index_id)
        return IndexDraft(
            self,
            index_id=index.id,
            name=index.name,
            description=index.description,
            sub_fields=index.sub_fields,
            is_active=index.is_active,
        )


class IndexDraft:
    """An index being composed in the editor, before it is saved.

    Fields picked from the library are copied in by value and bump the
    library's usage counter; brand-new fields never touch the library.
    Removing a field from the draft leaves the counter alone: the count
    records how often a field has been reused, not current references.
    """

    def __init__(
        self,
        catalog: IndexCatalog,
        index_id: Optional[str] = None,
        name: str = "",
        description: str = "",
        sub_fields: Sequence[SubField] = (),
        is_active: bool = True,
    ):
        self.catalog = catalog
        self.index_id = index_id
        self.name = name
        self.description = description
        self.sub_fields: List[SubField] = [sf.model_copy(deep=True) for sf in sub_fields]
        self.is_active = is_active

    @property
    def field_count(self) -> int:
        return len(self.sub_fields)

    def _check_name(self, name: str, skip: Optional[int] = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Sub-field name is required")
        for i, sf in enumerate(self.sub_fields):
            if i != skip and sf.name == name:
                raise ValidationError(f"Sub-field name '{name}' is already used in this index")
        return name

    def _position(self, position: int) -> int:
        if not 0 <= position < len(self.sub_fields):
            raise NotFoundError("Sub-field position", position)
        return position

    def add_existing(self, sub_field_id: str) -> SubField:
        original = self.catalog.library.get(sub_field_id)
        self._check_name(original.name)
        copy = original.copy_for_index()
        self.sub_fields.append(copy)
        self.catalog.library.increment_usage(sub_field_id)
        logger.debug(f"Draft '{self.name}': reused library field {sub_field_id}")
        return copy

    def add_new(
        self,
        name: str,
        field_type: FieldType = FieldType.TEXT,
        description: str = "",
        is_required: bool = False,
        validations: Iterable[ValidationRule] = (),
    ) -> SubField:
        sub_field = SubField(
            id=f"new_{uuid.uuid4().hex[:12]}",
            name=self._check_name(name),
            field_type=field_type,
            description=description,
            is_required=is_required,
            validations=validate_rules(FieldType(field_type), list(validations)),
            is_existing=False,
        )
        self.sub_fields.append(sub_field)
        return sub_field

    def update_field(self, position: int, changes: Dict[str, Any]) -> SubField:
        current = self.sub_fields[self._position(position)]
        if "id" in changes or "usage_count" in changes:
            raise ValidationError("Sub-field id and usage count cannot be edited")
        merged = current.model_dump()
        merged.update(changes)
        merged["name"] = self._check_name(merged["name"], skip=position)
        updated = SubField.model_validate(merged)
        updated.validations = validate_rules(updated.field_type, updated.validations)
        self.sub_fields[position] = updated
        return updated

    def remove(self, position: int) -> SubField:
        return self.sub_fields.pop(self._position(position))

    def move(self, position: int, new_position: int) -> None:
        sub_field = self.sub_fields.pop(self._position(position))
        self.sub_fields.insert(max(0, min(new_position, len(self.sub_fields))), sub_field)

    def save(self) -> Index:
        if self.index_id is None:
            index = self.catalog.create(self.name, self.description, self.sub_fields, self.is_active)
            self.index_id = index.id
            return index
        self.catalog.update(
            self.index_id,
            {
                "name": self.name,
                "description": self.description,
                "sub_fields": self.sub_fields,
                "is_active": self.is_active,
            },
        )
        return self.catalog.get(self.index_id)
