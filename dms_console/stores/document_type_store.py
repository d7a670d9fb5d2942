from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Iterable, List, Sequence

from PySide6.QtCore import QObject, Signal

from dms_console.errors import NotFoundError, ValidationError
from dms_console.logger import logger
from dms_console.models.document_type import DocumentType, SourcedField
from dms_console.models.index import Index

from .index_catalog import IndexCatalog

_UPDATABLE = {"name", "description", "index_ids"}


class DocumentTypeStore(QObject):
    """Named groupings of indexes used by the upload form.

    Index membership is held as ids and resolved against the catalog on
    every read; ids of deleted indexes are skipped rather than repaired.
    """

    changed = Signal()
    notified = Signal(str, str)  # message, severity

    def __init__(
        self,
        catalog: IndexCatalog,
        document_types: Iterable[DocumentType] = (),
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.catalog = catalog
        self._document_types: Dict[str, DocumentType] = {}
        for document_type in document_types:
            if not document_type.name.strip():
                raise ValidationError(f"Document type '{document_type.id}' has no name")
            self._document_types[document_type.id] = document_type.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._document_types)

    def _fail(self, exc: Exception) -> Exception:
        logger.warning(f"Document types: {exc}")
        self.notified.emit(str(exc), "error")
        return exc

    def _require(self, document_type_id: str) -> DocumentType:
        document_type = self._document_types.get(document_type_id)
        if document_type is None:
            raise self._fail(NotFoundError("Document type", document_type_id))
        return document_type

    def list(self) -> List[DocumentType]:
        return [dt.model_copy(deep=True) for dt in self._document_types.values()]

    def get(self, document_type_id: str) -> DocumentType:
        return self._require(document_type_id).model_copy(deep=True)

    def create(self, name: str, description: str = "", index_ids: Sequence[str] = ()) -> DocumentType:
        if not name or not name.strip():
            raise self._fail(ValidationError("Document type name is required"))
        missing = [i for i in index_ids if i not in self.catalog]
        if missing:
            logger.warning(f"Document type '{name}' references unknown index ids {missing}")

        document_type = DocumentType(
            id=f"dt_{uuid.uuid4().hex[:12]}",
            name=name.strip(),
            description=description,
            index_ids=list(index_ids),
            created_at=date.today(),
        )
        self._document_types[document_type.id] = document_type
        logger.info(f"Created document type {document_type.id} ({document_type.name})")
        self.notified.emit(f"{document_type.name} has been created.", "success")
        self.changed.emit()
        return document_type.model_copy(deep=True)

    def update(self, document_type_id: str, changes: Dict[str, Any]) -> None:
        current = self._require(document_type_id)
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise self._fail(
                ValidationError(f"Cannot update document type attribute(s): {', '.join(sorted(unknown))}")
            )
        if "name" in changes and (not changes["name"] or not str(changes["name"]).strip()):
            raise self._fail(ValidationError("Document type name is required"))

        merged = current.model_dump()
        merged.update(changes)
        merged["name"] = str(merged["name"]).strip()
        merged["description"] = merged["description"] or ""
        merged["index_ids"] = list(merged["index_ids"] or [])
        self._document_types[document_type_id] = DocumentType.model_validate(merged)
        logger.info(f"Updated document type {document_type_id}: {sorted(changes)}")
        self.notified.emit(f"{merged['name']} has been updated.", "success")
        self.changed.emit()

    def delete(self, document_type_id: str) -> None:
        document_type = self._require(document_type_id)
        del self._document_types[document_type_id]
        logger.info(f"Deleted document type {document_type_id} ({document_type.name})")
        self.notified.emit(f"{document_type.name} has been deleted.", "success")
        self.changed.emit()

    def get_indexes_for_document_type(self, document_type_id: str) -> List[Index]:
        document_type = self._require(document_type_id)
        indexes = []
        for index_id in document_type.index_ids:
            index = self.catalog.find(index_id)
            if index is None:
                logger.debug(f"Document type {document_type_id}: index {index_id} no longer exists")
                continue
            indexes.append(index)
        return indexes

    def get_all_fields_for_document_type(self, document_type_id: str) -> List[SourcedField]:
        return [
            SourcedField(sub_field, index.name, index.id)
            for index in self.get_indexes_for_document_type(document_type_id)
            for sub_field in index.sub_fields
        ]
