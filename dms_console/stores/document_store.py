from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from PySide6.QtCore import QObject, Signal

from dms_console.errors import DocumentValidationError, ValidationError
from dms_console.forms.evaluator import evaluate
from dms_console.logger import logger
from dms_console.models.documents import UploadedDocument

from .document_type_store import DocumentTypeStore


class DocumentStore(QObject):
    changed = Signal()
    notified = Signal(str, str)  # message, severity

    def __init__(self, document_types: DocumentTypeStore, date_format: str = "%Y-%m-%d",
                 parent: QObject | None = None):
        super().__init__(parent)
        self.document_types = document_types
        self.date_format = date_format
        self.documents: List[UploadedDocument] = []

    def _fail(self, exc: Exception) -> Exception:
        logger.warning(f"Document upload rejected: {exc}")
        self.notified.emit(str(exc), "error")
        return exc

    def submit(
        self,
        document_type_id: Optional[str],
        files: Sequence[Union[str, Path]],
        data: Mapping[str, Any],
    ) -> List[UploadedDocument]:
        """Validate ``data`` against the document type and record one document per file."""
        if not document_type_id:
            raise self._fail(ValidationError("Please select a document type"))
        if not files:
            raise self._fail(ValidationError("Please upload at least one file"))

        fields = self.document_types.get_all_fields_for_document_type(document_type_id)
        result = evaluate(fields, data, self.date_format)
        if not result.ok:
            raise self._fail(DocumentValidationError(result.failure))

        uploaded_at = datetime.now()
        created = [
            UploadedDocument(
                id=f"doc_{uuid.uuid4().hex[:12]}",
                name=Path(f).name,
                document_type_id=document_type_id,
                data=dict(data),
                uploaded_at=uploaded_at,
            )
            for f in files
        ]
        self.documents.extend(created)
        logger.info(f"Uploaded {len(created)} document(s) as {document_type_id}")
        self.notified.emit(f"{len(created)} document(s) uploaded successfully", "success")
        self.changed.emit()
        return [d.model_copy(deep=True) for d in created]

    def list(self) -> List[UploadedDocument]:
        return [d.model_copy(deep=True) for d in self.documents]

    def for_document_type(self, document_type_id: str) -> List[UploadedDocument]:
        return [d.model_copy(deep=True) for d in self.documents if d.document_type_id == document_type_id]
