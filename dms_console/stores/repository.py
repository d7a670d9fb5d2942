from __future__ import annotations

from typing import Any, List, Mapping, Optional

from dms_console.console_settings import ConsoleSettings
from dms_console.forms.deriver import FieldDescriptor, derive_form
from dms_console.forms.evaluator import EvaluationResult, evaluate
from dms_console.logger import configure_logging, logger
from dms_console.settings import Settings

from .document_store import DocumentStore
from .document_type_store import DocumentTypeStore
from .index_catalog import IndexCatalog
from .samples import sample_document_types, sample_indexes, sample_sub_fields
from .subfield_library import SubFieldLibrary


class ConsoleRepository:
    """Owns every catalog of the console.

    Build one per process and hand it to the views that need it.
    """

    def __init__(self, console_settings: Optional[ConsoleSettings] = None, seed_samples: Optional[bool] = None):
        self.settings = console_settings or ConsoleSettings()
        seed = self.settings.seed_samples if seed_samples is None else seed_samples

        self.library = SubFieldLibrary(sample_sub_fields() if seed else ())
        self.indexes = IndexCatalog(self.library, sample_indexes() if seed else ())
        self.document_types = DocumentTypeStore(self.indexes, sample_document_types() if seed else ())
        self.documents = DocumentStore(self.document_types, date_format=self.settings.date_format)
        logger.info(
            f"Console repository ready: {len(self.library)} sub-fields, "
            f"{len(self.indexes)} indexes, {len(self.document_types)} document types"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConsoleRepository":
        console = ConsoleSettings.from_settings(settings)
        configure_logging(console.log_level)
        return cls(console)

    def form_for_document_type(self, document_type_id: str) -> List[FieldDescriptor]:
        fields = self.document_types.get_all_fields_for_document_type(document_type_id)
        return derive_form(fields, self.settings.placeholder_template)

    def form_for_index(self, index_id: str) -> List[FieldDescriptor]:
        return derive_form(self.indexes.get(index_id), self.settings.placeholder_template)

    def validate_for_document_type(self, document_type_id: str, values: Mapping[str, Any]) -> EvaluationResult:
        fields = self.document_types.get_all_fields_for_document_type(document_type_id)
        return evaluate(fields, values, self.settings.date_format)
