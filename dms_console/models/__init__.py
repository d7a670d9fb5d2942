from .validation import FieldType, RuleKind, ValidationRule
from .subfield import SubField
from .index import Index
from .document_type import DocumentType, SourcedField
from .documents import UploadedDocument

__all__ = [
    "FieldType",
    "RuleKind",
    "ValidationRule",
    "SubField",
    "Index",
    "DocumentType",
    "SourcedField",
    "UploadedDocument",
]
