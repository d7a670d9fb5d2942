from .subfield_library import SubFieldLibrary
from .index_catalog import IndexCatalog, IndexDraft
from .document_type_store import DocumentTypeStore
from .document_store import DocumentStore
from .repository import ConsoleRepository

__all__ = [
    "SubFieldLibrary",
    "IndexCatalog",
    "IndexDraft",
    "DocumentTypeStore",
    "DocumentStore",
    "ConsoleRepository",
]
