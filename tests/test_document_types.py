import pytest

from dms_console.errors import NotFoundError, ValidationError
from dms_console.models.subfield import SubField
from dms_console.stores.document_type_store import DocumentTypeStore
from dms_console.stores.index_catalog import IndexCatalog
from dms_console.stores.samples import sample_document_types, sample_indexes, sample_sub_fields
from dms_console.stores.subfield_library import SubFieldLibrary


@pytest.fixture
def store() -> DocumentTypeStore:
    catalog = IndexCatalog(SubFieldLibrary(sample_sub_fields()), sample_indexes())
    return DocumentTypeStore(catalog, sample_document_types())


def test_indexes_resolved_in_reference_order(store):
    store.update("dt_3", {"index_ids": ["2", "1"]})
    assert [i.id for i in store.get_indexes_for_document_type("dt_3")] == ["2", "1"]


def test_deleted_indexes_are_dropped_silently(store):
    store.catalog.delete("2")
    assert [i.id for i in store.get_indexes_for_document_type("dt_3")] == ["1"]
    assert store.get_indexes_for_document_type("dt_1") == []
    # the reference itself is kept
    assert store.get("dt_3").index_ids == ["1", "2"]


def test_all_fields_in_index_then_field_order(store):
    fields = store.get_all_fields_for_document_type("dt_3")
    invoice = store.catalog.get("1")
    contract = store.catalog.get("2")
    expected = [(sf.name, "Invoice Index", "1") for sf in invoice.sub_fields] + [
        (sf.name, "Contract Index", "2") for sf in contract.sub_fields
    ]
    assert [(f.sub_field.name, f.index_name, f.index_id) for f in fields] == expected


def test_create_and_crud(store):
    created = store.create("Receipts", "Till slips", ["1", "1", "ghost"])
    assert created.index_ids == ["1", "ghost"]
    assert [i.id for i in store.get_indexes_for_document_type(created.id)] == ["1"]

    store.update(created.id, {"name": "Till Receipts"})
    assert store.get(created.id).name == "Till Receipts"

    store.delete(created.id)
    with pytest.raises(NotFoundError):
        store.get(created.id)


def test_validation_and_missing_ids(store):
    with pytest.raises(ValidationError):
        store.create("")
    with pytest.raises(ValidationError):
        store.update("dt_1", {"id": "dt_9"})
    with pytest.raises(NotFoundError):
        store.get_all_fields_for_document_type("dt_404")


def test_fields_are_copies(store):
    fields = store.get_all_fields_for_document_type("dt_2")
    sub_field: SubField = fields[0].sub_field
    sub_field.name = "Changed"
    assert store.catalog.get("1").sub_fields[0].name == "Invoice Number"


def test_update_accepts_cleared_description_and_indexes(store):
    store.update("dt_3", {"description": None})
    assert store.get("dt_3").description == ""
    store.update("dt_3", {"index_ids": None})
    assert store.get("dt_3").index_ids == []


def test_seed_document_types_need_a_name(store):
    nameless = sample_document_types()[0].model_copy(update={"name": "  "})
    with pytest.raises(ValidationError):
        DocumentTypeStore(store.catalog, [nameless])
