import pytest

from dms_console.errors import NotFoundError, ValidationError, ValidationRuleError
from dms_console.models.subfield import SubField
from dms_console.models.validation import FieldType, RuleKind, ValidationRule
from dms_console.stores.index_catalog import IndexCatalog
from dms_console.stores.samples import sample_indexes, sample_sub_fields
from dms_console.stores.subfield_library import SubFieldLibrary


@pytest.fixture
def library() -> SubFieldLibrary:
    return SubFieldLibrary(sample_sub_fields())


@pytest.fixture
def catalog(library) -> IndexCatalog:
    return IndexCatalog(library, sample_indexes())


def _field(name, field_type=FieldType.TEXT, **kwargs) -> SubField:
    return SubField(id=f"new_{name.lower()}", name=name, field_type=field_type, **kwargs)


def test_create_derives_field_count(catalog):
    index = catalog.create("Receipt Index", "Till receipts", [_field("Store"), _field("Total", FieldType.NUMBER)])
    assert index.id.startswith("idx_")
    assert index.field_count == 2
    assert index.is_active is True
    assert catalog.get(index.id).field_count == len(catalog.get(index.id).sub_fields)


def test_create_requires_name(catalog):
    with pytest.raises(ValidationError):
        catalog.create("")
    with pytest.raises(ValidationError):
        catalog.create("   ", "blank")
    assert len(catalog) == 2


def test_create_rejects_repeated_field_names(catalog):
    with pytest.raises(ValidationError):
        catalog.create("Dupes", sub_fields=[_field("Code"), _field("Code", FieldType.NUMBER)])


def test_create_rejects_rules_illegal_for_the_field(catalog):
    bad = _field("Flag", FieldType.BOOLEAN)
    bad.validations = [ValidationRule(kind=RuleKind.MIN, value="1")]
    with pytest.raises(ValidationRuleError):
        catalog.create("Bad rules", sub_fields=[bad])


def test_create_stores_copies(catalog):
    field = _field("Store")
    index = catalog.create("Receipt Index", sub_fields=[field])
    field.name = "Mutated"
    assert catalog.get(index.id).sub_fields[0].name == "Store"


def test_update_partial_fields(catalog):
    before = catalog.get("1")
    catalog.update("1", {"description": "Updated description"})
    after = catalog.get("1")
    assert after.description == "Updated description"
    assert after.name == before.name
    assert after.field_count == before.field_count
    assert after.created_at == before.created_at


def test_update_sub_fields_recomputes_field_count(catalog):
    catalog.update("2", {"sub_fields": [_field("Only One")]})
    index = catalog.get("2")
    assert index.field_count == 1
    assert index.sub_fields[0].name == "Only One"


def test_update_errors(catalog):
    with pytest.raises(NotFoundError):
        catalog.update("nope", {"name": "x"})
    with pytest.raises(ValidationError):
        catalog.update("1", {"name": ""})
    with pytest.raises(ValidationError):
        catalog.update("1", {"created_at": None})


def test_delete_is_unconditional(catalog):
    catalog.delete("1")
    assert "1" not in catalog
    assert catalog.find("1") is None
    with pytest.raises(NotFoundError):
        catalog.delete("1")


def test_toggle_active_only_flips_status(catalog):
    before = catalog.get("2")
    catalog.toggle_active("2")
    after = catalog.get("2")
    assert after.is_active is (not before.is_active)
    assert after.model_dump(exclude={"is_active"}) == before.model_dump(exclude={"is_active"})
    catalog.toggle_active("2")
    assert catalog.get("2").is_active is before.is_active
    with pytest.raises(NotFoundError):
        catalog.toggle_active("missing")


def test_draft_reuses_library_field_by_value(catalog, library):
    snapshot = library.get("sf1")
    draft = catalog.new_draft()
    draft.name = "Billing Index"
    copy = draft.add_existing("sf1")

    assert copy == snapshot
    assert copy.is_existing is True
    assert library.get("sf1").usage_count == snapshot.usage_count + 1

    draft.update_field(0, {"name": "Bill Number"})
    assert library.get("sf1").name == "Invoice Number"

    index = draft.save()
    assert index.sub_fields[0].name == "Bill Number"
    assert index.sub_fields[0].id == "sf1"
    assert library.get("sf1").name == "Invoice Number"


def test_draft_new_fields_never_touch_library(catalog, library):
    counts = {sf.id: sf.usage_count for sf in library.list()}
    draft = catalog.new_draft()
    draft.name = "Adhoc"
    field = draft.add_new("Notes", FieldType.TEXT, validations=[ValidationRule(kind="maxLength", value="200")])
    assert field.is_existing is False
    assert field.usage_count is None
    draft.save()
    assert {sf.id: sf.usage_count for sf in library.list()} == counts
    assert len(library) == 4


def test_removing_reused_field_keeps_usage_count(catalog, library):
    draft = catalog.new_draft()
    draft.add_existing("sf4")
    count = library.get("sf4").usage_count
    draft.remove(0)
    assert draft.field_count == 0
    assert library.get("sf4").usage_count == count


def test_draft_guards(catalog):
    draft = catalog.new_draft()
    draft.add_new("Code")
    with pytest.raises(ValidationError):
        draft.add_new("Code")
    with pytest.raises(ValidationError):
        draft.add_new("")
    with pytest.raises(ValidationRuleError):
        draft.add_new("Flag", FieldType.BOOLEAN, validations=[ValidationRule(kind="max", value="1")])
    with pytest.raises(NotFoundError):
        draft.add_existing("unknown")
    with pytest.raises(NotFoundError):
        draft.remove(5)
    with pytest.raises(ValidationError):
        draft.update_field(0, {"id": "other"})
    # saving without a name is refused by the catalog
    with pytest.raises(ValidationError):
        draft.save()


def test_draft_reorders_fields(catalog):
    draft = catalog.new_draft()
    for name in ("A", "B", "C"):
        draft.add_new(name)
    draft.move(2, 0)
    assert [sf.name for sf in draft.sub_fields] == ["C", "A", "B"]


def test_edit_draft_updates_existing_index(catalog):
    draft = catalog.edit_draft("2")
    assert draft.index_id == "2"
    draft.remove(draft.field_count - 1)
    draft.is_active = False
    index = draft.save()
    assert index.id == "2"
    assert index.field_count == 4
    assert index.is_active is False
    assert len(catalog) == 2


def test_update_field_type_rechecks_rules(catalog):
    draft = catalog.new_draft()
    draft.add_new("Length", FieldType.TEXT, validations=[ValidationRule(kind="minLength", value="2")])
    with pytest.raises(ValidationRuleError):
        draft.update_field(0, {"field_type": FieldType.BOOLEAN})
    assert draft.sub_fields[0].field_type == FieldType.TEXT


def test_seeded_index_with_bad_rules_is_rejected(library):
    field = _field("Code")
    field.validations = [ValidationRule(kind="minLength", value="abc")]
    seeded = sample_indexes()[0].model_copy(update={"sub_fields": [field]})
    with pytest.raises(ValidationRuleError):
        IndexCatalog(library, [seeded])


def test_seeded_index_with_repeated_names_is_rejected(library):
    seeded = sample_indexes()[0].model_copy(update={"sub_fields": [_field("Code"), _field("Code")]})
    with pytest.raises(ValidationError):
        IndexCatalog(library, [seeded])
