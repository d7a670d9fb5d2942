from unittest.mock import patch

from dms_console.console_settings import ConsoleSettings
from dms_console.settings import Settings
from dms_console.stores.repository import ConsoleRepository


def test_seeded_repository_matches_starter_catalog():
    repo = ConsoleRepository(seed_samples=True)
    assert len(repo.library) == 4
    assert [i.name for i in repo.indexes.list()] == ["Invoice Index", "Contract Index"]
    assert [dt.id for dt in repo.document_types.list()] == ["dt_1", "dt_2", "dt_3"]
    for index in repo.indexes.list():
        assert index.field_count == len(index.sub_fields)


def test_empty_repository():
    repo = ConsoleRepository(ConsoleSettings(seed_samples=False))
    assert len(repo.library) == 0
    assert len(repo.indexes) == 0
    assert len(repo.document_types) == 0


def test_repositories_do_not_share_state():
    first = ConsoleRepository(seed_samples=True)
    second = ConsoleRepository(seed_samples=True)
    first.library.increment_usage("sf1")
    first.indexes.delete("1")
    assert second.library.get("sf1").usage_count == 12
    assert "1" in second.indexes


def test_from_settings_reads_console_keys(tmp_path):
    with patch("dms_console.settings.get_app_data_dir", return_value=tmp_path):
        settings = Settings()
        settings.set("catalog.seed_samples", False)
        settings.set("forms.placeholder_template", "Type {name}")
        repo = ConsoleRepository.from_settings(settings)

    assert len(repo.indexes) == 0
    assert repo.settings.placeholder_template == "Type {name}"
    assert repo.settings.date_format == "%Y-%m-%d"


def test_form_and_validation_shortcuts():
    repo = ConsoleRepository(ConsoleSettings(placeholder_template="Type {name}"))
    form = repo.form_for_document_type("dt_3")
    assert len(form) == repo.indexes.get("1").field_count + repo.indexes.get("2").field_count
    assert form[0].placeholder == "Standard invoice identification number"

    contract_form = repo.form_for_index("2")
    assert contract_form[0].placeholder == "Type Contract Number"

    result = repo.validate_for_document_type("dt_1", {"Contract Number": "bad"})
    assert result.failure.message == "Use a reference like CTR-1024"
