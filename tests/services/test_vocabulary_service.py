import json

import pytest

from vocab_study.core import ImportTransactionError
from vocab_study.io import DatabaseManager
from vocab_study.services import CommandResult, VocabularyService

HEADER = "English\tFurigana\tJapanese\tChapter\tCategory\tSeen\tMissed%\tFlag\tPublic\tPersonal\tBook\tSection"
HELLO = "Hello\tこんにちは\t今日は\t1\tgreeting\t\t\t\t\t\tTextbookA\t3"
DOG = "dog\tいぬ\t犬\t2\tnoun\t5\t0.5\t1\t\t\tTextbookA\t"


@pytest.fixture
def service(tmp_path):
    db = DatabaseManager(tmp_path / "vocab.db")
    db.ensure_schema()
    yield VocabularyService(db)
    db.close()


def test_get_vocabulary_returns_json_ready_records(service):
    service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO, DOG]))

    records = service.get_vocabulary()

    assert len(records) == 2
    json.dumps(records, ensure_ascii=False)
    dog = next(r for r in records if r["english"] == "dog")
    assert dog["times_seen"] == 5
    assert dog["flag"] == 1
    assert dog["section"] is None
    assert dog["public_notes"] is None


def test_add_entries_returns_status_message(service):
    message = service.add_vocabulary_entries_tsv(
        "\n".join([HEADER, HELLO, "broken", DOG, "also\tbroken"])
    )
    assert message == "Inserted 2 entries, skipped 2 lines. First skipped lines: 3, 5"


def test_header_only_import_message(service):
    assert service.add_vocabulary_entries_tsv(HEADER) == "Inserted 0 entries, skipped 0 lines."


def test_import_report_keeps_every_skip(service):
    lines = [HEADER] + ["bad"] * 7 + [HELLO]
    report = service.import_report("\n".join(lines))

    assert report.inserted == 1
    assert report.skipped_line_numbers == [2, 3, 4, 5, 6, 7, 8]


def test_set_vocabulary_flag(service):
    service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO]))
    [record] = service.get_vocabulary()

    assert service.set_vocabulary_flag(record["vocab_id"], 1) is None
    assert service.get_vocabulary()[0]["flag"] == 1


def test_set_vocabulary_flag_unknown_id_succeeds(service):
    service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO]))
    before = service.get_vocabulary()

    result = service.invoke("set_vocabulary_flag", id=424242, flag_value=1)

    assert result == CommandResult(value=None)
    assert service.get_vocabulary() == before


def test_invoke_get_vocabulary(service):
    result = service.invoke("get_vocabulary")
    assert not result.is_error
    assert result.value == []
    assert result.to_dict() == {"ok": True, "value": []}


def test_invoke_unknown_command(service):
    result = service.invoke("delete_vocabulary")
    assert result.is_error
    assert result.error == "Unknown command: delete_vocabulary"
    assert result.to_dict() == {"ok": False, "error": "Unknown command: delete_vocabulary"}


def test_invoke_rejects_bad_arguments(service):
    result = service.invoke("set_vocabulary_flag", id="7", flag_value=1)
    assert result.is_error
    assert result.error.startswith("Invalid arguments for set_vocabulary_flag")

    missing = service.invoke("add_vocabulary_entries_tsv")
    assert missing.is_error


def test_invoke_reports_store_errors_as_strings(tmp_path):
    db = DatabaseManager(tmp_path / "no_schema.db")
    service = VocabularyService(db)

    listing = service.invoke("get_vocabulary")
    imported = service.invoke("add_vocabulary_entries_tsv", tsv_data="\n".join([HEADER, HELLO]))

    assert listing.error.startswith("Failed to query vocabulary")
    assert imported.error.startswith("Failed to prepare vocabulary insert")
    db.close()


def test_typed_methods_raise_store_errors(tmp_path):
    db = DatabaseManager(tmp_path / "no_schema.db")
    service = VocabularyService(db)

    with pytest.raises(ImportTransactionError):
        service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO]))
    db.close()


def test_invoke_after_close(tmp_path):
    db = DatabaseManager(tmp_path / "vocab.db")
    db.ensure_schema()
    service = VocabularyService(db)
    db.close()

    result = service.invoke("get_vocabulary")
    assert result.is_error
    assert "closed" in result.error


def test_command_names(service):
    assert service.command_names == [
        "add_vocabulary_entries_tsv",
        "get_vocabulary",
        "set_vocabulary_flag",
    ]


def test_invoke_set_flag_with_front_end_argument_names(service):
    service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO, DOG]))
    records = service.get_vocabulary()
    hello = next(r for r in records if r["english"] == "Hello")

    result = service.invoke("set_vocabulary_flag", id=hello["vocab_id"], flag_value=1)

    assert result == CommandResult(value=None)
    flags = {r["english"]: r["flag"] for r in service.get_vocabulary()}
    assert flags == {"Hello": 1, "dog": 1}


def test_invoke_set_flag_rejects_store_side_names(service):
    result = service.invoke("set_vocabulary_flag", vocab_id=1, flag_value=1)
    assert result.is_error
    assert result.error.startswith("Invalid arguments for set_vocabulary_flag")


@pytest.mark.parametrize("arguments", [{"id": 1, "flag_value": 2 ** 70}, {"id": -(2 ** 70), "flag_value": 1}])
def test_invoke_out_of_range_integer_is_reported(service, arguments):
    service.add_vocabulary_entries_tsv("\n".join([HEADER, HELLO]))
    before = service.get_vocabulary()

    result = service.invoke("set_vocabulary_flag", **arguments)

    assert result.is_error
    assert result.error.startswith("Failed to set flag for vocabulary entry")
    assert service.get_vocabulary() == before


def test_invoke_does_not_mislabel_internal_type_errors():
    class BrokenStore:
        def list_entries(self):
            raise TypeError("unexpected row type")

    service = VocabularyService(BrokenStore())

    with pytest.raises(TypeError, match="unexpected row type"):
        service.invoke("get_vocabulary")
