"""Tests for the command-line composition root."""

import json
from unittest.mock import patch

from vocab_study.core import StoreStartupError
from vocab_study.io import DB_FILENAME
from vocab_study.main import main

HEADER = "English\tFurigana\tJapanese\tChapter\tCategory\tSeen\tMissed%\tFlag\tPublic\tPersonal\tBook\tSection"
HELLO = "Hello\tこんにちは\t今日は\t1\tgreeting\t\t\t\t\t\tTextbookA\t3"


def run(capsys, *argv):
    code = main(list(argv))
    return code, json.loads(capsys.readouterr().out)


def test_import_list_and_flag(tmp_path, capsys):
    data_dir = tmp_path / "store"
    tsv_file = tmp_path / "words.tsv"
    tsv_file.write_text(f"{HEADER}\n{HELLO}\nbroken\n", encoding="utf-8")

    code, output = run(capsys, "--data-dir", str(data_dir), "import", str(tsv_file))
    assert code == 0
    assert output == {
        "ok": True,
        "value": "Inserted 1 entries, skipped 1 lines. First skipped lines: 3",
    }
    assert (data_dir / DB_FILENAME).exists()

    code, output = run(capsys, "--data-dir", str(data_dir), "list")
    assert code == 0
    [record] = output["value"]
    assert record["japanese"] == "今日は"

    code, output = run(
        capsys, "--data-dir", str(data_dir), "flag", str(record["vocab_id"]), "1"
    )
    assert code == 0
    assert output == {"ok": True, "value": None}

    _, output = run(capsys, "--data-dir", str(data_dir), "list")
    assert output["value"][0]["flag"] == 1


def test_missing_import_file_fails(tmp_path):
    code = main(["--data-dir", str(tmp_path), "import", str(tmp_path / "absent.tsv")])
    assert code == 1


def test_startup_failure_is_fatal(tmp_path, capsys):
    with patch(
        "vocab_study.main.open_vocabulary_store",
        side_effect=StoreStartupError("Failed to open DB"),
    ):
        code = main(["--data-dir", str(tmp_path), "list"])

    assert code == 1
    assert capsys.readouterr().out == ""


def test_undecodable_import_file_fails(tmp_path, capsys):
    bad_file = tmp_path / "bad.tsv"
    bad_file.write_bytes(b"h\n\xff\xfe\tx\n")

    code = main(["--data-dir", str(tmp_path / "store"), "import", str(bad_file)])

    assert code == 1
    assert capsys.readouterr().out == ""


def test_out_of_range_flag_reports_error(tmp_path, capsys):
    code, output = run(
        capsys, "--data-dir", str(tmp_path), "flag", "1", "99999999999999999999"
    )

    assert code == 1
    assert output["ok"] is False
    assert output["error"].startswith("Failed to set flag for vocabulary entry 1")
