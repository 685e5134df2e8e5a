from __future__ import annotations

import zipfile
from pathlib import Path
from unittest.mock import patch

from fieldmeta.cli import main as cli_main
from fieldmeta.logging.init import reset_logging


def test_cli_success_default_base_dir(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY rows=6 created=6 skipped=0 failed=0 duplicates=0" in out
    assert (temp_workdir / "salesforce_metadata.zip").exists()


def test_cli_uses_config_file(temp_workdir: Path, write_config: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 0
    zip_path = temp_workdir / "dist" / "sf_out.zip"
    assert zip_path.exists()
    with zipfile.ZipFile(zip_path) as zf:
        assert all(name.startswith("sf_out/") for name in zf.namelist())
    assert "archive=sf_out.zip" in out


def test_cli_output_base_dir_flag_wins(temp_workdir: Path, write_config: Path, sample_csv: Path, monkeypatch):
    reset_logging()
    monkeypatch.setenv("FIELDMETA_OUTPUT_BASE_DIR", "from_env")
    code = cli_main(["--csv", str(sample_csv), "--output-base-dir", "from_cli", "--output-dir", "out"])
    assert code == 0
    assert (temp_workdir / "out" / "from_cli.zip").exists()


def test_cli_env_file_sets_base_dir(temp_workdir: Path, sample_csv: Path, monkeypatch):
    reset_logging()
    # setenv で元の状態を記録し、.env による上書きをテスト後に戻す
    monkeypatch.setenv("FIELDMETA_OUTPUT_BASE_DIR", "before")
    (temp_workdir / ".env").write_text("FIELDMETA_OUTPUT_BASE_DIR=from_dotenv\n", encoding="utf-8")
    code = cli_main(["--csv", str(sample_csv)])
    assert code == 0
    assert (temp_workdir / "from_dotenv.zip").exists()


def test_cli_no_csv_is_fatal(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Please choose a CSV file first." in out
    assert "SUMMARY" not in out


def test_cli_missing_csv_is_fatal(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(temp_workdir / "data" / "missing.csv")])
    out = capsys.readouterr().out
    assert code == 1
    assert "file not found" in out


def test_cli_explicit_config_missing(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv), "--config", "config/nope.yml"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config:" in out


def test_cli_partial_failure(temp_workdir: Path, write_csv, capsys):
    reset_logging()
    csv_path = write_csv(
        "ObjectName,FieldName,Type,FieldLabel\n"
        "Account,Widget__c,Widget,Widget\n"
        "Account,Ok__c,Checkbox,Ok\n"
    )
    code = cli_main(["--csv", str(csv_path)])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR on FieldName=Widget__c: Unsupported field type: Widget" in out
    assert "SUMMARY rows=2 created=1 skipped=0 failed=1" in out


def test_cli_header_only_succeeds_without_zip(temp_workdir: Path, write_csv, capsys):
    reset_logging()
    csv_path = write_csv("ObjectName,FieldName,Type,FieldLabel\n")
    code = cli_main(["--csv", str(csv_path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO No rows found. Check the CSV format." in out
    assert "archive=-" in out
    assert list(temp_workdir.glob("*.zip")) == []


def test_cli_debug_flag(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv), "--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG config: GeneratorConfig(" in out


def test_cli_inspect_data(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: fields.csv rows=6" in out
    assert "columns=['ObjectName', 'FieldName', 'Type'" in out
    assert "Nickname__c" in out
    # 先頭 3 行のみ表示
    assert "Active__c" not in out
    assert list(temp_workdir.glob("*.zip")) == []


def test_cli_read_error_is_fatal(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    with patch("fieldmeta.services.orchestrator.read_csv_text", side_effect=PermissionError("denied")):
        code = cli_main(["--csv", str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read: denied" in out


def test_cli_invalid_utf8_is_fatal(temp_workdir: Path, capsys):
    reset_logging()
    p = temp_workdir / "data" / "bad.csv"
    p.write_bytes(b"ObjectName,FieldName\n\xff\xfe\xfa,x\n")
    code = cli_main(["--csv", str(p)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read:" in out


def test_cli_output_base_dir_cannot_leave_output_dir(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main(["--csv", str(sample_csv), "--output-dir", "out", "--output-base-dir", "../escaped"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: --output-base-dir: config validation failed" in out
    assert list(temp_workdir.rglob("*.zip")) == []
