# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from fieldmeta.logging.init import reset_logging

SAMPLE_HEADER = (
    "ObjectName,FieldName,Type,FieldLabel,Description,Length,VisibleLines,"
    "Precision,Scale,PicklistValues,ReferenceTo,RelationshipLabel,"
    "ChildRelationshipName,DeleteConstraint"
)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("FIELDMETA_OUTPUT_BASE_DIR", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    # 各テストでロガーを作り直す (capsys の stdout 差し替えに追従させるため)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_base_dir: sf_out
output_directory: ./dist
error_log_directory: ./logs
encoding: utf-8
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "fieldmeta.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    lines = [
        SAMPLE_HEADER,
        "Account,Nickname__c,Text,Nickname,,80,,,,,,,,",
        "Account,Notes__c,TextArea(Long),Notes,Free text notes,,,,,,,,,",
        "Account,Score__c,Number,Score,,,,,,,,,,",
        "Account,Active__c,Checkbox,Active,,,,,,,,,,",
        'Account,Tier__c,Picklist,Tier,,,,,,"Gold, Silver,,Bronze ",,,,',
        "Contact,Account__c,Lookup,Account,,,,,,,Account,,,",
    ]
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(text: str, name: str = "fields.csv") -> Path:
        p = temp_workdir / "data" / name
        # newline="" で CRLF をそのまま書き込む
        with p.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        return p
    return _write


@pytest.fixture()
def sample_csv(write_csv, sample_csv_text: str) -> Path:
    return write_csv(sample_csv_text)
