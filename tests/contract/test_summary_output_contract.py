from __future__ import annotations

import re
from pathlib import Path

from fieldmeta.cli import main as cli_main
from fieldmeta.logging.init import reset_logging

"""SUMMARY 行フォーマット契約テスト.

SUMMARY rows=<n> created=<n> skipped=<n> failed=<n> duplicates=<n> elapsed_sec=<f> archive=<name|->
"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)\s+created=([0-9]+)\s+skipped=([0-9]+)\s+failed=([0-9]+)\s+"
    r"duplicates=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+archive=(\S+)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY rows=4 created=3 skipped=1 failed=0 duplicates=0 "
        "elapsed_sec=0.012 archive=salesforce_metadata.zip"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_cli_emits_exactly_one_summary_line(temp_workdir: Path, sample_csv: Path, capsys):
    reset_logging()
    cli_main(["--csv", str(sample_csv)])
    out = capsys.readouterr().out
    summary = [line for line in out.splitlines() if line.startswith("SUMMARY")]
    assert len(summary) == 1
    m = SUMMARY_PATTERN.match(summary[0])
    assert m, summary[0]
    assert m.group(7) == "salesforce_metadata.zip"
    # SUMMARY は最終行
    assert out.splitlines()[-1] == summary[0]


def test_every_log_line_is_labeled(temp_workdir: Path, write_csv, capsys):
    reset_logging()
    csv_path = write_csv(
        "ObjectName,FieldName,Type,FieldLabel\n"
        "Account,A__c,Text,A\n"
        "Account,A__c,Text,A2\n"
        "Account,B__c,Nope,B\n"
        ",C__c,Text,C\n"
    )
    cli_main(["--csv", str(csv_path)])
    out = capsys.readouterr().out
    for line in out.splitlines():
        assert re.match(r"^(INFO|WARN|ERROR|SUMMARY) ", line), line
