from __future__ import annotations

import json

import jsonschema
import pytest

from fieldmeta.config.loader import SCHEMA_PATH

"""Config schema contract: accepted keys and value shapes of config/fieldmeta.yml."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_full_config_valid():
    jsonschema.validate(
        {
            "output_base_dir": "salesforce_metadata",
            "output_directory": "./dist",
            "error_log_directory": "./logs",
            "encoding": "utf-8",
        },
        _schema(),
    )


def test_empty_config_valid():
    jsonschema.validate({}, _schema())


@pytest.mark.parametrize(
    "data",
    [
        {"output_base_dir": "a/b"},
        {"output_base_dir": "a\\b"},
        {"output_base_dir": ".."},
        {"output_directory": ""},
        {"encoding": 8},
        {"unknown": "x"},
    ],
)
def test_invalid_configs_rejected(data):
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(data, _schema())
