from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default: config/fieldmeta.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every missing key
- Resolve the output base directory (CLI > env > config > default)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_OUTPUT_BASE_DIR",
    "GeneratorConfig",
    "OUTPUT_BASE_DIR_ENV",
    "load_config",
    "resolve_output_base_dir",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/fieldmeta.yml")

DEFAULT_OUTPUT_BASE_DIR = "salesforce_metadata"
OUTPUT_BASE_DIR_ENV = "FIELDMETA_OUTPUT_BASE_DIR"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    output_base_dir: str = DEFAULT_OUTPUT_BASE_DIR  # ZIP 名 & ルートフォルダ名
    output_directory: str = "."  # ZIP の書き出し先
    error_log_directory: str = "./logs"
    encoding: str = "utf-8"  # CSV 読み込みエンコーディング (BOM は decoder が除去)

    def with_output_base_dir(self, value: str | None) -> GeneratorConfig:
        """Return a copy whose base dir is `value`, unless value is blank."""
        if value is None or value.strip() == "":
            return self
        return replace(self, output_base_dir=value.strip())


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or config violates the schema
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> GeneratorConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = GeneratorConfig()
    cfg = GeneratorConfig(
        output_directory=data.get("output_directory", defaults.output_directory),
        error_log_directory=data.get("error_log_directory", defaults.error_log_directory),
        encoding=data.get("encoding", defaults.encoding),
    )
    # 空文字の output_base_dir は既定値にフォールバック
    return cfg.with_output_base_dir(data.get("output_base_dir"))


def resolve_output_base_dir(cfg: GeneratorConfig, cli_value: str | None = None) -> GeneratorConfig:
    """Apply output base dir overrides. Priority: CLI > FIELDMETA_OUTPUT_BASE_DIR > config.

    Overrides are held to the same schema rule as the YAML value (a single folder
    name: no "/" or "\\", not "." or ".."), so archive entries stay under the root.

    Raises:
        ConfigError: an override violates the schema
    """
    overrides = (
        (OUTPUT_BASE_DIR_ENV, os.getenv(OUTPUT_BASE_DIR_ENV)),
        ("--output-base-dir", cli_value),
    )
    for source, value in overrides:
        if value is None or value.strip() == "":
            continue
        try:
            _validate_config_schema({"output_base_dir": value.strip()})
        except ConfigError as e:
            raise ConfigError(f"{source}: {e}") from e
        cfg = cfg.with_output_base_dir(value)
    return cfg
