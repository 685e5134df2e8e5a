from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from fieldmeta.archive.writer import ArchiveWriteError
from fieldmeta.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    GeneratorConfig,
    load_config,
    resolve_output_base_dir,
)
from fieldmeta.logging.init import log_summary, set_log_level, setup_logging
from fieldmeta.models.generation_result import GenerationResult
from fieldmeta.services.orchestrator import InputMissingError, generate_archive, load_records, resolve_input
from fieldmeta.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override) and config/fieldmeta.yml (optional unless --config is given)
- Resolve output base dir (--output-base-dir > FIELDMETA_OUTPUT_BASE_DIR > config > default)
- Generate one field-meta.xml per CSV row into `<output_dir>/<base>.zip`
- Print a SUMMARY line and map the result to an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True により .env の値で既存環境変数を上書きする。
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CSV field definitions -> Salesforce field-meta.xml ZIP")
    p.add_argument("--csv", dest="csv_path", default=None, help="Input CSV file")
    p.add_argument(
        "--output-base-dir",
        default=None,
        help="Archive name and root folder (default: salesforce_metadata)",
    )
    p.add_argument("--output-dir", default=None, help="Directory the .zip is written to")
    p.add_argument("--config", default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print CSV header & first rows then exit")
    return p.parse_args(argv)


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    if args.config is not None:
        # 明示指定されたファイルは必須
        cfg = load_config(Path(args.config))
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = GeneratorConfig()
    return resolve_output_base_dir(cfg, args.output_base_dir)


def _inspect_data(csv_path: str | None, cfg: GeneratorConfig) -> int:
    from fieldmeta.tabular.preview import render_preview

    path = resolve_input(csv_path)
    records = load_records(path, encoding=cfg.encoding)
    print(f"FILE: {path.name} rows={len(records)}")
    if records:
        print(f"  columns={list(records[0].values.keys())}")
    print(render_preview([r.values for r in records], limit=INSPECT_ROWS))
    return EXIT_SUCCESS_ALL


def _exit_code(result: GenerationResult) -> int:
    if result.all_succeeded:
        return EXIT_SUCCESS_ALL
    # 1 行以上が failed (skip は失敗扱いしない)
    return EXIT_PARTIAL_FAILURE


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] の場合に sys.argv[1:] を読まないよう None のときのみシステム引数を使う。
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_log_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _load_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"config: {cfg}")

    try:
        if args.inspect_data:
            return _inspect_data(args.csv_path, cfg)
        output_dir = Path(args.output_dir) if args.output_dir else None
        result = generate_archive(args.csv_path, cfg, output_dir=output_dir)
    except InputMissingError as e:
        logger.error(str(e))
        return EXIT_FATAL
    except ArchiveWriteError as e:
        logger.error(f"archive: {e}")
        return EXIT_FATAL
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix
    log_summary(summary_line[len("SUMMARY "):])

    return _exit_code(result)
