from __future__ import annotations

import argparse
import os
import sys
from datetime import date, timedelta
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ParserConfig, load_config, with_overrides
from ..errors import ReportParseError
from ..grid.reader import parse_grid
from ..logging.init import log_summary, set_debug, setup_logging
from ..parsing.layout import detect_layout
from ..services.orchestrator import ProcessingError, process_all, scan_report_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override) and the YAML config
- Resolve report files (arguments, or a scan of source_directory)
- Parse each file, write <output_directory>/<stem>.json
- Print one SUMMARY line and exit 0 (all parsed) / 2 (some failed) / 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

ENV_CONFIG_PATH = "PNL_INGEST_CONFIG"
ENV_DELIMITER = "PNL_INGEST_DELIMITER"
INSPECT_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the existing environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _week_start(today: date) -> date:
    return today - timedelta(days=today.weekday())


def _parse_start_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="P&L report parser (delimited text -> per-store JSON)")
    p.add_argument("files", nargs="*", type=Path, help="Report files (default: scan source_directory)")
    p.add_argument("--config", type=Path, default=None, help="Config YAML path")
    p.add_argument("--start-date", type=_parse_start_date, default=None, help="Period start date (YYYY-MM-DD)")
    p.add_argument("--period", choices=["weekly", "monthly"], default=None, help="Override period_type")
    p.add_argument("--layout", choices=["auto", "vertical", "horizontal"], default=None, help="Override layout")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print grid head & detected layout then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ParserConfig, files: list[Path]) -> int:
    if not files:
        print("inspect: no report files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            grid = parse_grid(f.read_text(encoding=cfg.encoding), cfg.delimiter)
        except (OSError, UnicodeDecodeError, ReportParseError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  layout={detect_layout(grid).value} rows={len(grid)}")
        for idx, row in enumerate(grid[:INSPECT_ROWS]):
            print(f"    [{idx}] {list(row)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([]) を渡すため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    _load_env_file(Path(".env"), override=True)
    config_path = args.config or Path(os.getenv(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
        cfg = with_overrides(
            cfg,
            delimiter=os.getenv(ENV_DELIMITER) or None,
            period_type=args.period,
            layout=args.layout,
        )
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    files: list[Path] | None = list(args.files) or None
    if files is None:
        try:
            files = scan_report_files(Path(cfg.source_directory), cfg.file_patterns)
        except ProcessingError as e:
            logger.error(f"processing: {e}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {cfg.source_directory}")

    if args.inspect_data:
        return _inspect_data(cfg, files)

    start_date = args.start_date or _week_start(date.today())
    logger.info(f"period_start={start_date.isoformat()} period_type={cfg.period_type} layout={cfg.layout}")

    result = process_all(cfg, start_date, files=files)

    # log_summary が "SUMMARY " を付与するので先頭を外す
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
