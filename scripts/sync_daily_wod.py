"""Sync today's WODs from the WOD page text into the Notion database.

Standalone CLI script meant to run once a day from cron. The page text is
fetched by the caller (browsing agent or a plain HTTP fetch) and handed over
through WOD_MARKDOWN, a file, or stdin.

Run with: WOD_MARKDOWN="$(cat page.md)" python scripts/sync_daily_wod.py
File:     python scripts/sync_daily_wod.py --input page.md
Stdin:    fetch-wod | python scripts/sync_daily_wod.py --input -
Backfill: python scripts/sync_daily_wod.py --input page.md --date 2026-02-01
Preview:  python scripts/sync_daily_wod.py --input page.md --dry-run
Report:   python scripts/sync_daily_wod.py --input page.md --report reports/wod.json

Required environment (or .env): NOTION_TOKEN, NOTION_PAGE_ID

Exit codes:
  0 = success (summary line on stdout)
  1 = error (traceback on stderr)
"""

import argparse
import json
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add src/ to path so the script runs from a plain checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from wodsync.config import WodSyncConfig  # noqa: E402
from wodsync.logging import get_logger, setup_logging  # noqa: E402
from wodsync.pipeline import run_daily  # noqa: E402

log = get_logger("sync_daily_wod")


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Sync today's WODs into the Notion database.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Read page text from this file ('-' for stdin) instead of WOD_MARKDOWN.",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Target date as YYYY-MM-DD (default: today in WOD_TIMEZONE).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Query Notion and report what would be created, without writing.",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Also write the run result as JSON to this path.",
    )
    return parser.parse_args()


def _read_markdown(source: str | None, config: WodSyncConfig) -> str:
    if source is None:
        return config.wod_markdown
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(args: argparse.Namespace) -> None:
    # stderr logging before settings load, so config errors never reach stdout
    setup_logging()
    config = WodSyncConfig()
    if args.date:
        config = config.model_copy(update={"wod_date": args.date})
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    markdown = _read_markdown(args.input, config)
    result = run_daily(config, markdown, dry_run=args.dry_run)

    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **result.model_dump(mode="json"),
        }
        report_path.write_text(
            json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        log.info("report_written", path=str(report_path))

    print(result.summary())


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except Exception as e:
        log.error("wod_sync_failed", error=str(e), type=type(e).__name__)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)
