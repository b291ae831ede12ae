"""
Club analytics command line

Reads a JSON snapshot of club records and prints player analytics or
membership fee standing as JSON.
"""
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional, List
from loguru import logger

from club.store import JsonRecordStore
from analytics.snapshot import load_snapshot
from analytics.rating import ClubAnalyzer
from analytics.report import SortKey, select_analytics, summarize_team
from analytics.fees import compute_membership_statuses, summarize_fees


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None):
    """Log to stderr (stdout carries the JSON output), optionally to a daily file"""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
    if log_dir:
        logger.add(
            str(Path(log_dir) / "club_analytics_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="30 days",
            level="DEBUG"
        )


def run_analytics(args) -> dict:
    """Player analytics, filtered and sorted as requested"""
    snapshot = load_snapshot(JsonRecordStore(args.snapshot))
    analytics = ClubAnalyzer(snapshot).analyze_all()

    selected = select_analytics(
        analytics,
        position=args.position,
        status=args.status,
        sort_by=args.sort,
        descending=not args.ascending,
        limit=args.top,
    )

    output = {"players": [p.to_dict() for p in selected]}
    if args.summary:
        output["team"] = summarize_team(analytics).to_dict()
    if not snapshot.report.is_clean:
        output["integrity"] = snapshot.report.model_dump(mode="json")
    return output


def run_fees(args) -> dict:
    """Fee standing of every active member"""
    snapshot = load_snapshot(JsonRecordStore(args.snapshot))
    today = date.fromisoformat(args.today) if args.today else date.today()
    statuses = compute_membership_statuses(snapshot.members, snapshot.fee_payments, today)

    output = {"as_of": today.isoformat(), "members": [s.to_dict() for s in statuses]}
    if args.summary:
        output["summary"] = summarize_fees(statuses, snapshot.fee_payments).to_dict()
    return output


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Club performance & fee analytics")
    parser.add_argument(
        "--mode",
        choices=["analytics", "fees"],
        default="analytics",
        help="What to compute"
    )
    parser.add_argument("snapshot", type=str, help="JSON snapshot of club records")
    parser.add_argument("--position", type=str, help="Position filter (e.g. Goalkeeper)")
    parser.add_argument("--status", type=str, help="Member status filter (active/inactive/injured/suspended)")
    parser.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.rating.value,
        help="Sort key"
    )
    parser.add_argument("--ascending", action="store_true", help="Ascending order")
    parser.add_argument("--top", type=int, help="Only print the first N players")
    parser.add_argument("--today", type=str, help="Reference date for fee status (YYYY-MM-DD)")
    parser.add_argument("--summary", action="store_true", help="Include team / fee summary")
    parser.add_argument("--log-level", default="INFO", help="Log level")
    parser.add_argument("--log-dir", type=str, help="Also write daily log files here")

    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_dir)

    if args.today:
        try:
            date.fromisoformat(args.today)
        except ValueError:
            logger.error(f"Invalid --today date: {args.today}")
            return 2

    if args.mode == "analytics":
        output = run_analytics(args)
    else:
        output = run_fees(args)

    print(json.dumps(output, ensure_ascii=False, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
