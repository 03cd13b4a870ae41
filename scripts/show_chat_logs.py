#!/usr/bin/env python3
"""
Inspect the relay's chat log DB.

Prints the most recent logged exchanges (timestamp, query, response length,
context preview) from LOG_DB_PATH (default data/chat_logs.db). Use --reset to
clear the table.

Run from project root:

    python scripts/show_chat_logs.py
    python scripts/show_chat_logs.py --limit 5 --full
    python scripts/show_chat_logs.py --reset
"""

import argparse
import sys
from pathlib import Path

# Project root on path so "symptom_checker" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from symptom_checker.core.config import get_settings
from symptom_checker.core.log_store import clear_all, get_recent_logs


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Show or clear logged relay exchanges.")
    parser.add_argument("--db", default=None, help="Path to the SQLite log DB (default: LOG_DB_PATH).")
    parser.add_argument("--limit", type=int, default=10, help="Number of exchanges to show (newest first).")
    parser.add_argument("--full", action="store_true", help="Print full responses and context.")
    parser.add_argument("--reset", action="store_true", help="Delete all logged exchanges.")
    args = parser.parse_args(argv)

    db_path = args.db or get_settings().log_db_path

    if args.reset:
        removed = clear_all(db_path)
        print(f"Cleared {removed} logged exchanges.")
        return

    records = get_recent_logs(db_path, limit=args.limit)
    if not records:
        print(f"No logged exchanges in {db_path}.")
        return

    for rec in records:
        print(f"[{rec.timestamp}] {rec.query}")
        if args.full:
            print(f"  context:\n{rec.context}\n  response:\n{rec.response}\n")
        else:
            first_line = rec.context.splitlines()[0] if rec.context else ""
            print(f"  response: {len(rec.response)} chars | context: {first_line[:80]}")

    print(f"Done. Showed {len(records)} exchanges.")


if __name__ == "__main__":
    main()
