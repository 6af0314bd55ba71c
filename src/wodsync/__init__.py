"""Daily WOD schedule to Notion database sync.

Parses the WOD site's page text into per-location, per-program entries and
creates the missing rows for today's date in a Notion database.
"""

from wodsync.models import DedupKey, HeaderStatus, SyncResult, TargetDate, WodEntry
from wodsync.noise import clean
from wodsync.parser import entries_for_date, parse
from wodsync.pipeline import run_daily
from wodsync.sync import SyncEngine

__all__ = [
    "WodEntry",
    "DedupKey",
    "HeaderStatus",
    "TargetDate",
    "SyncResult",
    "SyncEngine",
    "clean",
    "parse",
    "entries_for_date",
    "run_daily",
]
