"""
Puzzle Selector

Derives the day's solution from the catalog and the UTC date. Every player
gets the same code on the same UTC day and the catalog is walked in order,
one code per day.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Sequence

from ..config.game_settings import PUZZLE_EPOCH
from .catalog_service import EmptyCatalogError

ONE_DAY = timedelta(days=1)


def parse_epoch(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` string into UTC midnight of that day."""
    day = date.fromisoformat(value)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def day_index(now: datetime, epoch: datetime = PUZZLE_EPOCH) -> int:
    """Number of whole days between ``epoch`` and ``now``, floored."""
    return (now - epoch) // ONE_DAY


def select_solution(catalog: Sequence[str], now: datetime, epoch: datetime = PUZZLE_EPOCH) -> str:
    """
    Returns today's code: ``catalog[day_index % len(catalog)]``.

    Raises:
        EmptyCatalogError: If the catalog is empty
    """
    if not catalog:
        raise EmptyCatalogError("Cannot select a solution from an empty catalog")
    return catalog[day_index(now, epoch) % len(catalog)]


def today_iso(now: datetime) -> str:
    """UTC calendar date of ``now`` as ``YYYY-MM-DD``."""
    return now.astimezone(timezone.utc).date().isoformat()


def next_puzzle_at(now: datetime) -> datetime:
    now = now.astimezone(timezone.utc)
    midnight = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
    return midnight + ONE_DAY


def format_countdown(now: datetime) -> str:
    """Time left until the next UTC midnight, e.g. ``"5h 3m 12s"``."""
    remaining = int((next_puzzle_at(now) - now).total_seconds())
    if remaining <= 0:
        return ""
    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}h {minutes}m {seconds}s"
