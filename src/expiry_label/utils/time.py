"""Relative duration formatting for the expiry label."""
from __future__ import annotations

from datetime import datetime, timezone
import logging
import time

from ..models import (
    CutoffParseError,
    DurationResult,
    PhraseConfig,
    Unit,
    UNIT_SECONDS,
)

logger = logging.getLogger(__name__)

# Candidate units, coarsest first. Anything below an hour reports in minutes.
_UNIT_ORDER: tuple[Unit, ...] = (Unit.YEAR, Unit.MONTH, Unit.WEEK, Unit.DAY, Unit.HOUR)

MIN_RECOMPUTE_DELAY_MS = 1000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def parse_cutoff(when: str) -> int:
    """Parse an ISO-8601 date-time into epoch milliseconds.

    A trailing 'Z' is accepted. Values without an offset are read as local time.
    """
    if not isinstance(when, str) or not when.strip():
        raise CutoffParseError(str(when), "empty value")
    text = when.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
        # Some parseable values have no epoch form, e.g. year 1 in local time
        return int(dt.timestamp() * 1000)
    except (ValueError, OverflowError, OSError) as exc:
        raise CutoffParseError(when, str(exc)) from exc


def format_cutoff(cutoff_ms: int) -> str | None:
    """Locale-style absolute date for tooltips, e.g. 'Mar 4, 2026 3:00 PM CET'.

    Returns None when the instant falls outside the local calendar range.
    """
    try:
        local_dt = datetime.fromtimestamp(cutoff_ms / 1000, tz=timezone.utc).astimezone()
    except (ValueError, OverflowError, OSError) as exc:
        logger.debug("Cannot format cut-off %d: %s", cutoff_ms, exc)
        return None
    return local_dt.strftime("%b %-d, %Y %-I:%M %p %Z").strip()


def _next_delay_ms(abs_gap: int, threshold: int, is_past: bool) -> int:
    """Milliseconds until the displayed magnitude goes stale."""
    remainder = abs_gap % threshold
    if not is_past and remainder > 0:
        delay = remainder
    else:
        delay = threshold
    # A whole-minute wait can overshoot a coarse boundary; poll again in a second
    if delay % 60 == 0:
        delay = 1
    return max(delay * 1000, MIN_RECOMPUTE_DELAY_MS)


def compute_duration(now: int, cutoff: int, cfg: PhraseConfig) -> DurationResult:
    """Format the gap between ``now`` and ``cutoff`` (both epoch ms).

    Picks the largest unit whose threshold the gap strictly exceeds, falling
    back to minutes. Exactly zero seconds renders as "now".
    """
    diff_seconds = (cutoff - now) // 1000
    is_past = diff_seconds < 0
    abs_gap = -diff_seconds if is_past else diff_seconds

    if diff_seconds == 0:
        return DurationResult(
            magnitude=0,
            unit=Unit.SECOND,
            is_past=False,
            rendered_text="now",
            direction_phrase=cfg.before_word,
            start_connector="",
            end_connector="",
            next_recompute_delay_ms=MIN_RECOMPUTE_DELAY_MS,
            diff_seconds=0,
        )

    unit = Unit.MINUTE
    for candidate in _UNIT_ORDER:
        if abs_gap > UNIT_SECONDS[candidate]:
            unit = candidate
            break

    threshold = UNIT_SECONDS[unit]
    magnitude = abs_gap // threshold
    suffix = "" if magnitude == 1 else "s"

    return DurationResult(
        magnitude=magnitude,
        unit=unit,
        is_past=is_past,
        rendered_text=f"{magnitude} {unit.value}{suffix}",
        direction_phrase=cfg.after_word if is_past else cfg.before_word,
        start_connector="" if is_past else cfg.start_connector,
        end_connector=cfg.end_connector if is_past else "",
        next_recompute_delay_ms=_next_delay_ms(abs_gap, threshold, is_past),
        diff_seconds=diff_seconds,
    )
