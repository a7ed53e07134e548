"""LiveLabelController — owns the cut-off and its self-rescheduling refresh loop."""
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from .models import (
    CutoffParseError,
    DurationResult,
    PhraseConfig,
    TimerSession,
    Urgency,
)
from .utils.time import compute_duration, now_ms, parse_cutoff

logger = logging.getLogger(__name__)

# Beyond this gap no timer is armed; the label is refreshed by the next present()
RESCHEDULE_CEILING_SECONDS = 8 * 3600


class TimerHandle(Protocol):
    def stop(self) -> None: ...


# Same shape as textual's Widget.set_timer(delay, callback)
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def urgency_class(diff_seconds: int, warn_at: int = -1, notice_at: int = -1) -> Urgency:
    """Classify a signed gap. Non-positive thresholds are disabled; warning wins."""
    if diff_seconds < 0:
        return Urgency.EXPIRED
    if warn_at > 0 and diff_seconds <= warn_at:
        return Urgency.WARNING
    if notice_at > 0 and diff_seconds <= notice_at:
        return Urgency.NOTICE
    return Urgency.NORMAL


class LiveLabelController:
    """Keeps a DurationResult current for one cut-off.

    Two transitions converge on :meth:`refresh`: a new cut-off string
    (``present``) rebuilds the session, and a fired timer re-derives the
    result from the clock. At most one timer is outstanding at a time.
    """

    def __init__(
        self,
        schedule: Scheduler,
        clock: Callable[[], int] = now_ms,
        on_update: Callable[[DurationResult], None] | None = None,
    ) -> None:
        self._schedule = schedule
        self._clock = clock
        self._on_update = on_update
        self._when: str | None = None
        self._cfg = PhraseConfig()
        self._session: TimerSession | None = None

    @property
    def session(self) -> TimerSession | None:
        return self._session

    @property
    def result(self) -> DurationResult | None:
        if self._session is None:
            return None
        return self._session.current_result

    @property
    def when(self) -> str | None:
        """The cut-off string of the current session."""
        return self._when

    @property
    def cutoff_ms(self) -> int | None:
        if self._session is None:
            return None
        return self._session.cutoff_epoch_ms

    @property
    def pending_handles(self) -> frozenset[Any]:
        if self._session is None:
            return frozenset()
        return frozenset(self._session.pending_timer_handles)

    @property
    def phrases(self) -> PhraseConfig:
        return self._cfg

    def present(self, when: str, cfg: PhraseConfig | None = None) -> None:
        """Show ``when``. An unchanged cut-off string leaves the timer chain alone."""
        if when == self._when and self._session is not None:
            if cfg is not None and cfg != self._cfg:
                # New wording only; the pending tick stays valid
                self._cfg = cfg
                self._recompute(self._session)
            return

        try:
            cutoff = parse_cutoff(when)
        except CutoffParseError as exc:
            logger.warning("Ignoring cut-off: %s", exc)
            return

        if cfg is not None:
            self._cfg = cfg
        self.dispose()
        self._when = when
        self._session = TimerSession(cutoff_epoch_ms=cutoff)
        logger.debug("New session for cut-off %s (%d ms)", when, cutoff)
        self.refresh()

    def refresh(self) -> None:
        """Recompute from the clock and arm the next tick if the gap is short enough."""
        session = self._session
        if session is None:
            return

        result = self._recompute(session)
        self._cancel(session)

        if result.abs_seconds >= RESCHEDULE_CEILING_SECONDS:
            logger.debug("Gap of %ds above ceiling, no tick armed", result.abs_seconds)
            return

        delay_ms = result.next_recompute_delay_ms
        handle = self._schedule(delay_ms / 1000, lambda: self._on_timer(session))
        session.pending_timer_handles.add(handle)
        logger.debug("Next refresh in %d ms (%s)", delay_ms, result.rendered_text)

    def urgency(self, warn_at: int = -1, notice_at: int = -1) -> Urgency | None:
        result = self.result
        if result is None:
            return None
        return urgency_class(result.diff_seconds, warn_at, notice_at)

    def dispose(self) -> None:
        """Cancel all pending timers and drop the session. Safe to call repeatedly."""
        if self._session is not None:
            self._cancel(self._session)
        self._session = None
        self._when = None

    def _recompute(self, session: TimerSession) -> DurationResult:
        now = self._clock()
        result = compute_duration(now, session.cutoff_epoch_ms, self._cfg)
        session.current_result = result
        session.last_computed_at = now
        if self._on_update is not None:
            self._on_update(result)
        return result

    def _on_timer(self, session: TimerSession) -> None:
        if session is not self._session:
            logger.debug("Dropping tick from a replaced session")
            return
        self.refresh()

    @staticmethod
    def _cancel(session: TimerSession) -> None:
        for handle in list(session.pending_timer_handles):
            handle.stop()
        session.pending_timer_handles.clear()
