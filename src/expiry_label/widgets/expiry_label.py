"""ExpiryLabel — Static widget showing a live "Expires in 3 hours" label."""
from __future__ import annotations

from typing import Callable

from textual.widgets import Static

from ..controller import LiveLabelController
from ..models import DurationResult, PhraseConfig, Urgency, URGENCY_MARKUP
from ..utils.time import format_cutoff, now_ms

PLACEHOLDER = "[dim]—[/dim]"


class ExpiryLabel(Static):
    """Live relative-time label anchored to a cut-off instant.

    Displays e.g. "Expires in 3 hours" or "Expired 2 days ago", coloured by
    urgency. The tooltip carries the absolute cut-off date. Timers are armed
    through ``set_timer`` so the label ticks on the app's event loop and stops
    when the widget is unmounted.

    The current display text is always stored in ``_display_text`` for easy
    introspection in tests.
    """

    DEFAULT_CSS = """
    ExpiryLabel {
        height: auto;
        width: auto;
        padding: 0 1;
    }
    ExpiryLabel.-expired {
        text-style: strike;
    }
    ExpiryLabel.-warning {
        background: #3A2A10;
    }
    """

    def __init__(
        self,
        when: str,
        *,
        before: str = "Expires",
        after: str = "Expired",
        start: str = "in",
        end: str = "ago",
        msg_prefix: str = "",
        msg_suffix: str = "",
        warn_at: int = -1,
        notice_at: int = -1,
        clock: Callable[[], int] = now_ms,
        **kwargs: object,
    ) -> None:
        """Initialise the label.

        Args:
            when:       ISO-8601 cut-off date-time.
            before:     Direction word while the cut-off is in the future.
            after:      Direction word once the cut-off has passed.
            start:      Connector placed before the duration ("in").
            end:        Connector placed after the duration ("ago").
            msg_prefix: Text shown before the phrase, passed through untouched.
            msg_suffix: Text shown after the phrase, passed through untouched.
            warn_at:    Seconds left at which the label turns to warning (<= 0 disables).
            notice_at:  Seconds left at which the label turns to notice (<= 0 disables).
            clock:      Epoch-millisecond time source.
            **kwargs:   Forwarded to :class:`textual.widgets.Static`.
        """
        super().__init__(PLACEHOLDER, **kwargs)
        self._when = when
        self._phrases = PhraseConfig(
            before_word=before,
            after_word=after,
            start_connector=start,
            end_connector=end,
        )
        self.msg_prefix = msg_prefix
        self.msg_suffix = msg_suffix
        self.warn_at = warn_at
        self.notice_at = notice_at
        self._clock = clock
        self._display_text: str = PLACEHOLDER
        self._controller: LiveLabelController | None = None

    @property
    def controller(self) -> LiveLabelController | None:
        return self._controller

    @property
    def urgency(self) -> Urgency | None:
        if self._controller is None:
            return None
        return self._controller.urgency(self.warn_at, self.notice_at)

    def on_mount(self) -> None:
        """Build the controller and show the initial cut-off."""
        self._controller = LiveLabelController(
            schedule=self.set_timer,
            clock=self._clock,
            on_update=self._show_result,
        )
        self._controller.present(self._when, self._phrases)

    def on_unmount(self) -> None:
        """Cancel any pending refresh when the widget is removed."""
        if self._controller is not None:
            self._controller.dispose()

    def set_cutoff(self, when: str) -> None:
        """Point the label at a new cut-off. Invalid values keep the old display."""
        if self._controller is None:
            self._when = when
            return
        self._controller.present(when, self._phrases)
        if self._controller.when is not None:
            self._when = self._controller.when

    def set_phrases(
        self,
        before: str | None = None,
        after: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> None:
        """Swap any of the phrase words without restarting the timer."""
        current = self._phrases
        self._phrases = PhraseConfig(
            before_word=current.before_word if before is None else before,
            after_word=current.after_word if after is None else after,
            start_connector=current.start_connector if start is None else start,
            end_connector=current.end_connector if end is None else end,
        )
        if self._controller is not None:
            self._controller.present(self._when, self._phrases)

    def _show_result(self, result: DurationResult) -> None:
        urgency = self.urgency or Urgency.NORMAL
        for level in Urgency:
            self.set_class(level is urgency, f"-{level.value}")

        controller = self._controller
        if controller is not None and controller.cutoff_ms is not None:
            self.tooltip = format_cutoff(controller.cutoff_ms) or controller.when

        text = self._render_phrase(result, urgency)
        self._display_text = text
        self.update(text)

    def _render_phrase(self, result: DurationResult, urgency: Urgency) -> str:
        """Join the non-empty phrase parts and wrap them in urgency markup."""
        parts = [
            result.direction_phrase,
            result.start_connector,
            result.rendered_text,
            result.end_connector,
        ]
        phrase = " ".join(part for part in parts if part)
        style = URGENCY_MARKUP[urgency]
        return f"{self.msg_prefix}[{style}]{phrase}[/]{self.msg_suffix}"
