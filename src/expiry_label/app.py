"""ExpiryLabelApp — minimal Textual app hosting a single live label."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from textual.app import App, ComposeResult
from textual.containers import Center, Middle
from textual.widgets import Footer, Header

from .config import LabelConfig, load_config
from .widgets import ExpiryLabel

logger = logging.getLogger(__name__)


class ExpiryLabelApp(App[None]):
    """Shows one ExpiryLabel centred on screen."""

    TITLE = "expiry-label"
    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, when: str, config: LabelConfig | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.when = when
        self.config = config or load_config()

    def compose(self) -> ComposeResult:
        yield Header()
        with Middle():
            with Center():
                yield ExpiryLabel(
                    self.when,
                    before=self.config.before,
                    after=self.config.after,
                    start=self.config.start,
                    end=self.config.end,
                    msg_prefix=self.config.msg_prefix,
                    msg_suffix=self.config.msg_suffix,
                    warn_at=self.config.warn_at,
                    notice_at=self.config.notice_at,
                )
        yield Footer()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expiry-label",
        description="Show a live 'Expires in ...' label for an ISO-8601 cut-off.",
    )
    parser.add_argument("when", help="cut-off date-time, e.g. 2026-03-01T12:00:00Z")
    parser.add_argument("--before", help="word used before the cut-off")
    parser.add_argument("--after", help="word used after the cut-off")
    parser.add_argument("--start", help="connector before the duration")
    parser.add_argument("--end", help="connector after the duration")
    parser.add_argument("--msg-prefix", help="text shown before the label")
    parser.add_argument("--msg-suffix", help="text shown after the label")
    parser.add_argument("--warn-at", type=int, help="seconds left that trigger warning")
    parser.add_argument("--notice-at", type=int, help="seconds left that trigger notice")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    overrides = {
        name: getattr(args, name)
        for name in (
            "before", "after", "start", "end",
            "msg_prefix", "msg_suffix", "warn_at", "notice_at",
        )
        if getattr(args, name) is not None
    }
    config = replace(config, **overrides)
    logger.debug("Starting with %s", config)

    ExpiryLabelApp(args.when, config).run()


if __name__ == "__main__":
    main()
