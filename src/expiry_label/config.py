"""Label configuration: phrase words and urgency thresholds."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import json
import logging
import os

from .models import PhraseConfig

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".expiry_label" / "config.json"
ENV_PREFIX = "EXPIRY_LABEL_"


@dataclass(frozen=True)
class LabelConfig:
    before: str = "Expires"
    after: str = "Expired"
    start: str = "in"
    end: str = "ago"
    msg_prefix: str = ""
    msg_suffix: str = ""
    warn_at: int = -1    # seconds; <= 0 disables
    notice_at: int = -1

    @property
    def phrases(self) -> PhraseConfig:
        return PhraseConfig(
            before_word=self.before,
            after_word=self.after,
            start_connector=self.start,
            end_connector=self.end,
        )


_INT_FIELDS = frozenset({"warn_at", "notice_at"})


def _coerce(name: str, raw: object) -> object | None:
    """Convert a raw value for field ``name``; None means reject it."""
    if name in _INT_FIELDS:
        if isinstance(raw, bool):
            return None
        try:
            return int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
    if isinstance(raw, str):
        return raw
    return None


def _apply(config: LabelConfig, values: dict[str, object], source: str) -> LabelConfig:
    known = {f.name for f in fields(LabelConfig)}
    updates: dict[str, object] = {}
    for name, raw in values.items():
        if name not in known:
            logger.debug("Ignoring unknown setting %r from %s", name, source)
            continue
        value = _coerce(name, raw)
        if value is None:
            logger.warning("Invalid value %r for %s in %s, keeping default", raw, name, source)
            continue
        updates[name] = value
    return replace(config, **updates)


def load_config(path: Path | None = None) -> LabelConfig:
    """Load settings from the JSON config file, then EXPIRY_LABEL_* env vars.

    A missing or malformed file falls back to defaults.
    """
    config = LabelConfig()
    path = path or CONFIG_PATH

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read config %s: %s", path, exc)
            data = None
        if isinstance(data, dict):
            config = _apply(config, data, str(path))
        elif data is not None:
            logger.warning("Config %s is not a JSON object, ignoring", path)

    env_values = {
        f.name: os.environ[ENV_PREFIX + f.name.upper()]
        for f in fields(LabelConfig)
        if ENV_PREFIX + f.name.upper() in os.environ
    }
    if env_values:
        config = _apply(config, env_values, "environment")

    return config
