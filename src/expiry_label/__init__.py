"""Live, self-updating relative-time labels for Textual apps."""
from .controller import LiveLabelController, urgency_class
from .models import CutoffParseError, DurationResult, PhraseConfig, Unit, Urgency
from .utils.time import compute_duration, parse_cutoff

__all__ = [
    "CutoffParseError",
    "DurationResult",
    "LiveLabelController",
    "PhraseConfig",
    "Unit",
    "Urgency",
    "compute_duration",
    "parse_cutoff",
    "urgency_class",
]
