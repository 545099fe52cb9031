"""Domain layer - core business logic."""

from .models import (
    BatchResult,
    BatchState,
    DateKey,
    FilterResult,
    LineDecision,
    MissingDatePolicy,
    OutcomeStatus,
    ProcessingOutcome,
    SourceEntry,
    WeekPolicy,
)

__all__ = [
    "BatchResult",
    "BatchState",
    "DateKey",
    "FilterResult",
    "LineDecision",
    "MissingDatePolicy",
    "OutcomeStatus",
    "ProcessingOutcome",
    "SourceEntry",
    "WeekPolicy",
]
