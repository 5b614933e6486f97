"""
Kindred word-help core.

- resolver:      finds the first model candidate that answers a probe
- orchestrator:  definition + image-prompt generation for one word
- service:       request-level checks in front of the orchestrator
"""

from .types import GenerationFailure, ResolutionState, WordHelpResult
from .errors import (
    ConfigurationError,
    KindredError,
    ResolutionExhausted,
    StageFailure,
    ValidationError,
)

__all__ = [
    "GenerationFailure",
    "ResolutionState",
    "WordHelpResult",
    "ConfigurationError",
    "KindredError",
    "ResolutionExhausted",
    "StageFailure",
    "ValidationError",
]
