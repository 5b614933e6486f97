"""
Error taxonomy for the word-help backend.

- ConfigurationError:   missing credential or empty candidate list (fatal at startup)
- ResolutionExhausted:  no candidate answered the probe (fatal at startup)
- StageFailure:         one generation stage failed (reported per request)
- ValidationError:      empty or missing word (reported per request)
"""

from kindred.types import GenerationFailure, Stage


class KindredError(Exception):
    """Base class for all word-help backend errors."""


class ConfigurationError(KindredError):
    """The service cannot start with the current configuration."""


class ValidationError(KindredError):
    """A request was rejected before any remote call."""


class ResolutionExhausted(KindredError):
    """Every model candidate failed its probe."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def failure(self) -> GenerationFailure:
        return GenerationFailure(stage="resolution", message=self.message)


class StageFailure(KindredError):
    """A single generation stage failed."""

    def __init__(self, stage: Stage, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message

    @property
    def failure(self) -> GenerationFailure:
        return GenerationFailure(stage=self.stage, message=self.message)
