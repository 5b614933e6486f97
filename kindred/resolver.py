"""
Model Resolver
==============

Finds, once, which of several model identifiers answers with the
configured credential. Availability varies by account, region and API
version, so it cannot be known statically.

Invariants:
- Candidates are probed strictly in order; the first success wins
- Once resolved, resolve() returns the cached identifier with no probe
- At most one probe sequence runs at a time; concurrent callers share it
- Only the resolver writes the resolved identifier
"""

import asyncio
import logging
from typing import Optional, Sequence, Tuple

from inference import ModelBackend, ModelRequest
from kindred.errors import ConfigurationError, ResolutionExhausted
from kindred.prompting import PROBE_PROMPT
from kindred.types import ResolutionState

logger = logging.getLogger(__name__)

EXHAUSTED_MESSAGE = "No working model found. Please check your API key."


class ModelResolver:
    """
    Owns the process-wide "which model is usable" cache.

    Usage:
        resolver = ModelResolver(backend, ["gemini-1.5-flash", "gemini-pro"])
        model = await resolver.resolve()
    """

    def __init__(
        self,
        backend: ModelBackend,
        candidates: Sequence[str],
        probe_timeout_s: float = 5.0,
    ):
        self._backend = backend
        self._candidates: Tuple[str, ...] = tuple(candidates)
        self.probe_timeout_s = probe_timeout_s

        self._state = ResolutionState.UNSET
        self._model: Optional[str] = None
        self._inflight: Optional[asyncio.Task] = None

    @property
    def candidates(self) -> Tuple[str, ...]:
        return self._candidates

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def model(self) -> Optional[str]:
        """Resolved identifier, or None unless state is RESOLVED."""
        return self._model if self._state is ResolutionState.RESOLVED else None

    @property
    def is_resolved(self) -> bool:
        return self._state is ResolutionState.RESOLVED

    async def resolve(self, candidates: Optional[Sequence[str]] = None) -> str:
        """
        Return the first candidate that answers a probe.

        Args:
            candidates: Override for the configured candidate list.

        Raises:
            ConfigurationError: No candidates to try.
            ResolutionExhausted: Every candidate failed its probe.
        """
        if self._state is ResolutionState.RESOLVED and self._model is not None:
            return self._model

        ordered = tuple(candidates) if candidates is not None else self._candidates
        if not ordered:
            raise ConfigurationError("At least one model candidate is required")

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._probe_in_order(ordered))

        # shield: a cancelled caller must not cancel the attempt others are awaiting
        return await asyncio.shield(self._inflight)

    def reset(self) -> None:
        """Forget the resolved model so the next resolve() probes again."""
        if self._state is ResolutionState.PROBING:
            logger.info("Reset requested while probing; in-flight attempt continues")
            return
        logger.info(f"Resetting resolved model (was: {self._model})")
        self._state = ResolutionState.UNSET
        self._model = None

    def cancel_inflight(self) -> None:
        """Abandon a running probe sequence (shutdown only)."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

    async def _probe_in_order(self, candidates: Tuple[str, ...]) -> str:
        self._state = ResolutionState.PROBING
        logger.info("Auto-detecting working model...")
        try:
            for candidate in candidates:
                logger.info(f"Testing: {candidate}...")
                if await self._probe(candidate):
                    self._model = candidate
                    self._state = ResolutionState.RESOLVED
                    logger.info(f"SUCCESS! Using model: {candidate}")
                    return candidate

            self._model = None
            self._state = ResolutionState.EXHAUSTED
            logger.error(f"{EXHAUSTED_MESSAGE} Tried {len(candidates)} candidate(s)")
            raise ResolutionExhausted(EXHAUSTED_MESSAGE)
        except asyncio.CancelledError:
            self._state = ResolutionState.UNSET
            raise
        finally:
            self._inflight = None

    async def _probe(self, candidate: str) -> bool:
        request = ModelRequest(
            task="probe",
            prompt=PROBE_PROMPT,
            model=candidate,
            timeout_s=self.probe_timeout_s,
        )
        try:
            response = await self._backend.generate(request)
        except Exception as e:
            logger.warning(f"Failed: {candidate} ({type(e).__name__}: {e})")
            return False

        if response.ok and (response.output or "").strip():
            return True

        reason = response.error_message if not response.ok else "empty response"
        logger.warning(f"Failed: {candidate} ({reason})")
        return False
