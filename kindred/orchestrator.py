"""
Word-Help Orchestrator
======================

Turns one word into a child-friendly definition and a cartoon image
description using the resolved model.

Flow:
  validate word → definition stage → image-prompt stage → WordHelpResult

Invariants:
- Stages run sequentially; the image stage starts only after the
  definition stage succeeded
- Any stage failure returns exactly one GenerationFailure and no
  partial result
- No retries at this layer
- The resolved model is passed in, never looked up or changed here
"""

import logging
from typing import Callable

from inference import ModelBackend, ModelRequest
from kindred.errors import StageFailure, ValidationError
from kindred.prompting import build_definition_prompt, build_image_prompt
from kindred.types import Stage, WordHelpOutcome, WordHelpResult

logger = logging.getLogger(__name__)


def normalize_word(word) -> str:
    """Return the trimmed word or raise ValidationError."""
    if not isinstance(word, str) or not word.strip():
        raise ValidationError("Word is required")
    return word.strip()


class WordHelpOrchestrator:
    """Runs the definition and image-prompt stages against one model."""

    def __init__(self, backend: ModelBackend, generation_timeout_s: float = 20.0):
        self._backend = backend
        self.generation_timeout_s = generation_timeout_s

    async def get_word_help(self, word: str, resolved_model: str) -> WordHelpOutcome:
        """
        Generate definition and image prompt for ``word``.

        Raises:
            ValidationError: ``word`` is blank (no remote call is made).

        Returns:
            WordHelpResult when both stages succeed, otherwise the
            GenerationFailure of the first stage that failed.
        """
        word = normalize_word(word)
        logger.info(f"Processing word: {word!r} with model: {resolved_model}")

        try:
            definition = await self.define(word, resolved_model)
            image_prompt = await self.describe_image(word, resolved_model)
        except StageFailure as e:
            logger.warning(f"Word help failed for {word!r} at stage {e.stage}: {e.message}")
            return e.failure

        return WordHelpResult(word=word, definition=definition, image_prompt=image_prompt)

    async def define(self, word: str, resolved_model: str) -> str:
        """Definition stage. Raises StageFailure."""
        word = normalize_word(word)
        return await self._run_stage(
            "definition", "define", build_definition_prompt, word, resolved_model
        )

    async def describe_image(self, word: str, resolved_model: str) -> str:
        """Image-prompt stage. Raises StageFailure."""
        word = normalize_word(word)
        return await self._run_stage(
            "imagePrompt", "describe_image", build_image_prompt, word, resolved_model
        )

    async def _run_stage(
        self,
        stage: Stage,
        task: str,
        build: Callable[[str], str],
        word: str,
        resolved_model: str,
    ) -> str:
        logger.debug(f"Requesting {stage} for {word!r}")
        request = ModelRequest(
            task=task,
            prompt=build(word),
            model=resolved_model,
            timeout_s=self.generation_timeout_s,
        )

        try:
            response = await self._backend.generate(request)
        except Exception as e:
            raise StageFailure(stage, str(e) or type(e).__name__) from e

        if not response.ok:
            raise StageFailure(stage, response.error_message)

        text = (response.output or "").strip()
        if not text:
            raise StageFailure(stage, "Model returned an empty response")

        logger.debug(f"{stage} received for {word!r}")
        return text
