"""
Word-Help Service
=================

Caller layer in front of the orchestrator: rejects blank words and
refuses work until the resolver holds a model.

Requests never trigger probing. While the resolver is unset, probing
or exhausted, every lookup fails with stage "resolution".
"""

import logging
from typing import Optional, Union

from kindred.errors import StageFailure
from kindred.orchestrator import WordHelpOrchestrator, normalize_word
from kindred.resolver import ModelResolver
from kindred.types import GenerationFailure, WordHelpOutcome

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Model initialization in progress. Please try again in a few seconds."


class WordHelpService:
    def __init__(self, resolver: ModelResolver, orchestrator: WordHelpOrchestrator):
        self.resolver = resolver
        self.orchestrator = orchestrator

    def _not_ready(self) -> Optional[GenerationFailure]:
        if self.resolver.is_resolved:
            return None
        logger.info(f"Rejecting request, resolver state: {self.resolver.state.value}")
        return GenerationFailure(stage="resolution", message=NOT_READY_MESSAGE)

    async def lookup(self, word) -> WordHelpOutcome:
        """
        Definition + image prompt for one word.

        Raises:
            ValidationError: blank or missing word.
        """
        word = normalize_word(word)
        failure = self._not_ready()
        if failure:
            return failure
        return await self.orchestrator.get_word_help(word, self.resolver.model)

    async def define(self, word) -> Union[str, GenerationFailure]:
        """Definition stage only."""
        word = normalize_word(word)
        failure = self._not_ready()
        if failure:
            return failure
        try:
            return await self.orchestrator.define(word, self.resolver.model)
        except StageFailure as e:
            logger.warning(f"Definition failed for {word!r}: {e.message}")
            return e.failure

    async def describe_image(self, word) -> Union[str, GenerationFailure]:
        """Image-prompt stage only."""
        word = normalize_word(word)
        failure = self._not_ready()
        if failure:
            return failure
        try:
            return await self.orchestrator.describe_image(word, self.resolver.model)
        except StageFailure as e:
            logger.warning(f"Image prompt failed for {word!r}: {e.message}")
            return e.failure
