from abc import ABC, abstractmethod
from .types import ModelRequest, ModelResponse


class ModelBackend(ABC):
    """
    Abstract model boundary.
    Resolver and orchestrator code must depend ONLY on this interface.

    Implementations never raise for remote problems; they report them
    through ModelResponse.status instead.
    """

    @abstractmethod
    async def generate(self, request: ModelRequest) -> ModelResponse:
        """Generate a text response from the named model."""
        raise NotImplementedError
