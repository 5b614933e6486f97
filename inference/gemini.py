import asyncio
from typing import Any, Optional

from google import genai

from kindred.errors import ConfigurationError
from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class GeminiModelBackend(ModelBackend):
    """
    Google Gemini backend (google-genai SDK, async client).

    One client is shared by every model identifier; the identifier is
    chosen per request so the resolver can probe candidates in turn.
    Each call is bounded by request.timeout_s.
    """

    def __init__(self, api_key: str, client: Optional[Any] = None):
        """
        Initialize Gemini backend.

        Args:
            api_key: Gemini API key (required)
            client:  Pre-built genai.Client, unit-test hook
        """
        if not api_key and client is None:
            raise ConfigurationError("GEMINI_API_KEY is required for the Gemini backend")
        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate text with client.aio.models.generate_content.

        Returns:
            ModelResponse: success with the response text, recoverable_error
            on timeout, fatal_error for anything else (error kept in
            metadata["error"]).
        """
        base_metadata = {
            "backend": "gemini",
            "model": request.model,
            "task": request.task,
        }

        try:
            call = self._client.aio.models.generate_content(
                model=request.model,
                contents=request.prompt,
            )
            if request.timeout_s:
                result = await asyncio.wait_for(call, timeout=request.timeout_s)
            else:
                result = await call

            output = result.text or ""
            if not output.strip():
                return ModelResponse(
                    status="fatal_error",
                    error_type="empty_output",
                    metadata={**base_metadata, "error": "Model returned an empty response"},
                )

            return ModelResponse(status="success", output=output, metadata=base_metadata)

        except asyncio.TimeoutError:
            return ModelResponse(
                status="recoverable_error",
                error_type="timeout",
                metadata={
                    **base_metadata,
                    "error": f"Request to {request.model} timed out after {request.timeout_s}s",
                },
            )

        except Exception as e:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "error": str(e) or type(e).__name__},
            )
