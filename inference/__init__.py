"""
Model boundary layer for text generation.

This package provides a clean abstraction for model invocation,
allowing the resolver and orchestrator to remain agnostic of the
underlying backend.

Supported backends:
- StubModelBackend: Deterministic fake model (default for CI/tests)
- GeminiModelBackend: Google Gemini via the google-genai SDK

Example usage:
    from inference import StubModelBackend, ModelRequest

    backend = StubModelBackend()
    request = ModelRequest(task="probe", prompt="Say hi in one word", model="m1")
    response = await backend.generate(request)
"""

from .types import ModelRequest, ModelResponse, ModelStatus
from .base import ModelBackend
from .stub import StubModelBackend
from .gemini import GeminiModelBackend

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ModelBackend",
    "StubModelBackend",
    "GeminiModelBackend",
]
