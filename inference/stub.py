import asyncio
from typing import Dict, Iterable, List, Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse


_DEFAULT_OUTPUTS: Dict[str, str] = {
    "probe": "Hi",
    "define": "This is a stubbed definition.",
    "describe_image": "A stubbed cartoon picture.",
    "diagnostic": "Hello",
}


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for testing and CI.

    This backend is fast, deterministic, and never fails silently.
    Failures can be scripted per model identifier or per task, and
    every request is recorded in ``calls`` for assertions.
    """

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        failing_models: Iterable[str] = (),
        failing_tasks: Iterable[str] = (),
        delay_s: float = 0.0,
    ):
        self.outputs = {**_DEFAULT_OUTPUTS, **(outputs or {})}
        self.failing_models = set(failing_models)
        self.failing_tasks = set(failing_tasks)
        self.delay_s = delay_s
        self.calls: List[ModelRequest] = []

    def calls_for(self, task: str) -> List[ModelRequest]:
        return [c for c in self.calls if c.task == task]

    async def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate a deterministic response based on task type.

        Args:
            request: ModelRequest with task, prompt, model and timeout

        Returns:
            ModelResponse with the scripted output for the task
        """
        self.calls.append(request)
        metadata = {"backend": "stub", "model": request.model}

        if self.delay_s:
            await asyncio.sleep(self.delay_s)

        if request.model in self.failing_models:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**metadata, "error": f"model {request.model} is not available"},
            )

        if request.task in self.failing_tasks:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**metadata, "error": f"stubbed failure for task: {request.task}"},
            )

        # Default stub output for any other task
        return ModelResponse(
            status="success",
            output=self.outputs.get(request.task, f"Default stub output for task: {request.task}"),
            metadata=metadata,
        )
