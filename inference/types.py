from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class ModelRequest:
    task: str                  # e.g. "probe", "define", "describe_image"
    prompt: str
    model: str
    timeout_s: Optional[float] = 20.0


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error_type: Optional[str] = None   # timeout | empty_output | backend_unavailable
    metadata: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def error_message(self) -> str:
        """Best human-readable reason for a failed response."""
        meta = self.metadata or {}
        return str(meta.get("error") or self.error_type or "unknown error")
