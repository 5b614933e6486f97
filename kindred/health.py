"""
Health and diagnostic checks.

Provides:
- HealthChecker: readiness snapshot; reflects resolver state WITHOUT
  calling the model backend
- run_diagnostic: operator probe that DOES call the backend
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from inference import ModelBackend, ModelRequest
from kindred.errors import KindredError
from kindred.prompting import DIAGNOSTIC_PROMPT
from kindred.resolver import ModelResolver

INITIALIZING = "initializing"


@dataclass
class HealthStatus:
    """Health status response."""

    status: str
    model: str  # resolved identifier or "initializing"
    credential_present: bool
    timestamp: str


class HealthChecker:
    """
    Health checker for the word-help backend.

    Invariant: Health checks do NOT verify external services.
    """

    def __init__(self, resolver: ModelResolver, credential_present: bool):
        self.resolver = resolver
        self.credential_present = credential_present

    def check(self) -> HealthStatus:
        return HealthStatus(
            status="healthy",
            model=self.resolver.model or INITIALIZING,
            credential_present=self.credential_present,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self, status: HealthStatus) -> Dict[str, Any]:
        """Convert HealthStatus to dict for JSON serialization."""
        return {
            "status": status.status,
            "model": status.model,
            "credentialPresent": status.credential_present,
            "timestamp": status.timestamp,
        }


async def run_diagnostic(
    resolver: ModelResolver,
    backend: ModelBackend,
    timeout_s: float,
    reprobe: bool = False,
) -> Tuple[int, Dict[str, Any]]:
    """
    Operator troubleshooting: (re-)resolve if needed, then one trivial call.

    Args:
        reprobe: reset the resolver first, forcing a fresh probe sequence.

    Returns:
        (http_status, body). Never raises for model or resolution errors.
    """
    try:
        if reprobe:
            resolver.reset()
        model = await resolver.resolve()
    except KindredError as e:
        return 500, {"success": False, "error": str(e)}

    try:
        response = await backend.generate(
            ModelRequest(task="diagnostic", prompt=DIAGNOSTIC_PROMPT, model=model, timeout_s=timeout_s)
        )
    except Exception as e:
        return 500, {"success": False, "error": str(e) or type(e).__name__, "model": model}

    if not response.ok:
        return 500, {"success": False, "error": response.error_message, "model": model}

    return 200, {
        "success": True,
        "message": "API key is working!",
        "model": model,
        "response": response.output,
    }
