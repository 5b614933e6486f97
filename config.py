"""
Configuration management for the Kindred backend.

Loads environment variables from .env file and provides typed access to configuration.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Tuple

from dotenv import load_dotenv

from kindred.errors import ConfigurationError

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


# Ordered by preference; the first one that answers a probe wins.
DEFAULT_MODEL_CANDIDATES: Tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-1.5-pro",
    "gemini-pro",
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash-002",
    "models/gemini-1.5-flash",
    "models/gemini-pro",
    "models/gemini-2.5-flash-image",
    "models/gemini-3-pro-image-preview",
    "models/gemini-2.5-flash",
)

StartupResolution = Literal["blocking", "background"]


def _parse_candidates(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _env_number(name: str, default: str, cast: Callable[[str], Any]) -> Any:
    raw = os.getenv(name, default).strip()
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class KindredConfig:
    """Backend configuration from environment."""

    gemini_api_key: str = ""
    model_candidates: Tuple[str, ...] = field(default=DEFAULT_MODEL_CANDIDATES)
    probe_timeout_s: float = 5.0
    generation_timeout_s: float = 20.0
    startup_resolution: StartupResolution = "blocking"
    port: int = 3001
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "KindredConfig":
        """
        Load configuration from environment variables.

        MODEL_CANDIDATES is a comma separated list; when unset the
        built-in Gemini list is used.
        """
        raw_candidates = os.getenv("MODEL_CANDIDATES", "")
        candidates = _parse_candidates(raw_candidates) if raw_candidates else DEFAULT_MODEL_CANDIDATES

        startup = os.getenv("STARTUP_RESOLUTION", "blocking").strip().lower()
        if startup not in ("blocking", "background"):
            raise ConfigurationError(
                f"STARTUP_RESOLUTION must be 'blocking' or 'background', got {startup!r}"
            )

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            model_candidates=candidates,
            probe_timeout_s=_env_number("PROBE_TIMEOUT_S", "5", float),
            generation_timeout_s=_env_number("GENERATION_TIMEOUT_S", "20", float),
            startup_resolution=startup,  # type: ignore
            port=_env_number("PORT", "3001", int),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def credential_present(self) -> bool:
        return bool(self.gemini_api_key)

    def validate(self) -> None:
        """Raise ConfigurationError unless the service can start."""
        if not self.credential_present:
            raise ConfigurationError("GEMINI_API_KEY not found. Please set it in the .env file")
        if not self.model_candidates:
            raise ConfigurationError("No model candidates configured (MODEL_CANDIDATES is empty)")
        if not (self.probe_timeout_s > 0 and self.generation_timeout_s > 0):
            raise ConfigurationError("PROBE_TIMEOUT_S and GENERATION_TIMEOUT_S must be greater than zero")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown LOG_LEVEL: {self.log_level!r}")


if __name__ == "__main__":
    # Test configuration loading
    cfg = KindredConfig.from_env()
    print("Configuration loaded:")
    print(f"  Gemini API Key: {'✓ Set' if cfg.credential_present else '✗ Missing'}")
    print(f"  Model candidates: {', '.join(cfg.model_candidates)}")
    print(f"  Startup resolution: {cfg.startup_resolution}")
    print(f"  Port: {cfg.port}")
