from .prompt_builder import (
    DIAGNOSTIC_PROMPT,
    PROBE_PROMPT,
    build_definition_prompt,
    build_image_prompt,
)

__all__ = [
    "DIAGNOSTIC_PROMPT",
    "PROBE_PROMPT",
    "build_definition_prompt",
    "build_image_prompt",
]
