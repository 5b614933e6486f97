"""
Prompt Builder Layer
====================

Fixed instruction templates sent to the model backend.

Invariants:
- The word is embedded verbatim inside double quotes
- Length limits are requested by instruction only; nothing here trims
  or validates the model's answer
"""

# Minimal, low-cost request used only to check that a candidate answers.
PROBE_PROMPT = "Say hi in one word"

# Operator troubleshooting call (GET /test).
DIAGNOSTIC_PROMPT = "Say hello in one word"

_DEFINITION_TEMPLATE = (
    'You are a friendly teacher. Explain the word "{word}" to a 5-year-old child '
    "in ONE simple, fun sentence. Keep it under 25 words."
)

_IMAGE_TEMPLATE = (
    'Describe a colorful, friendly cartoon image of "{word}" for children. '
    "One sentence, under 25 words."
)


def build_definition_prompt(word: str) -> str:
    """Child-level, one-sentence definition request for ``word``."""
    return _DEFINITION_TEMPLATE.format(word=word)


def build_image_prompt(word: str) -> str:
    """One-sentence cartoon illustration description request for ``word``."""
    return _IMAGE_TEMPLATE.format(word=word)
