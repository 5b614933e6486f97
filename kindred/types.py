from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Union

Stage = Literal["definition", "imagePrompt", "resolution"]


class ResolutionState(str, Enum):
    """Lifecycle of the resolved model."""

    UNSET = "unset"
    PROBING = "probing"
    RESOLVED = "resolved"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class WordHelpResult:
    """Definition and image prompt for one word. Only built when both stages succeed."""

    word: str
    definition: str
    image_prompt: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "definition": self.definition,
            "imagePrompt": self.image_prompt,
        }


@dataclass(frozen=True)
class GenerationFailure:
    """Which stage failed and why."""

    stage: Stage
    message: str


WordHelpOutcome = Union[WordHelpResult, GenerationFailure]
