"""Text analysis port (abstract interface).

Review content is scored by a hosted AI text-analysis service in production
and by a deterministic lexicon in development and tests. Both sit behind
this contract so the review handlers never know which one is active.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class Sentiment(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    MIXED = "Mixed"


class TextAnalysisError(Exception):
    """The analysis provider could not score the text."""


@dataclass(frozen=True)
class DetectedEntity:
    """A named thing mentioned in the text (brand, product, person...)."""

    text: str
    entity_type: str
    score: float


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing one piece of text."""

    sentiment: Sentiment
    scores: dict[str, float] = field(default_factory=dict)
    entities: tuple[DetectedEntity, ...] = ()

    @property
    def entity_texts(self) -> list[str]:
        seen = []
        for entity in self.entities:
            if entity.text not in seen:
                seen.append(entity.text)
        return seen


class TextAnalyzer(ABC):
    """Abstract text analyzer."""

    @abstractmethod
    def analyze(self, text: str, language_code: str = "en") -> AnalysisResult:
        """Detect the dominant sentiment and the entities mentioned in ``text``."""
        ...
