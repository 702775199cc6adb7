"""Deterministic word-list analyzer for development and testing.

Counts positive and negative cue words. Both present in meaningful amounts
means Mixed; neither means Neutral. Capitalized words that do not start a
sentence are reported as entities, which is enough to exercise the
entity-handling code paths without a network call.
"""

import re

from storefront.analysis.port import AnalysisResult, DetectedEntity, Sentiment, TextAnalyzer

POSITIVE_WORDS = frozenset(
    {
        "amazing",
        "awesome",
        "best",
        "excellent",
        "fantastic",
        "good",
        "great",
        "happy",
        "love",
        "loved",
        "perfect",
        "recommend",
        "wonderful",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "awful",
        "bad",
        "broke",
        "broken",
        "disappointed",
        "hate",
        "horrible",
        "poor",
        "refund",
        "terrible",
        "useless",
        "worst",
    }
)

_WORD = re.compile(r"[A-Za-z']+")
_SENTENCE_BREAK = re.compile(r"[.!?]\s+")


class LexiconAnalyzer(TextAnalyzer):
    """Word-list sentiment with naive proper-noun entity extraction."""

    def analyze(self, text: str, language_code: str = "en") -> AnalysisResult:  # noqa: ARG002
        words = [w.lower() for w in _WORD.findall(text or "")]
        positive = sum(1 for w in words if w in POSITIVE_WORDS)
        negative = sum(1 for w in words if w in NEGATIVE_WORDS)

        if positive and negative:
            sentiment = Sentiment.MIXED
        elif positive:
            sentiment = Sentiment.POSITIVE
        elif negative:
            sentiment = Sentiment.NEGATIVE
        else:
            sentiment = Sentiment.NEUTRAL

        return AnalysisResult(
            sentiment=sentiment,
            scores=_scores(positive, negative),
            entities=tuple(_proper_nouns(text or "")),
        )


def _scores(positive, negative):
    cues = positive + negative
    if cues == 0:
        return {"Positive": 0.0, "Negative": 0.0, "Neutral": 1.0, "Mixed": 0.0}

    mixed = (2 * min(positive, negative)) / cues
    return {
        "Positive": round((positive / cues) * (1 - mixed), 4),
        "Negative": round((negative / cues) * (1 - mixed), 4),
        "Neutral": 0.0,
        "Mixed": round(mixed, 4),
    }


def _proper_nouns(text):
    entities = []
    for sentence in _SENTENCE_BREAK.split(text):
        for word in _WORD.findall(sentence)[1:]:
            if len(word) > 1 and word[0].isupper() and word.lower() not in POSITIVE_WORDS | NEGATIVE_WORDS:
                entities.append(DetectedEntity(text=word, entity_type="OTHER", score=0.5))
    return entities
