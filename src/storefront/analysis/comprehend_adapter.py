"""Amazon Comprehend text analyzer.

Uses the synchronous DetectSentiment and DetectEntities APIs. Both accept at
most 5,000 bytes of UTF-8 text, so longer reviews are cut on a character
boundary before the call.
"""

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from storefront.analysis.port import (
    AnalysisResult,
    DetectedEntity,
    Sentiment,
    TextAnalysisError,
    TextAnalyzer,
)

logger = structlog.get_logger(__name__)

MAX_TEXT_BYTES = 5000
MIN_ENTITY_SCORE = 0.8

_SENTIMENT_MAP = {
    "POSITIVE": Sentiment.POSITIVE,
    "NEGATIVE": Sentiment.NEGATIVE,
    "NEUTRAL": Sentiment.NEUTRAL,
    "MIXED": Sentiment.MIXED,
}


def truncate_utf8(text: str, max_bytes: int = MAX_TEXT_BYTES) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


class ComprehendAnalyzer(TextAnalyzer):
    """Production analyzer backed by Amazon Comprehend."""

    def __init__(self, region_name: str | None = None, client=None) -> None:
        self.client = client or boto3.client("comprehend", region_name=region_name)

    def analyze(self, text: str, language_code: str = "en") -> AnalysisResult:
        if not text or not text.strip():
            return AnalysisResult(sentiment=Sentiment.NEUTRAL, scores={"Neutral": 1.0})

        payload = truncate_utf8(text)
        try:
            sentiment_response = self.client.detect_sentiment(Text=payload, LanguageCode=language_code)
            entities_response = self.client.detect_entities(Text=payload, LanguageCode=language_code)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("comprehend.request_failed", error=str(exc))
            raise TextAnalysisError(str(exc)) from exc

        label = sentiment_response.get("Sentiment")
        if label not in _SENTIMENT_MAP:
            raise TextAnalysisError(f"Unexpected sentiment label: {label!r}")

        scores = {key: round(float(value), 4) for key, value in sentiment_response.get("SentimentScore", {}).items()}
        entities = tuple(
            DetectedEntity(text=item["Text"], entity_type=item["Type"], score=float(item["Score"]))
            for item in entities_response.get("Entities", [])
            if float(item.get("Score", 0.0)) >= MIN_ENTITY_SCORE
        )

        return AnalysisResult(sentiment=_SENTIMENT_MAP[label], scores=scores, entities=entities)
