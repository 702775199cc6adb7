"""Text analyzer factory.

Provides get_analyzer() / set_analyzer() to swap implementations:
- LexiconAnalyzer for development and testing
- ComprehendAnalyzer for production

The default is picked from the domain's ``TEXT_ANALYZER`` setting.
"""

from protean.utils.globals import current_domain

from storefront.analysis.lexicon_adapter import LexiconAnalyzer
from storefront.analysis.port import TextAnalyzer

_current_analyzer: TextAnalyzer | None = None


def _configured_analyzer() -> TextAnalyzer:
    custom = current_domain.config.get("custom", {}) if current_domain else {}
    if custom.get("TEXT_ANALYZER") == "comprehend":
        from storefront.analysis.comprehend_adapter import ComprehendAnalyzer

        return ComprehendAnalyzer(region_name=custom.get("AWS_REGION") or None)
    return LexiconAnalyzer()


def get_analyzer() -> TextAnalyzer:
    """Return the current text analyzer, building the configured one on first use."""
    global _current_analyzer
    if _current_analyzer is None:
        _current_analyzer = _configured_analyzer()
    return _current_analyzer


def set_analyzer(analyzer: TextAnalyzer) -> None:
    """Override the active text analyzer (useful for tests)."""
    global _current_analyzer
    _current_analyzer = analyzer


def reset_analyzer() -> None:
    """Reset to the configured analyzer."""
    global _current_analyzer
    _current_analyzer = None
