"""Score Aggregator & Recommendation Engine — Pipeline Steps 5 and 6.

Computes:
  - Overall score (0–100):
      overall = 0.40 × Sentiment% + 0.20 × Relevance + 0.30 × Importance% + 0.10 × Authority%

      Sentiment% = (score + 1) × 50
      Importance% = relative_importance × 100
      Authority% = high 100 / medium 60 / low 30

  - Confidence level (0–1):
      confidence = 0.5 × sentiment_confidence + 0.15 × [context not neutral]
                   + 0.15 × [main focus] + 0.10 × [early] + 0.10 × relevance / 100

  - Recommendations: every matching rule fires, duplicates dropped.
"""

from __future__ import annotations

import logging

from mention_engine.analysis.types import (
    AuthorityLevel,
    BrandMention,
    ContextResult,
    ContextType,
    MentionType,
    PositionResult,
    SentimentLabel,
    SentimentResult,
    UserIntent,
)

logger = logging.getLogger(__name__)

SENTIMENT_WEIGHT = 0.40
RELEVANCE_WEIGHT = 0.20
POSITION_WEIGHT = 0.30
AUTHORITY_WEIGHT = 0.10

_AUTHORITY_SCORES = {
    AuthorityLevel.HIGH: 100.0,
    AuthorityLevel.MEDIUM: 60.0,
    AuthorityLevel.LOW: 30.0,
}

# Recommendation thresholds
LOW_RANK_THRESHOLD = 3  # rank above this is a late mention
LOW_RELEVANCE_THRESHOLD = 50
LOW_OVERALL_THRESHOLD = 40

REC_EARLIER_MENTIONS = "Improve content strategy to achieve earlier mentions in AI responses"
REC_RELEVANCE = "Increase content relevance and thought leadership in core areas"
REC_LEVERAGE_POSITIVE = "Leverage positive sentiment in marketing materials and testimonials"
REC_ADDRESS_NEGATIVE = "Address negative sentiment by improving customer experience and communication"
REC_COMPARISON_CONTENT = "Create competitive comparison content highlighting unique advantages"
REC_PURCHASE_CONCERNS = "Optimize sales and conversion content to address purchase concerns"

_POSITIVE_LABELS = {SentimentLabel.POSITIVE, SentimentLabel.VERY_POSITIVE}
_NEGATIVE_LABELS = {SentimentLabel.NEGATIVE, SentimentLabel.VERY_NEGATIVE}


def calculate_overall_score(
    sentiment: SentimentResult,
    context: ContextResult,
    position: PositionResult,
) -> float:
    """Weighted 0–100 score; increases with sentiment, earliness and relevance."""
    sentiment_pct = (max(-1.0, min(1.0, sentiment.score)) + 1.0) * 50.0
    relevance = max(0.0, min(100.0, float(context.relevance_score)))
    importance_pct = max(0.0, min(1.0, position.relative_importance)) * 100.0
    authority_pct = _AUTHORITY_SCORES.get(context.authority_level, 60.0)

    overall = (
        SENTIMENT_WEIGHT * sentiment_pct
        + RELEVANCE_WEIGHT * relevance
        + POSITION_WEIGHT * importance_pct
        + AUTHORITY_WEIGHT * authority_pct
    )
    return round(max(0.0, min(100.0, overall)), 2)


def calculate_confidence_level(
    sentiment: SentimentResult,
    context: ContextResult,
    position: PositionResult,
) -> float:
    confidence = sentiment.confidence * 0.5
    if context.context_type != ContextType.NEUTRAL:
        confidence += 0.15
    if position.is_main_focus:
        confidence += 0.15
    if position.is_early_mention:
        confidence += 0.10
    confidence += (context.relevance_score / 100) * 0.10
    return round(max(0.0, min(1.0, confidence)), 4)


def generate_recommendations(
    mention: BrandMention,
    sentiment: SentimentResult,
    context: ContextResult,
    position: PositionResult,
    overall_score: float,
) -> list[str]:
    """Map score thresholds and context / sentiment flags to action items."""
    recommendations: list[str] = []

    def add(text: str) -> None:
        if text not in recommendations:
            recommendations.append(text)

    if position.ranking_position > LOW_RANK_THRESHOLD:
        add(REC_EARLIER_MENTIONS)

    if context.relevance_score < LOW_RELEVANCE_THRESHOLD or overall_score < LOW_OVERALL_THRESHOLD:
        add(REC_RELEVANCE)

    if sentiment.label in _POSITIVE_LABELS:
        add(REC_LEVERAGE_POSITIVE)
    elif sentiment.label in _NEGATIVE_LABELS:
        add(REC_ADDRESS_NEGATIVE)

    if context.context_type == ContextType.COMPARISON or mention.mention_type == MentionType.COMPETITOR_COMPARISON:
        add(REC_COMPARISON_CONTENT)

    if context.user_intent == UserIntent.PURCHASE and sentiment.score < 0:
        add(REC_PURCHASE_CONCERNS)

    return recommendations
