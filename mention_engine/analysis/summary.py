"""Mention summary — rolls per-occurrence results up for one response.

  - Average overall score and sentiment score
  - Net Sentiment Score = (% positive − % negative), scale −100 to +100
  - Early-mention rate, main-focus flag
  - Sentiment label distribution, competitors seen, merged recommendations
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from mention_engine.analysis.types import MentionAnalysisResult, SentimentLabel

_POSITIVE_LABELS = {SentimentLabel.POSITIVE, SentimentLabel.VERY_POSITIVE}
_NEGATIVE_LABELS = {SentimentLabel.NEGATIVE, SentimentLabel.VERY_NEGATIVE}


@dataclass
class MentionSummary:
    brand_name: str = ""
    mention_count: int = 0
    average_overall_score: float = 0.0
    average_sentiment_score: float = 0.0
    net_sentiment_score: float = 0.0
    early_mention_rate: float = 0.0  # 0.0 .. 1.0
    is_main_focus: bool = False
    best_ranking_position: int = 0  # 0 = no mentions
    label_distribution: dict[str, int] = field(default_factory=dict)
    competitors_seen: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "brandName": self.brand_name,
            "mentionCount": self.mention_count,
            "averageOverallScore": self.average_overall_score,
            "averageSentimentScore": self.average_sentiment_score,
            "netSentimentScore": self.net_sentiment_score,
            "earlyMentionRate": self.early_mention_rate,
            "isMainFocus": self.is_main_focus,
            "bestRankingPosition": self.best_ranking_position,
            "labelDistribution": self.label_distribution,
            "competitorsSeen": self.competitors_seen,
            "recommendations": self.recommendations,
        }


def compute_net_sentiment(results: list[MentionAnalysisResult]) -> float:
    if not results:
        return 0.0
    positive = sum(1 for r in results if r.sentiment.label in _POSITIVE_LABELS)
    negative = sum(1 for r in results if r.sentiment.label in _NEGATIVE_LABELS)
    return round((positive - negative) / len(results) * 100.0, 2)


def summarize_mentions(results: list[MentionAnalysisResult], brand_name: str = "") -> MentionSummary:
    """Aggregate analyzed mentions of one brand. Empty input gives a zeroed summary."""
    if not results:
        return MentionSummary(brand_name=brand_name)

    count = len(results)
    labels = Counter(r.sentiment.label.value for r in results)

    competitors: list[str] = []
    recommendations: list[str] = []
    for r in results:
        for comp in r.context.competitor_mentions:
            if comp not in competitors:
                competitors.append(comp)
        for rec in r.recommendations:
            if rec not in recommendations:
                recommendations.append(rec)

    return MentionSummary(
        brand_name=brand_name or results[0].mention.brand_name,
        mention_count=count,
        average_overall_score=round(sum(r.overall_score for r in results) / count, 2),
        average_sentiment_score=round(sum(r.sentiment.score for r in results) / count, 4),
        net_sentiment_score=compute_net_sentiment(results),
        early_mention_rate=round(sum(1 for r in results if r.position.is_early_mention) / count, 4),
        is_main_focus=any(r.position.is_main_focus for r in results),
        best_ranking_position=min(r.position.ranking_position for r in results),
        label_distribution=dict(labels),
        competitors_seen=competitors,
        recommendations=recommendations,
    )
