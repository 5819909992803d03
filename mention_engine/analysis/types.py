"""Core types and DTOs for the Brand Mention Analysis Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class AnalysisDepth(str, Enum):
    """How much effort to spend on sentiment scoring."""

    BASIC = "basic"  # Lexicon only
    DETAILED = "detailed"  # AI judge when available
    COMPREHENSIVE = "comprehensive"  # AI judge when available


class MentionType(str, Enum):
    """How a brand occurrence is phrased in the response."""

    DIRECT = "direct"  # Named as the subject
    INDIRECT = "indirect"  # "tools like X", "such as X"
    COMPETITOR_COMPARISON = "competitor_comparison"  # "X vs Y"


class SentimentLabel(str, Enum):
    """Five-step sentiment bucket."""

    VERY_NEGATIVE = "very_negative"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    VERY_POSITIVE = "very_positive"


class ContextType(str, Enum):
    """Rhetorical role of the mention."""

    RECOMMENDATION = "recommendation"
    COMPARISON = "comparison"
    CRITICISM = "criticism"
    QUESTION = "question"
    NEUTRAL = "neutral"


class UserIntent(str, Enum):
    """Apparent intent behind the exchange."""

    GENERAL_INQUIRY = "general_inquiry"
    PURCHASE = "purchase"
    TROUBLESHOOTING = "troubleshooting"
    COMPARISON = "comparison"
    RESEARCH = "research"


class AuthorityLevel(str, Enum):
    """How confident / expert the surrounding language sounds."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass
class AnalysisRequest:
    """One (query, response, brand) triple to analyze."""

    query: str = ""  # Prompt that produced the response
    response: str = ""  # LLM output to analyze
    brand_name: str = ""
    competitors: list[str] = field(default_factory=list)
    llm_platform: str = ""  # Informational only
    analysis_depth: AnalysisDepth = AnalysisDepth.BASIC

    def __post_init__(self) -> None:
        # Accept plain strings from the API layer
        self.analysis_depth = AnalysisDepth(self.analysis_depth)
        self.competitors = list(self.competitors or [])


# ---------------------------------------------------------------------------
# Per-step results
# ---------------------------------------------------------------------------


@dataclass
class BrandMention:
    """A single occurrence of the brand inside the response."""

    brand_name: str = ""
    mention_text: str = ""  # Verbatim match, source casing
    mention_type: MentionType = MentionType.DIRECT
    start_position: int = 0
    end_position: int = 0
    context_snippet: str = ""  # Text around the match
    context_window: int = 0  # Characters taken on each side


@dataclass
class SentimentResult:
    score: float = 0.0  # -1.0 .. +1.0
    confidence: float = 0.0  # 0.0 .. 1.0
    label: SentimentLabel = SentimentLabel.NEUTRAL
    reasoning: str = ""
    emotional_tone: list[str] = field(default_factory=list)
    method: str = ""  # "ai" or "basic"


@dataclass
class ContextResult:
    context_type: ContextType = ContextType.NEUTRAL
    user_intent: UserIntent = UserIntent.GENERAL_INQUIRY
    key_topics: list[str] = field(default_factory=list)
    competitor_mentions: list[str] = field(default_factory=list)  # Input casing
    relevance_score: int = 0  # 0 .. 100
    authority_level: AuthorityLevel = AuthorityLevel.MEDIUM


@dataclass
class PositionResult:
    is_early_mention: bool = False
    is_main_focus: bool = False  # Brand occurs more than once
    ranking_position: int = 1  # 1-based among company-like names
    relative_importance: float = 0.0  # 0.0 .. 1.0


# ---------------------------------------------------------------------------
# Main output DTO
# ---------------------------------------------------------------------------


@dataclass
class MentionAnalysisResult:
    """Complete analysis of one brand occurrence."""

    mention: BrandMention = field(default_factory=BrandMention)
    sentiment: SentimentResult = field(default_factory=SentimentResult)
    context: ContextResult = field(default_factory=ContextResult)
    position: PositionResult = field(default_factory=PositionResult)
    overall_score: float = 0.0  # 0 .. 100
    confidence_level: float = 0.0  # 0 .. 1
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the JSON shape consumed by the API layer and UI."""
        return {
            "mention": {
                "brandName": self.mention.brand_name,
                "mentionText": self.mention.mention_text,
                "mentionType": self.mention.mention_type.value,
                "startPosition": self.mention.start_position,
                "endPosition": self.mention.end_position,
                "contextSnippet": self.mention.context_snippet,
                "contextWindow": self.mention.context_window,
            },
            "sentiment": {
                "score": self.sentiment.score,
                "confidence": self.sentiment.confidence,
                "label": self.sentiment.label.value,
                "reasoning": self.sentiment.reasoning,
                "emotionalTone": self.sentiment.emotional_tone,
            },
            "context": {
                "contextType": self.context.context_type.value,
                "userIntent": self.context.user_intent.value,
                "keyTopics": self.context.key_topics,
                "competitorMentions": self.context.competitor_mentions,
                "relevanceScore": self.context.relevance_score,
                "authorityLevel": self.context.authority_level.value,
            },
            "position": {
                "isEarlyMention": self.position.is_early_mention,
                "isMainFocus": self.position.is_main_focus,
                "rankingPosition": self.position.ranking_position,
                "relativeImportance": round(self.position.relative_importance, 4),
            },
            "overallScore": round(self.overall_score, 2),
            "confidenceLevel": round(self.confidence_level, 4),
            "recommendations": self.recommendations,
        }
