"""Context Analyzer — Pipeline Step 3.

Classifies how a mention is framed, using rules over its context snippet:
  - context_type (recommendation / comparison / criticism / question / neutral)
  - user_intent (purchase / comparison / troubleshooting / research / general)
  - key_topics from a fixed topic dictionary
  - competitor_mentions from the request's competitor list
  - relevance_score: lexical overlap between query and response
  - authority_level from expert vs. hedging language
"""

from __future__ import annotations

import logging
import re

from mention_engine.analysis.mention_detector import COMPARISON_PATTERN
from mention_engine.analysis.types import (
    AnalysisRequest,
    AuthorityLevel,
    BrandMention,
    ContextResult,
    ContextType,
    MentionType,
    UserIntent,
)

logger = logging.getLogger(__name__)

# Returned when the query has no usable tokens
DEFAULT_RELEVANCE = 50

# ---------------------------------------------------------------------------
# Context type / intent patterns
# ---------------------------------------------------------------------------
_RECOMMEND_PATTERN = re.compile(r"\b(?:recommend\w*|suggest\w*|should\s+use)\b", re.IGNORECASE)
_CRITICISM_PATTERN = re.compile(r"\b(?:problems?|issues?|complaints?|fix|help)\b", re.IGNORECASE)
_QUESTION_PATTERN = re.compile(r"\?|\bwhat\s+is\b|\bhow\s+to\b", re.IGNORECASE)

_INTENT_PATTERNS: list[tuple[UserIntent, re.Pattern]] = [
    (UserIntent.PURCHASE, re.compile(r"\b(?:buy\w*|purchas\w*|pricing|prices?|costs?)\b", re.IGNORECASE)),
    (UserIntent.COMPARISON, re.compile(r"\b(?:compar\w*|vs\.?|versus|alternatives?)\b", re.IGNORECASE)),
    (UserIntent.TROUBLESHOOTING, re.compile(r"\b(?:problems?|issues?|fix\w*|help)\b", re.IGNORECASE)),
    (UserIntent.RESEARCH, re.compile(r"\b(?:research\w*|learn\w*|understand\w*)\b", re.IGNORECASE)),
]

# ---------------------------------------------------------------------------
# Topic dictionary
# ---------------------------------------------------------------------------
_TOPIC_PATTERNS = {
    "pricing": re.compile(r"\b(?:pric\w*|costs?|expensive|affordable|cheap\w*|fees?)\b", re.IGNORECASE),
    "usability": re.compile(r"\b(?:user-friendly|easy|easier|difficult|complex|intuitive|interface)\b", re.IGNORECASE),
    "performance": re.compile(r"\b(?:fast\w*|slow\w*|performance|speed|efficient)\b", re.IGNORECASE),
    "features": re.compile(r"\b(?:features?|functionality|capabilit\w*|tools?|options?)\b", re.IGNORECASE),
    "support": re.compile(r"\b(?:support|help|customer\s+service|documentation)\b", re.IGNORECASE),
    "reliability": re.compile(r"\b(?:reliab\w*|stable|stability|bugs?|buggy|crash\w*|downtime)\b", re.IGNORECASE),
    "integration": re.compile(r"\b(?:integrat\w*|api|plugins?|connectors?)\b", re.IGNORECASE),
    "security": re.compile(r"\b(?:secur\w*|encrypt\w*|privacy|compliance)\b", re.IGNORECASE),
}

# ---------------------------------------------------------------------------
# Authority markers
# ---------------------------------------------------------------------------
_AUTHORITY_WORDS = {"expert", "professional", "industry", "leading", "established", "proven"}
_HEDGING_WORDS = {"maybe", "might", "possibly", "unclear", "unsure"}

# ---------------------------------------------------------------------------
# Relevance tokenization
# ---------------------------------------------------------------------------
_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
_MIN_TOKEN_LENGTH = 4

_STOP_WORDS = {
    "what",
    "which",
    "when",
    "where",
    "does",
    "with",
    "about",
    "that",
    "this",
    "have",
    "from",
    "your",
    "there",
    "their",
    "they",
    "would",
    "should",
    "could",
    "into",
    "than",
    "then",
    "some",
    "more",
    "most",
    "much",
    "many",
}


def _tokens(text: str) -> set[str]:
    return {
        t for t in _TOKEN_PATTERN.findall(text.lower()) if len(t) >= _MIN_TOKEN_LENGTH and t not in _STOP_WORDS
    }


def classify_context_type(snippet: str, mention_type: MentionType = MentionType.DIRECT) -> ContextType:
    """First matching rule wins: recommendation > comparison > criticism > question."""
    if _RECOMMEND_PATTERN.search(snippet):
        return ContextType.RECOMMENDATION
    if mention_type == MentionType.COMPETITOR_COMPARISON or COMPARISON_PATTERN.search(snippet):
        return ContextType.COMPARISON
    if _CRITICISM_PATTERN.search(snippet):
        return ContextType.CRITICISM
    if _QUESTION_PATTERN.search(snippet):
        return ContextType.QUESTION
    return ContextType.NEUTRAL


def classify_user_intent(snippet: str) -> UserIntent:
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(snippet):
            return intent
    return UserIntent.GENERAL_INQUIRY


def extract_key_topics(snippet: str) -> list[str]:
    """Every topic whose keywords occur in the snippet, in dictionary order."""
    return [topic for topic, pattern in _TOPIC_PATTERNS.items() if pattern.search(snippet)]


def find_competitor_mentions(snippet: str, competitors: list[str]) -> list[str]:
    """Competitors found in the snippet (case-insensitive), with input casing."""
    lowered = snippet.lower()
    found: list[str] = []
    for competitor in competitors:
        if competitor and competitor.strip() and competitor.lower() in lowered and competitor not in found:
            found.append(competitor)
    return found


def calculate_relevance_score(query: str, response: str) -> int:
    """Percentage of distinct query tokens that reappear in the response."""
    query_tokens = _tokens(query)
    if not query_tokens:
        return DEFAULT_RELEVANCE

    overlap = query_tokens & _tokens(response)
    return round(min(100.0, len(overlap) / len(query_tokens) * 100))


def determine_authority_level(snippet: str) -> AuthorityLevel:
    words = set(_TOKEN_PATTERN.findall(snippet.lower()))
    authority_hits = len(words & _AUTHORITY_WORDS)
    hedging_hits = len(words & _HEDGING_WORDS)

    if authority_hits > hedging_hits and authority_hits > 0:
        return AuthorityLevel.HIGH
    if hedging_hits > 0:
        return AuthorityLevel.LOW
    return AuthorityLevel.MEDIUM


def analyze_context(mention: BrandMention, request: AnalysisRequest) -> ContextResult:
    """Classify the framing of a single mention."""
    snippet = mention.context_snippet

    result = ContextResult(
        context_type=classify_context_type(snippet, mention.mention_type),
        user_intent=classify_user_intent(snippet),
        key_topics=extract_key_topics(snippet),
        competitor_mentions=find_competitor_mentions(snippet, request.competitors or []),
        relevance_score=calculate_relevance_score(request.query, request.response),
        authority_level=determine_authority_level(snippet),
    )

    logger.debug(
        "Context: brand=%s, offset=%d, type=%s, intent=%s, topics=%s, relevance=%d, authority=%s",
        mention.brand_name,
        mention.start_position,
        result.context_type.value,
        result.user_intent.value,
        result.key_topics,
        result.relevance_score,
        result.authority_level.value,
    )
    return result
