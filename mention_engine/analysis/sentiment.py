"""Sentiment Analyzer — Pipeline Step 2.

Scores the emotional valence of one mention's context snippet:
  - AI judge (OpenAI / Anthropic) for ``detailed`` / ``comprehensive`` depth
  - Deterministic keyword lexicon for ``basic`` depth and as the fallback

The AI path is an explicit two-step strategy: the judge attempt reports
its own failure mode instead of raising, and the lexicon fills in.
Every degradation is logged as a warning naming the failure mode.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mention_engine.analysis.types import (
    AnalysisDepth,
    BrandMention,
    SentimentLabel,
    SentimentResult,
)
from mention_engine.gateway.judge_clients import BaseJudgeClient, DisabledJudgeClient

logger = logging.getLogger(__name__)

BASIC_CONFIDENCE = 0.6

# Depths that may use the AI judge
_AI_DEPTHS = {AnalysisDepth.DETAILED, AnalysisDepth.COMPREHENSIVE}

# ---------------------------------------------------------------------------
# Judge prompt template
# ---------------------------------------------------------------------------

_JUDGE_SYSTEM_PROMPT = (
    "You are an expert sentiment analysis specialist. "
    "Provide accurate sentiment analysis in JSON format. Output ONLY valid JSON."
)

_JUDGE_USER_TEMPLATE = """\
Analyze the sentiment towards "{brand}" in this context:

Context: "{context}"

Provide a detailed sentiment analysis with:
1. Sentiment score from -1.0 (very negative) to 1.0 (very positive)
2. Confidence level from 0.0 to 1.0
3. Sentiment label (very_negative, negative, neutral, positive, very_positive)
4. Brief reasoning for the sentiment
5. Emotional tone keywords

Response format: JSON
{{
  "score": 0.0,
  "confidence": 0.0,
  "label": "neutral",
  "reasoning": "explanation",
  "emotionalTone": ["keyword1", "keyword2"]
}}"""

# ---------------------------------------------------------------------------
# Keyword lexicons
# ---------------------------------------------------------------------------

# Whole-word match, so inflected forms are listed explicitly
_POSITIVE_WORDS = {
    "excellent",
    "great",
    "greatest",
    "amazing",
    "best",
    "outstanding",
    "recommend",
    "recommends",
    "recommended",
    "recommending",
    "love",
    "loves",
    "loved",
    "loving",
    "perfect",
    "perfectly",
    "fantastic",
    "superior",
    "impressive",
    "impressed",
    "reliable",
    "reliably",
    "efficient",
    "efficiently",
    "powerful",
    "innovative",
    "user-friendly",
    "helpful",
}

_NEGATIVE_WORDS = {
    "terrible",
    "terribly",
    "awful",
    "worst",
    "worse",
    "bad",
    "disappointing",
    "disappointed",
    "disappoints",
    "useless",
    "buggy",
    "slow",
    "slower",
    "expensive",
    "complicated",
    "frustrating",
    "frustrated",
    "frustrates",
    "poor",
    "poorly",
    "lacking",
    "lacks",
    "inferior",
    "problematic",
    "confusing",
    "confused",
    "limited",
}

_WORD_PATTERN = re.compile(r"[a-z]+(?:-[a-z]+)*")

_JSON_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


# ---------------------------------------------------------------------------
# Basic (lexical) analyzer
# ---------------------------------------------------------------------------


def _label_from_score(score: float) -> SentimentLabel:
    if score > 0.6:
        return SentimentLabel.VERY_POSITIVE
    if score > 0:
        return SentimentLabel.POSITIVE
    if score < -0.6:
        return SentimentLabel.VERY_NEGATIVE
    if score < 0:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


def analyze_basic(context: str) -> SentimentResult:
    """Score a snippet by counting distinct lexicon words.

    Net hits map to ±0.4, ±0.6, ±0.8 (capped), zero net is neutral.
    """
    words = set(_WORD_PATTERN.findall(context.lower()))
    positive_hits = len(words & _POSITIVE_WORDS)
    negative_hits = len(words & _NEGATIVE_WORDS)
    net = positive_hits - negative_hits

    score = 0.0
    if net > 0:
        score = min(0.8, 0.2 + 0.2 * net)
    elif net < 0:
        score = max(-0.8, -0.2 + 0.2 * net)
    score = round(score, 2)

    return SentimentResult(
        score=score,
        confidence=BASIC_CONFIDENCE,
        label=_label_from_score(score),
        reasoning=f"Basic keyword analysis: {positive_hits} positive, {negative_hits} negative keywords",
        emotional_tone=[],
        method="basic",
    )


# ---------------------------------------------------------------------------
# AI judge answer schema
# ---------------------------------------------------------------------------


class SentimentJudgement(BaseModel):
    """Validated judge answer. Out-of-range values are rejected, not clamped."""

    model_config = ConfigDict(populate_by_name=True)

    score: float = Field(ge=-1.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    label: Literal["very_negative", "negative", "neutral", "positive", "very_positive"]
    reasoning: str = ""
    emotional_tone: list[str] = Field(default_factory=list, alias="emotionalTone")


@dataclass
class JudgeAttempt:
    """Outcome of one AI judge call: a result, or the reason there is none."""

    result: SentimentResult | None = None
    failure: str = ""  # provider_error | empty_response | malformed_json | invalid_schema
    detail: str = ""


def build_judge_prompt(mention: BrandMention) -> tuple[str, str]:
    """Build the system + user prompts for the sentiment judge."""
    user_prompt = _JUDGE_USER_TEMPLATE.format(
        brand=mention.brand_name,
        context=mention.context_snippet,
    )
    return _JUDGE_SYSTEM_PROMPT, user_prompt


def parse_judge_response(raw: str) -> JudgeAttempt:
    """Parse and validate the judge's text answer."""
    block = _JSON_BLOCK_PATTERN.search(raw)
    if block:
        raw = block.group(1)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return JudgeAttempt(failure="malformed_json", detail=str(e))

    try:
        judgement = SentimentJudgement.model_validate(data)
    except ValidationError as e:
        return JudgeAttempt(failure="invalid_schema", detail=f"{e.error_count()} validation error(s)")

    return JudgeAttempt(
        result=SentimentResult(
            score=judgement.score,
            confidence=judgement.confidence,
            label=SentimentLabel(judgement.label),
            reasoning=judgement.reasoning,
            emotional_tone=[str(t) for t in judgement.emotional_tone],
            method="ai",
        )
    )


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class SentimentAnalyzer:
    """Sentiment scoring with an optional AI judge in front of the lexicon."""

    def __init__(self, judge_client: BaseJudgeClient | None = None):
        self.judge_client = judge_client or DisabledJudgeClient()

    @property
    def ai_enabled(self) -> bool:
        return self.judge_client.enabled

    async def analyze(self, mention: BrandMention, depth: AnalysisDepth = AnalysisDepth.BASIC) -> SentimentResult:
        if depth not in _AI_DEPTHS or not self.ai_enabled:
            return analyze_basic(mention.context_snippet)
        return await self.try_ai_then_basic(mention)

    async def try_ai_then_basic(self, mention: BrandMention) -> SentimentResult:
        """Ask the AI judge first, fall back to the lexicon on any failure mode."""
        attempt = await self._ask_judge(mention)
        if attempt.result is not None:
            return attempt.result

        logger.warning(
            "AI sentiment analysis failed (%s) for brand=%s via %s, using basic analysis: %s",
            attempt.failure,
            mention.brand_name,
            self.judge_client.vendor,
            attempt.detail,
            extra={"brand": mention.brand_name},
        )
        return analyze_basic(mention.context_snippet)

    async def _ask_judge(self, mention: BrandMention) -> JudgeAttempt:
        system_prompt, user_prompt = build_judge_prompt(mention)

        try:
            raw = await self.judge_client.generate_sentiment_json(system_prompt, user_prompt)
        except Exception as e:
            return JudgeAttempt(failure="provider_error", detail=f"{type(e).__name__}: {e}")

        if raw is None or not raw.strip():
            return JudgeAttempt(failure="empty_response", detail="judge returned no content")

        logger.debug("Judge response for %s: %s", mention.brand_name, raw[:200])
        return parse_judge_response(raw)
