"""Analysis Pipeline — orchestrator for the brand mention analysis engine.

Per request:
  1. Mention Detector finds every occurrence of the brand
  2. Per occurrence, concurrently:
       Sentiment Analyzer (AI judge, lexicon fallback)
       Context Analyzer
       Position Analyzer
  3. Score Aggregator + Recommendation Engine

Input:  AnalysisRequest
Output: list[MentionAnalysisResult], one per occurrence that analyzed cleanly
"""

from __future__ import annotations

import asyncio
import logging

from mention_engine.analysis.context_analyzer import analyze_context
from mention_engine.analysis.mention_detector import detect_mentions
from mention_engine.analysis.position_analyzer import analyze_position
from mention_engine.analysis.scoring import (
    calculate_confidence_level,
    calculate_overall_score,
    generate_recommendations,
)
from mention_engine.analysis.sentiment import SentimentAnalyzer
from mention_engine.analysis.types import (
    AnalysisRequest,
    BrandMention,
    MentionAnalysisResult,
)
from mention_engine.core.config import Settings, settings as default_settings
from mention_engine.gateway.judge_clients import BaseJudgeClient, build_judge_client

logger = logging.getLogger(__name__)


class MentionAnalysisError(Exception):
    """Raised when a request fails as a whole (never for a single mention)."""


class MentionAnalyzer:
    """Runs the mention analysis pipeline.

    Provider credentials are read once here. Without them the AI sentiment
    path is disabled for every request; construction never fails on it.
    """

    def __init__(
        self,
        config: Settings | None = None,
        judge_client: BaseJudgeClient | None = None,
    ):
        self.config = config or default_settings
        self.judge_client = judge_client or build_judge_client(self.config)
        self.sentiment_analyzer = SentimentAnalyzer(self.judge_client)

    async def analyze_mentions(self, request: AnalysisRequest) -> list[MentionAnalysisResult]:
        """Analyze every occurrence of ``request.brand_name`` in ``request.response``.

        Returns:
            One result per occurrence, in text order. Occurrences whose
            analysis raised are logged and left out.

        Raises:
            MentionAnalysisError: the request failed before any mention
                could be analyzed (e.g. an empty brand name).
        """
        log_extra = {"brand": request.brand_name}
        try:
            logger.info("Analyzing mentions for brand: %s", request.brand_name, extra=log_extra)

            mentions = detect_mentions(request.response, request.brand_name)
            if not mentions:
                logger.info("No mentions found for brand: %s", request.brand_name, extra=log_extra)
                return []

            outcomes = await asyncio.gather(
                *(self._analyze_single_mention(m, request, len(mentions)) for m in mentions),
                return_exceptions=True,
            )

            results: list[MentionAnalysisResult] = []
            for mention, outcome in zip(mentions, outcomes):
                if isinstance(outcome, MentionAnalysisResult):
                    results.append(outcome)
                elif isinstance(outcome, Exception):
                    logger.warning(
                        "Failed to analyze mention: %s at offset %d: %s",
                        mention.mention_text,
                        mention.start_position,
                        outcome,
                        exc_info=outcome,
                        extra=log_extra,
                    )
                else:
                    # CancelledError and friends are not per-mention failures
                    raise outcome

        except Exception as e:
            logger.error(
                "Mention analysis failed for brand=%s: %s",
                request.brand_name,
                e,
                exc_info=True,
                extra=log_extra,
            )
            raise MentionAnalysisError(f"Failed to analyze mentions: {e}") from e

        logger.info(
            "Analyzed %d of %d mention(s) for brand=%s (platform=%s, depth=%s)",
            len(results),
            len(mentions),
            request.brand_name,
            request.llm_platform or "unknown",
            request.analysis_depth.value,
            extra=log_extra,
        )
        return results

    async def _analyze_single_mention(
        self,
        mention: BrandMention,
        request: AnalysisRequest,
        occurrences: int,
    ) -> MentionAnalysisResult:
        """Full analysis of one occurrence. Only the sentiment step may suspend."""
        sentiment = await self.sentiment_analyzer.analyze(mention, request.analysis_depth)
        context = analyze_context(mention, request)
        position = analyze_position(mention, request.response, occurrences)

        overall_score = calculate_overall_score(sentiment, context, position)
        confidence_level = calculate_confidence_level(sentiment, context, position)
        recommendations = generate_recommendations(mention, sentiment, context, position, overall_score)

        logger.debug(
            "Scoring: brand=%s, offset=%d, sentiment=%.2f (%s), relevance=%d, importance=%.2f → overall=%.2f, confidence=%.2f",
            mention.brand_name,
            mention.start_position,
            sentiment.score,
            sentiment.method,
            context.relevance_score,
            position.relative_importance,
            overall_score,
            confidence_level,
        )

        return MentionAnalysisResult(
            mention=mention,
            sentiment=sentiment,
            context=context,
            position=position,
            overall_score=overall_score,
            confidence_level=confidence_level,
            recommendations=recommendations,
        )
