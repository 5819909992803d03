"""Tests for DTOs and enums."""

import pytest

from mention_engine.analysis.types import (
    AnalysisDepth,
    AnalysisRequest,
    BrandMention,
    ContextType,
    MentionAnalysisResult,
    MentionType,
    PositionResult,
    SentimentLabel,
    SentimentResult,
)


class TestEnums:
    def test_values_are_wire_strings(self):
        assert MentionType.COMPETITOR_COMPARISON.value == "competitor_comparison"
        assert SentimentLabel.VERY_NEGATIVE.value == "very_negative"
        assert ContextType.QUESTION == "question"

    def test_depth_from_string(self):
        assert AnalysisDepth("comprehensive") is AnalysisDepth.COMPREHENSIVE


class TestAnalysisRequest:
    def test_defaults(self):
        request = AnalysisRequest(query="q", response="r", brand_name="Acme")
        assert request.analysis_depth == AnalysisDepth.BASIC
        assert request.competitors == []

    def test_depth_string_coerced(self):
        request = AnalysisRequest(brand_name="Acme", analysis_depth="detailed")
        assert request.analysis_depth is AnalysisDepth.DETAILED

    def test_unknown_depth_rejected(self):
        with pytest.raises(ValueError):
            AnalysisRequest(brand_name="Acme", analysis_depth="exhaustive")

    def test_none_competitors(self):
        assert AnalysisRequest(brand_name="Acme", competitors=None).competitors == []


class TestMentionAnalysisResult:
    def test_to_dict_shape(self):
        result = MentionAnalysisResult(
            mention=BrandMention(
                brand_name="Salesforce",
                mention_text="salesforce",
                mention_type=MentionType.INDIRECT,
                start_position=11,
                end_position=21,
                context_snippet="Tools like salesforce help.",
                context_window=150,
            ),
            sentiment=SentimentResult(score=0.4, confidence=0.6, label=SentimentLabel.POSITIVE),
            position=PositionResult(is_early_mention=True, ranking_position=2, relative_importance=0.123456),
            overall_score=61.23456,
            confidence_level=0.712345,
            recommendations=["Do something"],
        )
        data = result.to_dict()

        assert data["mention"]["mentionText"] == "salesforce"
        assert data["mention"]["mentionType"] == "indirect"
        assert data["mention"]["startPosition"] == 11
        assert data["sentiment"]["label"] == "positive"
        assert data["sentiment"]["emotionalTone"] == []
        assert data["context"]["contextType"] == "neutral"
        assert data["context"]["authorityLevel"] == "medium"
        assert data["position"]["rankingPosition"] == 2
        assert data["position"]["relativeImportance"] == 0.1235
        assert data["overallScore"] == 61.23
        assert data["confidenceLevel"] == 0.7123
        assert data["recommendations"] == ["Do something"]
