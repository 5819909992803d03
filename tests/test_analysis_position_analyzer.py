"""Tests for the Position Analyzer."""

import pytest

from mention_engine.analysis.mention_detector import detect_mentions
from mention_engine.analysis.position_analyzer import (
    analyze_position,
    calculate_ranking_position,
    calculate_relative_importance,
    extract_company_names,
    position_weight_ranked,
)


class TestPositionWeightRanked:
    @pytest.mark.parametrize(
        "rank,expected",
        [(1, 1.0), (2, 0.9), (5, 0.6), (9, 0.2), (10, 0.1), (25, 0.1), (0, 0.0)],
    )
    def test_decay(self, rank, expected):
        assert position_weight_ranked(rank) == expected


class TestExtractCompanyNames:
    def test_distinct_names_in_order(self):
        names = extract_company_names("Apple and Google compete. Apple wins.")
        assert [n for n, _ in names] == ["apple", "google"]

    def test_suffix_stripped(self):
        names = extract_company_names("HubSpot Corp and Zoho Ltd. both ship software")
        assert [n for n, _ in names] == ["hubspot", "zoho"]

    def test_sentence_starters_skipped(self):
        assert extract_company_names("The best option is good. However it is slow.") == []

    def test_end_bound(self):
        text = "Apple and Google"
        assert [n for n, _ in extract_company_names(text, end=5)] == ["apple"]


class TestRankingPosition:
    def test_first_named_is_rank_one(self):
        mention = detect_mentions("Salesforce leads the market.", "Salesforce")[0]
        assert calculate_ranking_position(mention, "Salesforce leads the market.") == 1

    def test_counts_companies_before_mention(self):
        text = "HubSpot Corp and Pipedrive trail Salesforce Inc."
        mention = detect_mentions(text, "Salesforce")[0]
        assert calculate_ranking_position(mention, text) == 3

    def test_brand_itself_not_counted(self):
        text = "Salesforce is great. HubSpot too. Salesforce again."
        second = detect_mentions(text, "Salesforce")[1]
        assert calculate_ranking_position(second, text) == 2

    def test_repeated_competitor_counted_once(self):
        text = "HubSpot, HubSpot and Salesforce"
        mention = detect_mentions(text, "Salesforce")[0]
        assert calculate_ranking_position(mention, text) == 2


class TestRelativeImportance:
    def test_maximum(self):
        assert calculate_relative_importance(1, True, True) == 1.0

    def test_late_unfocused(self):
        assert calculate_relative_importance(10, False, False) == 0.06

    def test_boosts_increase_importance(self):
        base = calculate_relative_importance(3, False, False)
        assert calculate_relative_importance(3, True, False) > base
        assert calculate_relative_importance(3, False, True) > base

    def test_better_rank_is_more_important(self):
        assert calculate_relative_importance(1, False, False) > calculate_relative_importance(4, False, False)


class TestAnalyzePosition:
    def test_early_mention(self):
        text = "Salesforce is the leading CRM platform for enterprise customers."
        mention = detect_mentions(text, "Salesforce")[0]
        result = analyze_position(mention, text, occurrences=1)
        assert result.is_early_mention is True
        assert result.is_main_focus is False
        assert result.ranking_position == 1
        assert 0.0 <= result.relative_importance <= 1.0

    def test_late_mention(self):
        text = "x" * 100 + " Salesforce"
        mention = detect_mentions(text, "Salesforce")[0]
        result = analyze_position(mention, text, occurrences=1)
        assert result.is_early_mention is False

    def test_main_focus_when_repeated(self):
        text = "Salesforce is great. Salesforce is fast."
        mentions = detect_mentions(text, "Salesforce")
        result = analyze_position(mentions[0], text, occurrences=len(mentions))
        assert result.is_main_focus is True

    def test_ranked_third_importance(self):
        text = "HubSpot Corp and Pipedrive trail Salesforce Inc."
        mention = detect_mentions(text, "Salesforce")[0]
        result = analyze_position(mention, text, occurrences=1)
        assert result.ranking_position == 3
        assert result.is_early_mention is False
        assert result.relative_importance == 0.48
