"""Position Analyzer — Pipeline Step 4.

Judges how prominently a mention is placed in the response:
  - Early mention: starts within the first half of the text
  - Main focus: the brand occurs more than once in the response
  - Ranking: ordinal among company-like names seen up to the mention
  - Relative importance: rank decay plus early / main-focus boosts

Rank decay follows the list-position weighting:
  Rank 1 → 1.0, Rank 2 → 0.9, ..., Rank 10+ → 0.1
"""

from __future__ import annotations

import logging
import re

from mention_engine.analysis.types import BrandMention, PositionResult

logger = logging.getLogger(__name__)

# Relative offset below which a mention counts as early
EARLY_MENTION_THRESHOLD = 0.5

# Importance weights (sum to 1.0)
_RANK_WEIGHT = 0.6
_EARLY_BOOST = 0.25
_MAIN_FOCUS_BOOST = 0.15

# ---------------------------------------------------------------------------
# Company-name heuristic
# ---------------------------------------------------------------------------

# Capitalized word sequences, optionally closed by a corporate suffix
_COMPANY_PATTERN = re.compile(
    r"\b[A-Z][A-Za-z0-9&'\-]*(?:\s+[A-Z][A-Za-z0-9&'\-]*)*(?:,?\s+(?:Inc|Corp|Corporation|LLC|Ltd|Co)\b\.?)?"
)

_SUFFIX_PATTERN = re.compile(r",?\s+(?:Inc|Corp|Corporation|LLC|Ltd|Co)\b\.?$")

# Capitalized words that start sentences rather than name companies
_COMMON_CAPITALIZED = {
    "a",
    "after",
    "also",
    "an",
    "and",
    "as",
    "at",
    "before",
    "both",
    "but",
    "compared",
    "comparing",
    "finally",
    "first",
    "for",
    "however",
    "i",
    "if",
    "in",
    "it",
    "its",
    "looking",
    "many",
    "maybe",
    "most",
    "my",
    "no",
    "on",
    "or",
    "other",
    "others",
    "our",
    "overall",
    "second",
    "some",
    "that",
    "the",
    "there",
    "these",
    "they",
    "this",
    "those",
    "to",
    "tools",
    "we",
    "when",
    "while",
    "with",
    "yes",
    "you",
    "your",
}


def position_weight_ranked(rank: int) -> float:
    """Decay weight for a 1-based rank.

    Rank 1 → 1.0, Rank 2 → 0.9, ..., Rank 10+ → 0.1
    """
    if rank <= 0:
        return 0.0
    if rank >= 10:
        return 0.1
    return round(1.0 - (rank - 1) * 0.1, 1)


def _normalize_company(candidate: str) -> str:
    """Drop corporate suffix and leading sentence-starter words."""
    name = _SUFFIX_PATTERN.sub("", candidate.strip())
    words = name.split()
    while words and words[0].lower() in _COMMON_CAPITALIZED:
        words.pop(0)
    return " ".join(words).lower()


def extract_company_names(text: str, end: int | None = None) -> list[tuple[str, int]]:
    """Distinct company-like names with the offset of their first appearance.

    Only names starting before ``end`` are returned when it is given.
    """
    seen: dict[str, int] = {}
    for match in _COMPANY_PATTERN.finditer(text):
        if end is not None and match.start() >= end:
            break
        name = _normalize_company(match.group(0))
        if name and name not in seen:
            seen[name] = match.start()
    return list(seen.items())


def calculate_ranking_position(mention: BrandMention, response: str) -> int:
    """1 + number of other company-like names first seen before the mention."""
    brand = mention.brand_name.lower()
    earlier = [
        name
        for name, offset in extract_company_names(response, end=mention.start_position)
        if brand not in name and name not in brand
    ]
    return len(earlier) + 1


def calculate_relative_importance(rank: int, is_early: bool, is_main_focus: bool) -> float:
    importance = (
        _RANK_WEIGHT * position_weight_ranked(rank)
        + (_EARLY_BOOST if is_early else 0.0)
        + (_MAIN_FOCUS_BOOST if is_main_focus else 0.0)
    )
    return round(max(0.0, min(1.0, importance)), 4)


def analyze_position(mention: BrandMention, response: str, occurrences: int) -> PositionResult:
    """Judge prominence of one mention.

    Args:
        mention: The occurrence being analyzed.
        response: Full response text.
        occurrences: Total occurrences of the brand in the response.
    """
    total_length = len(response)
    ratio = mention.start_position / total_length if total_length else 0.0

    is_early = ratio < EARLY_MENTION_THRESHOLD
    is_main_focus = occurrences > 1
    rank = calculate_ranking_position(mention, response)

    return PositionResult(
        is_early_mention=is_early,
        is_main_focus=is_main_focus,
        ranking_position=rank,
        relative_importance=calculate_relative_importance(rank, is_early, is_main_focus),
    )
