"""Mention Detector — Pipeline Step 1.

Finds every occurrence of the brand name in the response:
  - Case-insensitive, non-overlapping substring scan
  - Verbatim match text with source casing
  - Context snippet of 150 characters on each side
  - Mention type from the text just around the match
"""

from __future__ import annotations

import logging
import re

from mention_engine.analysis.types import BrandMention, MentionType

logger = logging.getLogger(__name__)

# Characters kept on each side of the match in context_snippet
CONTEXT_WINDOW = 150

# Characters inspected on each side when classifying the mention type
_TYPE_WINDOW = 50

# ---------------------------------------------------------------------------
# Mention-type marker patterns
# ---------------------------------------------------------------------------
COMPARISON_PATTERN = re.compile(
    r"\b(?:vs\.?|versus|compar(?:e|ed|es|ing))\b",
    re.IGNORECASE,
)

_INDIRECT_PATTERN = re.compile(
    r"\b(?:tools\s+like|like|such\s+as|including|similar\s+to)\b",
    re.IGNORECASE,
)


def _extract_context(text: str, start: int, end: int, window: int = CONTEXT_WINDOW) -> str:
    """Cut a snippet around [start, end), clipped to the string bounds."""
    return text[max(0, start - window) : min(len(text), end + window)]


def classify_mention_type(text: str, start: int, end: int) -> MentionType:
    """Classify one occurrence from the text immediately around it.

    Comparison markers on either side win over indirect markers, which
    only count when they precede the brand ("tools like X").
    """
    before = text[max(0, start - _TYPE_WINDOW) : start]
    after = text[end : end + _TYPE_WINDOW]

    if COMPARISON_PATTERN.search(before) or COMPARISON_PATTERN.search(after):
        return MentionType.COMPETITOR_COMPARISON

    if _INDIRECT_PATTERN.search(before):
        return MentionType.INDIRECT

    return MentionType.DIRECT


def detect_mentions(response: str, brand_name: str) -> list[BrandMention]:
    """Return every occurrence of ``brand_name`` in ``response``, in text order.

    Raises:
        ValueError: brand_name is empty or whitespace.
    """
    if not brand_name or not brand_name.strip():
        raise ValueError("brand_name must be a non-empty string")

    pattern = re.compile(re.escape(brand_name), re.IGNORECASE)

    mentions: list[BrandMention] = []
    for match in pattern.finditer(response or ""):
        start, end = match.start(), match.end()
        mentions.append(
            BrandMention(
                brand_name=brand_name,
                mention_text=match.group(0),
                mention_type=classify_mention_type(response, start, end),
                start_position=start,
                end_position=end,
                context_snippet=_extract_context(response, start, end),
                context_window=CONTEXT_WINDOW,
            )
        )

    logger.debug("Detected %d mention(s) of %s", len(mentions), brand_name)
    return mentions
