"""Brand Mention Analysis Engine.

Multi-stage pipeline for analyzing how an LLM response mentions a brand:
  1. Mention Detector
  2. Sentiment Analyzer (AI judge, keyword fallback)
  3. Context Analyzer
  4. Position Analyzer
  5. Score Aggregator
  6. Recommendation Engine

Input:  AnalysisRequest (query, response, brand, competitors)
Output: list[MentionAnalysisResult], one per brand occurrence
"""
