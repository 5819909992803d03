from unittest.mock import AsyncMock

import pytest

from mention_engine.core.config import Settings, settings

# Tests never talk to real providers, whatever the local .env holds
settings.openai_api_key = ""
settings.anthropic_api_key = ""

from mention_engine.analysis.pipeline import MentionAnalyzer  # noqa: E402
from mention_engine.gateway.judge_clients import BaseJudgeClient  # noqa: E402


class FakeJudgeClient(BaseJudgeClient):
    """Judge client whose answer is scripted by the test."""

    vendor = "fake"

    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.generate = AsyncMock(side_effect=error, return_value=reply)

    async def generate_sentiment_json(self, system_prompt: str, user_prompt: str) -> str | None:
        return await self.generate(system_prompt, user_prompt)


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(openai_api_key="", anthropic_api_key="")


@pytest.fixture
def analyzer(offline_settings) -> MentionAnalyzer:
    return MentionAnalyzer(config=offline_settings)


@pytest.fixture
def make_judge():
    """Factory for scripted judge clients: make_judge(reply=...) or make_judge(error=...)."""
    return FakeJudgeClient


@pytest.fixture
def samples() -> dict[str, str]:
    return {
        "positive": (
            "Salesforce is an excellent CRM platform that offers outstanding features for sales teams. "
            "It provides comprehensive tools for customer relationship management and has great "
            "integration capabilities."
        ),
        "negative": (
            "HubSpot is a terrible platform with poor customer service and limited functionality. "
            "The interface is confusing and the pricing is awful."
        ),
        "comparison": (
            "When comparing Slack vs Microsoft Teams, both have their advantages. "
            "Slack offers better third-party integrations, while Teams provides better Office integration."
        ),
        "no_mention": (
            "There are many great CRM solutions available in the market today. "
            "Companies should evaluate their specific needs before choosing a platform."
        ),
        "multiple": (
            "Salesforce and HubSpot are leading CRM platforms. Salesforce is more enterprise-focused "
            "while HubSpot caters to smaller businesses. Both offer excellent features."
        ),
    }
