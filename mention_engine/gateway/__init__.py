"""AI provider adapters used by the analysis engine.

Each adapter turns a system + user prompt into a single text completion
from one vendor:
  - OpenAI: chat completions with JSON response format
  - Anthropic: messages API
  - Disabled: stands in when no credentials are configured
"""
