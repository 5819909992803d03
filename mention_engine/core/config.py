from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # AI provider credentials; empty disables the AI sentiment path
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Sentiment judge
    judge_openai_model: str = "gpt-4-turbo-preview"
    judge_openai_url: str = "https://api.openai.com/v1/chat/completions"
    judge_anthropic_model: str = "claude-3-haiku-20240307"
    judge_anthropic_url: str = "https://api.anthropic.com/v1/messages"
    judge_anthropic_version: str = "2023-06-01"
    judge_temperature: float = 0.1
    judge_max_tokens: int = 500
    judge_timeout: float = 30.0  # seconds

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # set True in production for structured JSON logs

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key or self.anthropic_api_key)


settings = Settings()
