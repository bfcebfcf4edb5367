from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    ai_provider: str = "doubao"
    doubao_api_key: str | None = None
    deepseek_api_key: str | None = None
    qwen_api_key: str | None = None

    edition: str = "keyword"
    output_path: str = "data/news.json"
    feed_timeout: float = 30.0
    pipeline_timeout: float = 900.0
    display_timezone: str = "Asia/Shanghai"
    schedule_cron: str = "0 */6 * * *"
    log_level: str = "INFO"


settings = Settings()
