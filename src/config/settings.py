from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # News providers
    gnews_api_key: str = ""
    guardian_api_key: str = ""

    # Summarization (hosted chat model)
    hf_api_token: str = ""
    summary_model: str = "meta-llama/Llama-4-Scout-17B-16E-Instruct"

    # Other upstreams
    openweather_api_key: str = ""

    # Identity
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    database_url: str = "sqlite+aiosqlite:///./newszoid.db"

    cache_ttl_seconds: int = 300
    request_timeout_seconds: float = 8.0
    max_retries: int = 2
    default_location: str = "Delhi"

    log_level: str = "INFO"
    app_host: str = "0.0.0.0"
    app_port: int = 8000


def is_configured(value: str | None) -> bool:
    """A credential counts only when present and not a `your_..._here` placeholder."""
    if not value or not value.strip():
        return False
    value = value.strip().lower()
    return not (value.startswith("your_") and value.endswith("_here"))


settings = Settings()
