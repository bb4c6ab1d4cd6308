from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 4096


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    anthropic_api_key: str = Field(default="", alias="ANTHROPIC_API_KEY")
    anthropic_base_url: str = Field(default="", alias="ANTHROPIC_BASE_URL")
    anthropic_model: str = Field(default=DEFAULT_MODEL, alias="ANTHROPIC_MODEL")
    anthropic_max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, alias="ANTHROPIC_MAX_TOKENS")
    llm_timeout_seconds: float = Field(default=600.0, alias="LLM_TIMEOUT_SECONDS")

    drafter_api_url: str = Field(default="http://127.0.0.1:8000", alias="DRAFTER_API_URL")
    generate_cooldown_seconds: float = Field(default=3.0, alias="GENERATE_COOLDOWN_SECONDS")
    export_flash_seconds: float = Field(default=2.0, alias="EXPORT_FLASH_SECONDS")
    download_dir: str = Field(default=".", alias="DOWNLOAD_DIR")

    def model_post_init(self, __context) -> None:  # type: ignore[override]
        self.anthropic_api_key = self.anthropic_api_key.strip()
        self.anthropic_base_url = self.anthropic_base_url.strip()
        self.anthropic_model = self.anthropic_model.strip() or DEFAULT_MODEL
        self.drafter_api_url = self.drafter_api_url.strip().rstrip("/")

    @property
    def api_key_configured(self) -> bool:
        return bool(self.anthropic_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
