from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for daily recipe upserts and storage uploads

    # Cron
    cron_secret_key: Optional[str] = None

    # Spoonacular
    spoonacular_api_key: Optional[str] = None
    spoonacular_base_url: str = "https://api.spoonacular.com"
    spoonacular_timeout_seconds: float = 10.0

    # OpenRouter
    openrouter_api_key: Optional[str] = None
    openrouter_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_model: str = "deepseek/deepseek-r1:free"
    openrouter_suggestion_model: str = "mistralai/mistral-7b-instruct:free"
    ai_request_timeout_seconds: float = 15.0

    # Daily recipe scheduler
    daily_recipe_scheduler_enabled: bool = False
    daily_recipe_interval_seconds: int = 86400

    # Uploads
    max_upload_bytes: int = 5 * 1024 * 1024

    # App
    app_name: str = "savorycircle-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    site_url: str = "http://localhost:3000"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
