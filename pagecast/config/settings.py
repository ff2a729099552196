from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key, used to verify session tokens
    supabase_service_role_key: Optional[str] = None  # Required for user management (create/delete accounts, roles)

    # Read-only URLs handed to the frontend via /api/env
    books_webhook_url: Optional[str] = None
    stats_webhook_url: Optional[str] = None

    # App
    app_name: str = "pagecast-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:7893"
    auth_cache_ttl_seconds: int = 60

    # Rate limiting (slowapi / limits format)
    rate_limit_enabled: bool = True
    rate_limit: str = "100 per 15 minutes"
    admin_rate_limit: str = "5 per 15 minutes"
    settings_rate_limit: str = "20 per 5 minutes"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def identity_configured(self) -> bool:
        return bool(self.supabase_url and (self.supabase_key or self.supabase_service_role_key))

    @property
    def gateway_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def missing_configuration(self) -> List[str]:
        """Names of env vars whose absence degrades part of the API."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key and not self.supabase_service_role_key:
            missing.append("SUPABASE_KEY")
        if not self.supabase_service_role_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        return missing

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
