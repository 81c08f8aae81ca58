"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase (service key writes profiles, anon key drives auth calls)
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_ANON_KEY: str = ""

    # Google Sheets mirror
    GOOGLE_SERVICE_ACCOUNT_KEY: str = ""
    GOOGLE_SPREADSHEET_ID: str = ""
    GOOGLE_SHEET_NAME: str = "Registrazioni"
    SHEETS_TIMEOUT_SECONDS: float = 15.0

    # Scanner
    SCAN_SESSION_TTL_SECONDS: int = 600

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def auth_key(self) -> str:
        """Key used for end-user auth calls."""
        return self.SUPABASE_ANON_KEY or self.SUPABASE_KEY

    @property
    def sheets_configured(self) -> bool:
        return bool(self.GOOGLE_SERVICE_ACCOUNT_KEY and self.GOOGLE_SPREADSHEET_ID)


settings = Settings()  # type: ignore[call-arg]
