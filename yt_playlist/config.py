from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Environment
    environment: str = "local"  # local, production

    # Application
    app_name: str = "YouTube Playlist Handler"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Files
    config_path: str = "yph_config.json"
    token_path: str = "yph_token.json"
    log_path: str = "log/yph.log"
    log_rotations: int = 14

    # YouTube API
    youtube_scopes: list[str] = ["https://www.googleapis.com/auth/youtube"]
    youtube_auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    youtube_token_uri: str = "https://oauth2.googleapis.com/token"
    playlist_page_size: int = 25

    # Cookie carrying the OAuth state nonce between the redirect and the callback
    state_cookie_name: str = "yph_state"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


settings = Settings()
