from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Application
    app_name: str = "Scan Tracker"
    app_version: str = "1.0.0"

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = 3030

    # Public prefix for short URLs, derived from host:port when unset
    base_url: Optional[str] = None

    # Directory holding check_device.html, user_form.html,
    # new_device_form.html and redirect.html
    templates_path: str = "./templates"

    # Identifier generation
    id_length: int = 10

    # Seconds to wait for a table lock before failing the request
    store_lock_timeout: float = 5.0

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @model_validator(mode="after")
    def _derive_base_url(self) -> "Settings":
        if not self.base_url:
            self.base_url = f"http://{self.server_host}:{self.server_port}"
        self.base_url = self.base_url.rstrip("/")
        return self


# Create settings instance
settings = Settings()
