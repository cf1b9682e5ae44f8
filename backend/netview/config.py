from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "netview"
    app_env: str = "development"
    debug: bool = False

    # Key-value store (one logical database per plane)
    redis_host: str = "127.0.0.1"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_socket_timeout: float = 5.0
    appl_db: int = 0
    config_db: int = 4
    state_db: int = 6

    # Views
    interface_naming_mode: Literal["default", "alias"] = "default"
    fetch_concurrently: bool = False

    # CORS — comma-separated origins
    cors_allow_origins: str = "http://localhost:3000"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def docs_enabled(self) -> bool:
        """API docs are never served in production, even with debug on."""
        return self.debug and not self.is_production

    @property
    def db_numbers(self) -> dict[str, int]:
        return {
            "APPL_DB": self.appl_db,
            "CONFIG_DB": self.config_db,
            "STATE_DB": self.state_db,
        }


settings = Settings()
