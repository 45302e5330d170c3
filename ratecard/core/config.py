from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR,
    DB_FILENAME, EXCHANGE_RATE_PROVIDER, EXCHANGE_API_KEY, MAIL_BACKEND).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Rate Card Calculator"
    debug: bool = False
    log_level: Optional[str] = None  # overrides debug, e.g. "WARNING"
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "ratecard.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Exchange rates
    # Allowed: 'static' (built-in fallback table), 'external-http' (ExchangeRate-API v6)
    exchange_rate_provider: str = "static"
    exchange_api_base_url: str = "https://v6.exchangerate-api.com/v6"
    exchange_api_key: Optional[str] = None
    http_timeout_seconds: float = 5.0

    # Quote delivery
    # Allowed: 'log' (write the message to the log only), 'smtp'
    mail_backend: str = "log"
    mail_from: str = "noreply@ratecard.com"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path = Path(self.db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        allowed = {"static", "external-http"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )
        if self.mail_backend not in {"log", "smtp"}:
            raise ValueError(f"Unsupported mail_backend '{self.mail_backend}'")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
