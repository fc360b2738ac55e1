"""Configuracion de la aplicacion usando Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuracion principal de TribeTask - Mock Backend."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Storage
    storage_url: str = "sqlite:///data/tribetask.db"
    storage_namespace: str = "tribetask_mock"
    seed_demo_data: bool = True

    # Simulacion de red
    simulated_latency_ms: int = 100

    # Dashboard
    daily_focus_goal: int = 180  # minutos
    dashboard_feed_limit: int = 10

    @property
    def uses_memory_storage(self) -> bool:
        """Indica si el almacenamiento es solo en memoria."""
        return self.storage_url.startswith("memory://")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuracion cacheada."""
    return Settings()
