"""Configurações da aplicação"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import cached_property


class Settings(BaseSettings):
    """Configurações da aplicação"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow"
    )

    # App
    APP_NAME: str = "Simpleval API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development ou production

    # API
    API_PREFIX: str = ""
    CORS_ORIGINS: str = (
        "http://localhost:3000,http://localhost:5173,"
        "http://127.0.0.1:3000,http://127.0.0.1:5173"
    )

    @cached_property
    def is_production(self) -> bool:
        """Verifica se está em modo produção"""
        return self.ENVIRONMENT.lower() == "production"

    @cached_property
    def cors_origins_list(self) -> list[str]:
        """Retorna lista de origens CORS"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # Database
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "simpleval"

    @cached_property
    def database_url(self) -> str:
        """Retorna URL completa do banco de dados"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Redis Cache
    CACHE_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    CACHE_TTL: int = 3600

    # Regras de partida
    MATCH_ROSTER_SIZE: int = 5
    MATCH_ROSTER_RULE: str = "exact"  # exact ou at_least
    MATCH_MAX_MAPS_WON: int = 3

    # Geração de texto (bio de jogador)
    OPENAI_API_KEY: Optional[str] = None
    DEEPSEEK_API_KEY: Optional[str] = None
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com/v1"
    CHATBOT_MODEL: str = "deepseek-chat"
    CHATBOT_TEMPERATURE: float = 0.7

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"


settings = Settings()
