from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App Info
    app_name: str = "Açaí Control API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./acai_control.db"
    storage_backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Implementação do armazenamento: banco relacional ou memória"
    )
    seed_catalog: bool = Field(
        default=True,
        description="Popular produtos e vendedores padrão quando o catálogo estiver vazio"
    )

    # CORS
    allowed_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
