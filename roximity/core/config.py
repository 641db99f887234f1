# roximity/core/config.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configurações globais da aplicação.

    Lê as mesmas variáveis do backend antigo (os DB_* do .env viraram
    roximity_db_*) e expõe:
    - settings.database_url
    - settings.ATTENDANCE_* usados pelo motor de presença
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Roximity Attendance"
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------------
    # Banco
    # ------------------------------------------------------------------
    roximity_db_host: str = "localhost"
    roximity_db_port: int = 5432
    roximity_db_user: str = "postgres"
    roximity_db_password: str = "password"
    roximity_db_name: str = "roximity_db"

    # Opcional: DATABASE_URL direto no .env
    DATABASE_URL: Optional[str] = Field(
        default=None,
        alias="DATABASE_URL",
    )

    # ------------------------------------------------------------------
    # Motor de presença
    # ------------------------------------------------------------------
    # Silêncio máximo entre duas detecções do mesmo dispositivo que ainda
    # conta como presença contínua.
    ATTENDANCE_GAP_THRESHOLD_SECONDS: int = Field(default=300, ge=0)
    # Recorta os intervalos em [start_time, end_time] antes de somar.
    ATTENDANCE_CLIP_TO_WINDOW: bool = True

    # RSSI gravado quando o observer não envia um
    DEFAULT_PRESENCE_RSSI: int = -50

    # ==================================================================
    # Propriedades derivadas
    # ==================================================================

    @property
    def database_url(self) -> str:
        """
        URL async do banco para o SQLAlchemy.

        Prioridade:
        1) DATABASE_URL, se estiver setada
        2) senão, monta a partir de roximity_db_* e garante +asyncpg
        """
        url = self.DATABASE_URL
        if not url:
            url = (
                f"postgresql+asyncpg://"
                f"{self.roximity_db_user}:{self.roximity_db_password}"
                f"@{self.roximity_db_host}:{self.roximity_db_port}/{self.roximity_db_name}"
            )

        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

        return url


settings = Settings()
