# roximity/db/session.py

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from roximity.core.config import settings
from roximity.db.base import Base


# ----------------------------------------------------------------------
# Engine assíncrono usando a URL de settings.database_url
# ----------------------------------------------------------------------
engine = create_async_engine(
    settings.database_url,
    echo=False,  # True para ver o SQL no log
)

# ----------------------------------------------------------------------
# Factory de sessão assíncrona
# ----------------------------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ----------------------------------------------------------------------
# Inicialização do banco (chamada no startup)
# ----------------------------------------------------------------------
async def init_db() -> None:
    """
    Cria as tabelas com base no Base.metadata.

    Em produção, o ideal é rodar as migrations do Alembic; isto aqui atende
    desenvolvimento local e testes.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
