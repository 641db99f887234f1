# roximity/crud/base.py
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.core.exceptions import StoreError
from roximity.db.base_class import Base

logger = logging.getLogger("roximity.crud")

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


@asynccontextmanager
async def store_errors(db: AsyncSession, action: str) -> AsyncIterator[None]:
    """
    Converte falhas do SQLAlchemy em ``StoreError`` (503 na API).

    Faz rollback antes de propagar, para a sessão continuar utilizável.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("Database failure while trying to %s: %s", action, exc)
        await db.rollback()
        raise StoreError(f"Failed to {action}") from exc


def _as_dict(obj_in: Union[BaseModel, Dict[str, Any]], *, exclude_unset: bool) -> Dict[str, Any]:
    if isinstance(obj_in, dict):
        return obj_in
    if isinstance(obj_in, BaseModel):
        return obj_in.model_dump(exclude_unset=exclude_unset)
    raise TypeError("obj_in must be a dict or a Pydantic BaseModel instance")


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def label(self) -> str:
        return self.model.__tablename__

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        stmt = select(self.model).where(self.model.id == id)
        async with store_errors(db, f"load {self.label} {id}"):
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_in: Union[CreateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """
        Cria um objeto no banco.

        Aceita tanto um Pydantic (CreateSchemaType) quanto um dict pronto.
        """
        db_obj = self.model(**_as_dict(obj_in, exclude_unset=True))  # type: ignore[arg-type]
        async with store_errors(db, f"create {self.label}"):
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        for field, value in _as_dict(obj_in, exclude_unset=True).items():
            setattr(db_obj, field, value)

        async with store_errors(db, f"update {self.label}"):
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        return db_obj
