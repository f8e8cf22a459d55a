"""Base repository: generic CRUD over one mapped model plus optimistic-lock aware flush."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, delete and a guarded flush.

    Reads use populate_existing so rows changed by conditional UPDATE
    statements are never served stale from the identity map.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Return all records, newest first."""
        model: Any = self.model
        return await self._scalars(
            select(self.model).order_by(model.created_at.desc(), model.id.desc())
        )

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server-side defaults."""
        self.db.add(obj)
        await self.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record. Raises ConflictException if a foreign key still references it."""
        await self.db.delete(obj)
        await self.flush()

    async def flush(self) -> None:
        """Flush pending changes, turning lost updates and constraint hits into ConflictException."""
        try:
            await self.db.flush()
        except StaleDataError as e:
            raise ConflictException(
                f"{self.model.__name__} was modified concurrently; reload and retry",
                resource_type=self.model.__tablename__,
            ) from e
        except IntegrityError as e:
            raise ConflictException(
                f"{self.model.__name__} violates a uniqueness or reference constraint",
                resource_type=self.model.__tablename__,
            ) from e

    async def _scalars(self, stmt: Select[Any]) -> list[ModelType]:
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())
