"""
Kacchi Likhavat Backend — Shared Service Machinery
===================================================

What:  The ownership-scoped CRUD base class every content service extends,
       plus the DB-error translation context manager.
How:   Each concrete service declares its model, a resource name used in
       "not found" messages, and (optionally) the profile stat it keeps.
Who:   room/note/story/expense/memory services.

Ownership rule:
    Every lookup filters on BOTH id and user_id. A record owned by someone
    else is indistinguishable from a missing one (404), so ids of other
    users' data are never confirmed.

Transactions:
    Services only flush. The per-request session from get_db_session()
    commits once the handler returns, or rolls back on any exception.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.exceptions import DatabaseError, NotFoundError, ValidationError
from likhavat.models.mixins import utcnow
from likhavat.schemas.common import parse_datetime
from likhavat.services.stats import stats_service

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """
    Wrap unexpected SQLAlchemy failures in DatabaseError (→ 500).

    Constraint violations and bad values are left alone; main.py maps
    them to 400 because they are caused by the request payload.
    """
    try:
        yield
    except (IntegrityError, DataError):
        raise
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, e, exc_info=True)
        raise DatabaseError(
            message=f"Could not {operation}. Please try again.",
            context={"error_type": type(e).__name__},
        )


def changes_from(payload: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent, with nulls treated as "keep current"."""
    return payload.model_dump(exclude_unset=True, exclude_none=True)


class OwnedRecordService(Generic[ModelT]):
    model: Type[ModelT]
    resource: str = "record"
    stat_field: Optional[str] = None

    async def _get_owned(self, db: AsyncSession, user_id: uuid.UUID, record_id: uuid.UUID) -> ModelT:
        result = await db.execute(
            select(self.model).where(
                self.model.id == record_id,
                self.model.user_id == user_id,
            )
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        return record

    async def get(self, db: AsyncSession, user_id: uuid.UUID, record_id: uuid.UUID) -> ModelT:
        with translate_db_errors(f"retrieve the {self.resource}"):
            return await self._get_owned(db, user_id, record_id)

    async def _list(self, db: AsyncSession, query) -> List[ModelT]:
        with translate_db_errors(f"retrieve {self.resource} records"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def _insert(self, db: AsyncSession, record: ModelT) -> ModelT:
        with translate_db_errors(f"create the {self.resource}"):
            db.add(record)
            await db.flush()
            if self.stat_field:
                await stats_service.bump(db, record.user_id, self.stat_field, 1)
        logger.info("Created %s %s for user %s", self.resource, record.id, record.user_id)
        return record

    def apply_changes(self, record: ModelT, changes: Dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(record, name, value)
        # Set explicitly: collection-only edits (e.g. note tags) do not
        # mark the parent row dirty, so onupdate would not fire.
        record.updated_at = utcnow()

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        record_id: uuid.UUID,
        payload: BaseModel,
    ) -> ModelT:
        with translate_db_errors(f"update the {self.resource}"):
            record = await self._get_owned(db, user_id, record_id)
            self.apply_changes(record, changes_from(payload))
            await db.flush()
        return record

    async def _before_delete(self, db: AsyncSession, record: ModelT) -> None:
        """Hook for dependent-row cleanup (chapters of a story)."""

    async def delete(self, db: AsyncSession, user_id: uuid.UUID, record_id: uuid.UUID) -> ModelT:
        with translate_db_errors(f"delete the {self.resource}"):
            record = await self._get_owned(db, user_id, record_id)
            await self._before_delete(db, record)
            await db.delete(record)
            await db.flush()
            if self.stat_field:
                await stats_service.bump(db, user_id, self.stat_field, -1)
        logger.info("Deleted %s %s for user %s", self.resource, record_id, user_id)
        return record


def date_bounds(
    from_value: Optional[str],
    to_value: Optional[str],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Parse the `from`/`to` query parameters of the list endpoints.

    Both bounds are inclusive. A date-only `to` covers that whole day.

    Raises:
        ValidationError: a bound is not ISO 8601
    """
    bounds = []
    for name, value, end_of_day in (("from", from_value, False), ("to", to_value, True)):
        if not value:
            bounds.append(None)
            continue
        try:
            bounds.append(parse_datetime(value, end_of_day=end_of_day))
        except ValueError:
            raise ValidationError(
                message=f"Invalid '{name}' date. Use ISO 8601, e.g. 2024-01-31",
                field=name,
            )
    return bounds[0], bounds[1]
