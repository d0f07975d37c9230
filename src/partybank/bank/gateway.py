"""Persistence gateway consumed by the balance guard.

The guard only needs four operations: read the revive flag, grant the revive
with a conditional update, and append the two side records. ``SqlGateway``
implements them on an AsyncSession; each write is its own unit of work so a
committed grant survives a failed side-record append.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.db.models import Transaction, User
from partybank.social.notification_push import push_notification_to_user
from partybank.social.notification_service import create_notification

# Driver-level failures that can escape SQLAlchemy's wrapping (timeouts, resets)
_TRANSPORT_ERRORS = (SQLAlchemyError, OSError, TimeoutError)


class GatewayError(Exception):
    """Base class for persistence gateway failures."""


class GatewayNotFoundError(GatewayError):
    """The user record does not exist."""


class GatewayTransportError(GatewayError):
    """The store could not be reached or the statement failed."""


class GrantOutcome(enum.Enum):
    GRANTED = "granted"
    ALREADY_REVIVED = "already_revived"


class PersistenceGateway(ABC):
    """Read/write contract for balance floor settlement."""

    @abstractmethod
    async def get_user_revived_flag(self, user_id: str) -> bool:
        """Return the user's has_revived flag.

        Raises:
            GatewayNotFoundError: no such user.
            GatewayTransportError: the store is unreachable.
        """

    @abstractmethod
    async def conditional_grant_revive(self, user_id: str, amount: int) -> GrantOutcome:
        """Set balance=amount and has_revived=true only if has_revived is still false."""

    @abstractmethod
    async def append_transaction(self, to_user_id: str, amount: int, type_: str, description: str) -> None:
        """Append a ledger entry."""

    @abstractmethod
    async def append_notification(
        self,
        user_id: str,
        type_: str,
        title: str,
        message: str,
        data: dict[str, Any],
    ) -> None:
        """Append a user notification."""


class SqlGateway(PersistenceGateway):
    """SQLAlchemy implementation. Commits after every successful write."""

    def __init__(self, db: AsyncSession, redis: object | None = None) -> None:
        self.db = db
        self.redis = redis

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        try:
            yield
            await self.db.commit()
        except _TRANSPORT_ERRORS as exc:
            await self.db.rollback()
            raise GatewayTransportError(str(exc)) from exc

    async def get_user_revived_flag(self, user_id: str) -> bool:
        try:
            result = await self.db.execute(select(User.has_revived).where(User.id == user_id))
        except _TRANSPORT_ERRORS as exc:
            await self.db.rollback()
            raise GatewayTransportError(str(exc)) from exc

        flag = result.scalar_one_or_none()
        if flag is None:
            raise GatewayNotFoundError(user_id)
        return bool(flag)

    async def conditional_grant_revive(self, user_id: str, amount: int) -> GrantOutcome:
        async with self._unit_of_work():
            result = await self.db.execute(
                update(User)
                .where(User.id == user_id, User.has_revived.is_(False))
                .values(balance=amount, has_revived=True)
                .execution_options(synchronize_session=False)
            )
        # Zero rows: the flag was already true (or another request won the race)
        if result.rowcount == 0:
            return GrantOutcome.ALREADY_REVIVED
        return GrantOutcome.GRANTED

    async def append_transaction(self, to_user_id: str, amount: int, type_: str, description: str) -> None:
        async with self._unit_of_work():
            self.db.add(Transaction(
                to_user_id=to_user_id,
                amount=amount,
                type=type_,
                description=description,
                created_at=datetime.now(timezone.utc),
            ))
            await self.db.flush()

    async def append_notification(
        self,
        user_id: str,
        type_: str,
        title: str,
        message: str,
        data: dict[str, Any],
    ) -> None:
        async with self._unit_of_work():
            notification = await create_notification(self.db, user_id, type_, title, message, data=data)
        # Push only once the row is committed
        await push_notification_to_user(self.redis, notification)
