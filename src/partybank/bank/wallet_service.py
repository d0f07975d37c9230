"""Guest wallets: registration, balance reads and coin changes.

Every balance change in the service goes through ``apply_coin_change``.
Deductions are settled against the floor by ``BalanceGuard`` after the
change is committed, so the guard is the single gate for revives.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.balance_guard import BalanceGuard, normalize_balance
from partybank.bank.gateway import SqlGateway
from partybank.config import get_settings
from partybank.db.models import Transaction, User
from partybank.errors import UserNotFoundError

logger = structlog.get_logger()

TRANSACTION_TYPES = {
    "registration",
    "revive",
    "risk_entry",
    "risk_win",
    "risk_loss",
    "hidden_qr",
    "chain_complete",
    "mission_reward",
    "adjustment",
}


@dataclass(frozen=True)
class CoinChangeResult:
    balance: int
    applied: int
    revived: bool = False
    game_over: bool = False


async def create_guest(
    db: AsyncSession,
    name: str,
    trait_id: str | None = None,
    starting_balance: int | None = None,
) -> User:
    """Register a guest with the starting balance and a registration ledger entry."""
    if starting_balance is None:
        starting_balance = get_settings().starting_balance
    now = datetime.now(timezone.utc)

    user = User(
        name=name,
        balance=starting_balance,
        has_revived=False,
        trait_id=trait_id,
        created_at=now,
    )
    db.add(user)
    await db.flush()

    db.add(Transaction(
        to_user_id=user.id,
        amount=starting_balance,
        type="registration",
        description="Welcome to the party!",
        created_at=now,
    ))
    await db.flush()
    logger.info("guest_created", user_id=user.id, name=name, balance=starting_balance)
    return user


async def get_user(db: AsyncSession, user_id: str, *, for_update: bool = False) -> User:
    """Load a guest with fresh column values.

    Raises:
        UserNotFoundError: no guest with this id.
    """
    stmt = select(User).where(User.id == user_id).execution_options(populate_existing=True)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(f"Guest {user_id} not found")
    return user


async def get_transactions(
    db: AsyncSession,
    user_id: str,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Transaction], int]:
    """Ledger entries for a guest, newest first."""
    offset = (page - 1) * per_page

    total_result = await db.execute(
        select(func.count()).select_from(Transaction).where(Transaction.to_user_id == user_id)
    )
    total = total_result.scalar_one()

    result = await db.execute(
        select(Transaction)
        .where(Transaction.to_user_id == user_id)
        .order_by(Transaction.created_at.desc())
        .offset(offset)
        .limit(per_page)
    )
    return list(result.scalars().all()), total


async def apply_coin_change(
    db: AsyncSession,
    redis: object | None,
    user_id: str,
    amount: int,
    type_: str,
    description: str,
    revive_amount: int | None = None,
) -> CoinChangeResult:
    """Add ``amount`` (negative to deduct) to a guest's balance.

    The stored balance never goes below zero; the ledger records the change
    actually applied. A deduction then settles the raw balance against the
    floor, which may grant the one-time revive or end the game.
    """
    if type_ not in TRANSACTION_TYPES:
        raise ValueError(f"Invalid transaction type: {type_}")
    if revive_amount is None:
        revive_amount = get_settings().revive_amount

    user = await get_user(db, user_id, for_update=True)
    previous = user.balance
    raw_balance = previous + amount
    user.balance = normalize_balance(raw_balance)
    applied = user.balance - previous

    if applied != 0:
        db.add(Transaction(
            to_user_id=user_id,
            amount=applied,
            type=type_,
            description=description,
            created_at=datetime.now(timezone.utc),
        ))
    await db.commit()

    if amount >= 0:
        return CoinChangeResult(balance=user.balance, applied=applied)

    guard = BalanceGuard(SqlGateway(db, redis), revive_amount=revive_amount)
    floor = await guard.settle_floor(user_id, raw_balance)
    return CoinChangeResult(
        balance=floor.new_balance,
        applied=applied,
        revived=floor.revived,
        game_over=floor.game_over,
    )
