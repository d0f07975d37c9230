"""QR scan handling for hidden codes and scavenger chains.

Hidden codes: one claim per guest, at most ``max_scans`` guests per code.
Chains: steps must be scanned in order; the last step pays the chain reward.
All coin effects go through the wallet. A hidden-code claim row is only
flushed before its coin change, so the claim and the payout commit together;
a failed payout leaves the code unclaimed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import apply_coin_change, get_user
from partybank.db.models import ChainProgress, HiddenQRScan
from partybank.errors import (
    AlreadyClaimedError,
    ChainCompletedError,
    CodeExhaustedError,
    OutOfOrderScanError,
    UnknownCodeError,
)
from partybank.games.chains import CHAINS, get_step_by_qr_id, is_chain_qr
from partybank.games.hidden_qr import get_hidden_qr_by_id, is_hidden_qr
from partybank.social.notification_service import create_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    qr_id: str
    kind: str  # hidden | chain
    message: str
    coins: int = 0
    reward_type: str | None = None
    card_id: str | None = None
    chain_id: str | None = None
    step: int | None = None
    chain_completed: bool = False
    next_hint: str | None = None
    balance: int | None = None
    revived: bool = False
    game_over: bool = False


async def process_scan(db: AsyncSession, redis: object | None, user_id: str, qr_id: str) -> ScanResult:
    """Dispatch a scanned code to the hidden-code or chain handler."""
    if is_hidden_qr(qr_id):
        return await claim_hidden_qr(db, redis, user_id, qr_id)
    if is_chain_qr(qr_id):
        return await record_chain_scan(db, redis, user_id, qr_id)
    raise UnknownCodeError(f"Unknown code: {qr_id}")


# ---------------------------------------------------------------------------
# Hidden codes
# ---------------------------------------------------------------------------


async def claim_hidden_qr(db: AsyncSession, redis: object | None, user_id: str, qr_id: str) -> ScanResult:
    """Claim a hidden code for a guest and apply its reward."""
    code = get_hidden_qr_by_id(qr_id)
    if code is None:
        raise UnknownCodeError(f"Unknown code: {qr_id}")
    user = await get_user(db, user_id)

    existing = await db.execute(
        select(HiddenQRScan.id).where(HiddenQRScan.qr_id == qr_id, HiddenQRScan.user_id == user_id)
    )
    if existing.scalar_one_or_none() is not None:
        raise AlreadyClaimedError("You already found this one!")

    count_result = await db.execute(
        select(func.count()).select_from(HiddenQRScan).where(HiddenQRScan.qr_id == qr_id)
    )
    if count_result.scalar_one() >= code.max_scans:
        raise CodeExhaustedError("Someone beat you to it, this code has been fully claimed")

    db.add(HiddenQRScan(
        qr_id=qr_id,
        user_id=user_id,
        reward_type=code.reward_type,
        reward_amount=code.reward_amount,
        reward_card_id=code.reward_card_id,
        created_at=datetime.now(timezone.utc),
    ))
    try:
        await db.flush()
    except IntegrityError as exc:
        # Concurrent claim by the same guest
        await db.rollback()
        raise AlreadyClaimedError("You already found this one!") from exc

    coins = (code.reward_amount or 0) if code.reward_type in ("coins", "trap") else 0
    balance = user.balance
    revived = game_over = False
    if coins:
        change = await apply_coin_change(db, redis, user_id, coins, "hidden_qr", f"Hidden QR: {code.name}")
        balance, revived, game_over = change.balance, change.revived, change.game_over

    await create_notification(
        db,
        user_id,
        "hidden_qr",
        f"{code.emoji} {code.name}",
        code.message,
        data={"qr_id": qr_id, "reward_type": code.reward_type, "coins": coins, "card_id": code.reward_card_id},
        redis=redis,
    )
    await db.commit()
    logger.info("Hidden QR %s claimed by %s (%s)", qr_id, user_id, code.reward_type)

    return ScanResult(
        qr_id=qr_id,
        kind="hidden",
        message=code.message,
        coins=coins,
        reward_type=code.reward_type,
        card_id=code.reward_card_id,
        balance=balance,
        revived=revived,
        game_over=game_over,
    )


# ---------------------------------------------------------------------------
# Scavenger chains
# ---------------------------------------------------------------------------


async def record_chain_scan(db: AsyncSession, redis: object | None, user_id: str, qr_id: str) -> ScanResult:
    """Advance a guest along a chain; pay the reward on the final step."""
    found = get_step_by_qr_id(qr_id)
    if found is None:
        raise UnknownCodeError(f"Unknown code: {qr_id}")
    chain, step = found
    user = await get_user(db, user_id)

    result = await db.execute(
        select(ChainProgress)
        .where(ChainProgress.user_id == user_id, ChainProgress.chain_id == chain.id)
        .with_for_update()
    )
    progress = result.scalar_one_or_none()
    expected = progress.current_step if progress else 1

    if progress is not None and progress.completed:
        raise ChainCompletedError(f"You already completed {chain.name}")
    if step.step != expected:
        raise OutOfOrderScanError(f"Find step {expected} of {chain.name} first")

    if progress is None:
        progress = ChainProgress(
            user_id=user_id,
            chain_id=chain.id,
            current_step=1,
            completed=False,
            created_at=datetime.now(timezone.utc),
        )
        db.add(progress)

    completed = step.step == chain.last_step
    if completed:
        progress.completed = True
    else:
        progress.current_step = step.step + 1
    try:
        await db.commit()
    except IntegrityError as exc:
        # A concurrent first scan of this chain created the row
        await db.rollback()
        raise OutOfOrderScanError(f"Step {step.step} of {chain.name} is already recorded") from exc

    if not completed:
        next_step = chain.steps[step.step]
        return ScanResult(
            qr_id=qr_id,
            kind="chain",
            message=f"Step {step.step} of {chain.name} found!",
            chain_id=chain.id,
            step=step.step,
            next_hint=next_step.hint,
            balance=user.balance,
        )

    change = await apply_coin_change(
        db, redis, user_id, chain.reward, "chain_complete", f"Completed chain: {chain.name}",
    )
    await create_notification(
        db,
        user_id,
        "chain_complete",
        f"{chain.emoji} {chain.name} complete!",
        f"You finished the chain and earned {chain.reward} coins.",
        data={"chain_id": chain.id, "reward": chain.reward},
        redis=redis,
    )
    await db.commit()
    logger.info("Chain %s completed by %s", chain.id, user_id)

    return ScanResult(
        qr_id=qr_id,
        kind="chain",
        message=f"{chain.name} complete! +{chain.reward} coins",
        coins=chain.reward,
        reward_type="coins",
        chain_id=chain.id,
        step=step.step,
        chain_completed=True,
        balance=change.balance,
    )


async def get_chain_progress(db: AsyncSession, user_id: str) -> list[dict]:
    """Progress for every chain, including chains the guest has not started."""
    await get_user(db, user_id)
    result = await db.execute(select(ChainProgress).where(ChainProgress.user_id == user_id))
    by_chain = {row.chain_id: row for row in result.scalars().all()}

    progress = []
    for chain in CHAINS:
        row = by_chain.get(chain.id)
        current = row.current_step if row else 1
        completed = bool(row and row.completed)
        progress.append({
            "chain_id": chain.id,
            "name": chain.name,
            "emoji": chain.emoji,
            "current_step": current,
            "total_steps": len(chain.steps),
            "completed": completed,
            "next_hint": None if completed else chain.steps[current - 1].hint,
        })
    return progress
