"""Risk station play: pay the entry cost, draw a card, apply its effect."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import CoinChangeResult, apply_coin_change, get_user
from partybank.errors import InsufficientBalanceError, InvalidRiskLevelError
from partybank.games.risk_cards import RiskCard, draw_risk_card

logger = logging.getLogger(__name__)

# Level → entry cost in coins
RISK_LEVELS = {1: 1, 2: 2, 3: 3}

COIN_FLIP_HEADS = 4
COIN_FLIP_TAILS = -2


@dataclass(frozen=True)
class RiskPlayResult:
    card: RiskCard
    entry_cost: int
    coin_change: int
    drink_cancelled: bool
    result: CoinChangeResult


def resolve_coin_change(card: RiskCard, drink_cancel: bool, rng: random.Random | None = None) -> tuple[int, bool]:
    """Coins a drawn card is worth, and whether a drink cancelled a loss."""
    if card.special == "coin_flip":
        heads = (rng.random() if rng is not None else random.random()) < 0.5
        return (COIN_FLIP_HEADS if heads else COIN_FLIP_TAILS), False
    if drink_cancel and card.can_drink_cancel and card.coin_change < 0:
        return 0, True
    return card.coin_change, False


async def play_risk(
    db: AsyncSession,
    redis: object | None,
    user_id: str,
    level: int,
    drink_cancel: bool = False,
    rng: random.Random | None = None,
) -> RiskPlayResult:
    """Play one round at the risk station.

    Raises:
        InvalidRiskLevelError: level is not 1, 2 or 3.
        InsufficientBalanceError: the guest cannot cover the entry cost.
        UserNotFoundError: unknown guest.
    """
    cost = RISK_LEVELS.get(level)
    if cost is None:
        raise InvalidRiskLevelError(f"Risk level must be one of {sorted(RISK_LEVELS)}")

    user = await get_user(db, user_id)
    if user.balance < cost:
        raise InsufficientBalanceError("Not enough coins!")

    result = await apply_coin_change(
        db, redis, user_id, -cost, "risk_entry", f"Risk station entry (Level {level})",
    )

    card = draw_risk_card(rng, level=level)
    if result.game_over:
        # The entry cost ended the game; the card is shown but not applied
        coin_change, cancelled = 0, False
    else:
        coin_change, cancelled = resolve_coin_change(card, drink_cancel, rng)
    if coin_change != 0:
        outcome = await apply_coin_change(
            db,
            redis,
            user_id,
            coin_change,
            "risk_win" if coin_change > 0 else "risk_loss",
            card.display_text,
        )
        # A revive granted by the entry cost still counts for this round
        result = CoinChangeResult(
            balance=outcome.balance,
            applied=result.applied + outcome.applied,
            revived=result.revived or outcome.revived,
            game_over=outcome.game_over,
        )

    logger.info(
        "Risk play: user=%s level=%d card=%s change=%d balance=%d",
        user_id, level, card.id, coin_change, result.balance,
    )
    return RiskPlayResult(
        card=card,
        entry_cost=cost,
        coin_change=coin_change,
        drink_cancelled=cancelled,
        result=result,
    )
