"""Balance floor and one-time revive.

A guest whose balance reaches zero is revived once with REVIVE_AMOUNT coins.
A second floor hit is game over. States are derived from the persisted
balance and has_revived flag on every call:

    Active              balance > 0
    AtFloor-Eligible    balance == 0, has_revived false
    AtFloor-Exhausted   balance == 0, has_revived true

Gateway failures never propagate; they collapse into a result that grants
nothing, so the next floor hit rechecks the flag.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from partybank.bank.gateway import GatewayError, GrantOutcome, PersistenceGateway

logger = structlog.get_logger()

REVIVE_AMOUNT = 10
MIN_BALANCE = 0


@dataclass(frozen=True)
class FloorResult:
    revived: bool
    game_over: bool
    new_balance: int


def normalize_balance(raw_balance: int) -> int:
    """Clamp a raw balance to the floor."""
    return max(raw_balance, MIN_BALANCE)


class BalanceGuard:
    """Settles a balance against the floor, granting the one-time revive."""

    def __init__(self, gateway: PersistenceGateway, revive_amount: int = REVIVE_AMOUNT) -> None:
        self.gateway = gateway
        self.revive_amount = revive_amount

    async def settle_floor(self, user_id: str, raw_balance: int) -> FloorResult:
        safe_balance = normalize_balance(raw_balance)
        if safe_balance != MIN_BALANCE:
            return FloorResult(revived=False, game_over=False, new_balance=safe_balance)

        try:
            has_revived = await self.gateway.get_user_revived_flag(user_id)
        except GatewayError:
            logger.warning("revive_flag_read_failed", user_id=user_id, exc_info=True)
            return FloorResult(revived=False, game_over=False, new_balance=safe_balance)

        if has_revived:
            return await self._game_over(user_id)

        try:
            outcome = await self.gateway.conditional_grant_revive(user_id, self.revive_amount)
        except GatewayError:
            logger.warning("revive_grant_failed", user_id=user_id, exc_info=True)
            return FloorResult(revived=False, game_over=False, new_balance=safe_balance)

        if outcome is GrantOutcome.ALREADY_REVIVED:
            return await self._game_over(user_id)

        logger.info("revive_granted", user_id=user_id, amount=self.revive_amount)
        await self._record_revive(user_id)
        return FloorResult(revived=True, game_over=False, new_balance=self.revive_amount)

    async def _record_revive(self, user_id: str) -> None:
        """Ledger entry and notification for a committed grant. Best-effort."""
        try:
            await self.gateway.append_transaction(
                user_id, self.revive_amount, "revive", "One-time revive bonus",
            )
        except GatewayError:
            logger.warning("revive_transaction_failed", user_id=user_id, exc_info=True)

        try:
            await self.gateway.append_notification(
                user_id,
                "revive",
                "Emergency Rescue!",
                f"You hit zero and received {self.revive_amount} coins. This only happens once!",
                {"amount": self.revive_amount},
            )
        except GatewayError:
            logger.warning("revive_notification_failed", user_id=user_id, exc_info=True)

    async def _game_over(self, user_id: str) -> FloorResult:
        logger.info("game_over", user_id=user_id)
        try:
            await self.gateway.append_notification(
                user_id,
                "game_over",
                "Game Over",
                "You've used your revive already!",
                {"reason": "already_revived"},
            )
        except GatewayError:
            logger.warning("game_over_notification_failed", user_id=user_id, exc_info=True)
        return FloorResult(revived=False, game_over=True, new_balance=MIN_BALANCE)
