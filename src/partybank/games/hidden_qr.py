"""Hidden QR codes placed around the venue.

Ten codes, each claimable by at most ``max_scans`` guests. Rewards are coins,
a power card, or a trap that costs coins.
"""

from __future__ import annotations

from dataclasses import dataclass

HIDDEN_PREFIX = "hidden_"


@dataclass(frozen=True)
class HiddenQR:
    id: str
    name: str
    emoji: str
    location_hint: str
    reward_type: str  # coins | card | trap
    message: str
    reward_amount: int | None = None
    reward_card_id: str | None = None
    max_scans: int = 3


HIDDEN_QR_CODES: tuple[HiddenQR, ...] = (
    HiddenQR("hidden_1", "Lucky Find", "\U0001f340", "Behind the potted plant", "coins",
             "Lucky you! Found some hidden treasure!", reward_amount=5),
    HiddenQR("hidden_2", "Secret Stash", "\U0001f4b0", "Under the couch cushion", "coins",
             "You found a secret coin stash!", reward_amount=6),
    HiddenQR("hidden_3", "Shield Guardian", "\U0001f6e1️", "Near the emergency exit", "card",
             "A protective Shield card appears!", reward_card_id="shield"),
    HiddenQR("hidden_4", "Sneaky Coins", "\U0001fa99", "Inside the coat closet", "coins",
             "Some sneaky coins were hiding here!", reward_amount=3),
    HiddenQR("hidden_5", "The Trap", "\U0001f480", "Behind the photo backdrop", "trap",
             "Oh no! It was a trap! -2 coins", reward_amount=-2),
    HiddenQR("hidden_6", "Golden Discovery", "✨", "Under the birthday cake table", "coins",
             "Golden coins sparkle as you discover them!", reward_amount=4),
    HiddenQR("hidden_7", "Thief Card", "\U0001f9b9", "Behind the speaker", "card",
             "A powerful Steal card emerges from the shadows!", reward_card_id="steal"),
    HiddenQR("hidden_8", "Minor Mishap", "\U0001f605", "Under the bar counter", "trap",
             "Oops! Small mishap cost you 1 coin", reward_amount=-1),
    HiddenQR("hidden_9", "Generous Gift", "\U0001f381", "Near the window sill", "coins",
             "A generous gift was waiting for you!", reward_amount=4),
    HiddenQR("hidden_10", "Jackpot Spot", "\U0001f3b0", "Behind the birthday decorations", "coins",
             "JACKPOT! You found the best hidden spot!", reward_amount=6),
)

_CODES_BY_ID = {code.id: code for code in HIDDEN_QR_CODES}


def get_hidden_qr_by_id(qr_id: str) -> HiddenQR | None:
    return _CODES_BY_ID.get(qr_id)


def is_hidden_qr(qr_id: str) -> bool:
    return qr_id.startswith(HIDDEN_PREFIX)


def get_rewards_summary() -> dict[str, int]:
    """Totals across the catalog: coins on offer, coins lost to traps, card rewards."""
    return {
        "total_coins": sum(q.reward_amount or 0 for q in HIDDEN_QR_CODES if q.reward_type == "coins"),
        "total_traps": sum(q.reward_amount or 0 for q in HIDDEN_QR_CODES if q.reward_type == "trap"),
        "total_cards": sum(1 for q in HIDDEN_QR_CODES if q.reward_type == "card"),
    }
