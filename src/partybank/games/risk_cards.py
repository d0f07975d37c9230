"""Risk station deck: 24 cards, drawn by relative weight.

Card types: lucky, drink, dare, drink_dare, social, unlucky, special.
``probability`` is a relative weight; the deck total is not 1.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from partybank.games.weighted import draw_card

CARD_TYPES = ("lucky", "drink", "dare", "drink_dare", "social", "unlucky", "special")


@dataclass(frozen=True)
class RiskCard:
    id: str
    type: str
    effect: str
    display_text: str
    coin_change: int
    emoji: str
    probability: float
    task: str | None = None
    special: str | None = None
    can_drink_cancel: bool = False


RISK_CARDS: tuple[RiskCard, ...] = (
    # Lucky
    RiskCard("lucky1", "lucky", "JACKPOT", "JACKPOT! +3 coins!", 3, "⭐⭐⭐", 0.05),
    RiskCard("lucky2", "lucky", "NICE_WIN", "Nice win! +2 coins!", 2, "⭐⭐", 0.10),
    RiskCard("lucky3", "lucky", "SMALL_WIN", "Small win! +1 coin!", 1, "⭐", 0.15),
    # Drink
    RiskCard("drink1", "drink", "SIP", "Take a sip of your drink!", 0, "\U0001f37a", 0.10),
    RiskCard("drink2", "drink", "DOUBLE_SIP", "Take TWO sips!", 0, "\U0001f37a\U0001f37a", 0.08),
    RiskCard("drink3", "drink", "SHOT", "Take a shot! (or finish your drink)", 0, "\U0001f943", 0.05),
    # Dare
    RiskCard("dare1", "dare", "PUSHUPS", "Do 10 PUSHUPS right now!", 0, "\U0001f4aa", 0.08,
             task="Do 10 pushups"),
    RiskCard("dare2", "dare", "DANCE", "DANCE for 15 seconds! (no music needed)", 0, "\U0001f483", 0.08,
             task="Dance for 15 seconds"),
    RiskCard("dare3", "dare", "SING", "SING 10 seconds of any song out loud!", 0, "\U0001f3a4", 0.06,
             task="Sing for 10 seconds"),
    RiskCard("dare4", "dare", "JOKE", "Tell a JOKE to the nearest group!", 0, "\U0001f602", 0.06,
             task="Tell a joke"),
    RiskCard("dare5", "dare", "COMPLIMENT", "Give an EXAGGERATED compliment to a stranger!", 0, "\U0001f646", 0.06,
             task="Give dramatic compliment"),
    RiskCard("dare6", "dare", "SPIN", "Spin around 5 times then walk straight!", 0, "\U0001f300", 0.05,
             task="Spin and walk"),
    # Drink & dare
    RiskCard("dd1", "drink_dare", "SHOT_STORY", "Take a SHOT, then tell your most embarrassing story!", 3,
             "\U0001f943\U0001f4ac", 0.03, task="Shot + embarrassing story"),
    RiskCard("dd2", "drink_dare", "SIP_JUMPING", "Take a SIP, then do 20 jumping jacks!", 2,
             "\U0001f37a\U0001f4aa", 0.04, task="Sip + 20 jumping jacks"),
    RiskCard("dd3", "drink_dare", "SHOT_SERENADE", "Take a SHOT, then SERENADE the nearest person!", 4,
             "\U0001f943\U0001f3a4", 0.02, task="Shot + serenade someone"),
    # Social
    RiskCard("social1", "social", "MAKE_FRIEND", "Introduce yourself to someone new! (+1 coin)", 1,
             "\U0001f91d", 0.05),
    RiskCard("social2", "social", "CHEERS", "Get 3+ people to CHEERS with you! (+2 coins)", 2,
             "\U0001f942", 0.04),
    RiskCard("social3", "social", "BIRTHDAY_WISH", "Wish the host happy birthday creatively! (+2 coins)", 2,
             "\U0001f389", 0.04),
    # Unlucky
    RiskCard("unlucky1", "unlucky", "OOPS", "Oops! -1 coin (or drink to cancel)", -1, "\U0001f480", 0.08,
             can_drink_cancel=True),
    RiskCard("unlucky2", "unlucky", "BAD_LUCK", "Bad luck! -2 coins (or take a SHOT to cancel)", -2,
             "\U0001f480\U0001f480", 0.05, can_drink_cancel=True),
    RiskCard("unlucky3", "unlucky", "GENEROUS", "Give 1 coin to the next person you see!", -1, "\U0001f4b8", 0.04,
             special="give_to_next"),
    # Special
    RiskCard("special1", "special", "IMMUNITY", "IMMUNITY! Can't lose coins for 15 minutes!", 0,
             "\U0001f6e1️", 0.02, special="immunity"),
    RiskCard("special2", "special", "SWAP", "SWAP your balance with the nearest person!", 0, "\U0001f504", 0.02,
             special="swap"),
    RiskCard("special3", "special", "DOUBLE_NOTHING", "DOUBLE OR NOTHING! Flip a coin: Heads +4, Tails -2", 0,
             "\U0001f381", 0.02, special="coin_flip"),
)

_CARDS_BY_ID = {card.id: card for card in RISK_CARDS}


def get_card_by_id(card_id: str) -> RiskCard | None:
    return _CARDS_BY_ID.get(card_id)


def get_cards_by_type(card_type: str) -> list[RiskCard]:
    return [card for card in RISK_CARDS if card.type == card_type]


def _is_big_swing(card: RiskCard) -> bool:
    return card.coin_change >= 3 or card.coin_change <= -2 or card.special == "coin_flip"


def get_cards_for_level(level: int | None) -> tuple[RiskCard, ...]:
    """Card pool for a risk level.

    Level 1 leaves out big wins, big losses and balance-moving specials;
    level 3 keeps only the big swings. Level 2 (or None) is the full deck.
    """
    if level == 1:
        return tuple(c for c in RISK_CARDS if not _is_big_swing(c) and c.special != "swap")
    if level == 3:
        return tuple(c for c in RISK_CARDS if _is_big_swing(c))
    return RISK_CARDS


def draw_risk_card(rng: random.Random | None = None, level: int | None = None) -> RiskCard:
    """Draw one card by weight from the pool for ``level``."""
    return draw_card(get_cards_for_level(level), rng)
