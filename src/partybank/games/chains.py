"""Scavenger-hunt chains: 5 chains x 5 steps = 25 QR codes.

Steps are scanned in order; finishing a chain pays its reward.
"""

from __future__ import annotations

from dataclasses import dataclass

CHAIN_PREFIX = "chain_"


@dataclass(frozen=True)
class ChainStep:
    step: int
    qr_id: str
    hint: str
    location: str


@dataclass(frozen=True)
class Chain:
    id: str
    name: str
    emoji: str
    description: str
    reward: int
    steps: tuple[ChainStep, ...]

    @property
    def last_step(self) -> int:
        return self.steps[-1].step


def _steps(prefix: str, *clues: tuple[str, str]) -> tuple[ChainStep, ...]:
    return tuple(
        ChainStep(step=i, qr_id=f"{CHAIN_PREFIX}{prefix}_{i}", hint=hint, location=location)
        for i, (hint, location) in enumerate(clues, start=1)
    )


CHAINS: tuple[Chain, ...] = (
    Chain(
        "kitchen_explorer", "Kitchen Explorer", "\U0001f373",
        "Explore the kitchen area and find all hidden spots", 8,
        _steps(
            "kitchen",
            ("Start at the fridge - look for something magnetic", "Near the refrigerator"),
            ("Where do dirty dishes go to get clean?", "Near the dishwasher or sink"),
            ("Check where the snacks are stored", "Snack cabinet or pantry"),
            ("Something is brewing here...", "Coffee/tea station"),
            ("The final clue is where we serve food", "Serving counter or table"),
        ),
    ),
    Chain(
        "social_butterfly", "Social Butterfly", "\U0001f98b",
        "Meet specific people and collect their signatures", 8,
        _steps(
            "social",
            ("Find someone wearing something blue", "Ask around"),
            ("Find someone who arrived in the last 30 minutes", "Ask recent arrivals"),
            ("Find the tallest person at the party", "Look around"),
            ("Find someone who has known the host the longest", "Ask about friendships"),
            ("Find the host for the final stamp!", "Birthday guest of honour"),
        ),
    ),
    Chain(
        "snack_hunter", "Snack Hunter", "\U0001f37f",
        "Find all the hidden snack stations", 8,
        _steps(
            "snack",
            ("Sweet treats are hiding near something comfortable", "Near seating area"),
            ("Salty snacks are close to where drinks flow", "Near bar/drinks area"),
            ("Healthy options are near the window", "Window area"),
            ("Special treats are hidden in the corner", "Corner of room"),
            ("The grand snack finale is at the main table", "Main food table"),
        ),
    ),
    Chain(
        "mystery_trail", "Mystery Trail", "\U0001f50d",
        "Follow the riddles to uncover the mystery", 8,
        _steps(
            "mystery",
            ("I reflect your image but am not a mirror. Find me near the entrance.", "Shiny surface near door"),
            ("I make light but am not the sun. Look up!", "Near a lamp or light fixture"),
            ("Words live here but no one speaks. Check the bookshelf.", "Bookshelf or magazine rack"),
            ("I keep things cold but my heart is warm. Back to the kitchen!", "Fridge magnet or nearby"),
            ("The mystery ends where celebrations begin - find the birthday decorations!",
             "Birthday decoration area"),
        ),
    ),
    Chain(
        "night_owl", "Night Owl Quest", "\U0001f989",
        "Complete time-based challenges throughout the party", 8,
        _steps(
            "owl",
            ("Dance floor is calling - find the DJ station", "Music/DJ area"),
            ("Where do party photos happen?", "Photo area or backdrop"),
            ("Find the coziest spot to sit", "Comfortable seating area"),
            ("Check near the games station", "Game table or activity area"),
            ("The night ends where it began - return to the entrance", "Entrance area"),
        ),
    ),
)

_CHAINS_BY_ID = {chain.id: chain for chain in CHAINS}


def get_chain_by_id(chain_id: str) -> Chain | None:
    return _CHAINS_BY_ID.get(chain_id)


def get_step_by_qr_id(qr_id: str) -> tuple[Chain, ChainStep] | None:
    """Find the chain and step that own a scan code, in declaration order."""
    for chain in CHAINS:
        for step in chain.steps:
            if step.qr_id == qr_id:
                return chain, step
    return None


def is_chain_qr(qr_id: str) -> bool:
    return qr_id.startswith(CHAIN_PREFIX)
