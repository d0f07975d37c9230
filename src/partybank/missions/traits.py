"""Guest personality traits and the mission templates each one unlocks.

A guest picks a trait at registration; its templates become that guest's
missions. Verification modes: honor (self-reported), witness (someone saw
it), target (the person the mission was about confirms).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

VERIFICATION_MODES = ("honor", "witness", "target")


@dataclass(frozen=True)
class Trait:
    id: str
    name: str
    emoji: str
    description: str
    color: str


@dataclass(frozen=True)
class MissionTemplate:
    title: str
    description: str
    reward: int
    verification: str
    requires_confirmation: bool


TRAITS: tuple[Trait, ...] = (
    Trait("social_butterfly", "Social Butterfly", "\U0001f98b",
          "Loves meeting new people and making connections", "#EC4899"),
    Trait("party_starter", "Party Starter", "\U0001f389", "Gets the party going and keeps energy high", "#F59E0B"),
    Trait("quiet_observer", "Quiet Observer", "\U0001f92b",
          "Prefers watching and listening, thoughtful presence", "#8B5CF6"),
    Trait("photographer", "Photographer", "\U0001f4f8", "Always capturing moments and memories", "#3B82F6"),
    Trait("dancer", "Dancer", "\U0001f483", "Can't stop moving to the beat", "#EF4444"),
    Trait("funny_person", "Funny Person", "\U0001f602", "Makes everyone laugh", "#10B981"),
    Trait("helper", "Helper", "\U0001f91d", "Always lending a hand", "#6366F1"),
    Trait("adventurer", "Adventurer", "\U0001f31f", "Tries everything new", "#F97316"),
)


def _honor(title: str, description: str, reward: int) -> MissionTemplate:
    return MissionTemplate(title, description, reward, "honor", False)


def _witness(title: str, description: str, reward: int) -> MissionTemplate:
    return MissionTemplate(title, description, reward, "witness", True)


def _target(title: str, description: str, reward: int) -> MissionTemplate:
    return MissionTemplate(title, description, reward, "target", True)


TRAIT_MISSIONS: Mapping[str, tuple[MissionTemplate, ...]] = MappingProxyType({
    "social_butterfly": (
        _honor("Meet 5 new people", "Introduce yourself to 5 guests you haven't met before", 10),
        _witness("Start a group conversation", "Get 4+ people talking about something fun", 8),
        _honor("Exchange contact info", "Exchange social media or phone numbers with 3 new friends", 6),
    ),
    "party_starter": (
        _witness("Get people dancing", "Get at least 5 people on the dance floor", 10),
        _witness("Start a toast", "Lead a toast for the host", 8),
        _honor("Suggest a party game", "Organize a group activity or game", 7),
    ),
    "quiet_observer": (
        _target("Share a thoughtful compliment", "Give someone a meaningful compliment", 6),
        _honor("Listen to someone's story", "Have a deep conversation with someone", 7),
        _honor("Notice something special", "Point out something beautiful or interesting happening", 5),
    ),
    "photographer": (
        _honor("Take 10 candid photos", "Capture spontaneous moments throughout the party", 10),
        _witness("Group photo", "Organize and take a group photo of 8+ people", 8),
        _honor("Best shot of the host", "Capture an amazing photo of the birthday person", 7),
    ),
    "dancer": (
        _honor("Dance for 3 songs straight", "Keep moving without a break", 8),
        _target("Teach someone a move", "Show someone your signature dance move", 7),
        _witness("Dance battle", "Challenge someone to a friendly dance-off", 10),
    ),
    "funny_person": (
        _honor("Make 5 people laugh", "Spread joy with your humor", 8),
        _witness("Tell your best joke", "Share your funniest joke with a group", 6),
        _honor("Funny photo challenge", "Take the silliest photo of the night", 7),
    ),
    "helper": (
        _witness("Help set up or clean", "Assist with party setup or cleanup", 10),
        _target("Get someone a drink", "Bring a drink to someone who needs it", 5),
        _honor("Introduce two people", "Help two people meet each other", 7),
    ),
    "adventurer": (
        _honor("Try every station", "Visit Bar, Risk, Trivia, and Lottery", 12),
        _honor("Challenge yourself", "Do something outside your comfort zone", 10),
        _witness("Start a new tradition", "Create a fun moment that could become a party tradition", 8),
    ),
})

_TRAITS_BY_ID = {trait.id: trait for trait in TRAITS}


def get_trait_by_id(trait_id: str) -> Trait | None:
    return _TRAITS_BY_ID.get(trait_id)


def get_missions_for_trait(trait_id: str) -> tuple[MissionTemplate, ...]:
    return TRAIT_MISSIONS.get(trait_id, ())
