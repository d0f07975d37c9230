"""Unit tests for weighted random selection."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from partybank.games.risk_cards import RISK_CARDS, draw_risk_card
from partybank.games.weighted import draw_card

WEIGHTS = [0.05, 0.10, 0.15, 0.10, 0.08, 0.05, 0.08, 0.08, 0.06]


class TestDrawCard:
    """Frequencies converge to weight / total."""

    def test_frequencies_match_weights(self):
        catalog = [{"id": i, "probability": w} for i, w in enumerate(WEIGHTS)]
        total = sum(WEIGHTS)
        rng = random.Random(20240601)
        n = 100_000

        counts = Counter(draw_card(catalog, rng)["id"] for _ in range(n))

        for i, weight in enumerate(WEIGHTS):
            expected = weight / total
            assert abs(counts[i] / n - expected) < 0.01

    def test_full_deck_frequencies(self):
        total = sum(card.probability for card in RISK_CARDS)
        rng = random.Random(7)
        n = 100_000

        counts = Counter(draw_risk_card(rng).id for _ in range(n))

        for card in RISK_CARDS:
            assert abs(counts[card.id] / n - card.probability / total) < 0.01

    def test_always_returns_an_entry(self):
        catalog = [{"id": "a", "probability": 0.3}, {"id": "b", "probability": 0.7}]
        rng = random.Random(1)
        assert all(draw_card(catalog, rng) in catalog for _ in range(1000))

    def test_falls_back_to_last_entry(self):
        """A remainder left over after the last entry (float rounding) yields the last card."""

        class TopRandom(random.Random):
            def random(self):
                return 1.000001

        catalog = [{"id": "a", "probability": 0.1}, {"id": "b", "probability": 0.2}, {"id": "c", "probability": 0.0}]
        assert draw_card(catalog, TopRandom())["id"] == "c"

    def test_zero_weight_entries_never_drawn_first(self):
        catalog = [{"id": "zero", "probability": 0.0}, {"id": "one", "probability": 1.0}]
        rng = random.Random(3)
        assert {draw_card(catalog, rng)["id"] for _ in range(500)} == {"one"}

    def test_single_entry(self):
        catalog = [{"id": "only", "probability": 0.4}]
        assert draw_card(catalog)["id"] == "only"

    def test_attribute_weights(self):
        assert draw_card(RISK_CARDS, random.Random(0)) in RISK_CARDS

    def test_empty_catalog_raises(self):
        with pytest.raises(ValueError):
            draw_card([])
