from collections.abc import Callable
from typing import Any

import pytest

from lotusflare.models.card import CardLegalityInfo, DeckSnapshot

CardFactory = Callable[..., CardLegalityInfo]


def _make_card(name: str, quantity: int = 1, **kwargs: Any) -> CardLegalityInfo:
    """Card line whose printing id is derived from the name unless given."""
    kwargs.setdefault("id", f"id-{name.lower().replace(' ', '-')}")
    return CardLegalityInfo(canonical_name=name, quantity=quantity, **kwargs)


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for deck lines."""
    return _make_card


@pytest.fixture
def commander_deck() -> DeckSnapshot:
    """
    Legal 100-card Commander deck.

    Dimir commander plus 99 on-identity cards, basics included.
    """
    commander = _make_card(
        "Lazav, the Multifarious",
        is_commander=True,
        type_line="Legendary Creature — Shapeshifter",
        color_identity=("U", "B"),
    )
    singles = [
        _make_card(
            f"Dimir Spell {i}",
            type_line="Instant",
            color_identity=("U",) if i % 2 else ("B",),
        )
        for i in range(59)
    ]
    basics = [
        _make_card("Island", 20, type_line="Basic Land — Island"),
        _make_card("Swamp", 20, type_line="Basic Land — Swamp"),
    ]
    return DeckSnapshot(format="commander", cards=(commander, *singles, *basics), deck_id="deck-1")
