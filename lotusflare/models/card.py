"""
Deck line items as seen by the legality engine.

Cards arrive here already normalized (see lotusflare.parsers.scryfall);
nothing in this module touches raw card JSON.
"""

import hashlib
import json
from collections.abc import Iterable
from dataclasses import dataclass, field

from lotusflare.models.format_rules import normalize_format


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates while keeping first-seen order."""
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True, slots=True)
class CardLegalityInfo:
    """
    One line item of a deck being validated.

    Attributes:
        id: Identifier of the specific printing (opaque)
        canonical_name: Canonical English name, the copy-counting key
        quantity: Number of copies on this line
        is_commander: Card sits in the command zone
        is_sideboard: Card sits in the sideboard
        type_line: Free-text type line ("Legendary Creature — Elf Druid")
        color_identity: Color symbols (W, U, B, R, G), order preserved
        keywords: Ability keywords ("Partner", "Flying", ...)
        oracle_text: Rules text
        display_name: Printing-specific name used in messages (may be localized)
    """

    id: str
    canonical_name: str
    quantity: int = 1
    is_commander: bool = False
    is_sideboard: bool = False
    type_line: str = ""
    color_identity: tuple[str, ...] = field(default_factory=tuple)
    keywords: tuple[str, ...] = field(default_factory=tuple)
    oracle_text: str = ""
    display_name: str = ""

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "color_identity", _dedupe(self.color_identity))
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def label(self) -> str:
        """Name to show in issue messages."""
        return self.display_name or self.canonical_name


@dataclass(frozen=True, slots=True)
class DeckSnapshot:
    """
    Immutable input to a single legality evaluation cycle.

    Attributes:
        format: Target format name as chosen by the user
        cards: All deck lines (command zone, mainboard, sideboard)
        deck_id: Persisted deck identifier, None for unsaved decks
    """

    format: str
    cards: tuple[CardLegalityInfo, ...] = field(default_factory=tuple)
    deck_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))

    def mainboard_count(self, include_commanders: bool = True) -> int:
        """
        Total quantity of non-sideboard lines.

        Args:
            include_commanders: Count command-zone cards toward the total
                (Commander's 100 includes the commander)
        """
        return sum(
            card.quantity
            for card in self.cards
            if not card.is_sideboard and (include_commanders or not card.is_commander)
        )

    def fingerprint(self) -> str:
        """Stable digest of everything a cycle's result depends on."""
        payload = {
            "deck_id": self.deck_id,
            "format": normalize_format(self.format),
            "cards": [
                [
                    card.id,
                    card.canonical_name,
                    card.quantity,
                    card.is_commander,
                    card.is_sideboard,
                    card.type_line,
                    list(card.color_identity),
                    list(card.keywords),
                    card.oracle_text,
                ]
                for card in self.cards
            ],
        }
        encoded = json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()
