"""Banned/restricted lookup results exchanged with the restriction service."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RestrictedCard:
    """A card flagged by the restriction service for a format."""

    name: str
    printing_id: str
    status: str  # banned, restricted, not_legal

    @property
    def status_text(self) -> str:
        """Status with underscores spelled out ("not_legal" -> "not legal")."""
        return (self.status or "illegal").replace("_", " ")


@dataclass(frozen=True, slots=True)
class RestrictionReport:
    """
    Answer to a per-deck restriction lookup.

    A card absent from illegal_cards is not flagged.
    """

    is_legal: bool
    illegal_cards: tuple[RestrictedCard, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        """Wire shape used by the restriction endpoint."""
        return {
            "is_legal": self.is_legal,
            "illegal_cards": [
                {"name": c.name, "scryfall_id": c.printing_id, "status": c.status}
                for c in self.illegal_cards
            ],
        }
