"""
Server-side restriction evaluation.

Decides which cards of a deck are banned, restricted beyond their single
allowed copy, or otherwise not legal in a format, based on each card's
stored legalities map. This is the logic behind the restriction lookup
that RestrictionClient talks to.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from lotusflare.models.format_rules import normalize_format
from lotusflare.models.restriction import RestrictedCard, RestrictionReport

logger = logging.getLogger(__name__)

LEGAL = "legal"
RESTRICTED = "restricted"
NOT_LEGAL = "not_legal"


@dataclass(frozen=True, slots=True)
class LegalityEntry:
    """A deck card with its per-format legalities."""

    name: str
    printing_id: str
    quantity: int = 1
    legalities: Mapping[str, str] | str | None = field(default=None)


def parse_legalities(
    raw: Mapping[str, Any] | str | None, name: str = ""
) -> dict[str, str] | None:
    """
    Normalize a legalities map that may still be a JSON string.

    Returns:
        The decoded map, {} when absent, None when it cannot be parsed
    """
    if raw is None:
        return {}
    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except ValueError:
            logger.warning("Failed to parse legalities for %s", name)
            return None
        if not isinstance(decoded, dict):
            logger.warning("Legalities for %s are not an object", name)
            return None
        raw = decoded
    return {str(k): str(v) for k, v in raw.items()}


def find_restricted_cards(format_name: str, entries: Iterable[LegalityEntry]) -> RestrictionReport:
    """
    Flag every card not plainly legal in the format.

    A card whose legalities cannot be parsed, or that lacks the format,
    counts as not legal. "restricted" cards are flagged only when the deck
    runs more than one copy of the name.
    """
    format_key = normalize_format(format_name)
    entries = list(entries)

    totals: dict[str, int] = {}
    for entry in entries:
        totals[entry.name] = totals.get(entry.name, 0) + entry.quantity

    flagged: list[RestrictedCard] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            continue
        seen.add(entry.name)

        legalities = parse_legalities(entry.legalities, entry.name)
        status = NOT_LEGAL if legalities is None else legalities.get(format_key, NOT_LEGAL)

        if status == LEGAL:
            continue
        if status == RESTRICTED and totals[entry.name] <= 1:
            continue

        flagged.append(
            RestrictedCard(name=entry.name, printing_id=entry.printing_id, status=status)
        )

    return RestrictionReport(is_legal=not flagged, illegal_cards=tuple(flagged))
