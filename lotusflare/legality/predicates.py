"""
Card predicates used by the structural checkers.

Each function answers a yes/no question about a single card and has no
side effects.
"""

import re
from collections.abc import Iterable

from lotusflare.models.card import CardLegalityInfo
from lotusflare.models.format_rules import BASIC_LAND_NAMES

COMMANDER_KEYWORD = "can be your commander"
PARTNER_KEYWORD = "Partner"

# Heuristic, not full rules-text parsing
_PARTNER_WITH_PATTERN = re.compile(r"Partner with [A-Z][a-zA-Z\s,'-]+")
_FRIENDS_FOREVER_PATTERN = re.compile(r"Friends forever")

COLORLESS_SYMBOL = "C"


def is_basic_land_name(name: str) -> bool:
    """Basic lands ignore copy limits. Match is exact and case-sensitive."""
    return name.strip() in BASIC_LAND_NAMES


def grants_unlimited_copies(name: str, oracle_text: str | None) -> bool:
    """
    Check whether rules text lifts the copy limit for the card's own name.

    Looks for the verbatim clause
    "A deck can have any number of cards named <name>."
    """
    if not oracle_text or not oracle_text.strip():
        return False

    card_name = name.strip()
    if not card_name:
        return False

    pattern = re.compile(f"A deck can have any number of cards named {re.escape(card_name)}\\.")
    return pattern.search(oracle_text) is not None


def is_legal_commander_type(card: CardLegalityInfo) -> bool:
    """Legendary creature, legendary planeswalker, or explicitly allowed."""
    type_line = card.type_line.lower()
    return (
        "legendary creature" in type_line
        or "legendary planeswalker" in type_line
        or COMMANDER_KEYWORD in card.keywords
    )


def has_partner_ability(card: CardLegalityInfo) -> bool:
    """Partner, Partner with <name>, or Friends forever."""
    if PARTNER_KEYWORD in card.keywords:
        return True
    if not card.oracle_text:
        return False
    return bool(
        _PARTNER_WITH_PATTERN.search(card.oracle_text)
        or _FRIENDS_FOREVER_PATTERN.search(card.oracle_text)
    )


def is_within_identity(colors: Iterable[str], identity: Iterable[str]) -> bool:
    allowed = set(identity)
    return all(color in allowed for color in colors)


def format_color_identity(colors: Iterable[str]) -> str:
    """Join color symbols for messages; colorless renders as "C"."""
    return "".join(colors) or COLORLESS_SYMBOL
