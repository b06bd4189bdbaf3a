"""
Format Rule Tables.

Static deck-construction constraints keyed by lowercase format name.
A format missing from a table is unconstrained by that table.
"""

from dataclasses import dataclass

COMMANDER_FORMAT = "commander"
OATHBREAKER_FORMAT = "oathbreaker"
CUSTOM_FORMAT = "custom"


@dataclass(frozen=True, slots=True)
class FormatRule:
    """
    Deck size constraints for a single format.

    Attributes:
        exact: Required mainboard size, if the format fixes it
        min: Minimum mainboard size, if the format sets a floor
        sideboard_max: Maximum sideboard size (informational)
    """

    exact: int | None = None
    min: int | None = None
    sideboard_max: int | None = None


DECK_SIZE_RULES: dict[str, FormatRule] = {
    "commander": FormatRule(exact=100, sideboard_max=0),
    "standard": FormatRule(min=60, sideboard_max=15),
    "modern": FormatRule(min=60, sideboard_max=15),
    "pioneer": FormatRule(min=60, sideboard_max=15),
    "legacy": FormatRule(min=60, sideboard_max=15),
    "vintage": FormatRule(min=60, sideboard_max=15),
    "pauper": FormatRule(min=60, sideboard_max=15),
    "brawl": FormatRule(exact=60, sideboard_max=0),
    "historic brawl": FormatRule(exact=100, sideboard_max=0),
    "oathbreaker": FormatRule(exact=60, sideboard_max=0),
    "custom": FormatRule(min=0),
}

DEFAULT_MAX_COPIES = 4

# Singleton formats; everything else uses DEFAULT_MAX_COPIES
MAX_NON_BASIC_COPIES: dict[str, int] = {
    "commander": 1,
    "brawl": 1,
    "historic brawl": 1,
    "oathbreaker": 1,
}

BASIC_LAND_NAMES = frozenset(
    {
        "Plains",
        "Island",
        "Swamp",
        "Mountain",
        "Forest",
        "Snow-Covered Plains",
        "Snow-Covered Island",
        "Snow-Covered Swamp",
        "Snow-Covered Mountain",
        "Snow-Covered Forest",
        "Wastes",
    }
)


def normalize_format(format_name: str) -> str:
    """Lowercase, trimmed format key for table lookups."""
    return format_name.strip().lower()


def get_format_rule(format_name: str) -> FormatRule | None:
    """
    Look up deck size rules for a format.

    Returns:
        The FormatRule, or None when the format has no size constraints.
    """
    return DECK_SIZE_RULES.get(normalize_format(format_name))


def get_max_copies(format_name: str) -> int:
    """Maximum copies of any non-exempt card name for a format."""
    return MAX_NON_BASIC_COPIES.get(normalize_format(format_name), DEFAULT_MAX_COPIES)
