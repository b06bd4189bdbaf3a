from lotusflare.models.card import CardLegalityInfo, DeckSnapshot
from lotusflare.models.format_rules import (
    BASIC_LAND_NAMES,
    COMMANDER_FORMAT,
    CUSTOM_FORMAT,
    DECK_SIZE_RULES,
    DEFAULT_MAX_COPIES,
    MAX_NON_BASIC_COPIES,
    OATHBREAKER_FORMAT,
    FormatRule,
    get_format_rule,
    get_max_copies,
    normalize_format,
)
from lotusflare.models.restriction import RestrictedCard, RestrictionReport
from lotusflare.models.verdict import LegalityStatus, LegalityVerdict

__all__ = [
    "BASIC_LAND_NAMES",
    "COMMANDER_FORMAT",
    "CUSTOM_FORMAT",
    "CardLegalityInfo",
    "DECK_SIZE_RULES",
    "DEFAULT_MAX_COPIES",
    "DeckSnapshot",
    "FormatRule",
    "LegalityStatus",
    "LegalityVerdict",
    "MAX_NON_BASIC_COPIES",
    "OATHBREAKER_FORMAT",
    "RestrictedCard",
    "RestrictionReport",
    "get_format_rule",
    "get_max_copies",
    "normalize_format",
]
