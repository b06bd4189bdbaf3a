from lotusflare.legality.checkers import (
    check_commander_rules,
    check_deck_size,
    check_max_copies,
    check_oathbreaker_rules,
    get_commander_color_identity,
    run_structural_checks,
)
from lotusflare.legality.predicates import (
    format_color_identity,
    grants_unlimited_copies,
    has_partner_ability,
    is_basic_land_name,
    is_legal_commander_type,
)

__all__ = [
    "check_commander_rules",
    "check_deck_size",
    "check_max_copies",
    "check_oathbreaker_rules",
    "format_color_identity",
    "get_commander_color_identity",
    "grants_unlimited_copies",
    "has_partner_ability",
    "is_basic_land_name",
    "is_legal_commander_type",
    "run_structural_checks",
]
