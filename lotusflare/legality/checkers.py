"""
Structural legality checkers.

Four independent pure functions, each validating one axis of deck
legality and returning human-readable issue strings:

- check_deck_size: mainboard size against the format's size rule
- check_max_copies: per-name copy limits across all zones
- check_commander_rules: command zone and color identity for Commander
- check_oathbreaker_rules: Oathbreaker + Signature Spell constraints

None of them raise on bad card data; malformed lines are logged and
skipped. run_structural_checks selects the applicable checkers for a
deck snapshot.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from lotusflare.legality.predicates import (
    format_color_identity,
    grants_unlimited_copies,
    has_partner_ability,
    is_basic_land_name,
    is_legal_commander_type,
    is_within_identity,
)
from lotusflare.models.card import CardLegalityInfo, DeckSnapshot
from lotusflare.models.format_rules import (
    COMMANDER_FORMAT,
    OATHBREAKER_FORMAT,
    get_format_rule,
    get_max_copies,
    normalize_format,
)

logger = logging.getLogger(__name__)

MAX_COMMANDERS = 2


def check_deck_size(format_name: str, mainboard_count: int) -> str | None:
    """
    Check the mainboard size against the format's rule.

    Whether command-zone cards are part of mainboard_count is decided by
    the caller.

    Returns:
        One issue string, or None when the size is fine or the format
        has no size rule. An exact-size violation wins over a minimum.
    """
    rule = get_format_rule(format_name)
    if rule is None:
        return None

    if rule.exact is not None and mainboard_count != rule.exact:
        return f"Deck must have exactly {rule.exact} cards (currently {mainboard_count})."
    if rule.min is not None and mainboard_count < rule.min:
        return f"Deck must have at least {rule.min} cards (currently {mainboard_count})."
    return None


def _has_name(card: CardLegalityInfo) -> bool:
    """False (with a warning) for lines whose name is blank."""
    if card.canonical_name.strip():
        return True
    logger.warning("Encountered card with empty name (id: %s). Skipping.", card.id)
    return False


@dataclass
class _NameTally:
    quantity: int
    is_unlimited: bool


def check_max_copies(format_name: str, cards: Sequence[CardLegalityInfo]) -> list[str]:
    """
    Check per-name copy limits.

    Copies are summed by canonical name across every zone and printing.
    Basic lands and cards whose text allows any number of copies are exempt.

    Args:
        format_name: Target format (case-insensitive)
        cards: All deck lines, including sideboard and command zone

    Returns:
        Issues in order of each name's first appearance
    """
    max_copies = get_max_copies(format_name)
    tallies: dict[str, _NameTally] = {}

    for card in cards:
        if not _has_name(card):
            continue
        name = card.canonical_name.strip()
        if is_basic_land_name(name):
            continue

        tally = tallies.get(name)
        if tally is None:
            # Unlimited permission is intrinsic to the card; first text suffices
            tally = _NameTally(
                quantity=0, is_unlimited=grants_unlimited_copies(name, card.oracle_text)
            )
            tallies[name] = tally
        tally.quantity += card.quantity

    issues: list[str] = []
    for name, tally in tallies.items():
        if tally.is_unlimited:
            continue
        if tally.quantity > max_copies:
            issues.append(
                f"Too many copies of {name} "
                f"(max {max_copies} for this format, found {tally.quantity})."
            )
    return issues


def get_commander_color_identity(commanders: Sequence[CardLegalityInfo]) -> list[str]:
    """Union of the commanders' color identities, first-seen order."""
    identity: dict[str, None] = {}
    for commander in commanders:
        for color in commander.color_identity:
            identity.setdefault(color, None)
    return list(identity)


def _identity_issues(
    cards: Sequence[CardLegalityInfo], identity: Sequence[str], owner: str
) -> list[str]:
    """One issue per non-command-zone card outside the given identity."""
    issues: list[str] = []
    for card in cards:
        if card.is_commander or not _has_name(card):
            continue
        if not is_within_identity(card.color_identity, identity):
            issues.append(
                f"{card.label} ({format_color_identity(card.color_identity)}) is outside "
                f"the {owner} color identity ({format_color_identity(identity)})."
            )
    return issues


def check_commander_rules(cards: Sequence[CardLegalityInfo]) -> list[str]:
    """
    Check Commander command-zone and color identity rules.

    - At least one commander; with none, that is the only issue reported
    - Each commander is a legal commander type and a singleton
    - Two commanders both need a partner-like ability; more than two is illegal
    - Every other card fits inside the union of the commanders' identities
    """
    commanders = [card for card in cards if card.is_commander and _has_name(card)]

    if not commanders:
        return ["Deck must have a commander."]

    issues: list[str] = []
    for commander in commanders:
        if not is_legal_commander_type(commander):
            issues.append(f"{commander.label} is not a legal commander type.")
        if commander.quantity > 1:
            issues.append(f"Commander ({commander.label}) quantity must be 1.")

    if len(commanders) == MAX_COMMANDERS:
        if not all(has_partner_ability(commander) for commander in commanders):
            issues.append(
                "If using two commanders, both must have a suitable pairing ability "
                "(e.g., Partner, Friends forever, specific Partner with)."
            )
    elif len(commanders) > MAX_COMMANDERS:
        issues.append("A deck cannot have more than two commanders.")

    commander_identity = get_commander_color_identity(commanders)
    issues.extend(_identity_issues(cards, commander_identity, "commander's"))
    return issues


def check_oathbreaker_rules(cards: Sequence[CardLegalityInfo]) -> list[str]:
    """
    Check Oathbreaker command-zone and color identity rules.

    The command zone holds one planeswalker (the Oathbreaker) and one
    instant or sorcery (the Signature Spell). Only the Oathbreaker's
    identity constrains the rest of the deck.
    """
    issues: list[str] = []
    command_zone = [card for card in cards if card.is_commander]

    oathbreaker = next(
        (card for card in command_zone if "planeswalker" in card.type_line.lower()), None
    )
    signature_spell = next(
        (
            card
            for card in command_zone
            if "instant" in card.type_line.lower() or "sorcery" in card.type_line.lower()
        ),
        None,
    )

    if len(command_zone) > MAX_COMMANDERS:
        issues.append(
            "An Oathbreaker deck can only have one Oathbreaker and one Signature Spell "
            "in the command zone."
        )
    if oathbreaker is None:
        issues.append("Deck must have a Planeswalker as an Oathbreaker.")
    if signature_spell is None:
        issues.append("Deck must have an Instant or Sorcery as a Signature Spell.")

    if oathbreaker is not None and signature_spell is not None:
        if oathbreaker.quantity > 1:
            issues.append(f"Oathbreaker ({oathbreaker.label}) quantity must be 1.")
        if signature_spell.quantity > 1:
            issues.append(f"Signature Spell ({signature_spell.label}) quantity must be 1.")

        if oathbreaker.id == signature_spell.id:
            issues.append("Oathbreaker and Signature Spell must be different cards.")

        if not is_within_identity(signature_spell.color_identity, oathbreaker.color_identity):
            issues.append(
                f"Signature Spell ({signature_spell.label}, "
                f"{format_color_identity(signature_spell.color_identity)}) must be within "
                f"the Oathbreaker's ({oathbreaker.label}, "
                f"{format_color_identity(oathbreaker.color_identity)}) color identity."
            )

        issues.extend(_identity_issues(cards, oathbreaker.color_identity, "Oathbreaker's"))
    elif command_zone and not issues:
        others = [
            card
            for card in command_zone
            if card is not oathbreaker and card is not signature_spell
        ]
        if others:
            issues.append(
                "Invalid card(s) designated for the command zone. Must be one Planeswalker "
                "(Oathbreaker) and one Instant/Sorcery (Signature Spell)."
            )

    return issues


def run_structural_checks(
    snapshot: DeckSnapshot, include_commanders_in_count: bool = True
) -> list[str]:
    """
    Run every structural checker that applies to the snapshot's format.

    Deck size and copy limits always run; commander and oathbreaker rules
    run only for their own format.
    """
    issues: list[str] = []

    size_issue = check_deck_size(
        snapshot.format, snapshot.mainboard_count(include_commanders=include_commanders_in_count)
    )
    if size_issue:
        issues.append(size_issue)

    issues.extend(check_max_copies(snapshot.format, snapshot.cards))

    format_key = normalize_format(snapshot.format)
    if format_key == COMMANDER_FORMAT:
        issues.extend(check_commander_rules(snapshot.cards))
    elif format_key == OATHBREAKER_FORMAT:
        issues.extend(check_oathbreaker_rules(snapshot.cards))

    return issues
