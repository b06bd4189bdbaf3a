"""
Legality API endpoints.

Exposes the structural checkers for an in-memory deck and the
server-side banned/restricted evaluation.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from lotusflare.config import settings
from lotusflare.legality.checkers import run_structural_checks
from lotusflare.models.card import CardLegalityInfo, DeckSnapshot
from lotusflare.models.verdict import LegalityStatus
from lotusflare.services.restrictions import LegalityEntry, find_restricted_cards

router = APIRouter(prefix="/legality", tags=["legality"])


class CardLineRequest(BaseModel):
    """One deck line submitted for checking."""

    id: str = ""
    canonical_name: str
    quantity: int = Field(default=1, ge=1)
    is_commander: bool = False
    is_sideboard: bool = False
    type_line: str = ""
    color_identity: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    oracle_text: str = ""
    display_name: str = ""

    def to_card(self) -> CardLegalityInfo:
        return CardLegalityInfo(
            id=self.id,
            canonical_name=self.canonical_name,
            quantity=self.quantity,
            is_commander=self.is_commander,
            is_sideboard=self.is_sideboard,
            type_line=self.type_line,
            color_identity=tuple(self.color_identity),
            keywords=tuple(self.keywords),
            oracle_text=self.oracle_text,
            display_name=self.display_name,
        )


class CheckRequest(BaseModel):
    """Deck submitted for structural checks."""

    format: str = Field(..., min_length=1)
    include_commanders_in_count: bool | None = None
    cards: list[CardLineRequest] = Field(default_factory=list)


class CheckResponse(BaseModel):
    """Structural checks result."""

    format: str
    status: LegalityStatus
    issues: list[str]


class RestrictionCardRequest(BaseModel):
    """A card with its stored per-format legalities."""

    name: str
    printing_id: str = ""
    quantity: int = Field(default=1, ge=1)
    legalities: dict[str, str] | str | None = None


class RestrictionRequest(BaseModel):
    format: str = Field(..., min_length=1)
    cards: list[RestrictionCardRequest] = Field(default_factory=list)


class IllegalCardResponse(BaseModel):
    name: str
    scryfall_id: str
    status: str


class RestrictionResponse(BaseModel):
    is_legal: bool
    illegal_cards: list[IllegalCardResponse]


@router.post("/check", response_model=CheckResponse)
async def check_deck(request: CheckRequest) -> CheckResponse:
    """
    Run the structural checkers against a submitted deck.

    The banned/restricted lookup is not part of this endpoint, so decks
    are checked without their stored id; see /legality/restrictions.
    """
    include_commanders = (
        request.include_commanders_in_count
        if request.include_commanders_in_count is not None
        else settings.count_commanders_in_deck_size
    )
    snapshot = DeckSnapshot(
        format=request.format,
        cards=tuple(card.to_card() for card in request.cards),
    )
    issues = run_structural_checks(snapshot, include_commanders_in_count=include_commanders)

    return CheckResponse(
        format=request.format,
        status=LegalityStatus.ILLEGAL if issues else LegalityStatus.LEGAL,
        issues=issues,
    )


@router.post("/restrictions", response_model=RestrictionResponse)
async def check_restrictions(request: RestrictionRequest) -> dict[str, Any]:
    """
    Flag banned, restricted, or not-legal cards for a format.

    Same response shape as the per-deck restriction lookup.
    """
    report = find_restricted_cards(
        request.format,
        (
            LegalityEntry(
                name=card.name,
                printing_id=card.printing_id,
                quantity=card.quantity,
                legalities=card.legalities,
            )
            for card in request.cards
        ),
    )
    return report.to_dict()
