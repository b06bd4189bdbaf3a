"""
Scryfall card ingestion.

Card records reach us either straight from the Scryfall API or from the
backend's storage, where list and object fields are kept as JSON strings
and image_uris may be a string, an object, or missing in favour of
per-face images. Everything is normalized here, once, into
CardLegalityInfo so the legality engine only ever sees one shape.

Card objects: https://scryfall.com/docs/api/cards
"""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypedDict

from lotusflare.models.card import CardLegalityInfo

logger = logging.getLogger(__name__)

FACE_SEPARATOR = "\n//\n"
TYPE_LINE_SEPARATOR = " // "


class ImageUris(TypedDict, total=False):
    """Image URLs for a printing; any subset may be present."""

    small: str
    normal: str
    large: str
    png: str
    art_crop: str
    border_crop: str


def _decode_json(value: Any, name: str, field: str) -> Any:
    """Decode a field that may still be a JSON string."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("Failed to parse %s for card %s", field, name)
        return None


def _string_list(value: Any, name: str, field: str) -> list[str]:
    decoded = _decode_json(value, name, field)
    if not isinstance(decoded, list):
        return []
    return [str(item) for item in decoded if item]


def _card_faces(card: Mapping[str, Any], name: str) -> list[dict[str, Any]]:
    faces = _decode_json(card.get("card_faces"), name, "card_faces")
    if not isinstance(faces, list):
        return []
    return [face for face in faces if isinstance(face, dict)]


def extract_oracle_text(card: Mapping[str, Any]) -> str:
    """Oracle text, joining faces for multi-faced cards without a top-level text."""
    text = card.get("oracle_text")
    if text:
        return str(text)
    faces = _card_faces(card, str(card.get("name", "")))
    return FACE_SEPARATOR.join(str(f["oracle_text"]) for f in faces if f.get("oracle_text"))


def extract_type_line(card: Mapping[str, Any]) -> str:
    type_line = card.get("type_line")
    if type_line:
        return str(type_line)
    faces = _card_faces(card, str(card.get("name", "")))
    return TYPE_LINE_SEPARATOR.join(str(f["type_line"]) for f in faces if f.get("type_line"))


def normalize_image_uris(card: Mapping[str, Any]) -> ImageUris:
    """
    Collapse the different image_uris shapes into one dict.

    A bare string is treated as the "normal" image. Cards without
    top-level images fall back to their first face.
    """
    name = str(card.get("name", ""))
    raw = card.get("image_uris")

    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped.startswith("{"):
            raw = _decode_json(stripped, name, "image_uris")
        elif stripped:
            return ImageUris(normal=stripped)
        else:
            raw = None

    if isinstance(raw, dict):
        return ImageUris(**{k: str(v) for k, v in raw.items() if k in ImageUris.__annotations__})

    for face in _card_faces(card, name):
        face_uris = face.get("image_uris")
        if isinstance(face_uris, dict):
            return normalize_image_uris({"name": name, "image_uris": face_uris})

    return ImageUris()


def card_info_from_scryfall(
    card: Mapping[str, Any],
    *,
    quantity: int = 1,
    is_commander: bool = False,
    is_sideboard: bool = False,
    canonical_name: str | None = None,
) -> CardLegalityInfo:
    """
    Build a CardLegalityInfo from a Scryfall card object.

    Args:
        card: Scryfall card object or its stored form
        quantity: Copies on this deck line
        is_commander: Line sits in the command zone
        is_sideboard: Line sits in the sideboard
        canonical_name: English name when the printing is localized;
            defaults to the card's own name

    Returns:
        Normalized card info
    """
    printed_name = str(card.get("printed_name") or card.get("name") or "")
    name = canonical_name if canonical_name is not None else str(card.get("name") or "")

    return CardLegalityInfo(
        id=str(card.get("id") or card.get("scryfall_id") or ""),
        canonical_name=name,
        quantity=quantity,
        is_commander=is_commander,
        is_sideboard=is_sideboard,
        type_line=extract_type_line(card),
        color_identity=tuple(_string_list(card.get("color_identity"), name, "color_identity")),
        keywords=tuple(_string_list(card.get("keywords"), name, "keywords")),
        oracle_text=extract_oracle_text(card),
        display_name=printed_name if printed_name != name else "",
    )


def deck_lines_from_entries(entries: Iterable[Mapping[str, Any]]) -> list[CardLegalityInfo]:
    """
    Convert deck entries into legality lines.

    Each entry looks like {"quantity", "is_commander", "is_sideboard",
    "is_maybeboard", "card": {...}}. Maybeboard entries are not part of
    the deck and are dropped, as are entries without a card or with a
    quantity below one. A missing quantity means one copy.
    """
    lines: list[CardLegalityInfo] = []
    for entry in entries:
        if entry.get("is_maybeboard"):
            continue
        card = entry.get("card")
        if not isinstance(card, Mapping):
            logger.warning("Deck entry without card data skipped: %s", entry.get("card_id"))
            continue

        raw_quantity = entry.get("quantity")
        try:
            quantity = 1 if raw_quantity is None else int(raw_quantity)
        except (TypeError, ValueError):
            quantity = 0
        if quantity < 1:
            logger.warning(
                "Deck entry for %s with quantity %r skipped", card.get("name"), raw_quantity
            )
            continue

        is_commander = bool(entry.get("is_commander"))
        lines.append(
            card_info_from_scryfall(
                card,
                quantity=quantity,
                is_commander=is_commander,
                is_sideboard=bool(entry.get("is_sideboard")) and not is_commander,
            )
        )
    return lines
