from lotusflare.parsers.scryfall import (
    card_info_from_scryfall,
    deck_lines_from_entries,
    normalize_image_uris,
)

__all__ = [
    "card_info_from_scryfall",
    "deck_lines_from_entries",
    "normalize_image_uris",
]
