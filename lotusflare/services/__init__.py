from lotusflare.services.legality_checker import Debouncer, LegalityChecker
from lotusflare.services.restriction_client import (
    RestrictionClient,
    RestrictionLookup,
    RestrictionLookupError,
    RestrictionNetworkError,
    RestrictionServerError,
)
from lotusflare.services.restrictions import LegalityEntry, find_restricted_cards

__all__ = [
    "Debouncer",
    "LegalityChecker",
    "LegalityEntry",
    "RestrictionClient",
    "RestrictionLookup",
    "RestrictionLookupError",
    "RestrictionNetworkError",
    "RestrictionServerError",
    "find_restricted_cards",
]
