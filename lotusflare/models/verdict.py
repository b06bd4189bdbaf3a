"""
Legality verdict produced by the orchestrator.

A verdict is rebuilt from scratch on every evaluation cycle; consumers
read it whole and never patch it.
"""

from dataclasses import dataclass, field
from enum import Enum


class LegalityStatus(str, Enum):
    """Lifecycle of a deck's legality verdict."""

    UNKNOWN = "unknown"
    CHECKING = "checking"
    LEGAL = "legal"
    ILLEGAL = "illegal"


@dataclass(frozen=True, slots=True)
class LegalityVerdict:
    """
    Merged result of one evaluation cycle.

    Attributes:
        status: Current lifecycle state
        issues: Human-readable issues in the order they were found
        client_checked_format: Format the local checks last ran for
        api_checked_format: Format the remote lookup last succeeded for
    """

    status: LegalityStatus = LegalityStatus.UNKNOWN
    issues: tuple[str, ...] = field(default_factory=tuple)
    client_checked_format: str | None = None
    api_checked_format: str | None = None

    @property
    def is_legal(self) -> bool:
        return self.status is LegalityStatus.LEGAL

    def is_stale_for(self, format_name: str) -> bool:
        """True when neither pass has run for the given format yet."""
        return self.client_checked_format != format_name and self.api_checked_format != format_name

    @classmethod
    def resolved(
        cls,
        issues: list[str],
        client_checked_format: str | None,
        api_checked_format: str | None,
    ) -> "LegalityVerdict":
        """Final verdict for a completed cycle: illegal iff any issue was found."""
        return cls(
            status=LegalityStatus.ILLEGAL if issues else LegalityStatus.LEGAL,
            issues=tuple(issues),
            client_checked_format=client_checked_format,
            api_checked_format=api_checked_format,
        )
