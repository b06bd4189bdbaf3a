"""
Tests for the deck size and copy limit checkers.

Both are pure: the same input always yields the same issues in the same
order.
"""

import logging

import pytest

from lotusflare.legality.checkers import check_deck_size, check_max_copies

RATS_TEXT = "A deck can have any number of cards named Relentless Rats."


class TestCheckDeckSize:
    def test_standard_below_minimum(self) -> None:
        """58 cards in Standard is two short."""
        issue = check_deck_size("standard", 58)

        assert issue == "Deck must have at least 60 cards (currently 58)."
        assert "at least 60" in issue
        assert "currently 58" in issue

    def test_standard_above_minimum_is_fine(self) -> None:
        assert check_deck_size("standard", 75) is None

    def test_commander_exact_size(self) -> None:
        assert check_deck_size("commander", 100) is None
        assert check_deck_size("commander", 101) == (
            "Deck must have exactly 100 cards (currently 101)."
        )

    def test_exact_size_checked_for_undersized_deck(self) -> None:
        assert check_deck_size("oathbreaker", 59) == (
            "Deck must have exactly 60 cards (currently 59)."
        )

    def test_format_lookup_is_case_insensitive(self) -> None:
        assert check_deck_size("Modern", 40) == "Deck must have at least 60 cards (currently 40)."

    def test_unknown_format_is_unconstrained(self) -> None:
        """Formats missing from the table produce no size issue."""
        assert check_deck_size("kitchen table", 7) is None

    def test_custom_format_accepts_any_size(self) -> None:
        assert check_deck_size("custom", 0) is None

    def test_deterministic(self) -> None:
        assert check_deck_size("pauper", 12) == check_deck_size("pauper", 12)


class TestCheckMaxCopies:
    def test_five_bolts_in_modern(self, make_card) -> None:
        """Scenario: 5 copies of a four-of in Modern."""
        issues = check_max_copies("modern", [make_card("Lightning Bolt", 5)])

        assert issues == ["Too many copies of Lightning Bolt (max 4 for this format, found 5)."]

    def test_four_copies_allowed(self, make_card) -> None:
        assert check_max_copies("modern", [make_card("Lightning Bolt", 4)]) == []

    def test_copies_summed_across_printings_and_zones(self, make_card) -> None:
        """Same name in mainboard and sideboard under different printings adds up."""
        cards = [
            make_card("Counterspell", 3, id="mh2-267"),
            make_card("Counterspell", 2, id="tmp-57", is_sideboard=True),
        ]

        issues = check_max_copies("legacy", cards)

        assert issues == ["Too many copies of Counterspell (max 4 for this format, found 5)."]

    def test_names_are_trimmed(self, make_card) -> None:
        cards = [make_card("Opt", 3), make_card(" Opt ", 2, id="other")]

        assert check_max_copies("standard", cards) == [
            "Too many copies of Opt (max 4 for this format, found 5)."
        ]

    @pytest.mark.parametrize("name", ["Island", "Snow-Covered Swamp", "Wastes"])
    def test_basic_lands_never_flagged(self, make_card, name: str) -> None:
        """Basic lands ignore copy limits even in singleton formats."""
        cards = [make_card(name, 40), make_card(name, 40, id="other", is_sideboard=True)]

        assert check_max_copies("commander", cards) == []
        assert check_max_copies("modern", cards) == []

    def test_unlimited_copies_card_exempt(self, make_card) -> None:
        """Relentless Rats can be run at 99 copies."""
        cards = [make_card("Relentless Rats", 99, oracle_text=RATS_TEXT)]

        assert check_max_copies("commander", cards) == []

    def test_unlimited_flag_taken_from_first_occurrence(self, make_card) -> None:
        """A later printing without text still inherits the exemption."""
        cards = [
            make_card("Relentless Rats", 10, oracle_text=RATS_TEXT),
            make_card("Relentless Rats", 10, id="promo"),
        ]

        assert check_max_copies("standard", cards) == []

    def test_singleton_formats(self, make_card) -> None:
        cards = [make_card("Sol Ring", 2)]

        assert check_max_copies("Commander", cards) == [
            "Too many copies of Sol Ring (max 1 for this format, found 2)."
        ]

    def test_issues_in_first_occurrence_order(self, make_card) -> None:
        cards = [
            make_card("Shock", 5),
            make_card("Opt", 6),
            make_card("Shock", 1, id="shock-2"),
        ]

        issues = check_max_copies("pioneer", cards)

        assert issues == [
            "Too many copies of Shock (max 4 for this format, found 6).",
            "Too many copies of Opt (max 4 for this format, found 6).",
        ]
        assert check_max_copies("pioneer", cards) == issues

    def test_empty_name_skipped_with_warning(
        self, make_card, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Lines without a name are logged and ignored, never raised."""
        cards = [make_card("", 9, id="mystery"), make_card("  ", 9, id="blank")]

        with caplog.at_level(logging.WARNING, logger="lotusflare.legality.checkers"):
            issues = check_max_copies("modern", cards)

        assert issues == []
        assert "mystery" in caplog.text
        assert "blank" in caplog.text
