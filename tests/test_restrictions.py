import json

from lotusflare.services.restrictions import LegalityEntry, find_restricted_cards, parse_legalities


def _entry(name: str, legalities, quantity: int = 1, printing_id: str = "") -> LegalityEntry:
    return LegalityEntry(
        name=name,
        printing_id=printing_id or f"id-{name}",
        quantity=quantity,
        legalities=legalities,
    )


class TestFindRestrictedCards:
    def test_all_legal(self) -> None:
        report = find_restricted_cards(
            "modern",
            [_entry("Lightning Bolt", {"modern": "legal"}), _entry("Opt", {"modern": "legal"})],
        )

        assert report.is_legal
        assert report.illegal_cards == ()

    def test_banned_and_not_legal_flagged(self) -> None:
        report = find_restricted_cards(
            "modern",
            [
                _entry("Oko, Thief of Crowns", {"modern": "banned"}),
                _entry("Black Lotus", {"modern": "not_legal"}),
                _entry("Opt", {"modern": "legal"}),
            ],
        )

        assert not report.is_legal
        assert [(c.name, c.status) for c in report.illegal_cards] == [
            ("Oko, Thief of Crowns", "banned"),
            ("Black Lotus", "not_legal"),
        ]

    def test_restricted_single_copy_allowed(self) -> None:
        report = find_restricted_cards(
            "vintage", [_entry("Ancestral Recall", {"vintage": "restricted"})]
        )

        assert report.is_legal

    def test_restricted_copies_summed_across_printings(self) -> None:
        report = find_restricted_cards(
            "vintage",
            [
                _entry("Ancestral Recall", {"vintage": "restricted"}, printing_id="lea"),
                _entry("Ancestral Recall", {"vintage": "restricted"}, printing_id="2ed"),
            ],
        )

        assert [(c.name, c.printing_id, c.status) for c in report.illegal_cards] == [
            ("Ancestral Recall", "lea", "restricted")
        ]

    def test_missing_format_is_not_legal(self) -> None:
        report = find_restricted_cards("pauper", [_entry("Sol Ring", {"commander": "legal"})])

        assert report.illegal_cards[0].status == "not_legal"

    def test_json_string_legalities(self) -> None:
        """Stored legalities arrive as JSON text."""
        report = find_restricted_cards(
            "Legacy", [_entry("Brainstorm", json.dumps({"legacy": "legal"}))]
        )

        assert report.is_legal

    def test_unparseable_legalities_count_as_not_legal(self) -> None:
        report = find_restricted_cards("legacy", [_entry("Broken", "{not json")])

        assert report.illegal_cards[0].status == "not_legal"

    def test_report_wire_shape(self) -> None:
        report = find_restricted_cards(
            "modern", [_entry("Oko", {"modern": "banned"}, printing_id="eld")]
        )

        assert report.to_dict() == {
            "is_legal": False,
            "illegal_cards": [{"name": "Oko", "scryfall_id": "eld", "status": "banned"}],
        }


class TestParseLegalities:
    def test_none_is_empty(self) -> None:
        assert parse_legalities(None) == {}

    def test_non_object_json(self) -> None:
        assert parse_legalities("[1, 2]") is None
