"""Unit tests for document date extraction."""

from datetime import date

import pytest

from depotfiler.domain.dates import (
    find_document_date,
    is_plausible_date,
    parse_numeric_date,
    parse_textual_date,
    resolve_month,
)


class TestResolveMonth:
    """Tests for month name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Januar", 1),
            ("Jänner", 1),
            ("Feb", 2),
            ("März", 3),
            ("Mrz.", 3),
            ("Maerz", 3),
            ("MAI", 5),
            ("June", 6),
            ("Sept.", 9),
            ("Okt", 10),
            ("October", 10),
            ("Dez", 12),
        ],
    )
    def test_known_names(self, name: str, expected: int) -> None:
        assert resolve_month(name) == expected

    def test_unknown_name(self) -> None:
        assert resolve_month("Foo") is None
        assert resolve_month("Zeitraum") is None


class TestParsing:
    """Tests for single date parsing."""

    def test_numeric_german(self) -> None:
        assert parse_numeric_date("31.07.2025") == date(2025, 7, 31)

    def test_numeric_iso(self) -> None:
        assert parse_numeric_date("2025-07-31") == date(2025, 7, 31)

    def test_numeric_invalid_calendar_date(self) -> None:
        assert parse_numeric_date("31.02.2025") is None
        assert parse_numeric_date("2025-13-01") is None

    @pytest.mark.parametrize(
        "value", [date(2000, 1, 1), date(2024, 2, 29), date(2025, 12, 31)]
    )
    def test_formatting_roundtrip(self, value: date) -> None:
        assert parse_numeric_date(value.strftime("%d.%m.%Y")) == value
        assert parse_numeric_date(value.isoformat()) == value

    def test_textual(self) -> None:
        assert parse_textual_date("1", "Juli", "2025") == date(2025, 7, 1)

    def test_textual_unknown_month(self) -> None:
        assert parse_textual_date("1", "Foo", "2025") is None

    def test_textual_invalid_day(self) -> None:
        assert parse_textual_date("30", "Februar", "2025") is None


class TestCascade:
    """Tests for the date cascade."""

    def test_labeled_numeric_range_takes_end(self) -> None:
        text = "Depotauszug\nDATUM 01.07.2025 - 31.07.2025\n"
        assert find_document_date(text) == date(2025, 7, 31)

    def test_labeled_range_with_bis(self) -> None:
        assert find_document_date("Datum: 01.07.2025 bis 31.07.2025") == date(
            2025, 7, 31
        )

    def test_labeled_textual_range_takes_end(self) -> None:
        text = "Datum: 1. Juli 2025 - 31. Juli 2025"
        assert find_document_date(text) == date(2025, 7, 31)

    def test_labeled_textual_date(self) -> None:
        assert find_document_date("DATUM 15. März 2024") == date(2024, 3, 15)

    def test_labeled_textual_date_english(self) -> None:
        assert find_document_date("Date 01 Aug 2025") == date(2025, 8, 1)

    @pytest.mark.parametrize(
        "text",
        [
            "DATUM 03.05.2024",
            "Erstellt am 2024-05-03",
            "Created on: 03.05.2024",
            "Stand 03.05.2024",
            "as of 2024-05-03",
        ],
    )
    def test_labeled_numeric_date(self, text: str) -> None:
        assert find_document_date(text) == date(2024, 5, 3)

    def test_label_beats_unlabeled_range(self) -> None:
        text = "Zeitraum 01.07.2025 - 31.07.2025\nDATUM 05.08.2025\n"
        assert find_document_date(text) == date(2025, 8, 5)

    def test_unlabeled_range_takes_end(self) -> None:
        assert find_document_date("Zeitraum 01.01.2024 - 30.06.2024") == date(
            2024, 6, 30
        )

    def test_unlabeled_textual_date(self) -> None:
        assert find_document_date("Abrechnung vom 3 Aug. 2025") == date(2025, 8, 3)

    def test_invalid_candidate_skipped(self) -> None:
        text = "Buchung 31.02.2025 und 15.03.2025"
        assert find_document_date(text) == date(2025, 3, 15)

    def test_invalid_labeled_textual_falls_through(self) -> None:
        text = "DATUM 31. Februar 2025\nValuta 15.03.2025"
        assert find_document_date(text) == date(2025, 3, 15)

    def test_no_date(self) -> None:
        assert find_document_date("Kontoinhaber Max Mustermann") is None
        assert find_document_date("") is None


class TestPlausibility:
    """Tests for the year bound."""

    def test_bounds(self) -> None:
        today = date(2026, 10, 19)
        assert is_plausible_date(date(2000, 1, 1), today) is True
        assert is_plausible_date(date(2031, 12, 31), today) is True
        assert is_plausible_date(date(1999, 12, 31), today) is False
        assert is_plausible_date(date(2032, 1, 1), today) is False

    def test_defaults_to_today(self) -> None:
        assert is_plausible_date(date.today()) is True
