"""Tests for fintrack.domain.months pure functions."""

from fintrack.domain.months import normalize_text, parse_month_token, parse_year_token


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_strips_accents_and_case(self) -> None:
        """Should lower-case, trim and drop accents."""
        assert normalize_text("  Año ") == "ano"
        assert normalize_text("ACUMULACIÓN") == "acumulacion"


class TestParseYearToken:
    """Tests for parse_year_token."""

    def test_four_digits(self) -> None:
        """Should accept four digits."""
        assert parse_year_token("2024") == 2024

    def test_ignores_non_digits(self) -> None:
        """Should strip surrounding non-digits."""
        assert parse_year_token(" 2024 ") == 2024

    def test_rejects_other_lengths(self) -> None:
        """Should reject years that are not four digits."""
        assert parse_year_token("24") is None
        assert parse_year_token("20245") is None
        assert parse_year_token("") is None
        assert parse_year_token(None) is None


class TestParseMonthToken:
    """Tests for parse_month_token."""

    def test_iso_month(self) -> None:
        """Should accept YYYY-MM."""
        assert parse_month_token("2024-03") == "2024-03"

    def test_year_first_with_slash_and_single_digit(self) -> None:
        """Should accept YYYY/M and zero-pad."""
        assert parse_month_token("2024/3") == "2024-03"

    def test_year_first_ignores_trailing_day(self) -> None:
        """Should resolve a full ISO date to its month."""
        assert parse_month_token("2024-03-15") == "2024-03"

    def test_month_first(self) -> None:
        """Should swap MM/YYYY to canonical form."""
        assert parse_month_token("03/2024") == "2024-03"
        assert parse_month_token("3-2024") == "2024-03"

    def test_english_name_with_year(self) -> None:
        """Should resolve a full English name with year."""
        assert parse_month_token("March 2024") == "2024-03"

    def test_spanish_abbreviation_with_year(self) -> None:
        """Should resolve a Spanish abbreviation with year."""
        assert parse_month_token("dic 2023") == "2023-12"

    def test_accented_name(self) -> None:
        """Should ignore accents and case in month names."""
        assert parse_month_token("SEPTIEMBRE 2024") == "2024-09"
        assert parse_month_token("Setiembre 2024") == "2024-09"

    def test_bare_name_with_separate_year(self) -> None:
        """Should combine a bare name with the year cell."""
        assert parse_month_token("mar", "2024") == "2024-03"
        assert parse_month_token("Enero", "2025") == "2025-01"

    def test_bare_number_with_separate_year(self) -> None:
        """Should treat a bare number as the month when a year is given."""
        assert parse_month_token("3", "2024") == "2024-03"
        assert parse_month_token("12", "2024") == "2024-12"

    def test_bare_name_without_year_fails(self) -> None:
        """Should not resolve a bare name without a year."""
        assert parse_month_token("march") is None

    def test_bare_number_without_year_fails(self) -> None:
        """Should not resolve a bare number without a year."""
        assert parse_month_token("3") is None

    def test_bad_year_token_fails(self) -> None:
        """Should reject a year cell that is not four digits."""
        assert parse_month_token("3", "24") is None
        assert parse_month_token("march", "abc") is None

    def test_unknown_name_fails(self) -> None:
        """Should reject names that are not months."""
        assert parse_month_token("foo 2024") is None

    def test_out_of_range_month_fails(self) -> None:
        """Should reject month numbers outside 1-12."""
        assert parse_month_token("2024-13") is None
        assert parse_month_token("00/2024") is None
        assert parse_month_token("13", "2024") is None

    def test_empty_fails(self) -> None:
        """Should reject empty tokens."""
        assert parse_month_token("") is None
        assert parse_month_token("   ", "2024") is None

    def test_inline_form_wins_over_year_cell(self) -> None:
        """Should use the token's own year when it has one."""
        assert parse_month_token("2023-05", "2024") == "2023-05"
