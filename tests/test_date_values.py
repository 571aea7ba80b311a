import arrow
import pytest

from slugsync.fields import DateFormat, parse_date_value

NOW = arrow.Arrow(2026, 3, 9, 14, 5, 7)


@pytest.mark.parametrize(
    "text",
    ["February 28th, 2025", "DateFebruary 28th, 2025", "february-28th-2025", "FEBRUARY 28 2025"],
)
def test_natural_language_dates_keep_seconds(text: str) -> None:
    result = parse_date_value(text, now=NOW)

    assert result.success
    assert result.format is DateFormat.NATURAL
    assert result.value == "28022025-140507"


def test_iso_date_discards_its_own_time_of_day() -> None:
    result = parse_date_value("2024-01-15T23:59:00Z", now=NOW)

    assert result.format is DateFormat.ISO
    assert result.value == "15012024-1405"


def test_dotted_date_is_day_first() -> None:
    result = parse_date_value("05.11.24", now=NOW)

    assert result.format is DateFormat.DD_MM_YY
    assert result.value == "05112024-1405"


def test_slashed_date_is_month_first_when_ambiguous() -> None:
    assert parse_date_value("03/04/2025", now=NOW).value == "04032025-1405"


def test_slashed_date_is_day_first_when_first_number_exceeds_twelve() -> None:
    assert parse_date_value("31/12/2024", now=NOW).value == "31122024-1405"


def test_natural_language_beats_numeric_patterns() -> None:
    result = parse_date_value("March 3rd, 2024", now=NOW)
    assert result.format is DateFormat.NATURAL


@pytest.mark.parametrize("text", ["", "   ", "not a date", "Smarch 3, 2024", "2024-02-30"])
def test_unparseable_text_fails_softly(text: str) -> None:
    result = parse_date_value(text, now=NOW)

    assert result.success is False
    assert result.value is None


def test_defaults_to_current_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    from slugsync.fields import dates

    monkeypatch.setattr(dates, "local_now", lambda: NOW)
    assert parse_date_value("2024-07-01").value == "01072024-1405"
