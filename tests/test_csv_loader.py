from datetime import date

import pytest

from workout_analysis.config import get_config
from workout_analysis.errors import LoadError, RowParseError
from workout_analysis.io.csv_loader import (
    parse_duration,
    parse_optional_number,
    parse_start_date,
    parse_workout_csv,
    read_export_text,
)

from conftest import HEADER, make_csv


@pytest.mark.parametrize("text,expected", [
    ("0:00", 0),
    ("0:45", 45),
    ("1:05", 65),
    ("01:05", 65),
    ("12:59", 779),
    (" 2:30 ", 150),
])
def test_parse_duration_valid(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "65", "1:05:00", "a:05", "1:xx", "-1:05", "1:60", "1.5:00", ":30"])
def test_parse_duration_malformed(text):
    with pytest.raises(RowParseError):
        parse_duration(text)


def test_parse_start_date_keeps_local_calendar_day():
    assert parse_start_date("2024-03-01 23:30:00") == date(2024, 3, 1)
    assert parse_start_date("2024-03-01T23:30:00-05:00") == date(2024, 3, 1)


@pytest.mark.parametrize("text", ["", "   ", "not a date", "NaT", "12:30", "1:05"])
def test_parse_start_date_malformed(text):
    with pytest.raises(RowParseError):
        parse_start_date(text)


def test_parse_optional_number():
    assert parse_optional_number("", "calories") is None
    assert parse_optional_number("  ", "calories") is None
    assert parse_optional_number("312.5", "calories") == 312.5
    with pytest.raises(RowParseError, match="calories"):
        parse_optional_number("lots", "calories")
    with pytest.raises(RowParseError):
        parse_optional_number("-3", "calories")


def test_parse_keeps_only_configured_categories(sample_csv):
    result = parse_workout_csv(sample_csv)
    assert {r.category for r in result.records} == {"Squash", "Hiking"}
    assert len(result.records) == 4
    assert result.total_rows == 5
    assert result.ignored_rows == 1
    assert result.rejected == []


def test_parse_sorts_chronologically():
    text = make_csv([
        "Squash,2024-03-03 10:00:00,,0:30,100,,",
        "Squash,2024-03-01 10:00:00,,0:30,100,,",
        "Squash,2024-03-02 10:00:00,,0:30,100,,",
    ])
    result = parse_workout_csv(text)
    assert [r.date for r in result.records] == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]


def test_parse_same_day_keeps_source_order():
    text = make_csv([
        "Hiking,2024-03-02 08:00:00,,1:00,100,,",
        "Squash,2024-03-01 19:00:00,,0:30,100,,",
        "Squash,2024-03-01 07:00:00,,0:40,100,,",
    ])
    result = parse_workout_csv(text)
    assert [r.row_number for r in result.records] == [2, 3, 1]


def test_parse_builds_typed_record(sample_csv):
    first = parse_workout_csv(sample_csv).records[0]
    assert first.category == "Hiking"
    assert first.date == date(2024, 3, 1)
    assert first.duration_minutes == 150
    assert first.duration_text == "2:30"
    assert first.calories == 650.0
    assert first.avg_heart_rate == 110.0
    assert first.max_heart_rate == 160.0
    assert first.row_number == 2


def test_parse_absent_values_are_none(sample_csv):
    records = parse_workout_csv(sample_csv).records
    hike = [r for r in records if r.date == date(2024, 3, 2)][0]
    assert hike.calories is None
    assert hike.max_heart_rate is None
    assert hike.avg_heart_rate == 105.0


def test_malformed_rows_are_skipped_and_reported(caplog):
    text = make_csv([
        "Squash,2024-03-01 10:00:00,,1:05,300,,150",
        "Squash,2024-03-02 10:00:00,,soon,300,,150",
        "Squash,not-a-date,,0:45,200,,170",
        "Hiking,2024-03-04 10:00:00,,1:00,plenty,,",
    ])
    with caplog.at_level("WARNING"):
        result = parse_workout_csv(text)
    assert [r.row_number for r in result.records] == [1]
    assert [r.row_number for r in result.rejected] == [2, 3, 4]
    assert "duration" in result.rejected[0].reason
    assert result.rejected[1].raw["Start"] == "not-a-date"
    assert "Skipping malformed workout row" in caplog.text


def test_strict_mode_fails_the_load():
    text = make_csv([
        "Squash,2024-03-01 10:00:00,,1:05,300,,150",
        "Squash,2024-03-02 10:00:00,,1h05,300,,150",
    ])
    with pytest.raises(LoadError, match="Row 2"):
        parse_workout_csv(text, strict=True)


def test_strict_mode_from_config():
    get_config().update_settings(strict=True)
    with pytest.raises(LoadError):
        parse_workout_csv(make_csv(["Squash,2024-03-01,,bad,1,,"]))


def test_malformed_rows_in_other_categories_are_ignored():
    result = parse_workout_csv(make_csv(["Running,garbage,,??,,,"]), strict=True)
    assert result.records == []
    assert result.rejected == []
    assert result.ignored_rows == 1


def test_header_is_matched_by_name_not_position():
    text = (
        "Duration,Max. Heart Rate (bpm),Workout Type,Start\n"
        "0:50,155,Squash,2024-05-01 12:00:00\n"
    )
    record = parse_workout_csv(text).records[0]
    assert record.duration_minutes == 50
    assert record.max_heart_rate == 155.0
    assert record.calories is None


def test_header_whitespace_is_ignored():
    text = " Workout Type , Start , Duration \nSquash,2024-05-01,0:50\n"
    assert len(parse_workout_csv(text).records) == 1


def test_quoted_fields():
    text = make_csv(['"Squash","2024-03-01 10:00:00","","1:05","1,200","",""'])
    result = parse_workout_csv(text)
    # A thousands separator is not a number
    assert result.records == []
    assert len(result.rejected) == 1


def test_row_with_extra_field_is_rejected():
    text = make_csv([
        "Squash,2024-03-01 10:00:00,,1:05,1,200,140,150",
        "Squash,2024-03-02 10:00:00,,0:45,200,140,150",
    ])
    result = parse_workout_csv(text)
    assert [r.row_number for r in result.records] == [2]
    assert result.records[0].calories == 200.0
    assert len(result.rejected) == 1
    rejected = result.rejected[0]
    assert rejected.row_number == 1
    assert "Expected 7 fields, found 8" in rejected.reason
    assert rejected.raw["Workout Type"] == "Squash"
    assert rejected.raw["extra"] == "150"


def test_row_with_extra_field_fails_strict_load():
    text = make_csv(["Squash,2024-03-01 10:00:00,,1:05,1,200,140,150"])
    with pytest.raises(LoadError, match="Row 1: Expected 7 fields"):
        parse_workout_csv(text, strict=True)


def test_row_with_extra_field_in_other_category_is_ignored():
    result = parse_workout_csv(make_csv(["Running,2024-03-01 10:00:00,,0:30,1,200,140,150"]), strict=True)
    assert result.rejected == []
    assert result.ignored_rows == 1


def test_time_only_start_is_rejected():
    result = parse_workout_csv(make_csv(["Squash,12:30,,1:05,300,,150"]))
    assert result.records == []
    assert "no date part" in result.rejected[0].reason


def test_short_rows_treat_missing_cells_as_absent():
    text = make_csv(["Squash,2024-03-01 10:00:00,,1:05"])
    record = parse_workout_csv(text).records[0]
    assert record.calories is None
    assert record.max_heart_rate is None


def test_explicit_categories_override_config(sample_csv):
    result = parse_workout_csv(sample_csv, categories=["Running"])
    assert [r.category for r in result.records] == ["Running"]


def test_single_category_string(sample_csv):
    result = parse_workout_csv(sample_csv, categories="Squash")
    assert [r.category for r in result.records] == ["Squash", "Squash"]
    assert result.ignored_rows == 3


@pytest.mark.parametrize("text", ["", "   \n\n"])
def test_empty_export_is_a_load_error(text):
    with pytest.raises(LoadError, match="empty"):
        parse_workout_csv(text)


def test_missing_required_column_is_a_load_error():
    with pytest.raises(LoadError, match="Duration"):
        parse_workout_csv("Workout Type,Start\nSquash,2024-03-01\n")


def test_header_only_export_yields_no_records():
    result = parse_workout_csv(HEADER + "\n")
    assert result.records == []
    assert result.total_rows == 0


def test_read_export_text_strips_bom(tmp_path):
    path = tmp_path / "export.csv"
    path.write_bytes("\ufeffWorkout Type,Start,Duration\n".encode("utf-8"))
    assert read_export_text(path).startswith("Workout Type")


def test_read_export_text_missing_file(tmp_path):
    with pytest.raises(LoadError, match="not found"):
        read_export_text(tmp_path / "nope.csv")
