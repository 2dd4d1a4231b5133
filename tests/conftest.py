from datetime import date

import pytest

from workout_analysis.config import reset_config
from workout_analysis.models.types import WorkoutRecord

HEADER = "Workout Type,Start,End,Duration,Active Energy (kcal),Avg. Heart Rate (bpm),Max. Heart Rate (bpm)"

SAMPLE_ROWS = [
    "Squash,2024-03-03 18:00:00,2024-03-03 19:05:00,1:05,300,140,150",
    "Hiking,2024-03-01 09:00:00,2024-03-01 11:30:00,2:30,650,110,160",
    "Running,2024-03-02 07:00:00,2024-03-02 07:30:00,0:30,250,150,175",
    "Squash,2024-03-01 18:00:00,2024-03-01 18:45:00,0:45,200,145,170",
    "Hiking,2024-03-02 09:00:00,2024-03-02 10:15:00,1:15,,105,",
]


def make_csv(rows, header=HEADER) -> str:
    return "\n".join([header] + list(rows)) + "\n"


def make_record(day, minutes=60, category="Squash", calories=None, max_hr=None, row_number=0) -> WorkoutRecord:
    return WorkoutRecord(
        date=day,
        duration_minutes=minutes,
        category=category,
        calories=calories,
        max_heart_rate=max_hr,
        row_number=row_number,
    )


@pytest.fixture(autouse=True)
def fresh_config():
    # The CLI and several tests mutate the global configuration
    yield reset_config()
    reset_config()


@pytest.fixture
def sample_csv() -> str:
    return make_csv(SAMPLE_ROWS)


@pytest.fixture
def sample_path(tmp_path, sample_csv):
    path = tmp_path / "workouts.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path


@pytest.fixture
def squash_records():
    return [
        make_record(date(2024, 3, 1), 65, calories=300.0, max_hr=150.0, row_number=1),
        make_record(date(2024, 3, 2), 45, calories=200.0, max_hr=170.0, row_number=2),
    ]
