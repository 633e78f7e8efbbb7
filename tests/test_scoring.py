import pytest

from wellness.scoring import level_for_points, normalize_duration, score


@pytest.mark.parametrize(
    "activity_type, duration, expected",
    [
        ("workout", 0, 0),
        ("workout", 30, 60),
        ("workout", 60, 120),
        ("workout", 90, 120),
        ("meal", None, 10),
        ("meal", 45, 10),
        ("mindfulness", 15, 45),
        ("mindfulness", 200, 600),
        ("sleep", 480, 20),
        ("hydration", None, 5),
        ("weight-log", 30, 5),
        ("", None, 5),
    ],
)
def test_score_table(activity_type, duration, expected):
    assert score(activity_type, duration) == expected


@pytest.mark.parametrize("bad", [-10, None, "abc", "", [], {}, True, float("nan")])
def test_bad_duration_scores_as_zero(bad):
    assert score("workout", bad) == 0
    assert score("mindfulness", bad) == 0


def test_numeric_strings_and_fractions():
    assert normalize_duration("20") == 20
    assert normalize_duration(12.9) == 12
    assert score("mindfulness", "10.5") == 30


def test_level_for_points():
    assert level_for_points(0) == 1
    assert level_for_points(99) == 1
    assert level_for_points(100) == 2
    assert level_for_points(250) == 3
    assert level_for_points(-40) == 1
