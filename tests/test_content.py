from nostr_health.nostr.builder import WorkoutBuilder
from nostr_health.nostr.content import (
    extract_embedded_json,
    extract_from_content,
    mentions_completed_run,
    mentions_running,
)


def _extract(content: str, **prefilled) -> WorkoutBuilder:
    workout = WorkoutBuilder(timestamp=1700000000)
    for name, value in prefilled.items():
        workout.fill(name, value, "tags")
    extract_from_content(content, workout)
    return workout


def test_distance_from_text():
    workout = _extract("Great run today, 5.2 miles along the coast")
    assert workout.get("distance") == "5.2 mi"


def test_distance_in_kilometers():
    assert _extract("Did 10 kilometers").get("distance") == "10 km"
    assert _extract("Did 8km").get("distance") == "8 km"


def test_minutes_are_not_miles():
    assert not _extract("Ran for 30 minutes").has("distance")


def test_pace_from_text():
    assert _extract("Pace: 5:30 min/km, felt good").get("pace") == "5:30/km"
    assert _extract("avg pace 8:45 per mile").get("pace") == "8:45/mi"


def test_pace_requires_unit():
    assert not _extract("pace 5:30 today").has("pace")


def test_duration_from_text():
    assert _extract("Time: 25:13").get("duration") == "25:13"
    assert _extract("duration 1:02:03").get("duration") == "1:02:03"


def test_calories_from_text():
    assert _extract("Burned 420 kcal").get("calories") == 420
    assert _extract("Burned 300 cals").get("calories") == 300


def test_structured_values_win_over_text():
    workout = _extract("Ran 7 km in time 40:00, 500 kcal", distance="5 km", calories=350)
    assert workout.get("distance") == "5 km"
    assert workout.get("calories") == 350
    assert workout.get("duration") == "40:00"


def test_embedded_json():
    content = 'Run summary ```{"distance": 5.25, "distanceUnit": "mi", "pace": "8:10/mi", "calories": 512}```'
    workout = _extract(content)
    assert workout.get("distance") == "5.25 mi"
    assert workout.get("pace") == "8:10/mi"
    assert workout.get("calories") == 512


def test_broken_embedded_json_is_ignored():
    workout = _extract("stats {distance: 5, oops}")
    assert not workout.has("distance")
    assert extract_embedded_json("stats {distance: 5, oops}") is None
    assert extract_embedded_json("no braces") is None
    assert extract_embedded_json("} backwards {") is None


def test_running_marker_sets_type_and_title():
    workout = _extract("Posted from RUNSTR")
    assert workout.get("type") == "Running"
    assert workout.get("title") == "Run with RUNSTR"


def test_marker_does_not_override_tags():
    workout = _extract("Morning running session", title="Tempo", type="Intervals")
    assert workout.get("title") == "Tempo"
    assert workout.get("type") == "Intervals"


def test_content_becomes_notes():
    assert _extract("Legs felt heavy").get("notes") == "Legs felt heavy"


def test_empty_content_sets_nothing():
    workout = _extract("")
    assert not workout.has("notes")
    assert not workout.has("type")


def test_vocabulary_helpers():
    assert mentions_running("RUNSTR")
    assert mentions_running("went for a run")
    assert not mentions_running("runstr")
    assert not mentions_running("brunch with friends")
    assert mentions_completed_run("Completed a run with RUNSTR!")


def test_oversized_numbers_in_text_are_ignored():
    workout = _extract("Burned " + "9" * 5000 + " kcal over " + "1" * 50 + " km, time " + "2" * 40)
    assert not workout.has("calories")
    assert not workout.has("distance")
    assert not workout.has("duration")


def test_digits_inside_a_longer_number_are_not_read():
    assert not _extract("Burned 12345678 kcal").has("calories")


def test_non_finite_embedded_json_is_ignored():
    workout = _extract('{"distance": Infinity, "pace": NaN, "calories": 1e400}')
    assert not workout.has("distance")
    assert not workout.has("pace")
    assert not workout.has("calories")


def test_huge_embedded_json_numbers_are_ignored():
    workout = _extract('{"distance": ' + "9" * 400 + ', "pace": -5, "calories": "' + "9" * 400 + '"}')
    assert not workout.has("distance")
    assert not workout.has("pace")
    assert not workout.has("calories")


def test_embedded_json_with_overlong_integer():
    workout = _extract('Summary {"calories": ' + "9" * 5000 + "}")
    assert not workout.has("calories")
