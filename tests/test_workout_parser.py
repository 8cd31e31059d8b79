import logging

import pytest

from nostr_health.exceptions import InvalidEventError, NostrHealthError
from nostr_health.models import Measurement, NostrEvent, WorkoutRecord
from nostr_health.nostr import parse_workout_event, parse_workouts


class TestParseWorkoutEvent:
    def test_runstr_event(self, runstr_event, settings):
        workout = parse_workout_event(runstr_event, settings)

        assert isinstance(workout, WorkoutRecord)
        assert workout.timestamp == 1700000000
        assert workout.id == "run-2023-11-14"
        assert workout.title == "Morning Run"
        assert workout.type == "Running"
        assert workout.distance == "5 km"
        assert workout.duration == "30:00"
        assert workout.pace == "6:00/km"
        assert workout.calories == 350
        assert workout.route_data == "dGhpc2lzYW5lbmNvZGVkcm91dGVwb2x5bGluZQ=="
        assert workout.heart_rate == Measurement(value=152, unit="bpm")
        assert workout.source == "RUNSTR"
        assert workout.tags == ["running", "cardio"]
        assert workout.notes == "Completed a run with RUNSTR! 🏃"
        assert workout.estimated_fields == []

    def test_nip101e_event(self, nip101e_event, settings):
        workout = parse_workout_event(nip101e_event, settings)

        assert workout.distance == "10.00 km"
        assert workout.duration == "50:00"
        assert workout.start_time == 1700000000
        assert workout.end_time == 1700003000
        assert workout.pace == "5:00/km"
        assert workout.type == "cardio"
        assert workout.heart_rate == Measurement(value=148, unit="bpm")
        assert workout.max_heart_rate == Measurement(value=171, unit="bpm")
        assert workout.cadence == Measurement(value=172, unit="spm")
        assert workout.elevation_gain == 85
        assert workout.avg_speed == 12.0
        assert workout.max_speed == 15.5
        assert workout.weather.condition == "cloudy"
        assert workout.completed is True
        assert workout.source == "Garmin"
        assert [split.pace for split in workout.splits] == ["4:55/km", None]
        # no calorie tag, so calories come from the burn-rate estimate
        assert workout.calories == 500
        assert workout.estimated_fields == ["calories"]

    def test_minimal_event(self, make_event, settings):
        workout = parse_workout_event(
            make_event(tags=[["distance", "10"], ["duration", "3000"]]), settings
        )
        assert workout.pace == "5:00/km"
        assert workout.calories == 500
        assert workout.is_estimated("calories")
        assert not workout.is_estimated("pace")

    def test_duration_only_event(self, make_event, settings):
        workout = parse_workout_event(make_event(tags=[["duration", "3600"]]), settings)
        assert workout.duration == "1:00:00"
        assert workout.distance == "~8.0 km (est.)"
        assert workout.pace == "7:30/km (est.)"
        assert workout.calories == 600

    def test_completed_run_without_data(self, make_event, settings):
        workout = parse_workout_event(make_event(content="Completed a run with RUNSTR!"), settings)
        assert workout.type == "Running"
        assert workout.title == "Run with RUNSTR"
        assert workout.duration == "N/A"
        assert workout.distance == "N/A"
        assert workout.pace is None
        assert workout.calories is None

    def test_time_range_beats_duration_tag(self, make_event, settings):
        workout = parse_workout_event(
            make_event(tags=[["start", "1000"], ["end", "4600"], ["duration", "1800"]]), settings
        )
        assert workout.duration == "1:00:00"

    def test_time_range_beats_content(self, make_event, settings):
        workout = parse_workout_event(
            make_event(content="Easy run, time 25:00", tags=[["start", "1000"], ["end", "2800"]]),
            settings,
        )
        assert workout.duration == "30:00"

    def test_time_range_beats_exercise_seconds(self, make_event, settings):
        workout = parse_workout_event(
            make_event(
                tags=[["start", "1000"], ["end", "2800"], ["exercise", "id", "wss://r", "5", "1200"]]
            ),
            settings,
        )
        assert workout.duration == "30:00"
        assert workout.distance == "5 km"
        assert workout.calories == 1200
        assert workout.pace == "6:00/km"

    def test_distance_tag_repeated_in_exercise_tag(self, make_event, settings):
        workout = parse_workout_event(
            make_event(tags=[["distance", "42", "km"], ["exercise", "id", "wss://r", "42", "14400", "5:41"]]),
            settings,
        )
        assert workout.distance == "42 km"
        assert workout.duration == "4:00:00"
        assert workout.pace == "5:41/km"
        assert workout.calories == 2400
        assert workout.estimated_fields == ["calories"]

    @pytest.mark.parametrize(
        "tags, content",
        [
            ([["speed_avg", "nan"]], ""),
            ([["calories", "9" * 400]], ""),
            ([["duration", "9" * 400]], ""),
            ([["pace", "9" * 400]], ""),
            ([], '{"calories": 1e400}'),
            ([], '{"pace": Infinity}'),
            ([], "9" * 5000 + " kcal"),
            ([["start", "0"], ["end", "9" * 400]], ""),
        ],
    )
    def test_garbage_numbers_do_not_raise(self, make_event, settings, tags, content):
        workout = parse_workout_event(make_event(tags=tags, content=content), settings)
        assert workout.timestamp == 1700000000
        assert workout.calories is None
        assert workout.pace is None

    def test_bare_digit_content_duration_is_not_estimated_from(self, make_event, settings):
        workout = parse_workout_event(make_event(content="Easy jog, time 45"), settings)
        assert workout.duration == "45"
        assert workout.distance is None
        assert workout.calories is None

    def test_time_range_fills_duration(self, make_event, settings):
        workout = parse_workout_event(make_event(tags=[["start", "1000"], ["end", "2800"]]), settings)
        assert workout.duration == "30:00"

    def test_content_fills_missing_fields(self, make_event, settings):
        workout = parse_workout_event(
            make_event(content="Ran 5.2 miles, time 45:30, burned 520 kcal"), settings
        )
        assert workout.distance == "5.2 mi"
        assert workout.duration == "45:30"
        assert workout.calories == 520
        assert workout.pace == "8:45/mi"

    def test_event_model_input(self, runstr_event, settings):
        event = NostrEvent.model_validate(runstr_event)
        assert parse_workout_event(event, settings) == parse_workout_event(runstr_event, settings)

    def test_parsing_is_idempotent(self, nip101e_event, settings):
        first = parse_workout_event(nip101e_event, settings)
        second = parse_workout_event(nip101e_event, settings)
        assert first.to_dict() == second.to_dict()

    def test_malformed_tags_do_not_raise(self, make_event, settings):
        workout = parse_workout_event(
            make_event(tags=[[], ["exercise"], ["split", "a"], ["pace", ""], ["heart_rate_avg", "x"]]),
            settings,
        )
        assert workout.timestamp == 1700000000
        assert workout.heart_rate is None
        assert workout.splits is None

    def test_missing_event(self, settings):
        with pytest.raises(InvalidEventError):
            parse_workout_event(None, settings)

    def test_not_an_event(self, settings):
        with pytest.raises(InvalidEventError, match="list"):
            parse_workout_event([1, 2, 3], settings)

    def test_missing_created_at(self, settings):
        with pytest.raises(NostrHealthError):
            parse_workout_event({"content": "", "tags": []}, settings)

    def test_to_dict_uses_camel_case(self, nip101e_event, settings):
        data = parse_workout_event(nip101e_event, settings).to_dict()
        assert data["startTime"] == 1700000000
        assert data["heartRate"] == {"value": 148, "unit": "bpm"}
        assert data["estimatedFields"] == ["calories"]
        assert "routeData" not in data


class TestParseWorkouts:
    def test_newest_first(self, make_event, settings):
        events = [
            make_event(tags=[["d", "old"]], created_at=100),
            make_event(tags=[["d", "new"]], created_at=300),
            make_event(tags=[["d", "mid"]], created_at=200),
        ]
        assert [w.id for w in parse_workouts(events, settings)] == ["new", "mid", "old"]

    def test_other_kinds_are_skipped(self, make_event, settings):
        events = [make_event(tags=[["d", "run"]]), make_event(kind=1351, content="80")]
        assert [w.id for w in parse_workouts(events, settings)] == ["run"]

    def test_invalid_events_are_skipped(self, make_event, settings, caplog):
        events = [make_event(tags=[["d", "ok"]]), None, {"tags": []}]
        with caplog.at_level(logging.WARNING):
            workouts = parse_workouts(events, settings)
        assert [w.id for w in workouts] == ["ok"]
        assert "Skipped 2 invalid event(s)" in caplog.text

    def test_empty_input(self, settings):
        assert parse_workouts([], settings) == []
