"""Unit tests for the record parser."""

from datetime import date, time

import pytest

from pulse_tracker.domain.filters import FilterCommand, ItemType
from pulse_tracker.domain.health import Appointment, Bmi, Period
from pulse_tracker.domain.workout import Gym, Run
from pulse_tracker.infrastructure.parsers.record_parser import (
    RecordParser,
    format_date,
    format_line,
    stored_optional,
)
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import ErrorKind, TrackerError

GYM_LINE = "gym:2:11-11-1997:bench press:4:10:10,20,30,40:squats:2:5:20,30"


@pytest.fixture
def parser() -> RecordParser:
    """Create a parser that uses UTC for future-date checks."""
    return RecordParser("UTC")


def test_split_bmi_input(parser: RecordParser) -> None:
    """Test splitting a BMI command into its raw fields."""
    result = parser.split_bmi_input("/h:bmi /height:1.71 /weight:60.50 /date:19-03-2024")
    if result != ("1.71", "60.50", "19-03-2024"):
        raise AssertionError(f"Unexpected split {result}")


def test_split_bmi_input_rejects_extra_flags(parser: RecordParser) -> None:
    """Test the slash limit on BMI commands."""
    with pytest.raises(TrackerError) as exc_info:
        parser.split_bmi_input("/h:bmi /height:1.71 /weight:60.50 /date:19-03-2024 /extra:1")
    if exc_info.value.message != messages.TOO_MANY_SLASHES_ERROR:
        raise AssertionError("Expected the too-many-slashes message")


def test_split_bmi_input_missing_flag(parser: RecordParser) -> None:
    """Test that a missing flag is insufficient input."""
    with pytest.raises(TrackerError) as exc_info:
        parser.split_bmi_input("/h:bmi /height:1.71 /date:19-03-2024")
    if exc_info.value.kind != ErrorKind.INSUFFICIENT_INPUT:
        raise AssertionError("Expected INSUFFICIENT_INPUT")


def test_parse_bmi_command(parser: RecordParser) -> None:
    """Test building a BMI record from a command."""
    bmi = parser.parse_bmi_command("/h:bmi /height:1.71 /weight:60.50 /date:19-03-2024")
    if bmi != Bmi(height=1.71, weight=60.5, date=date(2024, 3, 19)):
        raise AssertionError(f"Unexpected BMI {bmi!r}")
    if bmi.bmi_score != 20.69:
        raise AssertionError(f"Expected score 20.69, got {bmi.bmi_score}")
    if bmi.category != "normal":
        raise AssertionError(f"Expected 'normal', got {bmi.category}")


def test_parse_appointment_command(parser: RecordParser) -> None:
    """Test building an appointment, including one in the future."""
    appointment = parser.parse_appointment_command(
        "/h:appointment /date:30-03-2999 /time:19:30 /description:knee surgery"
    )
    if appointment.date != date(2999, 3, 30) or appointment.time != time(19, 30):
        raise AssertionError(f"Unexpected appointment {appointment!r}")
    if appointment.description != "knee surgery":
        raise AssertionError("Expected description 'knee surgery'")


def test_split_period_input(parser: RecordParser) -> None:
    """Test that the end date is optional."""
    if parser.split_period_input("/h:period /start:01-04-2024") != ("01-04-2024", None):
        raise AssertionError("Expected no end date")
    if parser.split_period_input("/h:period /start:01-04-2024 /end:05-04-2024") != (
        "01-04-2024",
        "05-04-2024",
    ):
        raise AssertionError("Expected an end date")

    with pytest.raises(TrackerError):
        parser.split_period_input("/h:period /start:01-04-2024 /end:05-04-2024 /x:1")


def test_parse_period_command_rejects_future_start(parser: RecordParser) -> None:
    """Test that a period cannot start in the future."""
    with pytest.raises(TrackerError) as exc_info:
        parser.parse_period_command("/h:period /start:01-04-2999")
    if exc_info.value.message != messages.START_DATE_IN_FUTURE_ERROR:
        raise AssertionError("Expected the future start message")


def test_split_run_input(parser: RecordParser) -> None:
    """Test run splitting with and without a date."""
    result = parser.split_run_input("/e:run /d:5.15 /t:25:24")
    if result != ("25:24", "5.15", None):
        raise AssertionError(f"Unexpected split {result}")

    result = parser.split_run_input("/e:run /d:5.15 /t:25:24 /date:29-04-2024")
    if result != ("25:24", "5.15", "29-04-2024"):
        raise AssertionError(f"Unexpected split {result}")

    with pytest.raises(TrackerError):
        parser.split_run_input("/e:run /d:5.15 /t:25:24 /date:29-04-2024 /x:1")


def test_parse_run_command(parser: RecordParser) -> None:
    """Test building a run and its pace."""
    run = parser.parse_run_command("/e:run /d:5.15 /t:25:24 /date:29-04-2024")
    if run != Run(distance=5.15, time="25:24", date=date(2024, 4, 29)):
        raise AssertionError(f"Unexpected run {run!r}")
    if run.pace != "4:56/km":
        raise AssertionError(f"Expected pace 4:56/km, got {run.pace}")


def test_split_gym_input(parser: RecordParser) -> None:
    """Test gym splitting."""
    if parser.split_gym_input("/e:gym /n:2") != ("2", None):
        raise AssertionError("Expected two stations without a date")
    if parser.split_gym_input("/e:gym /n:2 /date:29-04-2024") != ("2", "29-04-2024"):
        raise AssertionError("Expected two stations with a date")

    with pytest.raises(TrackerError) as exc_info:
        parser.split_gym_input("/e:gym /date:29-04-2024")
    if exc_info.value.kind != ErrorKind.INSUFFICIENT_INPUT:
        raise AssertionError("Expected INSUFFICIENT_INPUT without /n:")


def test_split_station_input(parser: RecordParser) -> None:
    """Test splitting a station line."""
    result = parser.split_station_input("Bench Press /s:2 /r:4 /w:10,20")
    if result != ("Bench Press", "2", "4", "10,20"):
        raise AssertionError(f"Unexpected split {result}")

    with pytest.raises(TrackerError):
        parser.split_station_input("Bench Press /s:2 /r:4 /w:10,20 /x:1")


def test_parse_gym_command_reads_each_station(parser: RecordParser) -> None:
    """Test that one line is read per declared station."""
    lines = iter(["Bench Press /s:2 /r:4 /w:10,20", "Squat /s:1 /r:8 /w:60"])
    asked: list[int] = []

    def read_station(number: int) -> str:
        asked.append(number)
        return next(lines)

    gym = parser.parse_gym_command("/e:gym /n:2 /date:29-04-2024", read_station)

    if gym is None:
        raise AssertionError("Expected a gym session")
    if asked != [1, 2]:
        raise AssertionError(f"Expected stations 1 and 2 to be asked, got {asked}")
    if [station.name for station in gym.stations] != ["Bench Press", "Squat"]:
        raise AssertionError("Unexpected station names")
    if gym.stations[0].weights != [10, 20] or gym.stations[0].reps != 4:
        raise AssertionError("Unexpected first station")


def test_parse_gym_command_reprompts_bad_station(parser: RecordParser) -> None:
    """Test that a rejected station line is reported and asked for again."""
    lines = iter(["Bench Press /s:2 /r:4 /w:10", "Bench Press /s:2 /r:4 /w:10,20"])
    asked: list[int] = []
    reported: list[TrackerError] = []

    def read_station(number: int) -> str:
        asked.append(number)
        return next(lines)

    gym = parser.parse_gym_command("/e:gym /n:1", read_station, reported.append)

    if gym is None or len(gym.stations) != 1:
        raise AssertionError("Expected one station")
    if asked != [1, 1]:
        raise AssertionError(f"Expected station 1 to be asked twice, got {asked}")
    if len(reported) != 1:
        raise AssertionError("Expected one reported error")
    if reported[0].message != messages.GYM_WEIGHTS_INCORRECT_NUMBER_ERROR:
        raise AssertionError("Expected the weights count message")


def test_parse_gym_command_back_discards(parser: RecordParser) -> None:
    """Test that 'back' aborts the whole gym entry."""
    lines = iter(["Bench Press /s:2 /r:4 /w:10,20", "back"])

    gym = parser.parse_gym_command("/e:gym /n:3", lambda _: next(lines))

    if gym is not None:
        raise AssertionError("Expected the gym session to be discarded")


def test_parse_filter_input(parser: RecordParser) -> None:
    """Test history and latest filters."""
    if parser.parse_filter_input("history /item:workouts", FilterCommand.HISTORY) != ItemType.WORKOUTS:
        raise AssertionError("Expected workouts")

    with pytest.raises(TrackerError) as exc_info:
        parser.parse_filter_input("latest /item:workouts", FilterCommand.LATEST)
    if not exc_info.value.message.startswith(messages.INVALID_ITEM_ERROR):
        raise AssertionError("Expected the invalid item message")

    with pytest.raises(TrackerError) as exc_info:
        parser.parse_filter_input("latest /item:", FilterCommand.LATEST)
    if exc_info.value.message != messages.INSUFFICIENT_LATEST_FILTER_ERROR:
        raise AssertionError("Expected the missing filter message")


def test_parse_delete_input(parser: RecordParser) -> None:
    """Test delete parsing and its slash limit."""
    if parser.parse_delete_input("delete /item:appointment /index:1") != (ItemType.APPOINTMENT, 1):
        raise AssertionError("Expected (appointment, 1)")

    with pytest.raises(TrackerError) as exc_info:
        parser.parse_delete_input("delete /item:appointment /index:1/")
    if exc_info.value.message != messages.TOO_MANY_SLASHES_ERROR:
        raise AssertionError("Expected the too-many-slashes message")


def test_date_formatting_uses_na_for_missing() -> None:
    """Test the NA marker for absent dates."""
    if format_date(None) != "NA":
        raise AssertionError("Expected 'NA'")
    if format_date(date(2024, 4, 29)) != "29-04-2024":
        raise AssertionError("Expected '29-04-2024'")
    if stored_optional("NA") is not None:
        raise AssertionError("Expected None for 'NA'")
    if stored_optional("29-04-2024") != "29-04-2024":
        raise AssertionError("Expected the field to pass through")


def test_format_line() -> None:
    """Test the stored form of each record kind."""
    expected = {
        "BMI:1.71:60.50:20.69:19-03-2024": Bmi(height=1.71, weight=60.5, date=date(2024, 3, 19)),
        "APPOINTMENT:30-03-2024:19.30:dental checkup": Appointment(
            date=date(2024, 3, 30), time=time(19, 30), description="dental checkup"
        ),
        "PERIOD:01-04-2024:05-04-2024:5": Period(
            start_date=date(2024, 4, 1), end_date=date(2024, 4, 5)
        ),
        "PERIOD:01-05-2024:NA:NA": Period(start_date=date(2024, 5, 1)),
        "RUN:5.15:25.24:NA": Run(distance=5.15, time="25:24"),
        "RUN:21.10:1.45.30:29-04-2024": Run(distance=21.1, time="1:45:30", date=date(2024, 4, 29)),
    }
    for line, record in expected.items():
        if format_line(record) != line:
            raise AssertionError(f"Expected {line!r}, got {format_line(record)!r}")


def test_parse_gym_line(parser: RecordParser) -> None:
    """Test parsing a stored gym line with two stations."""
    gym = parser.parse_gym_line(GYM_LINE)

    if gym.date != date(1997, 11, 11):
        raise AssertionError(f"Unexpected date {gym.date}")
    if len(gym.stations) != 2:
        raise AssertionError(f"Expected 2 stations, got {len(gym.stations)}")

    bench, squats = gym.stations
    if (bench.name, bench.number_of_sets, bench.reps, bench.weights) != (
        "bench press",
        4,
        10,
        [10, 20, 30, 40],
    ):
        raise AssertionError(f"Unexpected first station {bench!r}")
    if (squats.name, squats.number_of_sets, squats.reps, squats.weights) != (
        "squats",
        2,
        5,
        [20, 30],
    ):
        raise AssertionError(f"Unexpected second station {squats!r}")


def test_gym_line_survives_format_and_parse(parser: RecordParser) -> None:
    """Test that a formatted gym line parses back to the same session."""
    gym = Gym()
    gym.add_station("bench press", 10, [10, 20, 30, 40])
    gym.add_station("squats", 5, [20, 30])

    line = format_line(gym)
    if line != "GYM:2:NA:bench press:4:10:10,20,30,40:squats:2:5:20,30":
        raise AssertionError(f"Unexpected line {line!r}")
    if parser.parse_gym_line(line) != gym:
        raise AssertionError("Expected the parsed gym to equal the original")


@pytest.mark.parametrize(
    "line",
    [
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:squats:2:5",
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:squats:2:5:",
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:" + "A" * 35 + ":2:5:20,30",
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:aa;:2:5:20,30",
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:squats:a:5:20,30",
        "gym:2:11-11-1997:bench press:4:10:10,20,30,40:squats:2:5:20",
        "gym:3:NA:bench press:1:10:10",
        "gym::NA:bench press:1:10:10",
        "gym:1::bench press:1:10:10",
        "gym:1",
    ],
)
def test_parse_gym_line_rejects_malformed(parser: RecordParser, line: str) -> None:
    """Test that malformed stored gym lines are rejected."""
    with pytest.raises(TrackerError):
        parser.parse_gym_line(line)


def test_parse_gym_line_station_count_mismatch(parser: RecordParser) -> None:
    """Test that a declared station count must match the stations present."""
    with pytest.raises(TrackerError) as exc_info:
        parser.parse_gym_line("GYM:3:NA:bench press:1:10:10")
    if exc_info.value.message != messages.LOAD_GYM_STATION_COUNT_ERROR:
        raise AssertionError("Expected the station count message")


def test_parse_stored_lines(parser: RecordParser) -> None:
    """Test parsing stored lines of every other kind."""
    bmi = parser.parse_bmi_line("BMI:1.71:60.50:20.69:19-03-2024")
    if bmi != Bmi(height=1.71, weight=60.5, date=date(2024, 3, 19)):
        raise AssertionError(f"Unexpected BMI {bmi!r}")

    appointment = parser.parse_appointment_line("APPOINTMENT:30-03-2024:19.30:dental checkup")
    if appointment.time != time(19, 30):
        raise AssertionError(f"Unexpected time {appointment.time}")

    period = parser.parse_period_line("PERIOD:01-05-2024:NA:NA")
    if not period.is_open:
        raise AssertionError("Expected an open period")

    run = parser.parse_run_line("RUN:21.10:1.45.30:NA")
    if run != Run(distance=21.1, time="1:45:30"):
        raise AssertionError(f"Unexpected run {run!r}")

    with pytest.raises(TrackerError):
        parser.parse_run_line("RUN:21.10:1.45.30")
    with pytest.raises(TrackerError):
        parser.parse_bmi_line("RUN:1.71:60.50:20.69:19-03-2024")
