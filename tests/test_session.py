"""Unit tests for interactive command handling."""

import pytest

from pulse_tracker.infrastructure.parsers.record_parser import RecordParser
from pulse_tracker.services.record_store import RecordStore
from pulse_tracker.services.session import Session
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import ErrorKind, TrackerError


class FakeConsole:
    """Collects echoed output and answers prompts from a script."""

    def __init__(self, answers: list[str] | None = None) -> None:
        self.output: list[str] = []
        self.answers = list(answers or [])

    def echo(self, message: str) -> None:
        self.output.append(message)

    def prompt(self, _: str) -> str:
        return self.answers.pop(0)


def _session(answers: list[str] | None = None) -> tuple[Session, FakeConsole]:
    console = FakeConsole(answers)
    session = Session(RecordStore(), RecordParser("UTC"), console.echo, console.prompt)
    return session, console


def test_exit_stops_session() -> None:
    """Test that 'exit' ends the loop and other commands do not."""
    session, _ = _session()

    if session.handle("exit") is not False:
        raise AssertionError("Expected 'exit' to stop the session")
    if session.handle("help") is not True:
        raise AssertionError("Expected 'help' to continue the session")


def test_unknown_command_is_reported() -> None:
    """Test that unknown commands are reported without raising."""
    session, console = _session()

    session.handle("jump /h:bmi")

    if console.output != [f"Error: {messages.UNKNOWN_COMMAND_ERROR}"]:
        raise AssertionError(f"Unexpected output {console.output}")


def test_health_commands_add_records() -> None:
    """Test adding BMI, appointment and period entries."""
    session, console = _session()

    session.handle("health /h:bmi /height:1.71 /weight:60.50 /date:19-03-2024")
    session.handle("health /h:appointment /date:30-03-2024 /time:19:30 /description:dental checkup")
    session.handle("health /h:period /start:01-03-2024 /end:05-03-2024")

    store = session.store
    if (len(store.bmis), len(store.appointments), len(store.periods)) != (1, 1, 1):
        raise AssertionError("Expected one record of each health kind")
    if not all(line.startswith("Added: ") for line in console.output):
        raise AssertionError(f"Unexpected output {console.output}")


def test_invalid_input_leaves_store_unchanged() -> None:
    """Test that a rejected command adds nothing."""
    session, console = _session()

    session.handle("health /h:bmi /height:1.71 /weight:60.50 /date:29-02-2023")

    if not session.store.is_empty():
        raise AssertionError("Expected an empty store")
    if console.output != [f"Error: {messages.INVALID_LEAP_YEAR_ERROR}"]:
        raise AssertionError(f"Unexpected output {console.output}")


def test_prediction_output() -> None:
    """Test the prediction command output."""
    session, console = _session()
    for start, end in [("01-01-2024", "05-01-2024"), ("29-01-2024", "02-02-2024"), ("26-02-2024", "01-03-2024")]:
        session.handle(f"health /h:period /start:{start} /end:{end}")
    console.output.clear()

    session.handle("health /h:prediction")

    if console.output[-1] != "Your next cycle is predicted to start on 25-03-2024.":
        raise AssertionError(f"Unexpected prediction line {console.output[-1]!r}")
    if len(console.output) != 5:
        raise AssertionError(f"Expected a heading, three cycles and the prediction, got {console.output}")


def test_gym_command_prompts_for_stations() -> None:
    """Test interactive gym entry, including a re-prompted station."""
    session, console = _session(["Bench Press /s:2 /r:4 /w:10", "Bench Press /s:2 /r:4 /w:10,20"])

    session.handle("workout /e:gym /n:1 /date:29-03-2024")

    if len(session.store.gyms) != 1:
        raise AssertionError("Expected one gym session")
    if console.output[0] != f"Error: {messages.GYM_WEIGHTS_INCORRECT_NUMBER_ERROR}":
        raise AssertionError(f"Expected the rejected station to be reported, got {console.output}")


def test_gym_back_discards_session() -> None:
    """Test that 'back' discards a partially entered gym session."""
    session, console = _session(["back"])

    session.handle("workout /e:gym /n:2")

    if session.store.gyms:
        raise AssertionError("Expected no gym session")
    if console.output != ["Gym session discarded."]:
        raise AssertionError(f"Unexpected output {console.output}")


def test_history_latest_and_delete() -> None:
    """Test listing, latest and deleting runs."""
    session, console = _session()
    session.handle("workout /e:run /d:5.15 /t:25:24 /date:01-04-2024")
    session.handle("workout /e:run /d:3.00 /t:15:10")
    console.output.clear()

    session.handle("history /item:run")
    if len(console.output) != 2 or not console.output[0].startswith("1. Run 01-04-2024"):
        raise AssertionError(f"Unexpected history {console.output}")

    console.output.clear()
    session.handle("latest /item:run")
    if not console.output[0].startswith("Run NA"):
        raise AssertionError(f"Unexpected latest {console.output}")

    console.output.clear()
    session.handle("delete /item:run /index:3")
    if console.output != [f"Error: {messages.INDEX_OUT_OF_RANGE_ERROR}"]:
        raise AssertionError(f"Unexpected output {console.output}")

    session.handle("delete /item:run /index:1")
    if len(session.store.runs) != 1:
        raise AssertionError("Expected one run to remain")

    console.output.clear()
    session.handle("history /item:bmi")
    if console.output != ["No bmi entries found."]:
        raise AssertionError(f"Unexpected output {console.output}")


def test_fatal_errors_propagate() -> None:
    """Test that storage errors are not swallowed by the session."""
    session, _ = _session()

    with pytest.raises(TrackerError) as exc_info:
        session._report(TrackerError(ErrorKind.FILE_WRITE, messages.SAVE_ERROR))
    if not exc_info.value.kind.is_fatal:
        raise AssertionError("Expected a fatal error kind")
