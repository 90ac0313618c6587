"""
Interactive session command handling.

Routes one command line at a time to the record parser and the store.
Non-fatal errors are reported and the command is dropped; fatal errors
propagate to the caller.
"""

import logging
from collections.abc import Callable

from pulse_tracker.domain.filters import FilterCommand
from pulse_tracker.infrastructure.parsers.fields import extract_field
from pulse_tracker.infrastructure.parsers.record_parser import (
    HEALTH_FLAG,
    WORKOUT_FLAG,
    RecordParser,
    format_date,
)
from pulse_tracker.services.record_store import Record, RecordStore
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import ErrorKind, TrackerError, invalid

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

HELP_TEXT = """Commands:
  health /h:bmi /height:HEIGHT /weight:WEIGHT /date:DD-MM-YYYY
  health /h:period /start:DD-MM-YYYY [/end:DD-MM-YYYY]
  health /h:prediction
  health /h:appointment /date:DD-MM-YYYY /time:HH:MM /description:TEXT
  workout /e:run /d:DISTANCE /t:[HH:]MM:SS [/date:DD-MM-YYYY]
  workout /e:gym /n:NUMBER_OF_STATIONS [/date:DD-MM-YYYY]
  history /item:run|gym|workouts|bmi|period|appointment|all
  latest /item:run|gym|bmi|period|appointment
  delete /item:run|gym|bmi|period|appointment /index:INDEX
  help
  exit"""


class Session:
    """Dispatcher for the commands of one interactive session."""

    def __init__(
        self,
        store: RecordStore,
        parser: RecordParser,
        echo: Callable[[str], None],
        prompt: Callable[[str], str],
    ) -> None:
        """
        Initialize the session.

        Args:
            store: The session's record store.
            parser: Parser for live commands.
            echo: Writes one message to the user.
            prompt: Asks the user for one line of input.
        """
        self.store = store
        self.parser = parser
        self.echo = echo
        self.prompt = prompt

    def handle(self, line: str) -> bool:
        """
        Run one command.

        Returns:
            False once the user asks to exit, True otherwise.

        Raises:
            TrackerError: For fatal error kinds only.
        """
        line = line.strip()
        command = line.split(" ", 1)[0].lower()
        if command == EXIT_COMMAND:
            return False

        try:
            match command:
                case "help":
                    self.echo(HELP_TEXT)
                case "health":
                    self._handle_health(line)
                case "workout":
                    self._handle_workout(line)
                case "history":
                    self._show_history(line)
                case "latest":
                    self._show_latest(line)
                case "delete":
                    self._delete(line)
                case _:
                    raise invalid(messages.UNKNOWN_COMMAND_ERROR)
        except TrackerError as e:
            self._report(e)
        return True

    def _report(self, error: TrackerError) -> None:
        match error.kind:
            case ErrorKind.INSUFFICIENT_INPUT | ErrorKind.INVALID_INPUT | ErrorKind.OUT_OF_BOUNDS:
                logger.warning(f"Command rejected ({error.kind.value}): {error.message}")
                self.echo(f"Error: {error.message}")
            case ErrorKind.FILE_CREATE | ErrorKind.FILE_READ | ErrorKind.FILE_WRITE | ErrorKind.CONFIGURATION:
                raise error

    def _added(self, record: Record) -> None:
        self.echo(f"Added: {record}")

    def _handle_health(self, line: str) -> None:
        match extract_field(line, HEALTH_FLAG).lower():
            case "bmi":
                self._added(self.store.add(self.parser.parse_bmi_command(line)))
            case "appointment":
                self._added(self.store.add(self.parser.parse_appointment_command(line)))
            case "period":
                self._added(self.store.add(self.parser.parse_period_command(line)))
            case "prediction":
                predicted = self.store.predict_next_period()
                self.echo("Latest cycles:")
                for period in self.store.cycle_summary():
                    self.echo(f"  {period}")
                self.echo(f"Your next cycle is predicted to start on {format_date(predicted)}.")
            case _:
                raise invalid(messages.INVALID_HEALTH_TYPE_ERROR)

    def _handle_workout(self, line: str) -> None:
        match extract_field(line, WORKOUT_FLAG).lower():
            case "run":
                self._added(self.store.add(self.parser.parse_run_command(line)))
            case "gym":
                gym = self.parser.parse_gym_command(line, self._read_station, self._report)
                if gym is None:
                    self.echo("Gym session discarded.")
                    return
                self._added(self.store.add(gym))
            case _:
                raise invalid(messages.INVALID_WORKOUT_TYPE_ERROR)

    def _read_station(self, number: int) -> str:
        return self.prompt(f"Station {number} (NAME /s:SETS /r:REPS /w:WEIGHTS, or 'back')")

    def _show_history(self, line: str) -> None:
        item_type = self.parser.parse_filter_input(line, FilterCommand.HISTORY)
        records = self.store.history(item_type)
        if not records:
            self.echo(f"No {item_type.value} entries found.")
            return
        for index, record in enumerate(records, start=1):
            self.echo(f"{index}. {record}")

    def _show_latest(self, line: str) -> None:
        item_type = self.parser.parse_filter_input(line, FilterCommand.LATEST)
        record = self.store.latest(item_type)
        if record is None:
            self.echo(f"No {item_type.value} entries found.")
            return
        self.echo(str(record))

    def _delete(self, line: str) -> None:
        item_type, index = self.parser.parse_delete_input(line)
        record = self.store.delete_at(item_type, index)
        self.echo(f"Removed {item_type.value} entry {index}: {record}")
