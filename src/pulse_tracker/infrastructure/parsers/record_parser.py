"""
Record parser for live commands and stored data lines.

Turns a flagged command string (e.g. "/h:bmi /height:1.71 /weight:60.50
/date:19-03-2024") or a colon separated data file line into a typed record.
Both forms go through the same validators. Times are written with ":" in
commands and with "." in the data file so that ":" can separate fields.
"""

import datetime as dt
import logging
from collections.abc import Callable
from enum import Enum

from pulse_tracker.domain.filters import ALLOWED_FILTERS, FilterCommand, ItemType
from pulse_tracker.domain.health import Appointment, Bmi, Period
from pulse_tracker.domain.workout import Gym, Run
from pulse_tracker.infrastructure.parsers.fields import count_delimiter, extract_field, has_flag
from pulse_tracker.utils import messages
from pulse_tracker.utils import validation
from pulse_tracker.utils.exceptions import TrackerError, insufficient, invalid
from pulse_tracker.utils.timezone_utils import current_date

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ":"
STORED_TIME_SEPARATOR = "."
DATE_FORMAT = "%d-%m-%Y"
BACK_COMMAND = "back"

# Flags
HEALTH_FLAG = "/h:"
WORKOUT_FLAG = "/e:"
HEIGHT_FLAG = "/height:"
WEIGHT_FLAG = "/weight:"
DATE_FLAG = "/date:"
TIME_FLAG = "/time:"
DESCRIPTION_FLAG = "/description:"
START_FLAG = "/start:"
END_FLAG = "/end:"
DISTANCE_FLAG = "/d:"
RUN_TIME_FLAG = "/t:"
NUMBER_OF_STATIONS_FLAG = "/n:"
SETS_FLAG = "/s:"
REPS_FLAG = "/r:"
WEIGHTS_FLAG = "/w:"
ITEM_FLAG = "/item:"
INDEX_FLAG = "/index:"

# Maximum "/" characters per command
MAX_SLASHES_BMI = 4
MAX_SLASHES_APPOINTMENT = 4
MAX_SLASHES_PERIOD = 3
MAX_SLASHES_STATION = 3
MAX_SLASHES_DELETE = 2
MAX_SLASHES_FILTER = 1
SLASHES_RUN = (3, 4)
SLASHES_GYM = (2, 3)

# Stored gym line: tag, station count, date, then a fixed stride per station
GYM_STATIONS_START = 3
GYM_STATION_STRIDE = 4


class RecordTag(str, Enum):
    """Leading tag of each stored record line."""

    BMI = "BMI"
    APPOINTMENT = "APPOINTMENT"
    PERIOD = "PERIOD"
    RUN = "RUN"
    GYM = "GYM"


def stored_optional(value: str) -> str | None:
    """Map the stored "NA" marker to None, leaving any other field as is."""
    if value == messages.NO_DATE_SPECIFIED:
        return None
    return value


def format_date(value: dt.date | None) -> str:
    """Format a date as DD-MM-YYYY, or "NA" when there is none."""
    if value is None:
        return messages.NO_DATE_SPECIFIED
    return value.strftime(DATE_FORMAT)


def _check_slashes(text: str, maximum: int) -> None:
    if count_delimiter(text) > maximum:
        raise invalid(messages.TOO_MANY_SLASHES_ERROR)


def _optional_field(text: str, flag: str) -> str | None:
    return extract_field(text, flag) if has_flag(text, flag) else None


def _split_line(line: str, tag: RecordTag, field_count: int) -> list[str]:
    fields = [field.strip() for field in line.split(FIELD_SEPARATOR)]
    if len(fields) != field_count:
        raise invalid(messages.LOAD_FIELD_COUNT_ERROR)
    if fields[0].upper() != tag.value:
        raise invalid(messages.LOAD_UNKNOWN_TYPE_ERROR + fields[0])
    return fields


class RecordParser:
    """
    Parser for live commands and stored lines of every record kind.

    Future-date checks use today's date in the configured timezone.
    """

    def __init__(self, timezone: str = "Asia/Singapore") -> None:
        """
        Initialize record parser.

        Args:
            timezone: Timezone that defines "today".
        """
        self.timezone = timezone

    def today(self) -> dt.date:
        return current_date(self.timezone)

    # Live commands

    def split_bmi_input(self, text: str) -> tuple[str, str, str]:
        """Split a BMI command into (height, weight, date)."""
        if not all(has_flag(text, flag) for flag in (HEIGHT_FLAG, WEIGHT_FLAG, DATE_FLAG)):
            raise insufficient(messages.INSUFFICIENT_BMI_PARAMETERS_ERROR)
        _check_slashes(text, MAX_SLASHES_BMI)
        return (
            extract_field(text, HEIGHT_FLAG),
            extract_field(text, WEIGHT_FLAG),
            extract_field(text, DATE_FLAG),
        )

    def parse_bmi_command(self, text: str) -> Bmi:
        height, weight, date = validation.validate_bmi_details(
            *self.split_bmi_input(text), today=self.today()
        )
        return Bmi(height=height, weight=weight, date=date)

    def split_appointment_input(self, text: str) -> tuple[str, str, str]:
        """Split an appointment command into (date, time, description)."""
        if not all(has_flag(text, flag) for flag in (DATE_FLAG, TIME_FLAG, DESCRIPTION_FLAG)):
            raise insufficient(messages.INSUFFICIENT_APPOINTMENT_PARAMETERS_ERROR)
        _check_slashes(text, MAX_SLASHES_APPOINTMENT)
        return (
            extract_field(text, DATE_FLAG),
            extract_field(text, TIME_FLAG),
            extract_field(text, DESCRIPTION_FLAG),
        )

    def parse_appointment_command(self, text: str) -> Appointment:
        date, time, description = validation.validate_appointment_details(
            *self.split_appointment_input(text)
        )
        return Appointment(date=date, time=time, description=description)

    def split_period_input(self, text: str) -> tuple[str, str | None]:
        """Split a period command into (start, end or None)."""
        if not has_flag(text, START_FLAG):
            raise insufficient(messages.INSUFFICIENT_PERIOD_PARAMETERS_ERROR)
        _check_slashes(text, MAX_SLASHES_PERIOD)
        return extract_field(text, START_FLAG), _optional_field(text, END_FLAG)

    def parse_period_command(self, text: str) -> Period:
        start, end = validation.validate_period_details(
            *self.split_period_input(text), today=self.today()
        )
        return Period(start_date=start, end_date=end)

    def split_run_input(self, text: str) -> tuple[str, str, str | None]:
        """Split a run command into (time, distance, date or None)."""
        if not has_flag(text, DISTANCE_FLAG) or not has_flag(text, RUN_TIME_FLAG):
            raise insufficient(messages.INSUFFICIENT_RUN_PARAMETERS_ERROR)
        if count_delimiter(text) not in SLASHES_RUN:
            raise invalid(messages.TOO_MANY_SLASHES_ERROR)
        return (
            extract_field(text, RUN_TIME_FLAG),
            extract_field(text, DISTANCE_FLAG),
            _optional_field(text, DATE_FLAG),
        )

    def parse_run_command(self, text: str) -> Run:
        distance, time, date = validation.validate_run_details(
            *self.split_run_input(text), today=self.today()
        )
        return Run(distance=distance, time=time, date=date)

    def split_gym_input(self, text: str) -> tuple[str, str | None]:
        """Split a gym command into (number of stations, date or None)."""
        if not has_flag(text, NUMBER_OF_STATIONS_FLAG):
            raise insufficient(messages.INSUFFICIENT_GYM_PARAMETERS_ERROR)
        if count_delimiter(text) not in SLASHES_GYM:
            raise invalid(messages.TOO_MANY_SLASHES_ERROR)
        return extract_field(text, NUMBER_OF_STATIONS_FLAG), _optional_field(text, DATE_FLAG)

    def split_station_input(self, text: str) -> tuple[str, str, str, str]:
        """Split a station line "NAME /s:SETS /r:REPS /w:W1,W2" into its fields."""
        _check_slashes(text, MAX_SLASHES_STATION)
        name = text.split("/", 1)[0].strip()
        return (
            name,
            extract_field(text, SETS_FLAG),
            extract_field(text, REPS_FLAG),
            extract_field(text, WEIGHTS_FLAG),
        )

    def parse_station_input(self, text: str, gym: Gym) -> None:
        name, reps, weights = validation.validate_station_details(*self.split_station_input(text))
        gym.add_station(name, reps, weights)

    def parse_gym_command(
        self,
        text: str,
        read_station: Callable[[int], str],
        report: Callable[[TrackerError], None] | None = None,
    ) -> Gym | None:
        """
        Parse a gym command, then read one line per station.

        Args:
            text: The gym command, e.g. "/e:gym /n:2 /date:29-03-2024".
            read_station: Called with the 1-based station number; returns the
                station line entered by the user.
            report: Called with the error when a station line is rejected.
                The same station is then asked for again.

        Returns:
            The completed gym, or None if the user entered "back".
        """
        number_of_stations, date = validation.validate_gym_details(
            *self.split_gym_input(text), today=self.today()
        )
        gym = Gym(date=date)

        station_number = 1
        while station_number <= number_of_stations:
            station_input = read_station(station_number).strip()
            if station_input == BACK_COMMAND:
                logger.info("Gym entry aborted, discarding partial session")
                return None
            try:
                self.parse_station_input(station_input, gym)
            except TrackerError as e:
                logger.warning(f"Rejected station {station_number}: {e.message}")
                if report is not None:
                    report(e)
                continue
            station_number += 1

        return gym

    def parse_filter_input(self, text: str, command: FilterCommand) -> ItemType:
        """Parse the /item: filter of a history or latest command."""
        _check_slashes(text, MAX_SLASHES_FILTER)
        item = extract_field(text, ITEM_FLAG)
        if not item:
            if command == FilterCommand.LATEST:
                raise insufficient(messages.INSUFFICIENT_LATEST_FILTER_ERROR)
            raise insufficient(messages.INSUFFICIENT_HISTORY_FILTER_ERROR)
        return validation.validate_enum_filter(item, ALLOWED_FILTERS[command])

    def parse_delete_input(self, text: str) -> tuple[ItemType, int]:
        """Parse a delete command into (item type, 1-based index)."""
        if not has_flag(text, ITEM_FLAG) or not has_flag(text, INDEX_FLAG):
            raise insufficient(messages.INSUFFICIENT_DELETE_PARAMETERS_ERROR)
        _check_slashes(text, MAX_SLASHES_DELETE)
        return validation.validate_delete_details(
            extract_field(text, ITEM_FLAG),
            extract_field(text, INDEX_FLAG),
            ALLOWED_FILTERS[FilterCommand.DELETE],
        )

    # Stored lines

    def parse_bmi_line(self, line: str) -> Bmi:
        """Parse "BMI:HEIGHT:WEIGHT:SCORE:DATE". The stored score is recomputed."""
        _, height, weight, _, date = _split_line(line, RecordTag.BMI, 5)
        height_value, weight_value, date_value = validation.validate_bmi_details(
            height, weight, date, today=self.today()
        )
        return Bmi(height=height_value, weight=weight_value, date=date_value)

    def parse_appointment_line(self, line: str) -> Appointment:
        """Parse "APPOINTMENT:DATE:HH.MM:DESCRIPTION"."""
        _, date, time, description = _split_line(line, RecordTag.APPOINTMENT, 4)
        date_value, time_value, description_value = validation.validate_appointment_details(
            date, time.replace(STORED_TIME_SEPARATOR, FIELD_SEPARATOR), description
        )
        return Appointment(date=date_value, time=time_value, description=description_value)

    def parse_period_line(self, line: str) -> Period:
        """Parse "PERIOD:START:END:LENGTH" where END and LENGTH may be "NA"."""
        _, start, end, _ = _split_line(line, RecordTag.PERIOD, 4)
        start_date, end_date = validation.validate_period_details(
            start, stored_optional(end), today=self.today()
        )
        return Period(start_date=start_date, end_date=end_date)

    def parse_run_line(self, line: str) -> Run:
        """Parse "RUN:DISTANCE:TIME:DATE" where TIME uses "." and DATE may be "NA"."""
        _, distance, time, date = _split_line(line, RecordTag.RUN, 4)
        distance_value, time_value, run_date = validation.validate_run_details(
            time.replace(STORED_TIME_SEPARATOR, FIELD_SEPARATOR),
            distance,
            stored_optional(date),
            today=self.today(),
        )
        return Run(distance=distance_value, time=time_value, date=run_date)

    def parse_gym_line(self, line: str) -> Gym:
        """
        Parse "GYM:COUNT:DATE:NAME:SETS:REPS:W1,W2,...[:NAME:SETS:REPS:W...]".

        Stations are not length-prefixed; each one takes the next four fields.
        A trailing partial station, or a station count different from COUNT,
        is a format error.
        """
        fields = [field.strip() for field in line.split(FIELD_SEPARATOR)]
        if len(fields) < GYM_STATIONS_START:
            raise invalid(messages.LOAD_GYM_FORMAT_ERROR)
        if fields[0].upper() != RecordTag.GYM.value:
            raise invalid(messages.LOAD_UNKNOWN_TYPE_ERROR + fields[0])

        count, date = fields[1], fields[2]
        if not count:
            raise invalid(messages.LOAD_NUMBER_OF_STATIONS_ERROR)
        if not date:
            raise invalid(messages.INVALID_DATE_ERROR)

        number_of_stations, gym_date = validation.validate_gym_details(
            count,
            stored_optional(date),
            today=self.today(),
        )

        station_fields = fields[GYM_STATIONS_START:]
        if len(station_fields) % GYM_STATION_STRIDE != 0:
            raise invalid(messages.LOAD_GYM_FORMAT_ERROR)

        gym = Gym(date=gym_date)
        for cursor in range(0, len(station_fields), GYM_STATION_STRIDE):
            name, sets, reps, weights = station_fields[cursor : cursor + GYM_STATION_STRIDE]
            station_name, rep_count, weight_list = validation.validate_station_details(
                name, sets, reps, weights
            )
            gym.add_station(station_name, rep_count, weight_list)

        if len(gym.stations) != number_of_stations:
            raise invalid(messages.LOAD_GYM_STATION_COUNT_ERROR)

        return gym

    def line_parsers(self) -> dict[str, Callable[[str], Bmi | Appointment | Period | Run | Gym]]:
        """Stored-line parser for each record tag."""
        return {
            RecordTag.BMI.value: self.parse_bmi_line,
            RecordTag.APPOINTMENT.value: self.parse_appointment_line,
            RecordTag.PERIOD.value: self.parse_period_line,
            RecordTag.RUN.value: self.parse_run_line,
            RecordTag.GYM.value: self.parse_gym_line,
        }


def format_line(record: Bmi | Appointment | Period | Run | Gym) -> str:
    """Serialize a record to its stored line, without a line terminator."""
    if isinstance(record, Bmi):
        parts = [
            RecordTag.BMI.value,
            f"{record.height:.2f}",
            f"{record.weight:.2f}",
            f"{record.bmi_score:.2f}",
            format_date(record.date),
        ]
    elif isinstance(record, Appointment):
        parts = [
            RecordTag.APPOINTMENT.value,
            format_date(record.date),
            record.time.strftime("%H:%M").replace(FIELD_SEPARATOR, STORED_TIME_SEPARATOR),
            record.description,
        ]
    elif isinstance(record, Period):
        length = record.length
        parts = [
            RecordTag.PERIOD.value,
            format_date(record.start_date),
            format_date(record.end_date),
            str(length) if length is not None else messages.NO_DATE_SPECIFIED,
        ]
    elif isinstance(record, Run):
        parts = [
            RecordTag.RUN.value,
            f"{record.distance:.2f}",
            record.time.replace(FIELD_SEPARATOR, STORED_TIME_SEPARATOR),
            format_date(record.date),
        ]
    elif isinstance(record, Gym):
        parts = [RecordTag.GYM.value, str(len(record.stations)), format_date(record.date)]
        for station in record.stations:
            parts.extend(
                [
                    station.name,
                    str(station.number_of_sets),
                    str(station.reps),
                    ",".join(str(weight) for weight in station.weights),
                ]
            )
    else:
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    return FIELD_SEPARATOR.join(parts)
