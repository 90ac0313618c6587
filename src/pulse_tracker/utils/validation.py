"""
Input validation for commands and stored entries.

Every function is pure: it either returns the parsed value or raises a
TrackerError tagged INSUFFICIENT_INPUT or INVALID_INPUT. Composite validators
check one record's raw fields in a fixed order and stop at the first failure.
"""

import datetime as dt
import re
from collections.abc import Iterable

from pulse_tracker.domain.filters import ItemType
from pulse_tracker.domain.health import MAX_DESCRIPTION_LENGTH, MAX_HEIGHT, MAX_WEIGHT
from pulse_tracker.domain.workout import (
    MAX_DISTANCE,
    MAX_SET_WEIGHT,
    MAX_STATION_NAME_LENGTH,
    MAX_STATIONS,
)
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import TrackerError, insufficient, invalid

DATE_REGEX = re.compile(r"^\d{2}-\d{2}-\d{4}$")
TIME_REGEX = re.compile(r"^\d{2}:\d{2}$")
RUN_TIME_REGEX = re.compile(r"^\d{2}:\d{2}$")
RUN_TIME_WITH_HOURS_REGEX = re.compile(r"^\d{1,2}:\d{2}:\d{2}$")
TWO_DP_NUMBER_REGEX = re.compile(r"^\d+\.\d{2}$")
POSITIVE_INTEGER_REGEX = re.compile(r"^0*[1-9]\d*$")
EXERCISE_NAME_REGEX = re.compile(r"^[A-Za-z0-9 ]+$")
DESCRIPTION_REGEX = re.compile(r"^[A-Za-z0-9 .,'!?()\-]+$")
WEIGHTS_REGEX = re.compile(r"^\d+(,\d+)*$")
USER_NAME_REGEX = re.compile(r"^[A-Za-z0-9 .'-]+$")

MIN_YEAR = 1967
MIN_RUN_UNIT = 1
MAX_RUN_UNIT = 59


def _is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def validate_date(value: str) -> dt.date:
    """
    Validate a DD-MM-YYYY date string.

    Args:
        value: Raw date string.

    Returns:
        The parsed date.

    Raises:
        TrackerError: With a message specific to the failing part (format,
            day, month, year, leap year or calendar consistency).
    """
    if not DATE_REGEX.match(value):
        raise invalid(messages.INVALID_DATE_ERROR)

    day, month, year = (int(part) for part in value.split("-"))

    if not 1 <= day <= 31:
        raise invalid(messages.INVALID_DAY_ERROR)
    if not 1 <= month <= 12:
        raise invalid(messages.INVALID_MONTH_ERROR)
    if year < MIN_YEAR:
        raise invalid(messages.INVALID_YEAR_ERROR)
    if month == 2 and day == 29 and not _is_leap_year(year):
        raise invalid(messages.INVALID_LEAP_YEAR_ERROR)

    try:
        return dt.date(year, month, day)
    except ValueError as e:
        raise invalid(messages.INVALID_CALENDAR_DATE_ERROR) from e


def validate_not_future(
    value: dt.date,
    today: dt.date | None = None,
    message: str = messages.DATE_IN_FUTURE_ERROR,
) -> dt.date:
    """Reject a date strictly after today."""
    if value > (today or dt.date.today()):
        raise invalid(message)
    return value


def validate_time_24h(value: str) -> dt.time:
    """Validate a HH:MM time of day."""
    if not TIME_REGEX.match(value):
        raise invalid(messages.INVALID_TIME_ERROR)

    hours, minutes = (int(part) for part in value.split(":"))
    if not 0 <= hours <= 23:
        raise invalid(messages.INVALID_HOURS_ERROR)
    if not 0 <= minutes <= 59:
        raise invalid(messages.INVALID_MINUTES_ERROR)

    return dt.time(hours, minutes)


def validate_run_time(value: str) -> str:
    """
    Validate a run duration in MM:SS or H:MM:SS form.

    Minutes and seconds must both be between 1 and 59. The three-part form
    cannot start with an hour of 0.
    """
    if RUN_TIME_REGEX.match(value):
        hours = None
        minutes, seconds = (int(part) for part in value.split(":"))
    elif RUN_TIME_WITH_HOURS_REGEX.match(value):
        hours, minutes, seconds = (int(part) for part in value.split(":"))
    else:
        raise invalid(messages.INVALID_RUN_TIME_ERROR)

    if not MIN_RUN_UNIT <= minutes <= MAX_RUN_UNIT:
        raise invalid(messages.INVALID_RUN_MINUTE_ERROR)
    if not MIN_RUN_UNIT <= seconds <= MAX_RUN_UNIT:
        raise invalid(messages.INVALID_RUN_SECOND_ERROR)
    if hours == 0:
        raise invalid(messages.INVALID_RUN_HOUR_ERROR)

    return value


def validate_decimal_2dp(value: str, message: str) -> float:
    """Validate a positive number written with exactly two decimal places."""
    if not TWO_DP_NUMBER_REGEX.match(value):
        raise invalid(message)

    number = float(value)
    if number <= 0:
        raise invalid(message)
    return number


def validate_positive_int(value: str, message: str) -> int:
    if not POSITIVE_INTEGER_REGEX.match(value):
        raise invalid(message)
    return int(value)


def validate_enum_filter(value: str, allowed: Iterable[ItemType]) -> ItemType:
    """
    Check a filter string against the item types a command accepts.

    Args:
        value: Raw filter string; matched case-insensitively.
        allowed: Item types accepted at the calling command.

    Returns:
        The matching item type.
    """
    allowed = frozenset(allowed)
    normalized = value.strip().lower()

    for item in allowed:
        if item.value == normalized:
            return item

    names = ", ".join(sorted(item.value for item in allowed))
    raise invalid(messages.INVALID_ITEM_ERROR + names)


def validate_exercise_name(value: str) -> str:
    if not value:
        raise insufficient(messages.EMPTY_EXERCISE_NAME_ERROR)
    if not EXERCISE_NAME_REGEX.match(value):
        raise invalid(messages.INVALID_EXERCISE_NAME_ERROR)
    if len(value) > MAX_STATION_NAME_LENGTH:
        raise invalid(messages.EXERCISE_NAME_LENGTH_ERROR)
    return value


def validate_weights_csv(value: str, expected_count: int) -> list[int]:
    """
    Validate comma separated per-set weights.

    Args:
        value: Raw weights string, e.g. "10,20,30".
        expected_count: Declared number of sets.

    Returns:
        List of weights, one per set.
    """
    if not WEIGHTS_REGEX.match(value):
        raise invalid(messages.INVALID_WEIGHTS_ERROR)

    weights = [int(weight) for weight in value.split(",")]
    if any(weight > MAX_SET_WEIGHT for weight in weights):
        raise invalid(messages.GYM_WEIGHT_LIMIT_ERROR)
    if len(weights) != expected_count:
        raise invalid(messages.GYM_WEIGHTS_INCORRECT_NUMBER_ERROR)

    return weights


def validate_appointment_description(value: str) -> str:
    if len(value) > MAX_DESCRIPTION_LENGTH:
        raise invalid(messages.DESCRIPTION_LENGTH_ERROR)
    if not DESCRIPTION_REGEX.match(value):
        raise invalid(messages.INVALID_DESCRIPTION_ERROR)
    return value


def validate_bmi_details(
    height: str, weight: str, date: str, today: dt.date | None = None
) -> tuple[float, float, dt.date]:
    """
    Validate BMI fields.

    Returns:
        Tuple of (height, weight, date).
    """
    if not height or not weight or not date:
        raise insufficient(messages.INSUFFICIENT_BMI_PARAMETERS_ERROR)

    height_value = validate_decimal_2dp(height, messages.HEIGHT_WEIGHT_INPUT_ERROR)
    weight_value = validate_decimal_2dp(weight, messages.HEIGHT_WEIGHT_INPUT_ERROR)
    if height_value > MAX_HEIGHT:
        raise invalid(messages.HEIGHT_LIMIT_ERROR)
    if weight_value > MAX_WEIGHT:
        raise invalid(messages.WEIGHT_LIMIT_ERROR)

    date_value = validate_not_future(validate_date(date), today)
    return height_value, weight_value, date_value


def validate_appointment_details(
    date: str, time: str, description: str
) -> tuple[dt.date, dt.time, str]:
    """
    Validate appointment fields. Appointments may be in the future.

    Returns:
        Tuple of (date, time, description).
    """
    if not date or not time or not description:
        raise insufficient(messages.INSUFFICIENT_APPOINTMENT_PARAMETERS_ERROR)

    date_value = validate_date(date)
    time_value = validate_time_24h(time)
    return date_value, time_value, validate_appointment_description(description)


def validate_period_details(
    start: str, end: str | None, today: dt.date | None = None
) -> tuple[dt.date, dt.date | None]:
    """
    Validate period fields. The end date is optional.

    Returns:
        Tuple of (start_date, end_date or None).
    """
    if not start or end == "":
        raise insufficient(messages.INSUFFICIENT_PERIOD_PARAMETERS_ERROR)

    try:
        start_date = validate_date(start)
    except TrackerError as e:
        raise invalid(messages.INVALID_START_DATE_ERROR + e.message) from e
    validate_not_future(start_date, today, messages.START_DATE_IN_FUTURE_ERROR)

    if end is None:
        return start_date, None

    try:
        end_date = validate_date(end)
    except TrackerError as e:
        raise invalid(messages.INVALID_END_DATE_ERROR + e.message) from e
    validate_not_future(end_date, today, messages.END_DATE_IN_FUTURE_ERROR)

    if start_date > end_date:
        raise invalid(messages.PERIOD_END_BEFORE_START_ERROR)

    return start_date, end_date


def validate_run_details(
    time: str, distance: str, date: str | None, today: dt.date | None = None
) -> tuple[float, str, dt.date | None]:
    """
    Validate run fields. The date is optional.

    Returns:
        Tuple of (distance, time, date or None).
    """
    if not time or not distance or date == "":
        raise insufficient(messages.INSUFFICIENT_RUN_PARAMETERS_ERROR)

    time_value = validate_run_time(time)
    distance_value = validate_decimal_2dp(distance, messages.INVALID_RUN_DISTANCE_ERROR)
    if distance_value > MAX_DISTANCE:
        raise invalid(messages.INVALID_RUN_DISTANCE_ERROR)

    date_value = None
    if date is not None:
        date_value = validate_not_future(validate_date(date), today)

    return distance_value, time_value, date_value


def validate_gym_details(
    number_of_stations: str, date: str | None, today: dt.date | None = None
) -> tuple[int, dt.date | None]:
    """
    Validate gym session fields. The date is optional.

    Returns:
        Tuple of (number_of_stations, date or None).
    """
    if not number_of_stations or date == "":
        raise insufficient(messages.INSUFFICIENT_GYM_PARAMETERS_ERROR)

    count = validate_positive_int(number_of_stations, messages.INVALID_NUMBER_OF_STATIONS_ERROR)
    if count > MAX_STATIONS:
        raise invalid(messages.INVALID_NUMBER_OF_STATIONS_ERROR)

    date_value = None
    if date is not None:
        date_value = validate_not_future(validate_date(date), today)

    return count, date_value


def validate_station_details(
    name: str, sets: str, reps: str, weights: str
) -> tuple[str, int, list[int]]:
    """
    Validate one gym station.

    Returns:
        Tuple of (name, reps, weights), with one weight per set.
    """
    station_name = validate_exercise_name(name)
    if not sets or not reps or not weights:
        raise insufficient(messages.INSUFFICIENT_STATION_PARAMETERS_ERROR)

    set_count = validate_positive_int(sets, messages.INVALID_SETS_ERROR)
    rep_count = validate_positive_int(reps, messages.INVALID_REPS_ERROR)
    return station_name, rep_count, validate_weights_csv(weights, set_count)


def validate_delete_details(
    item: str, index: str, allowed: Iterable[ItemType]
) -> tuple[ItemType, int]:
    """
    Validate delete fields.

    Returns:
        Tuple of (item type, 1-based index).
    """
    if not item or not index:
        raise insufficient(messages.INSUFFICIENT_DELETE_PARAMETERS_ERROR)

    item_type = validate_enum_filter(item, allowed)
    return item_type, validate_positive_int(index, messages.INVALID_INDEX_ERROR)


def validate_user_name(value: str) -> str:
    """Validate the user name stored on the first line of the data file."""
    name = value.strip()
    if not name:
        raise insufficient(messages.EMPTY_NAME_ERROR)
    if not USER_NAME_REGEX.match(name):
        raise invalid(messages.INVALID_NAME_ERROR)
    return name
