"""
Item filters accepted by the history, latest and delete commands.

Each command accepts a different set of item types; the table below is the
single source of truth for which filters a command allows.
"""

from enum import Enum


class ItemType(str, Enum):
    """Enumeration of filterable item types."""

    RUN = "run"
    GYM = "gym"
    BMI = "bmi"
    PERIOD = "period"
    APPOINTMENT = "appointment"
    WORKOUTS = "workouts"
    ALL = "all"


class FilterCommand(str, Enum):
    """Commands that take an /item: filter."""

    HISTORY = "history"
    LATEST = "latest"
    DELETE = "delete"


_RECORD_TYPES = frozenset(
    {ItemType.RUN, ItemType.GYM, ItemType.BMI, ItemType.PERIOD, ItemType.APPOINTMENT}
)

ALLOWED_FILTERS: dict[FilterCommand, frozenset[ItemType]] = {
    FilterCommand.HISTORY: _RECORD_TYPES | {ItemType.WORKOUTS, ItemType.ALL},
    FilterCommand.LATEST: _RECORD_TYPES,
    FilterCommand.DELETE: _RECORD_TYPES,
}
