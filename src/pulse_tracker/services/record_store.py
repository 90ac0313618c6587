"""
In-memory record store for one session.

Holds every health and workout record between load and save, keeps each
collection in its display order, and enforces the cross-record rules that a
single record cannot check on its own.
"""

import logging
import math
from datetime import date, timedelta

from pulse_tracker.domain.filters import ALLOWED_FILTERS, FilterCommand, ItemType
from pulse_tracker.domain.health import Appointment, Bmi, Period
from pulse_tracker.domain.workout import Gym, Run
from pulse_tracker.utils import messages
from pulse_tracker.utils.exceptions import insufficient, invalid, out_of_bounds
from pulse_tracker.utils.timezone_utils import days_between

logger = logging.getLogger(__name__)

Record = Bmi | Appointment | Period | Run | Gym

MIN_PERIODS_FOR_PREDICTION = 3
CYCLES_FOR_PREDICTION = 3


class RecordStore:
    """
    Per-type record collections for the active session.

    Ordering:
        bmis: most recent date first.
        appointments: earliest (date, time) first.
        periods: most recent start date first.
        workouts: runs and gyms in insertion order.
    """

    def __init__(self) -> None:
        self.bmis: list[Bmi] = []
        self.appointments: list[Appointment] = []
        self.periods: list[Period] = []
        self.workouts: list[Run | Gym] = []

    @property
    def runs(self) -> list[Run]:
        return [w for w in self.workouts if isinstance(w, Run)]

    @property
    def gyms(self) -> list[Gym]:
        return [w for w in self.workouts if isinstance(w, Gym)]

    def is_empty(self) -> bool:
        return not (self.bmis or self.appointments or self.periods or self.workouts)

    def add(self, record: Record, enforce_sequence: bool = True) -> Record:
        """
        Add a validated record.

        Args:
            record: The record to add.
            enforce_sequence: Apply the sequential-period rules. Disabled when
                records are restored from the data file.

        Returns:
            The stored record. Closing an open period returns that period.

        Raises:
            TrackerError: If the record breaks a cross-record rule.
        """
        if isinstance(record, Bmi):
            return self._add_bmi(record)
        if isinstance(record, Appointment):
            self.appointments.append(record)
            self.appointments.sort(key=lambda a: (a.date, a.time))
            logger.info("Added appointment")
            return record
        if isinstance(record, Period):
            if enforce_sequence:
                return self._add_period(record)
            self._insert_period(record)
            return record
        if isinstance(record, (Run, Gym)):
            self.workouts.append(record)
            logger.info(f"Added {type(record).__name__.lower()}")
            return record
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    def _add_bmi(self, bmi: Bmi) -> Bmi:
        if any(existing.date == bmi.date for existing in self.bmis):
            raise invalid(messages.DUPLICATE_BMI_DATE_ERROR)
        self.bmis.append(bmi)
        self.bmis.sort(key=lambda b: b.date, reverse=True)
        logger.info("Added BMI")
        return bmi

    def _insert_period(self, period: Period) -> None:
        self.periods.append(period)
        self.periods.sort(key=lambda p: p.start_date, reverse=True)

    def _add_period(self, period: Period) -> Period:
        """
        Add a period from live input.

        A period carrying the start date of the open latest period closes it.
        Otherwise a new period must start after the previous one ended, and
        only the most recent period may be left open.
        """
        if not self.periods:
            self._insert_period(period)
            logger.info("Added period")
            return period

        latest = self.periods[0]

        if latest.is_open:
            if period.start_date == latest.start_date:
                if period.end_date is None:
                    raise invalid(messages.PERIOD_ALREADY_OPEN_ERROR)
                latest.close(period.end_date)
                logger.info("Closed latest period")
                return latest
            if period.start_date < latest.start_date:
                raise invalid(messages.PERIOD_NOT_LATEST_ERROR)
            raise invalid(messages.PERIOD_STILL_OPEN_ERROR)

        if latest.end_date is not None and period.start_date <= latest.end_date:
            raise invalid(messages.PERIOD_START_BEFORE_PREVIOUS_END_ERROR)

        self._insert_period(period)
        logger.info("Added period")
        return period

    def history(self, item_type: ItemType) -> list[Record]:
        """Records of one type, or every record for ALL, in display order."""
        match item_type:
            case ItemType.BMI:
                return list(self.bmis)
            case ItemType.APPOINTMENT:
                return list(self.appointments)
            case ItemType.PERIOD:
                return list(self.periods)
            case ItemType.RUN:
                return list(self.runs)
            case ItemType.GYM:
                return list(self.gyms)
            case ItemType.WORKOUTS:
                return list(self.workouts)
            case ItemType.ALL:
                return [*self.bmis, *self.appointments, *self.periods, *self.workouts]
        raise invalid(messages.INVALID_ITEM_ERROR + item_type.value)

    def latest(self, item_type: ItemType) -> Record | None:
        """Most recent record of a type, or None if there is none."""
        if item_type not in ALLOWED_FILTERS[FilterCommand.LATEST]:
            raise invalid(messages.INVALID_ITEM_ERROR + item_type.value)

        items = self.history(item_type)
        if not items:
            return None
        if item_type in (ItemType.BMI, ItemType.PERIOD):
            return items[0]
        return items[-1]

    def delete_at(self, item_type: ItemType, index: int) -> Record:
        """
        Delete a record by its 1-based position in history(item_type).

        Raises:
            TrackerError: OUT_OF_BOUNDS if the index is outside the collection.
        """
        if item_type not in ALLOWED_FILTERS[FilterCommand.DELETE]:
            raise invalid(messages.INVALID_ITEM_ERROR + item_type.value)

        items = self.history(item_type)
        if index < 1 or index > len(items):
            raise out_of_bounds(messages.INDEX_OUT_OF_RANGE_ERROR)

        record = items[index - 1]
        match item_type:
            case ItemType.BMI:
                self.bmis = [b for b in self.bmis if b is not record]
            case ItemType.APPOINTMENT:
                self.appointments = [a for a in self.appointments if a is not record]
            case ItemType.PERIOD:
                self.periods = [p for p in self.periods if p is not record]
            case _:
                self.workouts = [w for w in self.workouts if w is not record]

        logger.info(f"Deleted {item_type.value} at index {index}")
        return record

    def cycle_summary(self) -> list[Period]:
        """Closed periods whose start dates the prediction averages, latest first."""
        closed = [p for p in self.periods if not p.is_open]
        return closed[: CYCLES_FOR_PREDICTION + 1]

    def predict_next_period(self) -> date:
        """
        Predict the next period start date.

        Averages the gaps between successive start dates of the most recent
        closed periods, then adds the rounded average to the latest start
        date, which may belong to an open period.

        Raises:
            TrackerError: INSUFFICIENT_INPUT with fewer than 3 closed periods.
        """
        cycles = self.cycle_summary()
        if len(cycles) < MIN_PERIODS_FOR_PREDICTION:
            raise insufficient(messages.UNABLE_TO_MAKE_PREDICTIONS_ERROR)

        starts = [p.start_date for p in reversed(cycles)]
        gaps = [days_between(earlier, later) for earlier, later in zip(starts, starts[1:])]
        average = sum(gaps) / len(gaps)

        predicted = self.periods[0].start_date + timedelta(days=math.floor(average + 0.5))
        logger.info(f"Predicted next period start: {predicted.isoformat()}")
        return predicted
