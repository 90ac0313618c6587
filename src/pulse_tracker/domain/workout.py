"""
Workout domain models.

Defines runs and gym sessions. A gym session is made of stations, each of
which holds one set per declared set count.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from pulse_tracker.utils.exceptions import out_of_bounds
from pulse_tracker.utils.messages import MAX_STATIONS_ERROR

MAX_DISTANCE = 5000.00
MAX_STATIONS = 50
MAX_STATION_NAME_LENGTH = 25
MAX_SET_WEIGHT = 2000


class Run(BaseModel):
    """
    A timed run.

    The time is kept in its display form, MM:SS or H:MM:SS.
    """

    distance: float = Field(gt=0, le=MAX_DISTANCE)
    time: str
    date: dt.date | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def total_seconds(self) -> int:
        seconds = 0
        for part in self.time.split(":"):
            seconds = seconds * 60 + int(part)
        return seconds

    @property
    def pace(self) -> str:
        """Average pace per kilometre, formatted M:SS/km."""
        seconds_per_km = round(self.total_seconds / self.distance)
        minutes, seconds = divmod(seconds_per_km, 60)
        return f"{minutes}:{seconds:02d}/km"

    def __str__(self) -> str:
        when = f"{self.date:%d-%m-%Y}" if self.date else "NA"
        return f"Run {when} Distance: {self.distance:.2f}km Time: {self.time} Pace: {self.pace}"


class GymSet(BaseModel):
    """One set of an exercise."""

    reps: int = Field(gt=0)
    weight: int = Field(ge=0, le=MAX_SET_WEIGHT)

    model_config = ConfigDict(frozen=True)


class GymStation(BaseModel):
    """An exercise station with its ordered sets."""

    name: str = Field(min_length=1, max_length=MAX_STATION_NAME_LENGTH)
    sets: list[GymSet]

    @property
    def number_of_sets(self) -> int:
        return len(self.sets)

    @property
    def reps(self) -> int:
        """Repetitions per set. Every set of a station shares the same count."""
        return self.sets[0].reps

    @property
    def weights(self) -> list[int]:
        return [gym_set.weight for gym_set in self.sets]

    def __str__(self) -> str:
        weights = ",".join(str(w) for w in self.weights)
        return f"{self.name}: {self.number_of_sets} sets x {self.reps} reps ({weights} kg)"


class Gym(BaseModel):
    """A gym session made of ordered stations."""

    date: dt.date | None = None
    stations: list[GymStation] = Field(default_factory=list)

    def add_station(self, name: str, reps: int, weights: list[int]) -> GymStation:
        """
        Append a station with one set per weight.

        Raises:
            TrackerError: If the session already holds the maximum number of stations.
        """
        if len(self.stations) >= MAX_STATIONS:
            raise out_of_bounds(MAX_STATIONS_ERROR)
        station = GymStation(
            name=name, sets=[GymSet(reps=reps, weight=weight) for weight in weights]
        )
        self.stations.append(station)
        return station

    def __str__(self) -> str:
        when = f"{self.date:%d-%m-%Y}" if self.date else "NA"
        lines = [f"Gym {when} ({len(self.stations)} stations)"]
        lines.extend(f"  {i}. {station}" for i, station in enumerate(self.stations, start=1))
        return "\n".join(lines)
