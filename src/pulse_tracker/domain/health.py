"""
Health domain models.

Defines BMI measurements, medical appointments and menstrual-cycle periods.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from pulse_tracker.utils.timezone_utils import days_between

MAX_HEIGHT = 2.75
MAX_WEIGHT = 640.00
MAX_DESCRIPTION_LENGTH = 100


class Bmi(BaseModel):
    """BMI measurement. Height is in metres and weight in kilograms."""

    height: float = Field(gt=0, le=MAX_HEIGHT)
    weight: float = Field(gt=0, le=MAX_WEIGHT)
    date: dt.date

    model_config = ConfigDict(frozen=True)

    @property
    def bmi_score(self) -> float:
        """BMI rounded to 2 decimal places."""
        return round(self.weight / (self.height * self.height), 2)

    @property
    def category(self) -> str:
        """Weight category for the score."""
        score = self.bmi_score
        if score < 18.5:
            return "underweight"
        if score < 25.0:
            return "normal"
        if score < 30.0:
            return "overweight"
        if score < 40.0:
            return "obese"
        return "severely obese"

    def __str__(self) -> str:
        return (
            f"{self.date:%d-%m-%Y} Height: {self.height:.2f}m Weight: {self.weight:.2f}kg "
            f"BMI: {self.bmi_score:.2f} ({self.category})"
        )


class Appointment(BaseModel):
    """Medical appointment."""

    date: dt.date
    time: dt.time
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.date:%d-%m-%Y} {self.time:%H:%M} {self.description}"


class Period(BaseModel):
    """
    Menstrual period.

    A period without an end date is "open". The end date is the only field
    that may change after creation, when an open period is closed.
    """

    start_date: dt.date
    end_date: dt.date | None = None

    @property
    def is_open(self) -> bool:
        return self.end_date is None

    @property
    def length(self) -> int | None:
        """Length in days, counting both ends, or None while open."""
        if self.end_date is None:
            return None
        return days_between(self.start_date, self.end_date) + 1

    def close(self, end_date: dt.date) -> None:
        """Set the end date of an open period."""
        self.end_date = end_date

    def __str__(self) -> str:
        end = f"{self.end_date:%d-%m-%Y}" if self.end_date else "NA"
        length = f"{self.length} days" if self.length is not None else "ongoing"
        return f"Period Start: {self.start_date:%d-%m-%Y} End: {end} ({length})"
