"""
schemas/records.py
──────────────────
Immutable input records consumed by the analytics engine.

The storage layer (``data_engine.repository``) builds these from database
rows; the engine never mutates them.  Validation happens here, at the
boundary, so the engine can assume well-formed input.

Models
------
EarningRecord   One work session on a delivery platform.
ExpenseRecord   One business expense.
DateRange       Inclusive [start, end] window used to scope queries.
"""

from datetime import date as Date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

_DATETIME = TypeAdapter(datetime)


class Platform(str, Enum):
    """Delivery platforms a session can be logged against."""

    UBER_EATS = "UberEats"
    DOORDASH = "DoorDash"
    GRUBHUB = "GrubHub"
    POSTMATES = "Postmates"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    """Expense categories accepted by the ledger."""

    FUEL = "Fuel"
    MAINTENANCE = "Maintenance"
    INSURANCE = "Insurance"
    VEHICLE_PAYMENT = "Vehicle Payment"
    PHONE_BILL = "Phone Bill"
    SUBSCRIPTIONS = "Subscriptions"
    PARKING = "Parking"
    TOLLS = "Tolls"
    FOOD = "Food"
    EQUIPMENT = "Equipment"
    OTHER = "Other"


# ── Earnings ──────────────────────────────────────────────────────────────────


class EarningRecord(BaseModel):
    """
    A single delivery work session.

    Attributes:
        user_id:        Owner of the record.
        platform:       Platform the session was worked on.
        date:           Calendar day the session is booked under.
        start_time:     Session start timestamp.
        end_time:       Session end timestamp (``>= start_time``).
        base_earning:   Base pay.
        tips:           Customer tips.
        bonuses:        Promotions / peak pay.
        total_earning:  Caller-supplied total (base + tips + bonuses);
                        never re-derived here.
        delivery_count: Deliveries completed during the session.
        hours_worked:   Session length in hours.  Derived from the
                        timestamps when omitted.
        miles_driven:   Miles driven during the session.
        notes:          Free-form notes.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    platform: Platform
    date: Date
    start_time: datetime
    end_time: datetime
    base_earning: float = Field(default=0.0, ge=0)
    tips: float = Field(default=0.0, ge=0)
    bonuses: float = Field(default=0.0, ge=0)
    total_earning: float
    delivery_count: int = Field(default=1, ge=1)
    hours_worked: float
    miles_driven: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_hours_worked(cls, data: Any) -> Any:
        """Fill ``hours_worked`` from the session span when it is missing."""
        if not isinstance(data, dict) or data.get("hours_worked") is not None:
            return data
        start, end = data.get("start_time"), data.get("end_time")
        if start is None or end is None:
            return data
        span = _DATETIME.validate_python(end) - _DATETIME.validate_python(start)
        return {**data, "hours_worked": span / timedelta(hours=1)}


# ── Expenses ──────────────────────────────────────────────────────────────────


class ExpenseRecord(BaseModel):
    """A single business expense.  ``amount`` carries no sign constraint."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    date: Date
    category: ExpenseCategory
    amount: float
    tax_deductible: bool = True
    description: Optional[str] = None


# ── Date range ────────────────────────────────────────────────────────────────


class DateRange(BaseModel):
    """
    Inclusive time window ``[start, end]``.

    Use :meth:`last_days` for the default "last 30 days" window.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError("'start' must not be later than 'end'.")
        return self

    @classmethod
    def last_days(cls, days: int = 30, now: Optional[datetime] = None) -> "DateRange":
        """Window ending at ``now`` (default: current UTC time) and spanning ``days``."""
        end = now or datetime.now(timezone.utc)
        return cls(start=end - timedelta(days=days), end=end)

    def contains_day(self, day: Date) -> bool:
        """True when the calendar ``day`` falls inside the window's days."""
        return self.start.date() <= day <= self.end.date()
