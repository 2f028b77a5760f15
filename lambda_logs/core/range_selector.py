"""
Range Selector Module - Time window selection for log fetches

Handles:
- Fixed list of quick ranges ("Last hour", "Last 7 days", ...)
- Custom range built from year/month/day/hour fields on two endpoints
- Two-column focus model (quick ranges vs custom range)
- Per-field edit cursor with independent clamping (no carry)
- Resolution into a concrete [start, end) interval
"""
import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple

from lambda_logs.errors import ValidationError


class ActiveColumn(Enum):
    """Which column of the date screen has focus"""
    QUICK_RANGES = "quick"
    CUSTOM_RANGE = "custom"


@dataclass(frozen=True)
class QuickRange:
    """A named look-back window ending now"""
    label: str
    duration: timedelta


QUICK_RANGES: Tuple[QuickRange, ...] = (
    QuickRange("Last 15 minutes", timedelta(minutes=15)),
    QuickRange("Last hour", timedelta(hours=1)),
    QuickRange("Last 3 hours", timedelta(hours=3)),
    QuickRange("Last 12 hours", timedelta(hours=12)),
    QuickRange("Last 24 hours", timedelta(hours=24)),
    QuickRange("Last 3 days", timedelta(days=3)),
    QuickRange("Last 7 days", timedelta(days=7)),
)

DEFAULT_QUICK_RANGE = 1

FIELD_NAMES = ("year", "month", "day", "hour")
FIELDS_PER_ENDPOINT = len(FIELD_NAMES)
FIELD_COUNT = FIELDS_PER_ENDPOINT * 2

YEAR_BOUNDS = (1970, 9999)
MONTH_BOUNDS = (1, 12)
HOUR_BOUNDS = (0, 23)


def _clamp(value: int, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(value, high))


@dataclass(frozen=True)
class TimeRange:
    """Concrete half-open interval handed to the log fetch"""
    start: datetime
    end: datetime

    @property
    def start_ms(self) -> int:
        return int(self.start.timestamp() * 1000)

    @property
    def end_ms(self) -> int:
        return int(self.end.timestamp() * 1000)

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d %H:%M} → {self.end:%Y-%m-%d %H:%M}"


@dataclass
class DateFields:
    """Editable calendar fields of one endpoint of a custom range"""
    year: int
    month: int
    day: int
    hour: int

    @classmethod
    def from_datetime(cls, value: datetime) -> "DateFields":
        return cls(value.year, value.month, value.day, value.hour)

    def bounds(self, name: str) -> Tuple[int, int]:
        if name == "year":
            return YEAR_BOUNDS
        if name == "month":
            return MONTH_BOUNDS
        if name == "day":
            return 1, calendar.monthrange(self.year, self.month)[1]
        return HOUR_BOUNDS

    def adjust(self, name: str, delta: int) -> None:
        """
        Step one field, clamping it to its own domain

        Higher-order fields are never touched. Changing the year or month
        re-clamps the day so that e.g. Jan 31 becomes Feb 28/29.
        """
        value = getattr(self, name) + delta
        setattr(self, name, _clamp(value, self.bounds(name)))
        if name in ("year", "month"):
            self.day = _clamp(self.day, self.bounds("day"))

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d} {self.hour:02d}:00"


class RangeSelector:
    """
    Focus and field model of the date selection screen

    Quick column: left/right move between presets and stop at the ends,
    up/down cycle through them. Custom column: left/right move between the
    eight field slots (four on ``from``, four on ``to``); up/down adjust
    the focused field while editing is on.
    """

    def __init__(self, now: Optional[datetime] = None):
        now = (now or datetime.now()).replace(minute=0, second=0, microsecond=0)
        self.quick_index = DEFAULT_QUICK_RANGE
        self.active_column = ActiveColumn.QUICK_RANGES
        self.editing = False
        self.active_field = 0
        self.start_fields = DateFields.from_datetime(now - timedelta(hours=1))
        self.end_fields = DateFields.from_datetime(now + timedelta(hours=1))

    @property
    def quick_range(self) -> QuickRange:
        return QUICK_RANGES[self.quick_index]

    @property
    def active_endpoint(self) -> str:
        return "from" if self.active_field < FIELDS_PER_ENDPOINT else "to"

    @property
    def active_field_name(self) -> str:
        return FIELD_NAMES[self.active_field % FIELDS_PER_ENDPOINT]

    # Focus

    def select_column(self, column: ActiveColumn) -> None:
        self.active_column = column
        if column is ActiveColumn.QUICK_RANGES:
            self.editing = False

    def toggle_column(self) -> None:
        if self.active_column is ActiveColumn.QUICK_RANGES:
            self.select_column(ActiveColumn.CUSTOM_RANGE)
        else:
            self.select_column(ActiveColumn.QUICK_RANGES)

    def toggle_editing(self) -> None:
        """Flip field editing; only meaningful while the custom column has focus"""
        if self.active_column is ActiveColumn.CUSTOM_RANGE:
            self.editing = not self.editing

    # Directional input

    def left(self) -> None:
        if self.active_column is ActiveColumn.CUSTOM_RANGE:
            self.active_field = max(self.active_field - 1, 0)
        else:
            self.quick_index = max(self.quick_index - 1, 0)

    def right(self) -> None:
        if self.active_column is ActiveColumn.CUSTOM_RANGE:
            self.active_field = min(self.active_field + 1, FIELD_COUNT - 1)
        else:
            self.quick_index = min(self.quick_index + 1, len(QUICK_RANGES) - 1)

    def up(self) -> None:
        if self.active_column is ActiveColumn.CUSTOM_RANGE:
            if self.editing:
                self.adjust_current_field(1)
        else:
            self.quick_index = (self.quick_index - 1) % len(QUICK_RANGES)

    def down(self) -> None:
        if self.active_column is ActiveColumn.CUSTOM_RANGE:
            if self.editing:
                self.adjust_current_field(-1)
        else:
            self.quick_index = (self.quick_index + 1) % len(QUICK_RANGES)

    def adjust_current_field(self, delta: int) -> None:
        fields = self.start_fields if self.active_endpoint == "from" else self.end_fields
        fields.adjust(self.active_field_name, delta)

    # Output

    def resolve(self, now: Optional[datetime] = None) -> TimeRange:
        """
        Produce the concrete interval for the current selection

        Args:
            now: Reference instant for quick ranges (defaults to the clock)

        Returns:
            TimeRange with start <= end

        Raises:
            ValidationError: If the custom range starts after it ends
        """
        if self.active_column is ActiveColumn.QUICK_RANGES:
            end = now or datetime.now()
            return TimeRange(end - self.quick_range.duration, end)

        start = self.start_fields.to_datetime()
        end = self.end_fields.to_datetime()
        if start > end:
            raise ValidationError(
                f"Custom range starts after it ends ({self.start_fields} > {self.end_fields})"
            )
        return TimeRange(start, end)
