"""Domain models for food logs, weight history and progress."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Meal a food log belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodLogEntry:
    """A single logged food item."""

    id: UUID
    name: str
    calories: float
    timestamp: datetime
    meal_type: MealType


@dataclass(frozen=True)
class DailyProgress:
    """Food intake for one calendar date."""

    date: date
    calories_consumed: float
    calories_goal: int
    food_logs: list[FoodLogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class WeightSample:
    """A recorded body weight."""

    date: date
    weight: float


class TrendDirection(StrEnum):
    """Direction of the latest weight change."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class WeightTrend:
    """Change between the two most recent weight samples."""

    direction: TrendDirection
    magnitude: float


@dataclass(frozen=True)
class ProgressView:
    """Derived progress figures for display."""

    percent: float
    tip: str
    trend: WeightTrend | None
    recent_weights: list[WeightSample]


@dataclass(frozen=True)
class DaySummary:
    """Consumption summary for one date in a rolling history."""

    date: date
    calories_consumed: float
    calories_goal: int
    log_count: int
