"""Progress aggregation: food logs, weight trends and tips."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutri_guide.domain.profile import Goal, UserProfile
from nutri_guide.domain.progress import (
    DailyProgress,
    DaySummary,
    FoodLogEntry,
    MealType,
    ProgressView,
    TrendDirection,
    WeightSample,
    WeightTrend,
)
from nutri_guide.services.analyzer import analyze_profile, round_half_up
from nutri_guide.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

EARLY_DAY_PERCENT = 50
ON_TRACK_PERCENT = 80
GOAL_PERCENT = 100
OVER_GOAL_PERCENT = 110

WEIGHT_HISTORY_WINDOW = 7

MOTIVATIONS = (
    "{name}, every healthy choice you make is a step towards a better you! "
    "Keep going! 💪",
    "You're doing amazing, {name}! Consistency is the key to success. 🌟",
    "{name}, remember: progress, not perfection. You've got this! 🎯",
    "Great work today, {name}! Your future self will thank you for these "
    "healthy habits. 🙌",
    "{name}, nutrition is self-care. You're investing in your health every day! 💚",
    "Stay strong, {name}! Small daily improvements lead to stunning long-term "
    "results. 🚀",
    "{name}, your commitment to health is inspiring! Keep nourishing your body "
    "well. 🥗",
    "Believe in yourself, {name}! Every meal is an opportunity to fuel your "
    "goals. ⭐",
)


class DailyProgressRepository(Protocol):
    """Persistence interface for per-day food intake."""

    def get_progress(self, day: date) -> DailyProgress | None:
        """Return the progress record for a date, if any."""

    def save_progress(self, progress: DailyProgress) -> None:
        """Store a progress record under its date."""


class WeightHistoryRepository(Protocol):
    """Persistence interface for the weight series."""

    def list_samples(self) -> list[WeightSample]:
        """Return all samples in the order they were recorded."""

    def append_sample(self, sample: WeightSample) -> None:
        """Append a sample to the series."""


def current_date(timezone_name: str) -> date:
    """Return today's calendar date in a timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def percent_of_goal(consumed: float, goal: float) -> float:
    """Return consumption as a percentage of the goal (goal must be positive)."""
    return consumed / goal * 100


def progress_tip(consumed: float, goal: float, user_goal: Goal) -> str:
    """Return feedback text for the day's intake."""
    percentage = percent_of_goal(consumed, goal)
    rounded = round_half_up(percentage)
    if percentage < EARLY_DAY_PERCENT:
        return (
            f"You've consumed {rounded}% of your daily calories. Make sure to eat "
            "nutritious meals throughout the day to meet your goal!"
        )
    if percentage < ON_TRACK_PERCENT:
        return (
            f"Great progress! You're at {rounded}% of your calorie goal. "
            "Stay on track with balanced meals."
        )
    if percentage < GOAL_PERCENT:
        meal = "dinner" if user_goal == Goal.LOSE else "snack"
        return (
            f"Almost there! You've reached {rounded}% of your goal. "
            f"A light, healthy {meal} will complete your day perfectly."
        )
    if percentage < OVER_GOAL_PERCENT:
        return (
            "Perfect! You've met your calorie goal. "
            "Stay hydrated and maintain this consistency!"
        )
    over = round_half_up(percentage - 100)
    return (
        f"You're {over}% over your goal. No worries! "
        "Consider lighter meals tomorrow and stay active."
    )


def recent_weights(
    history: list[WeightSample], limit: int = WEIGHT_HISTORY_WINDOW
) -> list[WeightSample]:
    """Return the last ``limit`` samples of a chronological series, newest first."""
    if limit <= 0:
        return []
    return list(reversed(history[-limit:]))


def weight_trend(history: list[WeightSample]) -> WeightTrend | None:
    """Compare the two newest samples; ``history`` is ordered newest first.

    Returns None when fewer than two samples exist.
    The magnitude is rounded to one decimal.
    """
    if len(history) < 2:  # noqa: PLR2004
        return None
    diff = history[0].weight - history[1].weight
    if diff > 0:
        return WeightTrend(direction=TrendDirection.UP, magnitude=round(diff, 1))
    if diff < 0:
        return WeightTrend(
            direction=TrendDirection.DOWN, magnitude=round(abs(diff), 1)
        )
    return WeightTrend(direction=TrendDirection.STABLE, magnitude=0.0)


def weekly_weight_change(history: list[WeightSample]) -> float:
    """Return the change across the last week of chronological samples."""
    window = history[-WEIGHT_HISTORY_WINDOW:]
    if len(window) < 2:  # noqa: PLR2004
        return 0.0
    return window[-1].weight - window[0].weight


def motivational_message(
    profile: UserProfile, rng: random.Random | None = None
) -> str:
    """Pick a motivation line addressed to the user."""
    chooser = rng or random.Random()
    return chooser.choice(MOTIVATIONS).format(name=profile.name)


def record_food_log(
    day: date,
    entry: FoodLogEntry,
    load_progress: Callable[[date], DailyProgress | None],
    save_progress: Callable[[DailyProgress], None],
    calories_goal: int,
) -> DailyProgress:
    """Append a food log to the day's record and persist it.

    ``calories_goal`` seeds a newly created record; existing records keep the
    goal they were created with.
    """
    current = load_progress(day)
    if current is None:
        updated = DailyProgress(
            date=day,
            calories_consumed=entry.calories,
            calories_goal=calories_goal,
            food_logs=[entry],
        )
    else:
        updated = replace(
            current,
            calories_consumed=current.calories_consumed + entry.calories,
            food_logs=[*current.food_logs, entry],
        )
    save_progress(updated)
    return updated


def compute_progress_view(
    consumed: float,
    goal: float,
    user_goal: Goal,
    weight_history: list[WeightSample],
    window: int = WEIGHT_HISTORY_WINDOW,
) -> ProgressView:
    """Combine intake and the chronological weight series into display figures."""
    recent = recent_weights(weight_history, window)
    return ProgressView(
        percent=percent_of_goal(consumed, goal),
        tip=progress_tip(consumed, goal, user_goal),
        trend=weight_trend(recent),
        recent_weights=recent,
    )


@dataclass
class ProgressService:
    """Service for food logs, weight history and progress views."""

    daily_repository: DailyProgressRepository
    weight_repository: WeightHistoryRepository
    profile_service: ProfileService
    weight_window: int = WEIGHT_HISTORY_WINDOW
    rng: random.Random = field(default_factory=random.Random)

    def log_food(  # noqa: PLR0913
        self,
        profile: UserProfile,
        day: date,
        name: str,
        calories: float,
        meal_type: MealType,
        logged_at: datetime,
    ) -> DailyProgress:
        """Create a food log entry and append it to the day."""
        entry = FoodLogEntry(
            id=uuid4(),
            name=name,
            calories=calories,
            timestamp=logged_at,
            meal_type=meal_type,
        )
        progress = record_food_log(
            day,
            entry,
            load_progress=self.daily_repository.get_progress,
            save_progress=self.daily_repository.save_progress,
            calories_goal=analyze_profile(profile).daily_calorie_goal,
        )
        _logger.info(
            "Food logged: day=%s meal=%s calories=%s total=%s",
            day.isoformat(),
            meal_type,
            calories,
            progress.calories_consumed,
        )
        return progress

    def get_daily_progress(self, day: date) -> DailyProgress | None:
        """Return the stored record for a date."""
        return self.daily_repository.get_progress(day)

    def get_consumed(self, day: date) -> float:
        """Return calories consumed on a date, zero when nothing was logged."""
        progress = self.daily_repository.get_progress(day)
        return progress.calories_consumed if progress else 0.0

    def get_recent_days(
        self, profile: UserProfile, end: date, days: int = WEIGHT_HISTORY_WINDOW
    ) -> list[DaySummary]:
        """Return one summary per date for the ``days`` ending at ``end``."""
        fallback_goal = analyze_profile(profile).daily_calorie_goal
        summaries: list[DaySummary] = []
        for offset in range(days - 1, -1, -1):
            day = end - timedelta(days=offset)
            progress = self.daily_repository.get_progress(day)
            if progress is None:
                summaries.append(
                    DaySummary(
                        date=day,
                        calories_consumed=0.0,
                        calories_goal=fallback_goal,
                        log_count=0,
                    )
                )
                continue
            summaries.append(
                DaySummary(
                    date=day,
                    calories_consumed=progress.calories_consumed,
                    calories_goal=progress.calories_goal,
                    log_count=len(progress.food_logs),
                )
            )
        return summaries

    def record_weight(
        self, profile: UserProfile, weight: float, day: date
    ) -> UserProfile:
        """Append a weight sample and store the new weight on the profile.

        Raises ValueError when the new weight leaves no positive calorie goal;
        nothing is stored in that case.
        """
        updated = replace(profile, weight=weight)
        if analyze_profile(updated).daily_calorie_goal <= 0:
            raise ValueError("Weight gives a daily calorie goal of zero or less")
        self.weight_repository.append_sample(WeightSample(date=day, weight=weight))
        self.profile_service.save_profile(updated)
        _logger.info("Weight recorded: day=%s weight=%s", day.isoformat(), weight)
        return updated

    def get_weight_history(self) -> list[WeightSample]:
        """Return the full chronological weight series."""
        return self.weight_repository.list_samples()

    def get_recent_weights(self) -> list[WeightSample]:
        """Return the rolling weight window, newest first."""
        return recent_weights(self.weight_repository.list_samples(), self.weight_window)

    def get_motivation(self, profile: UserProfile) -> str:
        """Return a random motivation line for the user."""
        return motivational_message(profile, self.rng)

    def get_progress_view(self, profile: UserProfile, day: date) -> ProgressView:
        """Return percent, tip and trend for a date."""
        goal = analyze_profile(profile).daily_calorie_goal
        return compute_progress_view(
            self.get_consumed(day),
            goal,
            profile.goal,
            self.weight_repository.list_samples(),
            window=self.weight_window,
        )
