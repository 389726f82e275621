"""Tests for key-value repository adapters."""

from datetime import UTC, date, datetime
from uuid import UUID

from nutri_guide.adapters.kv_daily_progress_repository import (
    KeyValueDailyProgressRepository,
)
from nutri_guide.adapters.kv_meal_plan_repository import KeyValueMealPlanRepository
from nutri_guide.adapters.kv_profile_repository import KeyValueProfileRepository
from nutri_guide.adapters.kv_weight_history_repository import (
    KeyValueWeightHistoryRepository,
)
from nutri_guide.domain.meal_plans import MealPlan
from nutri_guide.domain.profile import Gender
from nutri_guide.domain.progress import (
    DailyProgress,
    FoodLogEntry,
    MealType,
    WeightSample,
)
from nutri_guide.services.storage import NamespacedStore
from tests.conftest import make_profile


def test_profile_is_stored_as_json(namespace: NamespacedStore) -> None:
    repository = KeyValueProfileRepository(namespace)

    repository.save_profile(make_profile(gender=Gender.OTHER))

    raw = namespace.store.get("@nutriguide_user_profile")
    assert isinstance(raw, dict)
    assert raw["gender"] == "other"
    assert raw["activity_level"] == "moderate"
    assert repository.get_profile() == make_profile(gender=Gender.OTHER)


def test_daily_progress_preserves_entries(namespace: NamespacedStore) -> None:
    repository = KeyValueDailyProgressRepository(namespace)
    entry = FoodLogEntry(
        id=UUID("8d4f0a3c-7a4e-4a55-9a5e-1f6e5a1b2c3d"),
        name="Sprouted moong salad",
        calories=160.0,
        timestamp=datetime(2024, 5, 1, 16, 30, tzinfo=UTC),
        meal_type=MealType.SNACK,
    )
    progress = DailyProgress(
        date=date(2024, 5, 1),
        calories_consumed=160.0,
        calories_goal=2556,
        food_logs=[entry],
    )

    repository.save_progress(progress)
    loaded = repository.get_progress(date(2024, 5, 1))

    assert loaded == progress
    assert loaded is not None
    assert loaded.food_logs[0].meal_type is MealType.SNACK
    assert repository.get_progress(date(2024, 5, 2)) is None
    raw = namespace.store.get("@nutriguide_daily_progress_2024-05-01")
    assert isinstance(raw, dict)
    assert raw["food_logs"][0]["id"] == "8d4f0a3c-7a4e-4a55-9a5e-1f6e5a1b2c3d"


def test_weight_history_appends_in_order(namespace: NamespacedStore) -> None:
    repository = KeyValueWeightHistoryRepository(namespace)

    assert repository.list_samples() == []
    repository.append_sample(WeightSample(date=date(2024, 5, 1), weight=71.0))
    repository.append_sample(WeightSample(date=date(2024, 5, 2), weight=70.4))

    assert repository.list_samples() == [
        WeightSample(date=date(2024, 5, 1), weight=71.0),
        WeightSample(date=date(2024, 5, 2), weight=70.4),
    ]


def test_meal_plan_keyed_by_date(namespace: NamespacedStore) -> None:
    repository = KeyValueMealPlanRepository(namespace)
    plan = MealPlan(
        breakfast="Upma", lunch="Rajma chawal", dinner="Dal", snacks="Fruit chaat"
    )

    repository.save_plan(date(2024, 5, 1), plan)

    assert repository.get_plan(date(2024, 5, 1)) == plan
    assert repository.get_plan(date(2024, 5, 2)) is None
    assert namespace.store.keys("@nutriguide_meal_plan") == [
        "@nutriguide_meal_plan_2024-05-01"
    ]
