"""Shared test fixtures."""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

import pytest

from nutri_guide.adapters.kv_daily_progress_repository import (
    KeyValueDailyProgressRepository,
)
from nutri_guide.adapters.kv_meal_plan_repository import KeyValueMealPlanRepository
from nutri_guide.adapters.kv_profile_repository import KeyValueProfileRepository
from nutri_guide.adapters.kv_weight_history_repository import (
    KeyValueWeightHistoryRepository,
)
from nutri_guide.config import Settings
from nutri_guide.containers import AppContainer
from nutri_guide.domain.meal_plans import MealPlan
from nutri_guide.domain.profile import (
    ActivityLevel,
    DietaryPreference,
    Gender,
    Goal,
    UserProfile,
)
from nutri_guide.domain.progress import DailyProgress, WeightSample
from nutri_guide.services.coaching import CoachClient, CoachingService
from nutri_guide.services.food_photos import FoodPhotoService, VisionClient
from nutri_guide.services.meal_planner import MealPlanRepository, MealPlanService
from nutri_guide.services.profiles import ProfileRepository, ProfileService
from nutri_guide.services.progress import (
    DailyProgressRepository,
    ProgressService,
    WeightHistoryRepository,
)
from nutri_guide.services.storage import InMemoryKeyValueStore, NamespacedStore

T = TypeVar("T")


class FirstChoiceRandom(random.Random):
    """Random source that always picks the first candidate."""

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]


class LastChoiceRandom(random.Random):
    """Random source that always picks the last candidate."""

    def choice(self, seq: Sequence[T]) -> T:
        return seq[-1]


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository that records saves."""

    plans: dict[date, MealPlan] = field(default_factory=dict)
    saves: list[date] = field(default_factory=list)

    def get_plan(self, day: date) -> MealPlan | None:
        return self.plans.get(day)

    def save_plan(self, day: date, plan: MealPlan) -> None:
        self.saves.append(day)
        self.plans[day] = plan


@dataclass
class InMemoryDailyProgressRepository(DailyProgressRepository):
    """In-memory daily progress repository for tests."""

    records: dict[date, DailyProgress] = field(default_factory=dict)

    def get_progress(self, day: date) -> DailyProgress | None:
        return self.records.get(day)

    def save_progress(self, progress: DailyProgress) -> None:
        self.records[progress.date] = progress


@dataclass
class InMemoryWeightHistoryRepository(WeightHistoryRepository):
    """In-memory weight history repository for tests."""

    samples: list[WeightSample] = field(default_factory=list)

    def list_samples(self) -> list[WeightSample]:
        return list(self.samples)

    def append_sample(self, sample: WeightSample) -> None:
        self.samples.append(sample)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profile: UserProfile | None = None

    def get_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile


@dataclass
class FakeCoachClient(CoachClient):
    """Fake coach client that records prompts."""

    reply: str = "Keep it up!"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "food_name": "Vegetable biryani",
            "calories": 550,
            "description": "Rice with mixed vegetables, moderate fat",
        }
    )
    error: Exception | None = None
    image_data_urls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.image_data_urls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return self.payload


def make_profile(**overrides: object) -> UserProfile:
    """Return the reference profile with optional field overrides."""
    values: dict[str, object] = {
        "name": "Asha",
        "age": 30,
        "height": 175.0,
        "weight": 70.0,
        "gender": Gender.MALE,
        "activity_level": ActivityLevel.MODERATE,
        "goal": Goal.MAINTAIN,
        "dietary_preference": DietaryPreference.VEGETARIAN,
    }
    values.update(overrides)
    return UserProfile(**values)  # type: ignore[arg-type]


@pytest.fixture
def profile() -> UserProfile:
    return make_profile()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        openai_api_key="openai-key",
        timezone="UTC",
    )


@pytest.fixture
def namespace() -> NamespacedStore:
    return NamespacedStore(store=InMemoryKeyValueStore(), prefix="@nutriguide")


@pytest.fixture
def coach_client() -> FakeCoachClient:
    return FakeCoachClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(
    settings: Settings,
    namespace: NamespacedStore,
    coach_client: FakeCoachClient,
    vision_client: FakeVisionClient,
) -> AppContainer:
    profile_service = ProfileService(
        repository=KeyValueProfileRepository(namespace),
        store=namespace,
    )
    meal_plan_service = MealPlanService(
        KeyValueMealPlanRepository(namespace), rng=random.Random(7)
    )
    progress_service = ProgressService(
        daily_repository=KeyValueDailyProgressRepository(namespace),
        weight_repository=KeyValueWeightHistoryRepository(namespace),
        profile_service=profile_service,
        rng=FirstChoiceRandom(),
    )
    coaching_service = CoachingService(client=coach_client, model="test-model")
    food_photo_service = FoodPhotoService(
        client=vision_client, model="test-vision-model"
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        meal_plan_service=meal_plan_service,
        progress_service=progress_service,
        coaching_service=coaching_service,
        food_photo_service=food_photo_service,
        close_resources=close_resources,
    )
