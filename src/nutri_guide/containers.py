"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutri_guide.adapters.kv_daily_progress_repository import (
    KeyValueDailyProgressRepository,
)
from nutri_guide.adapters.kv_meal_plan_repository import KeyValueMealPlanRepository
from nutri_guide.adapters.kv_profile_repository import KeyValueProfileRepository
from nutri_guide.adapters.kv_weight_history_repository import (
    KeyValueWeightHistoryRepository,
)
from nutri_guide.adapters.openai_responses_client import OpenAIResponsesClient
from nutri_guide.adapters.supabase_kv_store import SupabaseKeyValueStore
from nutri_guide.config import Settings
from nutri_guide.services.coaching import CoachingService
from nutri_guide.services.food_photos import FoodPhotoService
from nutri_guide.services.meal_planner import MealPlanService
from nutri_guide.services.profiles import ProfileService
from nutri_guide.services.progress import ProgressService
from nutri_guide.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    NamespacedStore,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_plan_service: MealPlanService
    progress_service: ProgressService
    coaching_service: CoachingService
    food_photo_service: FoodPhotoService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value backend."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    return SupabaseKeyValueStore(supabase_client, table_name=settings.supabase_table)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    namespace = NamespacedStore(
        store=build_store(resolved_settings),
        prefix=resolved_settings.storage_key_prefix,
    )
    profile_service = ProfileService(
        repository=KeyValueProfileRepository(namespace),
        store=namespace,
    )
    meal_plan_service = MealPlanService(KeyValueMealPlanRepository(namespace))
    progress_service = ProgressService(
        daily_repository=KeyValueDailyProgressRepository(namespace),
        weight_repository=KeyValueWeightHistoryRepository(namespace),
        profile_service=profile_service,
        weight_window=resolved_settings.weight_history_window,
    )
    openai_client = OpenAIResponsesClient.create(
        resolved_settings.openai_api_key,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    coaching_service = CoachingService(
        client=openai_client, model=resolved_settings.openai_model
    )
    food_photo_service = FoodPhotoService(
        client=openai_client, model=resolved_settings.openai_vision_model
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_plan_service=meal_plan_service,
        progress_service=progress_service,
        coaching_service=coaching_service,
        food_photo_service=food_photo_service,
        close_resources=close_resources,
    )
