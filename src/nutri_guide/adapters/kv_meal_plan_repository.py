"""Key-value repository for daily meal plans."""

from dataclasses import dataclass
from datetime import date

from pydantic import TypeAdapter

from nutri_guide.domain.meal_plans import MealPlan
from nutri_guide.services.meal_planner import MealPlanRepository
from nutri_guide.services.storage import NamespacedStore

_PLAN_ADAPTER = TypeAdapter(MealPlan)


@dataclass
class KeyValueMealPlanRepository(MealPlanRepository):
    """Stores one meal plan per ISO date key."""

    namespace: NamespacedStore

    def get_plan(self, day: date) -> MealPlan | None:
        """Return the plan stored for a date."""
        raw = self.namespace.store.get(
            self.namespace.key(f"meal_plan_{day.isoformat()}")
        )
        if raw is None:
            return None
        return _PLAN_ADAPTER.validate_python(raw)

    def save_plan(self, day: date, plan: MealPlan) -> None:
        """Store the plan for a date."""
        self.namespace.store.set(
            self.namespace.key(f"meal_plan_{day.isoformat()}"),
            _PLAN_ADAPTER.dump_python(plan, mode="json"),
        )
