"""Daily meal plan generation with per-day persistence."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from nutri_guide.domain.meal_plans import MealPlan
from nutri_guide.domain.profile import Goal, UserProfile

_logger = logging.getLogger(__name__)

# Vegetarian table; it is the only catalog and serves every dietary preference.
MEAL_CATALOG: dict[Goal, dict[str, list[str]]] = {
    Goal.LOSE: {
        "breakfast": [
            "Oatmeal with berries and almonds (~300 cal) - High fiber, protein-rich",
            "Greek yogurt with chia seeds and honey (~250 cal) - Probiotic, omega-3",
            "Vegetable poha with peanuts (~280 cal) - Light, nutritious",
            "Smoothie bowl with banana, spinach, protein powder (~320 cal) - "
            "Vitamin-packed",
        ],
        "lunch": [
            "Quinoa salad with chickpeas, cucumber, tomatoes (~400 cal) - "
            "Complete protein, fiber",
            "Brown rice with dal and steamed vegetables (~420 cal) - "
            "Balanced, filling",
            "Whole wheat wrap with paneer and veggies (~380 cal) - Protein-rich",
            "Vegetable khichdi with curd (~350 cal) - Easy to digest, comforting",
        ],
        "dinner": [
            "Grilled vegetables with tofu (~300 cal) - Low-cal, high protein",
            "Vegetable soup with multigrain bread (~280 cal) - Light, satisfying",
            "Palak paneer with roti (~350 cal) - Iron, calcium-rich",
            "Stir-fried vegetables with brown rice (~320 cal) - Fiber-rich",
        ],
        "snacks": [
            "Apple with peanut butter (~150 cal)",
            "Carrot sticks with hummus (~120 cal)",
            "Roasted chickpeas (~130 cal)",
            "Mixed nuts (small handful ~160 cal)",
        ],
    },
    Goal.MAINTAIN: {
        "breakfast": [
            "Whole wheat toast with avocado and eggs (~400 cal) - "
            "Healthy fats, protein",
            "Upma with vegetables and coconut chutney (~380 cal) - Energizing",
            "Masala dosa with sambar (~420 cal) - Traditional, balanced",
            "Paneer paratha with curd (~450 cal) - Protein-packed",
        ],
        "lunch": [
            "Rice with rajma and salad (~500 cal) - Complete protein, fiber",
            "Chole with brown rice and raita (~520 cal) - Satisfying, nutritious",
            "Vegetable biryani with raita (~550 cal) - Flavorful, balanced",
            "Mixed dal with roti and vegetables (~480 cal) - Traditional, wholesome",
        ],
        "dinner": [
            "Paneer tikka with quinoa (~450 cal) - High protein",
            "Vegetable curry with brown rice (~420 cal) - Nutrient-dense",
            "Mushroom masala with roti (~400 cal) - Umami-rich",
            "Dal makhani with jeera rice (~480 cal) - Protein-rich, comforting",
        ],
        "snacks": [
            "Fruit chaat (~180 cal)",
            "Sprouted moong salad (~160 cal)",
            "Paneer cubes with mint chutney (~200 cal)",
            "Trail mix (~190 cal)",
        ],
    },
    Goal.GAIN: {
        "breakfast": [
            "Banana smoothie with oats, peanut butter, milk (~500 cal) - "
            "Calorie-dense",
            "Aloo paratha with butter and curd (~550 cal) - High-energy",
            "Idli with coconut chutney and sambhar (~480 cal) - Carb-rich",
            "Stuffed paneer sandwich with cheese (~520 cal) - Protein-packed",
        ],
        "lunch": [
            "Paneer butter masala with naan and rice (~700 cal) - Rich, satisfying",
            "Rajma chawal with raita and salad (~650 cal) - Complete meal",
            "Vegetable pulao with paneer curry (~680 cal) - Wholesome",
            "Chole bhature with lassi (~720 cal) - Traditional, filling",
        ],
        "dinner": [
            "Stuffed capsicum with rice (~550 cal) - Nutrient-dense",
            "Paneer tikka masala with naan (~600 cal) - Protein-rich",
            "Mixed vegetable curry with paratha (~580 cal) - Balanced",
            "Palak paneer with rice and dal (~620 cal) - Iron-rich",
        ],
        "snacks": [
            "Peanut butter banana sandwich (~300 cal)",
            "Protein shake with fruits (~280 cal)",
            "Cheese and crackers (~250 cal)",
            "Dry fruits and nuts mix (~320 cal)",
        ],
    },
}


class MealPlanRepository(Protocol):
    """Persistence interface for per-day meal plans."""

    def get_plan(self, day: date) -> MealPlan | None:
        """Return the stored plan for a date, if any."""

    def save_plan(self, day: date, plan: MealPlan) -> None:
        """Store the plan for a date."""


def generate_meal_plan(
    goal: Goal, calorie_goal: int, rng: random.Random | None = None
) -> MealPlan:
    """Draw one catalog entry per slot for the goal.

    ``calorie_goal`` does not influence selection yet.
    """
    chooser = rng or random.Random()
    meals = MEAL_CATALOG[goal]
    return MealPlan(
        breakfast=chooser.choice(meals["breakfast"]),
        lunch=chooser.choice(meals["lunch"]),
        dinner=chooser.choice(meals["dinner"]),
        snacks=chooser.choice(meals["snacks"]),
    )


def get_or_create_meal_plan(  # noqa: PLR0913
    day: date,
    profile: UserProfile,
    calorie_goal: int,
    load_plan: Callable[[date], MealPlan | None],
    save_plan: Callable[[date, MealPlan], None],
    rng: random.Random | None = None,
) -> MealPlan:
    """Return the stored plan for the day, generating and saving it once."""
    existing = load_plan(day)
    if existing is not None:
        return existing
    plan = generate_meal_plan(profile.goal, calorie_goal, rng)
    save_plan(day, plan)
    _logger.info("Generated meal plan: day=%s goal=%s", day.isoformat(), profile.goal)
    return plan


@dataclass
class MealPlanService:
    """Service that keeps one meal plan per calendar day."""

    repository: MealPlanRepository
    rng: random.Random = field(default_factory=random.Random)

    def get_plan_for_day(
        self, day: date, profile: UserProfile, calorie_goal: int
    ) -> MealPlan:
        """Return the day's plan, creating it on first request."""
        return get_or_create_meal_plan(
            day,
            profile,
            calorie_goal,
            load_plan=self.repository.get_plan,
            save_plan=self.repository.save_plan,
            rng=self.rng,
        )
