"""Domain models for daily meal plans."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MealPlan:
    """One suggestion per meal slot for a single day."""

    breakfast: str
    lunch: str
    dinner: str
    snacks: str
