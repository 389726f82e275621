"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Gender options collected at onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported daily activity level."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Goal(StrEnum):
    """Weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class DietaryPreference(StrEnum):
    """Dietary preference."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    NON_VEG = "non-veg"


@dataclass(frozen=True)
class UserProfile:
    """Biometric profile of the single app user."""

    name: str
    age: int
    height: float
    weight: float
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    dietary_preference: DietaryPreference
