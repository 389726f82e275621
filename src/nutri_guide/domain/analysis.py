"""Domain models for BMI and calorie analysis."""

from dataclasses import dataclass
from enum import StrEnum


class BMICategory(StrEnum):
    """BMI bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class MacroRatios:
    """Percentage split of daily calories between macronutrients."""

    carbs: int
    protein: int
    fats: int

    @property
    def total(self) -> int:
        return self.carbs + self.protein + self.fats


@dataclass(frozen=True)
class BMIResult:
    """Derived analysis of a profile."""

    bmi: float
    category: BMICategory
    daily_calorie_goal: int
    macros: MacroRatios
