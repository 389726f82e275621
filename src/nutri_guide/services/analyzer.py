"""BMI, calorie goal and macro analysis."""

import math

from nutri_guide.domain.analysis import BMICategory, BMIResult, MacroRatios
from nutri_guide.domain.profile import ActivityLevel, Gender, Goal, UserProfile

UNDERWEIGHT_LIMIT = 18.5
NORMAL_LIMIT = 25.0
OVERWEIGHT_LIMIT = 30.0

GOAL_ADJUSTMENT_KCAL = 500

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.LOW: 1.2,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.HIGH: 1.9,
}

MACRO_RATIOS: dict[Goal, MacroRatios] = {
    Goal.LOSE: MacroRatios(carbs=40, protein=30, fats=30),
    Goal.GAIN: MacroRatios(carbs=50, protein=25, fats=25),
    Goal.MAINTAIN: MacroRatios(carbs=45, protein=25, fats=30),
}

for _goal, _ratios in MACRO_RATIOS.items():
    if _ratios.total != 100:  # noqa: PLR2004
        raise ValueError(f"Macro ratios for {_goal} must sum to 100")


def analyze_profile(profile: UserProfile) -> BMIResult:
    """Derive BMI, category, calorie goal and macros for a profile."""
    bmi = calculate_bmi(profile.weight, profile.height)
    return BMIResult(
        bmi=bmi,
        category=bmi_category(bmi),
        daily_calorie_goal=daily_calorie_goal(profile),
        macros=macro_ratios(profile.goal),
    )


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return BMI in kg/m² for a weight in kg and a height in cm."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> BMICategory:
    """Classify a BMI value; band boundaries belong to the higher band."""
    if bmi < UNDERWEIGHT_LIMIT:
        return BMICategory.UNDERWEIGHT
    if bmi < NORMAL_LIMIT:
        return BMICategory.NORMAL
    if bmi < OVERWEIGHT_LIMIT:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def basal_metabolic_rate(profile: UserProfile) -> float:
    """Mifflin-St Jeor BMR.

    Only ``male`` uses the male constant; ``female`` and ``other`` share the
    female one.
    """
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.gender == Gender.MALE:
        return base + 5
    return base - 161


def daily_calorie_goal(profile: UserProfile) -> int:
    """Return the goal-adjusted daily energy target in kcal."""
    tdee = basal_metabolic_rate(profile) * ACTIVITY_MULTIPLIERS[profile.activity_level]
    if profile.goal == Goal.LOSE:
        tdee -= GOAL_ADJUSTMENT_KCAL
    elif profile.goal == Goal.GAIN:
        tdee += GOAL_ADJUSTMENT_KCAL
    return round_half_up(tdee)


def macro_ratios(goal: Goal) -> MacroRatios:
    """Return the fixed macro split for a goal."""
    return MACRO_RATIOS[goal]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties rounding up."""
    return math.floor(value + 0.5)
