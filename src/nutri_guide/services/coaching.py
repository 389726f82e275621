"""Language-model coaching built on the derived nutrition figures."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from nutri_guide.domain.analysis import BMIResult
from nutri_guide.domain.coaching import ChatTurn
from nutri_guide.domain.profile import Goal, UserProfile
from nutri_guide.domain.progress import MealType, WeightSample
from nutri_guide.services.progress import WEIGHT_HISTORY_WINDOW, weekly_weight_change

_logger = logging.getLogger(__name__)

MOTIVATION_FALLBACK = (
    "🌟 Keep pushing forward! Every healthy choice counts toward your goals."
)
PROGRESS_FALLBACK = (
    "Keep tracking your progress consistently. "
    "Small, sustainable changes lead to lasting results! 💪"
)
MEAL_SUGGESTIONS_FALLBACK = [
    "Oatmeal with fruits",
    "Greek yogurt parfait",
    "Veggie omelet",
]

COACH_PERSONA = """You are NutriGuide, an expert AI diet coach and nutrition advisor.

Your role:
- Help users maintain a healthy body weight based on their BMI.
- Provide daily diet guidance, calorie goals, and food intake tracking.
- Motivate users to stay consistent and teach them about healthy eating habits.
- Be friendly, encouraging, and conversational.
- Avoid medical claims or strict prescriptions.
- Always promote balance, moderation, and positivity.
"""

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


class CoachClient(Protocol):
    """Interface for free-text generation."""

    async def generate(self, *, model: str, prompt: str) -> str:
        """Return the model's reply to a prompt."""


@dataclass
class CoachingService:
    """Service that builds coaching prompts and applies fallbacks."""

    client: CoachClient
    model: str

    async def chat(
        self,
        message: str,
        profile: UserProfile | None,
        analysis: BMIResult | None,
        history: list[ChatTurn] | None = None,
    ) -> str:
        """Answer a free-text question; client errors propagate."""
        prompt = build_chat_prompt(message, profile, analysis, history or [])
        return await self.client.generate(model=self.model, prompt=prompt)

    async def motivation(
        self, profile: UserProfile, analysis: BMIResult, consumed: float
    ) -> str:
        """Return a short personalised motivation message."""
        prompt = build_motivation_prompt(profile, analysis, consumed)
        try:
            return await self.client.generate(model=self.model, prompt=prompt)
        except Exception:
            _logger.exception("Coach motivation failed")
            return MOTIVATION_FALLBACK

    async def analyze_progress(
        self,
        profile: UserProfile,
        analysis: BMIResult,
        weight_history: list[WeightSample],
    ) -> str:
        """Return commentary on the recent weight series."""
        prompt = build_progress_prompt(profile, analysis, weight_history)
        try:
            return await self.client.generate(model=self.model, prompt=prompt)
        except Exception:
            _logger.exception("Coach progress analysis failed")
            return PROGRESS_FALLBACK

    async def meal_suggestions(
        self, profile: UserProfile, analysis: BMIResult, meal_type: MealType
    ) -> list[str]:
        """Return three meal ideas for a meal type."""
        prompt = (
            f"Generate 3 personalized {meal_type} suggestions for:\n"
            f"- Goal: {profile.goal} weight\n"
            f"- Diet: {profile.dietary_preference}\n"
            f"- Daily calories: {analysis.daily_calorie_goal}\n"
            f"- Macros: {_format_macros(analysis)}\n\n"
            "Respond with ONLY a JSON array of 3 meal names, no explanations:\n"
            '["meal1", "meal2", "meal3"]'
        )
        try:
            reply = await self.client.generate(model=self.model, prompt=prompt)
        except Exception:
            _logger.exception("Coach meal suggestions failed")
            return list(MEAL_SUGGESTIONS_FALLBACK)
        return parse_string_list(reply) or list(MEAL_SUGGESTIONS_FALLBACK)

    async def food_alternatives(
        self, food_name: str, profile: UserProfile
    ) -> list[str]:
        """Return up to three healthier alternatives to a food."""
        prompt = (
            f'Suggest 3 healthier alternatives to "{food_name}" for someone with:\n'
            f"- Goal: {profile.goal} weight\n"
            f"- Diet: {profile.dietary_preference}\n\n"
            'Respond with ONLY a JSON array: ["alternative1", "alternative2", '
            '"alternative3"]'
        )
        try:
            reply = await self.client.generate(model=self.model, prompt=prompt)
        except Exception:
            _logger.exception("Coach food alternatives failed")
            return []
        return parse_string_list(reply)


def quick_suggestions(profile: UserProfile | None) -> list[str]:
    """Return canned chat starters, with one extra for weight-change goals."""
    suggestions = [
        "💡 Give me meal ideas for today",
        "🍎 What healthy snacks can I have?",
        "🏃 How much exercise should I do?",
        "💧 How much water should I drink?",
        "😴 Tips for better sleep?",
    ]
    if profile is not None and profile.goal == Goal.LOSE:
        suggestions.append("⚖️ Best foods for weight loss?")
    elif profile is not None and profile.goal == Goal.GAIN:
        suggestions.append("💪 High-calorie healthy foods?")
    return suggestions


def build_chat_prompt(
    message: str,
    profile: UserProfile | None,
    analysis: BMIResult | None,
    history: list[ChatTurn],
) -> str:
    """Assemble persona, user context and the conversation so far."""
    context = COACH_PERSONA
    if profile is not None and analysis is not None:
        context += (
            "\nCurrent User Profile:\n"
            f"- Name: {profile.name}\n"
            f"- Age: {profile.age} years\n"
            f"- Height: {profile.height} cm\n"
            f"- Weight: {profile.weight} kg\n"
            f"- Gender: {profile.gender}\n"
            f"- Activity Level: {profile.activity_level}\n"
            f"- Goal: {profile.goal} weight\n"
            f"- Dietary Preference: {profile.dietary_preference}\n"
            f"- BMI: {analysis.bmi:.1f} ({analysis.category})\n"
            f"- Daily Calorie Goal: {analysis.daily_calorie_goal} cal\n"
            f"- Macros: {_format_macros(analysis)}\n\n"
            "Personalize your responses using this information.\n"
        )
    lines = [context, ""]
    lines.extend(f"{turn.role}: {turn.text}" for turn in history)
    lines.append(f"User: {message}")
    lines.append("Assistant:")
    return "\n".join(lines)


def build_motivation_prompt(
    profile: UserProfile, analysis: BMIResult, consumed: float
) -> str:
    """Prompt for a short encouraging message about today's intake."""
    return (
        "You are a motivational nutrition coach. Generate a short, encouraging "
        "message (2-3 sentences) for:\n"
        f"- User: {profile.name or 'there'}\n"
        f"- BMI: {analysis.bmi:.1f} ({analysis.category})\n"
        f"- Goal: {profile.goal} weight\n"
        f"- Today's calories: {consumed:g}/{analysis.daily_calorie_goal}\n\n"
        "Be supportive, specific, and actionable. Use emojis appropriately."
    )


def build_progress_prompt(
    profile: UserProfile, analysis: BMIResult, weight_history: list[WeightSample]
) -> str:
    """Prompt for commentary on the last week of weights."""
    recent = [sample.weight for sample in weight_history[-WEIGHT_HISTORY_WINDOW:]]
    change = weekly_weight_change(weight_history)
    return (
        "Analyze this fitness progress and provide insights (3-4 sentences):\n"
        f"- Goal: {profile.goal} weight\n"
        f"- Current BMI: {analysis.bmi:.1f} ({analysis.category})\n"
        f"- Week weight change: {change:+.1f} kg\n"
        f"- Recent weights: {', '.join(f'{weight:g}' for weight in recent)} kg\n\n"
        "Provide specific, actionable advice based on their progress. "
        "Be encouraging but honest."
    )


def parse_string_list(text: str) -> list[str]:
    """Extract the first JSON array of strings embedded in a reply."""
    match = _JSON_ARRAY.search(text)
    if match is None:
        return []
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError:
        return []
    if not isinstance(payload, list):
        return []
    return [str(item) for item in payload if isinstance(item, str | int | float)]


def _format_macros(analysis: BMIResult) -> str:
    macros = analysis.macros
    return (
        f"Carbs {macros.carbs}%, Protein {macros.protein}%, Fats {macros.fats}%"
    )
