"""Request models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from nutri_guide.domain.coaching import ChatTurn
from nutri_guide.domain.profile import (
    ActivityLevel,
    DietaryPreference,
    Gender,
    Goal,
    UserProfile,
)
from nutri_guide.domain.progress import MealType
from nutri_guide.services.analyzer import daily_calorie_goal


class ProfileRequest(BaseModel):
    """Onboarding or profile edit form."""

    name: str = Field(min_length=1, max_length=100)
    age: int = Field(gt=0, le=150)
    height: float = Field(gt=0, le=300, allow_inf_nan=False)
    weight: float = Field(gt=0, le=700, allow_inf_nan=False)
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    dietary_preference: DietaryPreference

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name must not be blank")
        return cleaned

    @model_validator(mode="after")
    def _require_positive_goal(self) -> "ProfileRequest":
        if daily_calorie_goal(self.to_profile()) <= 0:
            raise ValueError("Profile gives a daily calorie goal of zero or less")
        return self

    def to_profile(self) -> UserProfile:
        """Convert the validated form into a domain profile."""
        return UserProfile(
            name=self.name,
            age=self.age,
            height=self.height,
            weight=self.weight,
            gender=self.gender,
            activity_level=self.activity_level,
            goal=self.goal,
            dietary_preference=self.dietary_preference,
        )


class FoodLogRequest(BaseModel):
    """Manual or photo-prefilled food entry."""

    name: str = Field(min_length=1, max_length=200)
    calories: float = Field(gt=0, allow_inf_nan=False)
    meal_type: MealType = MealType.BREAKFAST
    logged_at: datetime | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Food name must not be blank")
        return cleaned


class WeightRequest(BaseModel):
    """Weight update form."""

    weight: float = Field(gt=0, le=700, allow_inf_nan=False)


class ChatTurnModel(BaseModel):
    """Previous message of a coaching conversation."""

    role: str
    text: str

    def to_turn(self) -> ChatTurn:
        return ChatTurn(role=self.role, text=self.text)


class ChatRequest(BaseModel):
    """Coaching chat message with optional history."""

    message: str = Field(min_length=1, max_length=2000)
    history: list[ChatTurnModel] = Field(default_factory=list)
