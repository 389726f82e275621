"""Models for coaching and food photo estimates."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class ChatTurn:
    """A previous message in a coaching conversation."""

    role: str
    text: str


class FoodEstimate(BaseModel):
    """Structured output for a food photo estimate."""

    food_name: str = "Unknown Food"
    calories: float = Field(default=0, ge=0)
    description: str = ""
