"""Calorie estimation from food photos."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from nutri_guide.domain.coaching import FoodEstimate

_logger = logging.getLogger(__name__)

FOOD_ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "description": {"type": "string"},
    },
    "required": ["food_name", "calories", "description"],
    "additionalProperties": False,
}

FOOD_ESTIMATE_PROMPT = (
    "Analyze this food image and provide the name of the food or dish, "
    "the estimated calories as a number, and a brief nutritional description "
    "(protein, carbs, fats content)."
)

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF8", "image/gif"),
)


class VisionClient(Protocol):
    """Interface for schema-constrained image questions."""

    async def extract(
        self,
        *,
        model: str,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the object the model produced for an image."""


@dataclass
class FoodPhotoService:
    """Turns a meal photo into a name and calorie estimate for the log form."""

    client: VisionClient
    model: str

    async def estimate(self, image_bytes: bytes) -> FoodEstimate:
        raw = await self.client.extract(
            model=self.model,
            image_data_url=image_data_url(image_bytes),
            schema=FOOD_ESTIMATE_SCHEMA,
            prompt=FOOD_ESTIMATE_PROMPT,
        )
        estimate = FoodEstimate.model_validate(raw)
        _logger.info(
            "Food photo estimated: bytes=%s calories=%s",
            len(image_bytes),
            estimate.calories,
        )
        if not estimate.food_name.strip():
            return estimate.model_copy(update={"food_name": "Unknown Food"})
        return estimate


def image_data_url(image_bytes: bytes) -> str:
    """Encode image bytes as a base64 data URL."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{image_mime_type(image_bytes)};base64,{encoded}"


def image_mime_type(image_bytes: bytes) -> str:
    """Guess the MIME type from magic bytes, defaulting to JPEG."""
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _SIGNATURES:
        if image_bytes.startswith(signature):
            return mime_type
    return "image/jpeg"
