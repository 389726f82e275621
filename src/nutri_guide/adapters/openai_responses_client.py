"""OpenAI Responses API client for coaching text and food photo estimates."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutri_guide.services.coaching import CoachClient
from nutri_guide.services.food_photos import VisionClient


@dataclass
class OpenAIResponsesClient(CoachClient, VisionClient):
    """Sends plain prompts and structured image requests to OpenAI."""

    client: AsyncOpenAI
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, reasoning_effort: str | None = None, store: bool = False
    ) -> "OpenAIResponsesClient":
        """Create a client from an API key."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate(self, *, model: str, prompt: str) -> str:
        """Return the stripped text reply for a prompt."""
        output_text = await self._respond(model=model, input_payload=prompt)
        return output_text.strip()

    async def extract(
        self,
        *,
        model: str,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the JSON object the model produced for an image."""
        message = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
        }
        output_text = await self._respond(
            model=model,
            input_payload=[message],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
        )
        try:
            payload = json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise RuntimeError("OpenAI returned malformed JSON") from exc
        if not isinstance(payload, dict):
            raise RuntimeError("OpenAI returned a non-object estimate")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

    async def _respond(
        self, *, model: str, input_payload: object, **extra: object
    ) -> str:
        request_payload: dict[str, object] = {
            "model": model,
            "input": input_payload,
            "store": self.store,
            **extra,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return response.output_text
