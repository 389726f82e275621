"""Tests for the OpenAI Responses adapter."""

import asyncio
import json

import pytest

from nutri_guide.adapters.openai_responses_client import OpenAIResponsesClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def _extract(client: OpenAIResponsesClient) -> dict[str, object]:
    return asyncio.run(
        client.extract(
            model="gpt-5.2",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            prompt="Estimate calories",
        )
    )


def test_extract_parses_structured_output() -> None:
    fake = _FakeOpenAI(
        json.dumps({"food_name": "Idli", "calories": 180, "description": "Steamed"})
    )
    client = OpenAIResponsesClient(  # type: ignore[arg-type]
        client=fake, reasoning_effort="low"
    )

    result = _extract(client)

    assert result["food_name"] == "Idli"
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["store"] is False
    text_format = payload["text"]["format"]  # type: ignore[index]
    assert text_format["name"] == "food_estimate"
    content = payload["input"][0]["content"]  # type: ignore[index]
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/jpeg;base64,ZmFrZQ==",
    }


@pytest.mark.parametrize("output_text", ["", "not json", "[1, 2]"])
def test_extract_rejects_unusable_output(output_text: str) -> None:
    fake = _FakeOpenAI(output_text)
    client = OpenAIResponsesClient(client=fake)  # type: ignore[arg-type]

    with pytest.raises(RuntimeError):
        _extract(client)


def test_generate_returns_stripped_text() -> None:
    fake = _FakeOpenAI("  Drink water regularly.\n")
    client = OpenAIResponsesClient(client=fake, store=True)  # type: ignore[arg-type]

    reply = asyncio.run(client.generate(model="gpt-5.2", prompt="Tips?"))
    asyncio.run(client.close())

    assert reply == "Drink water regularly."
    assert fake.responses.last_payload == {
        "model": "gpt-5.2",
        "input": "Tips?",
        "store": True,
    }
    assert fake.closed


def test_generate_rejects_empty_output() -> None:
    client = OpenAIResponsesClient(client=_FakeOpenAI(""))  # type: ignore[arg-type]

    with pytest.raises(RuntimeError, match="empty response"):
        asyncio.run(client.generate(model="gpt-5.2", prompt="Hi"))
