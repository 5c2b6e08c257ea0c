"""Tests for the OpenAI and Bedrock text generators."""

import io
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest
from botocore.exceptions import ClientError

from ListingMVP.ai import BedrockGenerator, GenerationOptions, OpenAIGenerator, build_generator
from ListingMVP.ai.providers import as_messages, render_claude_prompt
from ListingMVP.exceptions import ConfigurationError, GenerationError, ProviderError
from ListingMVP.services.generation_metrics import get_metrics_snapshot


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _bedrock_response(payload):
    return {"body": io.BytesIO(json.dumps(payload).encode("utf-8"))}


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("  Hello from OpenAI  ")
    return client


@pytest.fixture
def bedrock_client():
    client = MagicMock()
    client.invoke_model.return_value = _bedrock_response({"completion": " Hello from Claude "})
    return client


def test_as_messages_wraps_plain_prompt() -> None:
    assert as_messages("hi") == [{"role": "user", "content": "hi"}]


class TestOpenAIGenerator:
    def test_sends_model_and_options(self, openai_client) -> None:
        gen = OpenAIGenerator("sk-test", model="gpt-4o", client=openai_client)

        assert gen.generate_text("Describe the loft") == "Hello from OpenAI"

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [{"role": "user", "content": "Describe the loft"}]
        assert kwargs["max_tokens"] == 1000
        assert kwargs["temperature"] == 0.7
        assert "response_format" not in kwargs

    def test_json_response_sets_response_format(self, openai_client) -> None:
        gen = OpenAIGenerator("sk-test", client=openai_client)

        gen.generate_text("json please", gen.options(json_response=True))

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_default_options_are_used(self, openai_client) -> None:
        gen = OpenAIGenerator(
            "sk-test",
            client=openai_client,
            default_options=GenerationOptions(max_tokens=250, temperature=0.2),
        )

        gen.generate_text("short")

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert (kwargs["max_tokens"], kwargs["temperature"]) == (250, 0.2)

    def test_no_choices_returns_empty(self, openai_client) -> None:
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        assert OpenAIGenerator("sk-test", client=openai_client).generate_text("x") == ""

    def test_api_error_becomes_provider_error(self, openai_client) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(ProviderError):
            OpenAIGenerator("sk-test", client=openai_client).generate_text("x")

    def test_quota_error_message(self, openai_client) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        openai_client.chat.completions.create.side_effect = openai.RateLimitError(
            "You exceeded your current quota",
            response=httpx.Response(429, request=request),
            body={"code": "insufficient_quota", "message": "You exceeded your current quota"},
        )

        with pytest.raises(ProviderError) as exc_info:
            OpenAIGenerator("sk-test", client=openai_client).generate_text("x")

        assert str(exc_info.value) == "OpenAI API quota exceeded. Please try again later or contact support."
        assert isinstance(exc_info.value, GenerationError)

    def test_missing_key_is_configuration_error(self) -> None:
        gen = OpenAIGenerator("   ")
        with pytest.raises(ConfigurationError):
            gen.generate_text("x")

    def test_key_is_stripped(self) -> None:
        assert OpenAIGenerator("sk-test\n").api_key == "sk-test"


class TestBedrockGenerator:
    def test_invoke_model_body(self, bedrock_client) -> None:
        gen = BedrockGenerator(model_id="anthropic.claude-v2", client=bedrock_client)

        assert gen.generate_text("Describe the loft") == "Hello from Claude"

        call = bedrock_client.invoke_model.call_args.kwargs
        assert call["modelId"] == "anthropic.claude-v2"
        assert call["contentType"] == "application/json"
        body = json.loads(call["body"])
        assert body["prompt"] == "\n\nHuman: Describe the loft\n\nAssistant:"
        assert body["max_tokens_to_sample"] == 1000
        assert body["top_k"] == 250
        assert body["top_p"] == 0.999
        assert body["stop_sequences"] == ["\n\nHuman:"]

    def test_render_prompt_with_system_and_turns(self) -> None:
        prompt = render_claude_prompt(
            [
                {"role": "system", "content": "You are helpful."},
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello!"},
                {"role": "user", "content": "Any lofts?"},
            ]
        )
        assert prompt == (
            "You are helpful.\n\nHuman: Hi\n\nAssistant: Hello!\n\nHuman: Any lofts?\n\nAssistant:"
        )

    def test_client_error_becomes_provider_error(self, bedrock_client) -> None:
        bedrock_client.invoke_model.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
            "InvokeModel",
        )

        with pytest.raises(ProviderError, match="Rate exceeded"):
            BedrockGenerator(client=bedrock_client).generate_text("x")

    def test_missing_completion(self, bedrock_client) -> None:
        bedrock_client.invoke_model.return_value = _bedrock_response({"stop_reason": "max_tokens"})

        with pytest.raises(ProviderError, match="No content generated"):
            BedrockGenerator(client=bedrock_client).generate_text("x")

    def test_malformed_body(self, bedrock_client) -> None:
        bedrock_client.invoke_model.return_value = {"body": io.BytesIO(b"<html>")}

        with pytest.raises(ProviderError, match="Malformed Bedrock response"):
            BedrockGenerator(client=bedrock_client).generate_text("x")


class TestBuildGenerator:
    def test_openai_by_default(self) -> None:
        gen = build_generator({"OPENAI_API_KEY": "sk-test", "AI_MODEL": "gpt-4o-mini", "AI_MAX_TOKENS": "500"})

        assert isinstance(gen, OpenAIGenerator)
        assert gen.model == "gpt-4o-mini"
        assert gen.default_options.max_tokens == 500

    def test_bedrock(self) -> None:
        gen = build_generator({"AI_PROVIDER": " Bedrock ", "AWS_REGION": "us-west-2", "AI_TIMEOUT": 12})

        assert isinstance(gen, BedrockGenerator)
        assert gen.region == "us-west-2"
        assert gen.timeout == 12

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown AI_PROVIDER"):
            build_generator({"AI_PROVIDER": "cohere"})


class TestGenerationMetrics:
    def test_success_and_failure_are_counted(self, openai_client) -> None:
        gen = OpenAIGenerator("sk-test", client=openai_client)
        gen.generate_text("ok")
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        with pytest.raises(ProviderError):
            gen.generate_text("fails")

        stats = get_metrics_snapshot()["openai"]
        assert (stats["count"], stats["ok"], stats["error"]) == (2, 1, 1)
        assert stats["avg_ms"] >= 0
