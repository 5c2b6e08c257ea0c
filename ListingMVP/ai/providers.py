"""
ai/providers.py
===============
Text-generation adapters behind one interface:

    generator.generate_text(prompt, options) -> str

``prompt`` is either a plain string (sent as one user message) or a list of
``{"role", "content"}`` dicts. Exactly one adapter is built per app, picked by
``AI_PROVIDER``. Calls are bounded by ``AI_TIMEOUT`` and never retried.
"""
import dataclasses
import json
import logging
from dataclasses import dataclass

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from openai import OpenAI, OpenAIError

from ListingMVP.exceptions import ConfigurationError, ProviderError
from ListingMVP.services.generation_metrics import track_generation

logger = logging.getLogger(__name__)

HUMAN_STOP = "\n\nHuman:"


@dataclass(frozen=True)
class GenerationOptions:
    max_tokens: int = 1000
    temperature: float = 0.7
    json_response: bool = False


def as_messages(prompt):
    if isinstance(prompt, str):
        return [{"role": "user", "content": prompt}]
    return [{"role": m["role"], "content": m["content"]} for m in prompt]


# ---------------------------------------------------------
# Base interface
# ---------------------------------------------------------
class TextGenerator:
    name = "base"

    def __init__(self, default_options=None):
        self.default_options = default_options or GenerationOptions()

    def options(self, **overrides):
        return dataclasses.replace(self.default_options, **overrides)

    def generate_text(self, prompt, options=None) -> str:
        messages = as_messages(prompt)
        with track_generation(self.name):
            return self._complete(messages, options or self.default_options)

    def _complete(self, messages, options) -> str:
        raise NotImplementedError


# ---------------------------------------------------------
# OpenAI chat completions
# ---------------------------------------------------------
def _describe_openai_error(error):
    if getattr(error, "code", None) == "insufficient_quota":
        return "OpenAI API quota exceeded. Please try again later or contact support."
    return str(error)


class OpenAIGenerator(TextGenerator):
    name = "openai"

    def __init__(self, api_key, model="gpt-4o", timeout=30, default_options=None, client=None):
        super().__init__(default_options)
        # Render env vars sometimes end with newline (common when copy/paste)
        self.api_key = (api_key or "").strip()
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OPENAI_API_KEY is not set.")
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def _complete(self, messages, options):
        kwargs = {
            "model": self.model,
            "messages": messages,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
        }
        if options.json_response:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.warning("OpenAI call failed: %s", e)
            raise ProviderError(_describe_openai_error(e)) from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


# ---------------------------------------------------------
# AWS Bedrock (Anthropic text-completion envelope)
# ---------------------------------------------------------
def render_claude_prompt(messages):
    """Flatten chat messages into the ``Human:/Assistant:`` completion prompt."""
    system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
    parts = [system] if system else []
    for m in messages:
        if m["role"] == "system":
            continue
        speaker = "Human" if m["role"] == "user" else "Assistant"
        parts.append(f"\n\n{speaker}: {m['content']}")
    parts.append("\n\nAssistant:")
    return "".join(parts)


class BedrockGenerator(TextGenerator):
    name = "bedrock"

    def __init__(
        self,
        model_id="anthropic.claude-v2",
        region="us-east-1",
        access_key_id=None,
        secret_access_key=None,
        timeout=30,
        default_options=None,
        client=None,
    ):
        super().__init__(default_options)
        self.model_id = model_id
        self.region = region
        self.access_key_id = access_key_id or None
        self.secret_access_key = secret_access_key or None
        self.timeout = timeout
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "bedrock-runtime",
                region_name=self.region,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                config=BotoConfig(
                    connect_timeout=5,
                    read_timeout=self.timeout,
                    retries={"max_attempts": 0},
                ),
            )
        return self._client

    def _complete(self, messages, options):
        body = {
            "prompt": render_claude_prompt(messages),
            "max_tokens_to_sample": options.max_tokens,
            "temperature": options.temperature,
            "top_k": 250,
            "top_p": 0.999,
            "stop_sequences": [HUMAN_STOP],
        }

        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(body),
            )
            result = json.loads(response["body"].read())
        except (BotoCoreError, ClientError) as e:
            logger.warning("Bedrock call failed: %s", e)
            raise ProviderError(str(e)) from e
        except ValueError as e:
            raise ProviderError(f"Malformed Bedrock response: {e}") from e

        completion = result.get("completion") if isinstance(result, dict) else None
        if not isinstance(completion, str):
            raise ProviderError("No content generated")
        return completion.strip()


# ---------------------------------------------------------
# Factory
# ---------------------------------------------------------
def build_generator(config):
    """Build the single adapter named by ``config["AI_PROVIDER"]``."""
    provider = (config.get("AI_PROVIDER") or "openai").strip().lower()
    options = GenerationOptions(
        max_tokens=int(config.get("AI_MAX_TOKENS", 1000)),
        temperature=float(config.get("AI_TEMPERATURE", 0.7)),
    )
    timeout = int(config.get("AI_TIMEOUT", 30))

    if provider == "openai":
        return OpenAIGenerator(
            api_key=config.get("OPENAI_API_KEY"),
            model=config.get("AI_MODEL", "gpt-4o"),
            timeout=timeout,
            default_options=options,
        )
    if provider == "bedrock":
        return BedrockGenerator(
            model_id=config.get("BEDROCK_MODEL_ID", "anthropic.claude-v2"),
            region=config.get("AWS_REGION", "us-east-1"),
            access_key_id=config.get("AWS_ACCESS_KEY_ID"),
            secret_access_key=config.get("AWS_SECRET_ACCESS_KEY"),
            timeout=timeout,
            default_options=options,
        )
    raise ConfigurationError(f"Unknown AI_PROVIDER {provider!r}; expected 'openai' or 'bedrock'.")
