from ListingMVP.ai.base_ai import AIAssistant
from ListingMVP.ai.providers import (
    BedrockGenerator,
    GenerationOptions,
    OpenAIGenerator,
    TextGenerator,
    build_generator,
)

__all__ = [
    "AIAssistant",
    "BedrockGenerator",
    "GenerationOptions",
    "OpenAIGenerator",
    "TextGenerator",
    "build_generator",
]
