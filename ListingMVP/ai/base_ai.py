# =========================================================
# 🧠 Listing Assistant – prompt façade over one TextGenerator
# =========================================================

import json
import logging

from ListingMVP.exceptions import GenerationError, ValidationError
from ListingMVP.models import GenerationRequest, PropertyAnalysis, PropertyRecommendations, parse_payload

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Prompts
# ---------------------------------------------------------
AGENT_PERSONA = "You are a real estate AI assistant."
DEFAULT_CHAT_CONTEXT = "Help users find and understand property listings."
CHAT_FALLBACK = "I couldn't process that request."

LISTING_SUMMARY_TEMPLATE = """
You are an AI assistant helping real estate agents generate personalized listing summaries for their clients.
Create a message that is engaging, informative, and formatted clearly.

**Client Name:** {client_name}
**Summary Title:** {summary_title}
**Listings:**
{listings}
**Client Preferences:** {preferences}
**Message Style:** {message_style}
**Call-to-Action:** {cta}

### **Instructions:**
- Use a professional yet friendly tone.
- Clearly highlight key property features like price, location, and special amenities.
- Use bullet points for listing details.
- Include a warm closing and call to action.

**Generate the message below:**
""".strip()

ANALYSIS_TEMPLATE = """
Analyze the following property details and provide:
1. Property recommendations
2. Market analysis
3. Estimated price range

Property Details:
{details}

Respond with JSON only, using exactly this structure:
{{
  "recommendations": string[],
  "marketAnalysis": string,
  "priceEstimate": {{
    "value": number,
    "range": {{"min": number, "max": number}}
  }}
}}
""".strip()

RECOMMENDATIONS_SYSTEM = (
    "You are a real estate expert AI. Analyze the user's criteria and provide property "
    "recommendations along with explanations. Respond with JSON in this format: "
    '{"recommendations": string[], "explanation": string}'
)


def extract_json_object(text):
    """Parse the first complete JSON object in ``text``; models sometimes wrap JSON in prose."""
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = decoder.raw_decode(text, start)
        except ValueError:
            obj = None
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    raise ValueError("response contains no JSON object")


# ---------------------------------------------------------
# AIAssistant Class
# ---------------------------------------------------------
class AIAssistant:
    """Stateless: every call builds its prompt from scratch and keeps nothing."""

    def __init__(self, generator):
        self.generator = generator

    # -----------------------------------------------------
    def generate_listing_summary(self, request) -> str:
        """Write a client-facing summary of the given listings."""
        if not isinstance(request, GenerationRequest):
            request = parse_payload(GenerationRequest, request)

        prompt = LISTING_SUMMARY_TEMPLATE.format(
            client_name=request.client_name or "No name provided",
            summary_title=request.summary_title or "Handpicked Listings for You",
            listings="\n".join(request.listing_urls) or "No listings provided",
            preferences=request.preferences or "No specific preferences",
            message_style=request.message_style or "",
            cta=request.cta or "",
        )

        try:
            content = self.generator.generate_text(prompt)
        except GenerationError as e:
            raise GenerationError(f"Failed to generate listing summary: {e}") from e

        if not content:
            raise GenerationError("Failed to generate listing summary: No content generated")
        return content

    # -----------------------------------------------------
    def chat_with_ai(self, messages, context=None) -> str:
        """Answer the latest turn of ``messages``; the transcript is not modified."""
        persona = f"{AGENT_PERSONA} {context}" if context else f"{AGENT_PERSONA} {DEFAULT_CHAT_CONTEXT}"
        transcript = [{"role": "system", "content": persona}]
        transcript.extend({"role": m["role"], "content": m["content"]} for m in _as_dicts(messages))

        try:
            content = self.generator.generate_text(transcript)
        except GenerationError as e:
            raise GenerationError(f"Failed to process chat: {e}") from e

        return content or CHAT_FALLBACK

    # -----------------------------------------------------
    def analyze_property(self, details) -> PropertyAnalysis:
        """Market analysis and price estimate for free-text property details."""
        prompt = ANALYSIS_TEMPLATE.format(details=details)
        return self._structured(
            prompt,
            PropertyAnalysis,
            failure="Failed to analyze property",
        )

    def analyze_listing(self, prop) -> PropertyAnalysis:
        """Same as analyze_property, for a stored listing."""
        return self.analyze_property(prop.to_prompt_details())

    # -----------------------------------------------------
    def recommend_properties(self, criteria) -> PropertyRecommendations:
        """Suggest properties that fit a buyer's free-text criteria."""
        messages = [
            {"role": "system", "content": RECOMMENDATIONS_SYSTEM},
            {"role": "user", "content": criteria},
        ]
        return self._structured(
            messages,
            PropertyRecommendations,
            failure="Failed to get property recommendations",
        )

    # -----------------------------------------------------
    def _structured(self, prompt, schema, failure):
        try:
            content = self.generator.generate_text(prompt, self.generator.options(json_response=True))
        except GenerationError as e:
            raise GenerationError(f"{failure}: {e}") from e

        try:
            payload = extract_json_object(content or "")
            return parse_payload(schema, payload)
        except (ValueError, ValidationError) as e:
            logger.warning("%s: unparseable provider response %r", failure, (content or "")[:200])
            raise GenerationError(f"{failure}: response was not valid {schema.__name__} JSON ({e})") from e


def _as_dicts(messages):
    for m in messages:
        yield m.model_dump() if hasattr(m, "model_dump") else m
