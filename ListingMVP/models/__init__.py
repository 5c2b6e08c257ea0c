# ListingMVP/models/__init__.py

# 🧍 User & Authentication
from ListingMVP.models.user_model import User, AGENT_ROLE

# 🏠 Property listings
from ListingMVP.models.property import Property

# 🧾 API payload and LLM response schemas
from ListingMVP.models.schemas import (
    AnalyzeRequest,
    ChatMessage,
    ChatRequest,
    ContactMessage,
    Credentials,
    GenerationRequest,
    PdfDocument,
    PropertyAnalysis,
    PropertyCreate,
    PropertyRecommendations,
    RecommendationRequest,
    parse_payload,
)

__all__ = [
    "AGENT_ROLE",
    "AnalyzeRequest",
    "ChatMessage",
    "ChatRequest",
    "ContactMessage",
    "Credentials",
    "GenerationRequest",
    "PdfDocument",
    "Property",
    "PropertyAnalysis",
    "PropertyCreate",
    "PropertyRecommendations",
    "RecommendationRequest",
    "User",
    "parse_payload",
]
