"""
models/schemas.py
=================
Pydantic schemas for API payloads and structured LLM responses.
JSON keys are camelCase; attributes are snake_case.
"""
import json
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as SchemaError

from ListingMVP.exceptions import ValidationError


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


def parse_payload(schema, data):
    """Validate ``data`` against ``schema``; raise ValidationError with the issue list."""
    try:
        return schema.model_validate(data)
    except SchemaError as e:
        issues = json.loads(e.json(include_url=False))
        raise ValidationError(f"Invalid {schema.__name__} payload", issues=issues) from e


# ── Properties ────────────────────────────────────────────────────────────────
def _require_http_url(value, field_name):
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"{field_name} must be an http(s) URL")
    return value


class PropertyCreate(ApiModel):
    title:           str = Field(min_length=1)
    description:     str
    price:           float = Field(gt=0, allow_inf_nan=False)
    location:        str = Field(min_length=1)
    image_url:       str = Field(alias="imageUrl", min_length=1)
    bedrooms:        StrictInt = Field(ge=0)
    bathrooms:       StrictInt = Field(ge=0)
    area:            float = Field(ge=0, allow_inf_nan=False)
    features:        List[str] = Field(default_factory=list)
    open_house_date: Optional[date] = Field(default=None, alias="openHouseDate")

    @field_validator("price", "area", mode="before")
    @classmethod
    def _json_number(cls, value):
        # "975000" and true are not numbers
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        return value

    @field_validator("image_url")
    @classmethod
    def _http_url(cls, value):
        return _require_http_url(value, "imageUrl")


# ── Auth ──────────────────────────────────────────────────────────────────────
class Credentials(ApiModel):
    # Passwords are compared byte for byte
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=False)

    username: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1)


# ── Chat / generation ─────────────────────────────────────────────────────────
class ChatMessage(ApiModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=False)

    role:   Literal["user", "assistant", "system"]
    content: str


class ChatRequest(ApiModel):
    messages: List[ChatMessage] = Field(min_length=1)
    context:  Optional[str] = None


class GenerationRequest(ApiModel):
    # Nothing is required here; missing values are forwarded into the prompt.
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    client_name:   Optional[str] = Field(default=None, alias="clientName")
    summary_title: Optional[str] = Field(default=None, alias="summaryTitle")
    listing_urls:  List[str] = Field(default_factory=list, alias="listingUrls")
    preferences:   Optional[str] = None
    message_style: Optional[str] = Field(default=None, alias="messageStyle")
    cta:           Optional[str] = None

    @field_validator("listing_urls", mode="before")
    @classmethod
    def _split_lines(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [line.strip() for line in value.splitlines() if line.strip()]
        return value


class AnalyzeRequest(ApiModel):
    details: str = Field(min_length=1)


class RecommendationRequest(ApiModel):
    criteria: str = Field(min_length=1)


# ── Structured LLM responses ──────────────────────────────────────────────────
class PriceRange(ApiModel):
    min: float
    max: float


class PriceEstimate(ApiModel):
    value: float
    range: PriceRange


class PropertyAnalysis(ApiModel):
    recommendations: List[str]
    market_analysis: str = Field(alias="marketAnalysis")
    price_estimate:  PriceEstimate = Field(alias="priceEstimate")


class PropertyRecommendations(ApiModel):
    recommendations: List[str]
    explanation:     str


# ── PDF export ────────────────────────────────────────────────────────────────
class PdfDetails(ApiModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    beds:  Optional[str] = None
    baths: Optional[str] = None
    area:  Optional[str] = None


class PdfDocument(ApiModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    title:     str = Field(min_length=1)
    content:   str
    price:     Optional[str] = None
    details:   Optional[PdfDetails] = None
    features:  List[str] = Field(default_factory=list)
    logo_url:  Optional[str] = Field(default=None, alias="logoUrl")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("logo_url", "image_url")
    @classmethod
    def _http_url(cls, value, info):
        if not value:
            return None
        return _require_http_url(value, info.field_name)


# ── Contact ───────────────────────────────────────────────────────────────────
class ContactMessage(ApiModel):
    name:    str = Field(min_length=1)
    email:   str = Field(min_length=3)
    message: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value):
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("email must be a valid address")
        return value
