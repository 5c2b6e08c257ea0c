from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


# ====================================
# 🏠 PROPERTY MODEL
# ====================================
@dataclass(frozen=True)
class Property:
    id: int
    title: str
    description: str
    price: float
    location: str
    image_url: str
    bedrooms: int
    bathrooms: int
    area: float
    created_at: datetime
    features: List[str] = field(default_factory=list)
    open_house_date: Optional[date] = None

    def __repr__(self):
        return f"<Property {self.id} {self.title!r}>"

    def to_dict(self):
        """JSON shape served by the API (camelCase keys, ISO dates)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "location": self.location,
            "imageUrl": self.image_url,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "area": self.area,
            "features": list(self.features),
            "openHouseDate": self.open_house_date.isoformat() if self.open_house_date else None,
            "createdAt": self.created_at.isoformat(),
        }

    def to_pdf_document(self):
        return {
            "title": self.title,
            "content": self.description,
            "price": f"${self.price:,.0f}",
            "details": {"beds": self.bedrooms, "baths": self.bathrooms, "area": f"{self.area:,.0f} sq ft"},
            "features": list(self.features),
            "imageUrl": self.image_url,
        }

    def to_prompt_details(self):
        """Plain-text block describing the listing for LLM prompts."""
        lines = [
            f"Title: {self.title}",
            f"Location: {self.location}",
            f"Price: ${self.price:,.0f}",
            f"Bedrooms: {self.bedrooms}",
            f"Bathrooms: {self.bathrooms}",
            f"Area: {self.area:,.0f} sq ft",
            f"Features: {', '.join(self.features) or 'None listed'}",
            f"Description: {self.description}",
        ]
        if self.open_house_date:
            lines.append(f"Open house: {self.open_house_date.isoformat()}")
        return "\n".join(lines)
