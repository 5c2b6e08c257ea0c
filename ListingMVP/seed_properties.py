# ListingMVP/seed_properties.py

# ----------------------------
# 🌱 Demo listings loaded into every fresh store
# ----------------------------
SAMPLE_PROPERTIES = [
    {
        "title": "Stunning Home in Prime Location",
        "description": "Beautiful modern home with premium finishes and amazing views.",
        "price": 1250000,
        "location": "Beverly Hills, CA",
        "imageUrl": "https://images.unsplash.com/photo-1564013799919-ab600027ffc6",
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 2800,
        "features": ["Pool", "Garden", "Smart Home", "Solar Panels"],
        "openHouseDate": "2024-04-15",
    },
    {
        "title": "Modern Downtown Loft",
        "description": "Spacious loft in the heart of downtown with high ceilings.",
        "price": 850000,
        "location": "Downtown LA",
        "imageUrl": "https://images.unsplash.com/photo-1554995207-c18c203602cb",
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1600,
        "features": ["High Ceilings", "Floor-to-ceiling Windows", "Gourmet Kitchen"],
        "openHouseDate": "2024-04-20",
    },
]


def seed_properties(store):
    """Insert the demo listings; returns the created records."""
    return [store.create_property(fields) for fields in SAMPLE_PROPERTIES]
