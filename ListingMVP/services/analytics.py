"""
Analytics dashboard payload.

Search and market figures are demo data (there is no search tracking);
catalog figures come from the live store and provider counters come from
generation_metrics.
"""
import random

from ListingMVP.services.generation_metrics import get_metrics_snapshot

TREND_SERIES = ("apartments", "houses", "rooms")


def _trend(rng, points=10):
    return [{"time": str(i), "value": round(rng.uniform(100, 200), 1)} for i in range(points)]


def catalog_stats(properties):
    count = len(properties)
    if not count:
        return {"totalListings": 0, "averagePrice": None, "averagePricePerSqft": None, "priceRange": None}

    prices = [p.price for p in properties]
    per_sqft = [p.price / p.area for p in properties if p.area]
    return {
        "totalListings": count,
        "averagePrice": round(sum(prices) / count, 2),
        "averagePricePerSqft": round(sum(per_sqft) / len(per_sqft), 2) if per_sqft else None,
        "priceRange": {"min": min(prices), "max": max(prices)},
    }


def build_dashboard(properties, rng=None):
    rng = rng or random.Random()
    return {
        "catalog": catalog_stats(properties),
        "savedListings": 136,
        "totalSearches": 1543,
        "mostSearched": [
            {"range": "14560", "count": 2000},
            {"range": "2000", "count": 100},
            {"range": "100", "count": 50},
            {"range": "10", "count": 30},
        ],
        "searchTrends": {name: _trend(rng) for name in TREND_SERIES},
        "searchStats": [
            {"area": "80km²", "searches": 740, "trend": "up"},
            {"area": "60km²", "searches": 550, "trend": "down"},
            {"area": "350km²", "searches": 440, "trend": "up"},
            {"area": "60km²", "searches": 288, "trend": "up"},
        ],
        "priceMetrics": {
            "averagePricePerSqm": [
                {"area": "City Center", "price": 5200},
                {"area": "Suburbs", "price": 3800},
                {"area": "Coastal", "price": 4500},
            ],
            "marketDynamics": {"averageDaysOnMarket": 45, "priceChangeTrend": -2.5},
            "popularAmenities": [
                {"name": "Swimming Pool", "count": 245},
                {"name": "Garden", "count": 312},
                {"name": "Garage", "count": 520},
                {"name": "Security", "count": 180},
            ],
            "neighborhoodRanking": [
                {"name": "Downtown", "score": 92},
                {"name": "Waterfront", "score": 88},
                {"name": "Suburban Area", "score": 85},
            ],
        },
        "aiUsage": get_metrics_snapshot(),
    }
