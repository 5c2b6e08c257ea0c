"""
services/storage.py
===================
In-memory user and property store.

One instance is built per app in ``create_app`` and hung on ``app.store``.
Ids come from per-table counters starting at 1; they only move forward and
are never reused while the process lives. Nothing is persisted.
"""
import itertools
import logging
from datetime import datetime

from ListingMVP.exceptions import UsernameTakenError
from ListingMVP.models import AGENT_ROLE, Property, PropertyCreate, User, parse_payload
from ListingMVP.seed_properties import seed_properties

logger = logging.getLogger(__name__)


class MemStorage:
    """Map-backed store for users and property listings."""

    def __init__(self, seed=True):
        self._users = {}
        self._properties = {}
        self._user_ids = itertools.count(1)
        self._property_ids = itertools.count(1)

        if seed:
            seeded = seed_properties(self)
            logger.info("Seeded %d demo properties", len(seeded))

    # ── Users ────────────────────────────────────────────────────────────────
    def get_user(self, user_id):
        return self._users.get(user_id)

    def get_user_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, fields):
        """Store a new agent. ``fields["password"]`` must already be hashed."""
        username = fields["username"]
        if self.get_user_by_username(username) is not None:
            raise UsernameTakenError("Username already exists")

        user = User(id=next(self._user_ids), username=username, password=fields["password"], role=AGENT_ROLE)
        self._users[user.id] = user
        logger.info("Registered user %s (id=%d)", user.username, user.id)
        return user

    # ── Properties ───────────────────────────────────────────────────────────
    def get_all_properties(self):
        return list(self._properties.values())

    def get_property(self, property_id):
        return self._properties.get(property_id)

    def create_property(self, fields):
        """Validate ``fields`` and store a new listing.

        Raises ValidationError before an id is drawn, so rejected payloads
        leave the counter untouched.
        """
        data = parse_payload(PropertyCreate, fields)

        prop = Property(
            id=next(self._property_ids),
            title=data.title,
            description=data.description,
            price=data.price,
            location=data.location,
            image_url=data.image_url,
            bedrooms=data.bedrooms,
            bathrooms=data.bathrooms,
            area=data.area,
            features=list(data.features),
            open_house_date=data.open_house_date,
            created_at=datetime.now(),
        )
        self._properties[prop.id] = prop
        logger.debug("Created property %d %r", prop.id, prop.title)
        return prop
