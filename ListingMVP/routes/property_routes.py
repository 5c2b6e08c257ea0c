from flask import Blueprint, current_app, jsonify, request

from ListingMVP.exceptions import NotFoundError
from ListingMVP.utils.decorators import agent_required

property_bp = Blueprint("property", __name__, url_prefix="/api/properties")


def get_property_or_404(property_id):
    """Store lookup for a raw path segment; a miss or non-integer id is NotFoundError."""
    try:
        prop = current_app.store.get_property(int(property_id))
    except ValueError:
        prop = None
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


# =========================================================
# 📋 PROPERTY LIST
# =========================================================
@property_bp.route("", methods=["GET"])
def property_list():
    return jsonify([p.to_dict() for p in current_app.store.get_all_properties()])


# =========================================================
# 🧾 VIEW PROPERTY
# =========================================================
@property_bp.route("/<property_id>", methods=["GET"])
def view_property(property_id):
    return jsonify(get_property_or_404(property_id).to_dict())


# =========================================================
# ➕ CREATE PROPERTY
# =========================================================
@property_bp.route("", methods=["POST"])
@agent_required
def create_property():
    prop = current_app.store.create_property(request.get_json(silent=True))
    current_app.logger.info("Property %d created: %s", prop.id, prop.title)
    return jsonify(prop.to_dict()), 201


# =========================================================
# 🧠 AI ANALYSIS OF A STORED LISTING
# =========================================================
@property_bp.route("/<property_id>/analysis", methods=["POST"])
@agent_required
def analyze_property(property_id):
    prop = get_property_or_404(property_id)
    analysis = current_app.assistant.analyze_listing(prop)
    return jsonify(analysis.model_dump(by_alias=True))
