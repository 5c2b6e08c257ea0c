"""
routes/ai_routes.py
===================
POST /api/chat              one chat turn; caller sends the whole transcript
POST /api/generate          client-facing listing summary
POST /api/analyze           market analysis for free-text property details
POST /api/recommendations   property suggestions for buyer criteria

All routes need a logged-in session. Provider failures come back as
500 {"error": ...} through the GenerationError handler.
"""
from flask import Blueprint, current_app, jsonify, request

from ListingMVP.models import (
    AnalyzeRequest,
    ChatRequest,
    GenerationRequest,
    RecommendationRequest,
    parse_payload,
)
from ListingMVP.utils.decorators import agent_required

ai_bp = Blueprint("ai", __name__, url_prefix="/api")


@ai_bp.route("/chat", methods=["POST"])
@agent_required
def chat():
    body = parse_payload(ChatRequest, request.get_json(silent=True))
    reply = current_app.assistant.chat_with_ai(body.messages, body.context)
    return jsonify({"response": reply})


@ai_bp.route("/generate", methods=["POST"])
@agent_required
def generate():
    # Missing fields are allowed; they show up as placeholders in the prompt.
    body = parse_payload(GenerationRequest, request.get_json(silent=True) or {})
    content = current_app.assistant.generate_listing_summary(body)
    return jsonify({"generatedContent": content})


@ai_bp.route("/analyze", methods=["POST"])
@agent_required
def analyze():
    body = parse_payload(AnalyzeRequest, request.get_json(silent=True))
    analysis = current_app.assistant.analyze_property(body.details)
    return jsonify(analysis.model_dump(by_alias=True))


@ai_bp.route("/recommendations", methods=["POST"])
@agent_required
def recommendations():
    body = parse_payload(RecommendationRequest, request.get_json(silent=True))
    result = current_app.assistant.recommend_properties(body.criteria)
    return jsonify(result.model_dump(by_alias=True))
