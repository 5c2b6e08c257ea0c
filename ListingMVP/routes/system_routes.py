import smtplib

from flask import Blueprint, current_app, jsonify, request
from flask_mail import Message

from ListingMVP.extensions import mail
from ListingMVP.models import ContactMessage, parse_payload
from ListingMVP.services.analytics import build_dashboard
from ListingMVP.utils.decorators import agent_required

system_bp = Blueprint("system", __name__)


@system_bp.route("/health")
def health():
    return jsonify({"status": "ok"})


# =========================================================
# 📊 ANALYTICS DASHBOARD
# =========================================================
@system_bp.route("/api/analytics")
@agent_required
def analytics():
    return jsonify(build_dashboard(current_app.store.get_all_properties()))


# =========================================================
# ✉️ CONTACT FORM
# =========================================================
@system_bp.route("/api/contact", methods=["POST"])
def contact():
    body = parse_payload(ContactMessage, request.get_json(silent=True))

    msg = Message(
        subject=f"Website inquiry from {body.name}",
        recipients=[current_app.config["COMPANY_EMAIL"]],
        reply_to=body.email,
        body=(
            f"Name: {body.name}\n"
            f"Email: {body.email}\n\n"
            f"{body.message}\n"
        ),
    )

    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error("Contact mail failed: %s", e)
        return jsonify({"error": "Could not send your message right now. Please try again."}), 503

    return jsonify({"status": "sent"}), 202
