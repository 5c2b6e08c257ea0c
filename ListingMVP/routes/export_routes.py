import io

from flask import Blueprint, current_app, request, send_file

from ListingMVP.models import PdfDocument, parse_payload
from ListingMVP.routes.property_routes import get_property_or_404
from ListingMVP.utils.decorators import agent_required
from ListingMVP.utils.pdf_export import build_listing_pdf

export_bp = Blueprint("export", __name__, url_prefix="/api")


def _pdf_response(document, filename):
    pdf = build_listing_pdf(
        document,
        company_name=current_app.config.get("COMPANY_NAME", "ListingMVP Realty"),
        logo_url=current_app.config.get("LOGO_URL") or None,
        image_timeout=current_app.config.get("PDF_IMAGE_TIMEOUT", 10),
        max_image_bytes=current_app.config.get("PDF_IMAGE_MAX_BYTES", 5 * 1024 * 1024),
    )
    return send_file(
        io.BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=filename,
    )


# =========================================================
# 📄 STORED LISTING → PDF
# =========================================================
@export_bp.route("/properties/<property_id>/pdf", methods=["GET"])
@agent_required
def property_pdf(property_id):
    prop = get_property_or_404(property_id)
    return _pdf_response(prop.to_pdf_document(), f"listing-{prop.id}.pdf")


# =========================================================
# 📄 GENERATED SUMMARY → PDF
# =========================================================
@export_bp.route("/export/pdf", methods=["POST"])
@agent_required
def export_pdf():
    document = parse_payload(PdfDocument, request.get_json(silent=True))
    return _pdf_response(document, "listing-summary.pdf")
