import io
import ipaddress
import logging
import socket
from datetime import datetime
from urllib.parse import urlsplit
from xml.sax.saxutils import escape

import requests
from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer

from ListingMVP.models import PdfDocument, parse_payload

logger = logging.getLogger(__name__)

CONTENT_WIDTH = LETTER[0] - 2 * inch
MAX_IMAGE_BYTES = 5 * 1024 * 1024

STYLE_TITLE = ParagraphStyle(
    "Title",
    fontName="Helvetica-Bold",
    fontSize=22,
    leading=26,
    textColor=colors.black,
    spaceAfter=16,
)

STYLE_PRICE = ParagraphStyle(
    "Price",
    fontName="Helvetica-Bold",
    fontSize=16,
    textColor=colors.HexColor("#10b981"),
    spaceAfter=8,
)

STYLE_DETAILS = ParagraphStyle(
    "Details",
    fontName="Helvetica",
    fontSize=11,
    textColor=colors.HexColor("#4b5563"),
    leading=15,
)

STYLE_BODY = ParagraphStyle(
    "Body",
    fontName="Helvetica",
    fontSize=11,
    textColor=colors.black,
    leading=15,
    spaceAfter=6,
)

STYLE_FOOTER = ParagraphStyle(
    "Footer",
    fontName="Helvetica",
    fontSize=9,
    textColor=colors.HexColor("#6b7280"),
    alignment=1,
)


class ImageRejected(ValueError):
    """The image URL or its response is not allowed into a PDF."""


def host_addresses(host):
    """Every IP address ``host`` resolves to (an IP literal resolves to itself)."""
    try:
        return [ipaddress.ip_address(host)]
    except ValueError:
        pass
    infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
    return [ipaddress.ip_address(info[4][0].split("%")[0]) for info in infos]


def check_image_url(url):
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ImageRejected(f"not an http(s) URL: {url!r}")
    for addr in host_addresses(parts.hostname):
        if not addr.is_global or addr.is_multicast:
            raise ImageRejected(f"{parts.hostname} resolves to non-public address {addr}")


def _read_capped(resp, max_bytes):
    declared = resp.headers.get("Content-Length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise ImageRejected(f"image is {declared} bytes, limit is {max_bytes}")

    data = bytearray()
    for chunk in resp.iter_content(chunk_size=64 * 1024):
        data.extend(chunk)
        if len(data) > max_bytes:
            raise ImageRejected(f"image exceeds {max_bytes} bytes")
    return bytes(data)


def fetch_image(url, timeout=10, max_width=CONTENT_WIDTH, max_height=3.5 * inch, max_bytes=MAX_IMAGE_BYTES):
    """Download ``url`` into a scaled platypus Image, or None if it can't be used.

    Only public http(s) hosts are fetched, redirects are not followed, and the
    body is abandoned once it passes ``max_bytes``.
    """
    try:
        check_image_url(url)
        with requests.get(url, timeout=timeout, stream=True, allow_redirects=False) as resp:
            resp.raise_for_status()
            data = _read_capped(resp, max_bytes)
        width, height = ImageReader(io.BytesIO(data)).getSize()
    except Exception as e:  # unreadable image: export without it
        logger.warning("Skipping PDF image %s: %s", url, e)
        return None

    scale = min(max_width / width, max_height / height, 1.0)
    return Image(io.BytesIO(data), width=width * scale, height=height * scale)


def _details_line(details):
    parts = []
    if details.beds:
        parts.append(f"{details.beds} Beds")
    if details.baths:
        parts.append(f"{details.baths} Baths")
    if details.area:
        parts.append(details.area)
    return " • ".join(parts)


def build_listing_pdf(
    document,
    company_name="ListingMVP Realty",
    logo_url=None,
    image_timeout=10,
    max_image_bytes=MAX_IMAGE_BYTES,
):
    """Render a listing document (PdfDocument or dict) to PDF bytes."""
    if not isinstance(document, PdfDocument):
        document = parse_payload(PdfDocument, document)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        title=document.title,
        author=company_name,
        leftMargin=inch,
        rightMargin=inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )

    story = []

    logo = document.logo_url or logo_url
    if logo:
        logo_img = fetch_image(
            logo,
            timeout=image_timeout,
            max_width=1.5 * inch,
            max_height=0.6 * inch,
            max_bytes=max_image_bytes,
        )
        if logo_img:
            logo_img.hAlign = "LEFT"
            story.append(logo_img)
            story.append(Spacer(1, 12))

    if document.image_url:
        hero = fetch_image(document.image_url, timeout=image_timeout, max_bytes=max_image_bytes)
        if hero:
            story.append(hero)
            story.append(Spacer(1, 16))

    story.append(Paragraph(escape(document.title), STYLE_TITLE))

    if document.price:
        story.append(Paragraph(escape(document.price), STYLE_PRICE))

    if document.details:
        line = _details_line(document.details)
        if line:
            story.append(Paragraph(escape(line), STYLE_DETAILS))
    story.append(Spacer(1, 12))

    if document.features:
        story.append(Paragraph("<b>Features</b>", STYLE_BODY))
        for feature in document.features:
            story.append(Paragraph(f"• {escape(feature)}", STYLE_DETAILS))
        story.append(Spacer(1, 12))

    for block in document.content.split("\n"):
        if block.strip():
            story.append(Paragraph(escape(block.strip()), STYLE_BODY))

    story.append(Spacer(1, 30))
    story.append(Paragraph(
        f"{escape(company_name)} · generated {datetime.now().strftime('%B %d, %Y')}",
        STYLE_FOOTER,
    ))

    doc.build(story)
    return buffer.getvalue()
