"""UPI payment request builder.

Builds the ``upi://pay`` deep link that payment apps understand and renders it
as a PNG QR code.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, InvalidOperation
from io import BytesIO
from urllib.parse import quote

import qrcode
from qrcode.image.pil import PilImage

from packslip.constants import CURRENCY_CODE, CURRENCY_SYMBOL
from packslip.models import CENTS, parse_numeric

logger = logging.getLogger(__name__)

_UPI_HANDLE_RE = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+$")

# Characters left alone by JavaScript's encodeURIComponent, which UPI apps expect.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def is_upi_handle(text: str) -> bool:
    """Basic shape check for a UPI id such as ``merchant@bank``."""
    return bool(text) and bool(_UPI_HANDLE_RE.match(text))


def clean_amount(amount: str) -> str:
    """Drop the rupee symbol and grouping commas: '₹1,234.50' -> '1234.50'"""
    return amount.replace(CURRENCY_SYMBOL, "").replace(",", "")


def build_payment_uri(payee_id: str, payee_name: str, amount: str) -> str | None:
    """Build a UPI payment URI for a formatted amount.

    Args:
        payee_id: The payee's UPI id (``pa``), inserted as given.
        payee_name: Display name (``pn``), percent-encoded.
        amount: Amount as displayed, e.g. ``"₹1,234.50"``.

    Returns:
        ``upi://pay?pa=...&pn=...&am=...&cu=INR``, or None when the amount is
        not a positive number.
    """
    value = parse_numeric(clean_amount(amount or ""))
    if value <= 0:
        logger.warning("Invalid or non-positive amount for UPI request: %r", amount)
        return None

    try:
        am = f"{value.quantize(CENTS, rounding=ROUND_HALF_UP):f}"
    except InvalidOperation:
        logger.warning("Amount out of range for UPI request: %r", amount)
        return None

    pn = quote(payee_name, safe=_URI_COMPONENT_SAFE)
    return f"upi://pay?pa={payee_id}&pn={pn}&am={am}&cu={CURRENCY_CODE}"


def generate_upi_qrcode_png(payload: str, box_size: int = 10, border: int = 2) -> bytes:
    """Render a UPI payment URI as PNG bytes, ready to save or embed in a PDF."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img: PilImage = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
