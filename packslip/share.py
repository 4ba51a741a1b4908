"""WhatsApp chat links for sending a finished slip to the customer.

WhatsApp cannot take an attachment through a link, so the chat opens with a
prefilled message and the exported slip is attached by hand.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from packslip.settings import settings

COUNTRY_CODE = "91"


def normalize_phone(number: str) -> str:
    """International form without '+': '098201 16595' -> '919820116595'"""
    phone = re.sub(r"[^0-9]", "", number or "")
    if phone.startswith("0"):
        phone = phone[1:]
    if len(phone) == 10:
        phone = COUNTRY_CODE + phone
    return phone


def build_whatsapp_url(number: str, message: str | None = None) -> str | None:
    phone = normalize_phone(number)
    if not phone:
        return None
    text = settings.share_message if message is None else message
    return f"https://wa.me/{phone}?text={quote(text, safe='')}"
