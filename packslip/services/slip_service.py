from __future__ import annotations

import logging
from datetime import datetime

from packslip.constants import DATE_FORMAT, IST_TZ
from packslip.models.slip import PackingSlip
from packslip.pdf.slip import SlipPDF
from packslip.services.ledger import net_amount
from packslip.settings import settings
from packslip.storage.base import StorageBackend
from packslip.storage.counter import SlipCounterStore
from packslip.upi import build_payment_uri, generate_upi_qrcode_png

logger = logging.getLogger(__name__)


def _date_folder(slip_date: str) -> str:
    """'19/10/2026' -> '2026-10-19'; falls back to today for free-text dates."""
    try:
        day = datetime.strptime(slip_date, DATE_FORMAT).date()
    except ValueError:
        day = datetime.now(IST_TZ).date()
    return day.isoformat()


def _storage_key(slip: PackingSlip, extension: str) -> str:
    name = f"{_date_folder(slip.header.date)}/slip-{slip.slip_number}.{extension}"
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{name}"
    return name


class SlipService:
    def __init__(self, storage: StorageBackend, counter_store: SlipCounterStore) -> None:
        self.storage = storage
        self.counter_store = counter_store
        self.pdf_generator = SlipPDF()

    def issue_slip_number(self, slip: PackingSlip) -> PackingSlip:
        slip.slip_number = self.counter_store.next_number()
        logger.info("Slip number %d issued", slip.slip_number)
        return slip

    def payment_uri(self, slip: PackingSlip) -> str | None:
        """UPI request for the slip's net amount, or None if UPI is not set up or nothing is due."""
        if not settings.upi_id or not settings.upi_payee_name:
            logger.debug("UPI id or payee name not configured, no payment request")
            return None
        return build_payment_uri(
            settings.upi_id,
            settings.upi_payee_name,
            net_amount(slip.items, slip.balance_outstanding),
        )

    def export_slip(self, slip: PackingSlip) -> str:
        """Render the slip PDF, store it and return the stored path."""
        if slip.slip_number is None:
            self.issue_slip_number(slip)

        qrcode_png = None
        uri = self.payment_uri(slip)
        if uri:
            qrcode_png = generate_upi_qrcode_png(uri)

        pdf_bytes = self.pdf_generator.generate(
            slip,
            merchant_name=settings.merchant_name,
            merchant_mobile=settings.merchant_mobile,
            upi_qrcode_png=qrcode_png,
            upi_id=settings.upi_id if qrcode_png else "",
        )

        key = _storage_key(slip, "pdf")
        path = self.storage.save(key, pdf_bytes)
        logger.info("Slip %s stored at %s", slip.slip_number, key)
        return path

    def export_qrcode(self, slip: PackingSlip) -> str | None:
        """Store the UPI QR code alone as a PNG; None when no payment request can be built."""
        uri = self.payment_uri(slip)
        if not uri:
            return None
        if slip.slip_number is None:
            self.issue_slip_number(slip)

        key = _storage_key(slip, "png")
        path = self.storage.save(key, generate_upi_qrcode_png(uri), content_type="image/png")
        logger.info("UPI QR code for slip %s stored at %s", slip.slip_number, key)
        return path
