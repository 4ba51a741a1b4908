from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO

from fpdf import FPDF

from packslip.constants import IST_TZ, MAX_ITEMS, TIME_FORMAT
from packslip.models import format_inr
from packslip.models.line_item import LineItem
from packslip.models.slip import PackingSlip
from packslip.services.ledger import gross_amount, net_amount_value, total_pieces

logger = logging.getLogger(__name__)

# The core PDF fonts are latin-1 only and have no rupee glyph.
PDF_CURRENCY = "Rs. "

FONT = "Helvetica"

COLUMNS = (
    ("Item Name", 0.15),
    ("Description", 0.30),
    ("Pcs.", 0.10),
    ("Total Mtr.", 0.15),
    ("Rate", 0.15),
    ("Amount", 0.15),
)

HEADER_FILL = (230, 230, 230)
BORDER_COLOR = (122, 121, 121)
MUTED_TEXT = (110, 110, 110)


def _pdf_text(text: str) -> str:
    text = text.replace("₹", PDF_CURRENCY.strip())
    return text.encode("latin-1", "replace").decode("latin-1")


def _money(value) -> str:
    return format_inr(value, symbol=PDF_CURRENCY)


def _plain_number(value) -> str:
    return f"{value.normalize():f}"


def _row_cells(item: LineItem | None) -> list[str]:
    if item is None:
        return [""] * len(COLUMNS)
    return [
        item.item_name,
        item.item_description,
        item.pc,
        item.total_meter,
        f"{PDF_CURRENCY}{item.rate}" if item.rate else "",
        _money(item.total) if item.total > 0 else "",
    ]


class SlipPDF:
    def generate(
        self,
        slip: PackingSlip,
        merchant_name: str = "",
        merchant_mobile: str = "",
        upi_qrcode_png: bytes | None = None,
        upi_id: str = "",
        generated_at: datetime | None = None,
    ) -> bytes:
        generated_at = generated_at or datetime.now(IST_TZ)

        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)
        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_title(pdf, slip.slip_number)
        self._draw_header(pdf, page_w, slip, generated_at)
        self._draw_table(pdf, page_w, slip.items)
        self._draw_summary(pdf, page_w, slip)

        if upi_qrcode_png:
            self._draw_payment(pdf, page_w, upi_qrcode_png, merchant_name, merchant_mobile, upi_id)

        self._draw_footer(pdf, page_w)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: slip=%s items=%d upi=%s size=%d bytes",
            slip.slip_number,
            len(slip.items),
            bool(upi_qrcode_png),
            len(output),
        )
        return output

    def _draw_title(self, pdf: FPDF, slip_number: int | None) -> None:
        pdf.set_font(FONT, "B", 24)
        pdf.set_text_color(0, 0, 0)
        pdf.cell(0, 14, "PACKING SLIP", align="C", new_x="LMARGIN", new_y="NEXT")
        if slip_number is not None:
            pdf.set_font(FONT, "", 10)
            pdf.set_text_color(*MUTED_TEXT)
            pdf.cell(0, 6, f"Slip No. {slip_number}", align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

    def _draw_labeled(self, pdf: FPDF, w: float, label: str, value: str, align: str = "L") -> None:
        pdf.set_font(FONT, "B", 12)
        pdf.set_text_color(0, 0, 0)
        label_w = pdf.get_string_width(label) + 2
        pdf.cell(label_w, 9, label)
        pdf.set_font(FONT, "", 12)
        pdf.cell(w - label_w, 9, _pdf_text(value), border="B", align=align)

    def _draw_header(self, pdf: FPDF, page_w: float, slip: PackingSlip, generated_at: datetime) -> None:
        header = slip.header
        left_w = page_w * 0.62
        right_w = page_w - left_w - 6
        pdf.set_draw_color(*BORDER_COLOR)
        pdf.set_line_width(0.3)

        self._draw_labeled(pdf, left_w, "Mobile No.:", header.mobile)
        pdf.cell(6, 9, "")
        self._draw_labeled(pdf, right_w, "Date:", header.date)
        pdf.ln(11)

        self._draw_labeled(pdf, left_w, "Name:", header.customer_name)
        pdf.cell(6, 9, "")
        self._draw_labeled(pdf, right_w, "Time:", generated_at.strftime(TIME_FORMAT))
        pdf.ln(15)

    def _draw_table(self, pdf: FPDF, page_w: float, items: list[LineItem]) -> None:
        widths = [page_w * share for _, share in COLUMNS]
        line_h = 10

        pdf.set_fill_color(*HEADER_FILL)
        pdf.set_draw_color(*BORDER_COLOR)
        pdf.set_font(FONT, "B", 10)
        for (title, _), w in zip(COLUMNS, widths):
            pdf.cell(w, line_h, title, border=1, fill=True, align="C")
        pdf.ln(line_h)

        # Always print the full table so handwritten rows can be added.
        rows: list[LineItem | None] = list(items[:MAX_ITEMS])
        rows += [None] * (MAX_ITEMS - len(rows))

        pdf.set_font(FONT, "", 10)
        for item in rows:
            for i, (text, w) in enumerate(zip(_row_cells(item), widths)):
                align = "R" if i >= 2 else "L"
                pdf.cell(w, line_h, _pdf_text(text), border=1, align=align)
            pdf.ln(line_h)

        pieces = total_pieces(items)
        gross = gross_amount(items)
        pdf.set_font(FONT, "B", 10)
        pdf.cell(widths[0] + widths[1], line_h, "Total", border=1)
        pdf.cell(widths[2], line_h, _plain_number(pieces) if pieces else "", border=1, align="R")
        pdf.cell(widths[3] + widths[4], line_h, "", border=1)
        pdf.cell(widths[5], line_h, _money(gross) if gross else "", border=1, align="R")
        pdf.ln(line_h + 6)

    def _draw_summary(self, pdf: FPDF, page_w: float, slip: PackingSlip) -> None:
        balance = slip.balance_outstanding
        balance_text = f"{PDF_CURRENCY}{balance}" if balance else "0"

        pdf.set_text_color(0, 0, 0)
        pdf.set_font(FONT, "B", 12)
        pdf.cell(0, 8, _pdf_text(f"Balance: {balance_text}"), align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(FONT, "B", 14)
        net = _money(net_amount_value(slip.items, balance))
        pdf.cell(0, 10, f"Total Amount: {net}", align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(2)

        self._draw_labeled(pdf, page_w * 0.5, "Bundles:", slip.header.bundles)
        pdf.ln(14)

    def _draw_payment(
        self,
        pdf: FPDF,
        page_w: float,
        qrcode_png: bytes,
        merchant_name: str,
        merchant_mobile: str,
        upi_id: str,
    ) -> None:
        qr_size = 40
        if pdf.get_y() + qr_size + 20 > pdf.h - pdf.b_margin:
            pdf.add_page()

        x = pdf.l_margin
        pdf.set_font(FONT, "B", 12)
        pdf.set_text_color(0, 0, 0)
        pdf.cell(0, 8, "Scan to Pay", new_x="LMARGIN", new_y="NEXT")
        y = pdf.get_y()

        pdf.image(BytesIO(qrcode_png), x=x, y=y, w=qr_size, h=qr_size)

        text_x = x + qr_size + 10
        pdf.set_xy(text_x, y + 8)
        if merchant_name:
            pdf.set_font(FONT, "B", 14)
            pdf.cell(page_w - qr_size - 10, 8, _pdf_text(merchant_name), new_x="LEFT", new_y="NEXT")
        if merchant_mobile:
            pdf.set_font(FONT, "", 12)
            pdf.cell(page_w - qr_size - 10, 8, _pdf_text(f"Mob no. {merchant_mobile}"), new_x="LEFT", new_y="NEXT")
        if upi_id:
            pdf.set_font(FONT, "", 12)
            pdf.cell(page_w - qr_size - 10, 8, _pdf_text(f"UPI ID: {upi_id}"), new_x="LEFT", new_y="NEXT")

        pdf.set_y(y + qr_size + 6)

    def _draw_footer(self, pdf: FPDF, page_w: float) -> None:
        # Must sit above the auto page break margin set in generate().
        pdf.set_y(-30)
        pdf.set_draw_color(*BORDER_COLOR)
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(3)
        pdf.set_font(FONT, "", 7)
        pdf.set_text_color(*MUTED_TEXT)
        pdf.cell(0, 5, "Generated automatically", align="C")
