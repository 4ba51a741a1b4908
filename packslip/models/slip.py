from __future__ import annotations

from pydantic import BaseModel, Field

from packslip.constants import today_str
from packslip.models.line_item import LineItem


class SlipHeader(BaseModel):
    mobile: str = ""
    date: str = Field(default_factory=today_str)  # 'DD/MM/YYYY'
    customer_name: str = ""
    bundles: str = ""


class PackingSlip(BaseModel):
    header: SlipHeader = Field(default_factory=SlipHeader)
    items: list[LineItem] = Field(default_factory=lambda: [LineItem()])
    balance_outstanding: str = ""
    slip_number: int | None = None

    @classmethod
    def blank(cls) -> PackingSlip:
        """A cleared slip: today's date and one empty row."""
        return cls()
