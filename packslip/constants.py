from datetime import datetime
from zoneinfo import ZoneInfo

IST_TZ = ZoneInfo("Asia/Kolkata")

MAX_ITEMS = 7

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"

CURRENCY_SYMBOL = "₹"
CURRENCY_CODE = "INR"

FIELD_LABELS = {
    "item_name": "Item Name",
    "item_description": "Description",
    "pc": "Pieces",
    "total_meter": "Total Meter",
    "rate": "Rate",
}


def today_str() -> str:
    return datetime.now(IST_TZ).strftime(DATE_FORMAT)
