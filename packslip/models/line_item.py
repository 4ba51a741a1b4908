from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from packslip.constants import MAX_ITEMS
from packslip.expression import evaluate, format_quantity
from packslip.models import ZERO, parse_numeric


class LineItemField(str, Enum):
    ITEM_NAME = "item_name"
    ITEM_DESCRIPTION = "item_description"
    PC = "pc"
    TOTAL_METER = "total_meter"
    RATE = "rate"


def _new_id() -> str:
    from ulid import ULID

    return str(ULID())


class LineItem(BaseModel):
    id: str = Field(default_factory=_new_id)
    item_name: str = ""
    item_description: str = ""
    pc: str = ""
    total_meter: str = ""
    rate: str = ""
    total: Decimal = ZERO  # meter x rate, never set directly

    @model_validator(mode="after")
    def _derive_total(self) -> LineItem:
        self.total = line_total(self.total_meter, self.rate)
        return self


def line_total(total_meter: str, rate: str) -> Decimal:
    return parse_numeric(total_meter) * parse_numeric(rate)


def _apply(item: LineItem, field: LineItemField, value: str) -> LineItem:
    changes: dict[str, object] = {field.value: value}

    # Editing the description always re-derives the meter, even over a typed one.
    if field is LineItemField.ITEM_DESCRIPTION:
        meter = evaluate(value)
        changes["total_meter"] = format_quantity(meter) if meter > 0 else ""

    total_meter = changes.get("total_meter", item.total_meter)
    rate = changes.get("rate", item.rate)
    changes["total"] = line_total(str(total_meter), str(rate))
    return item.model_copy(update=changes)


def update_field(items: list[LineItem], item_id: str, field: LineItemField | str, value: str) -> list[LineItem]:
    """Return a new collection with one field of the item ``item_id`` replaced.

    Unknown ids leave the collection unchanged. ``field`` may be given as its
    string value; names outside ``LineItemField`` raise ``ValueError``.
    """
    field = LineItemField(field)
    return [_apply(item, field, value) if item.id == item_id else item for item in items]


def add_item(items: list[LineItem]) -> list[LineItem]:
    if len(items) >= MAX_ITEMS:
        return list(items)
    return [*items, LineItem()]


def remove_item(items: list[LineItem], item_id: str) -> list[LineItem]:
    return [item for item in items if item.id != item_id]
