"""Shared fixtures: slips with known totals."""

from __future__ import annotations

import pytest

from packslip.models.line_item import LineItem
from packslip.models.slip import PackingSlip, SlipHeader


@pytest.fixture
def items() -> list[LineItem]:
    # gross 1000, 5 pieces
    return [
        LineItem(item_name="Cotton", item_description="6+4", pc="2", total_meter="10", rate="60"),
        LineItem(item_name="Silk", pc="3", total_meter="8", rate="50"),
    ]


@pytest.fixture
def slip(items) -> PackingSlip:
    return PackingSlip(
        header=SlipHeader(mobile="9820116595", date="19/10/2026", customer_name="Ramesh Traders", bundles="3"),
        items=items,
    )
