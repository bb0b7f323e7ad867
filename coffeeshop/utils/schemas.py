"""Schemas shared by modules that move goods: imports, exports, sales."""

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    quant: float = Field(..., gt=0)
    unit: str = Field("pcs", min_length=1, max_length=20)


def line_key(line: dict) -> tuple:
    """Stock items are keyed by (name, unit, price)."""
    return (line["name"], line["unit"], float(line["price"]))


def fold_lines(lines: list[dict]) -> dict[tuple, float]:
    """Sum quantities per stock key."""
    totals: dict[tuple, float] = {}
    for line in lines:
        key = line_key(line)
        totals[key] = totals.get(key, 0) + line["quant"]
    return totals
