"""Rows for the dashboard list views, built from API records."""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_date(value: Union[str, datetime]) -> str:
    """'MMMM do, yyyy', e.g. October 19th, 2026."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value:%B} {_ordinal(value.day)}, {value.year}"


def format_price(value) -> str:
    return f"${float(value):,.2f}"


@dataclass
class CategoryColumn:
    id: str
    name: str
    createdAt: str


@dataclass
class AttributeColumn:
    id: str
    name: str
    value: str
    createdAt: str


# List views for sizes, colors and genders share one row shape
SizeColumn = ColorColumn = GenderColumn = AttributeColumn


@dataclass
class ProductColumn:
    id: str
    name: str
    isFeatured: bool
    isArchived: bool
    price: str
    quantity: int
    category: Optional[str]
    size: Optional[str]
    color: Optional[str]
    gender: Optional[str]
    createdAt: str


def category_columns(records: List[dict]) -> List[CategoryColumn]:
    return [CategoryColumn(id=r["id"], name=r["name"], createdAt=format_date(r["createdAt"])) for r in records]


def attribute_columns(records: List[dict]) -> List[AttributeColumn]:
    return [
        AttributeColumn(id=r["id"], name=r["name"], value=r["value"], createdAt=format_date(r["createdAt"]))
        for r in records
    ]


def _related(record: dict, key: str, attr: str) -> Optional[str]:
    related = record.get(key)
    return related.get(attr) if related else None


def product_columns(records: List[dict]) -> List[ProductColumn]:
    return [
        ProductColumn(
            id=r["id"],
            name=r["name"],
            isFeatured=bool(r.get("isFeatured")),
            isArchived=bool(r.get("isArchived")),
            price=format_price(r["price"]),
            quantity=r["quantity"],
            category=_related(r, "category", "name"),
            size=_related(r, "size", "name"),
            # colors are shown by their swatch value
            color=_related(r, "color", "value"),
            gender=_related(r, "gender", "name"),
            createdAt=format_date(r["createdAt"]),
        )
        for r in records
    ]
