"""Request body checks shared by the route handlers.

Rules run in the order they are declared and the first failure becomes the
400 response; errors are never aggregated.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional
from fastapi import HTTPException

# Column limits: Numeric(10, 2) for prices, a 32-bit Integer for quantities
MAX_PRICE = Decimal("99999999.99")
MAX_QUANTITY = 2**31 - 1


class FieldRule:
    """Required value; fails on None, empty or blank strings and False."""

    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label

    @property
    def message(self) -> str:
        return f"{self.label} is required"

    def check(self, value: Any) -> Optional[str]:
        """Return an error message, or None when the value passes."""
        if value is None or value == "" or value is False:
            return self.message
        if isinstance(value, str) and not value.strip():
            return self.message
        return None


class Text(FieldRule):
    def check(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return self.message
        return None


class Price(FieldRule):
    def check(self, value: Any) -> Optional[str]:
        if value is None or value == "" or isinstance(value, bool):
            return self.message
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return self.message
        if not amount.is_finite() or amount == 0:
            return self.message
        if amount < 0:
            return f"{self.label} must be greater than zero"
        if amount > MAX_PRICE:
            return f"{self.label} must be at most {MAX_PRICE}"
        return None


class Quantity(FieldRule):
    def check(self, value: Any) -> Optional[str]:
        # 0 is a valid quantity
        if value is None or value == "" or isinstance(value, bool):
            return self.message
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return self.message
        if not amount.is_finite() or amount < 0 or amount != amount.to_integral_value():
            return f"{self.label} must be a non-negative integer"
        if amount > MAX_QUANTITY:
            return f"{self.label} must be at most {MAX_QUANTITY}"
        return None


class Images(FieldRule):
    @property
    def message(self) -> str:
        return f"{self.label} are required"

    def check(self, value: Any) -> Optional[str]:
        if not isinstance(value, list) or not value:
            return self.message
        for image in value:
            if not isinstance(image, dict) or not isinstance(image.get("url"), str) or not image["url"].strip():
                return f"{self.label} must each have a url"
        return None


def validate_payload(payload: Optional[dict], rules: Iterable[FieldRule]) -> dict:
    """Apply rules to the body in order, raising 400 on the first failure."""
    body = payload if isinstance(payload, dict) else {}
    for rule in rules:
        error = rule.check(body.get(rule.key))
        if error:
            raise HTTPException(status_code=400, detail=error)
    return body


def require_path_param(value: Optional[str], label: str) -> str:
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=f"{label} is required")
    return value
